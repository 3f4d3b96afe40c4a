from fastapi import APIRouter, Request

from backend.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/pagopar")
def health_pagopar(request: Request):
    """Configuration effective du client PagoPar (sans jamais exposer la clé privée)."""
    client = getattr(request.app.state, "pagopar", None)
    return {
        "configured": client is not None,
        "base_url": getattr(client, "base_url", None),
        "version": getattr(client, "version", None),
        "timeout_ms": getattr(client, "timeout", None),
        "rate_limit": rate_limit_health_info(request),
    }
