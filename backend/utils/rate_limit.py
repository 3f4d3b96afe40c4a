from typing import Dict, Any
from fastapi import Request, Response, HTTPException
import os
import time
import hashlib

# Cookie posé par SessionMiddleware (porte le panier)
SESSION_COOKIE_NAME = "session"

def _client_key(req: Request) -> str:
    # Priorité: cookie de session (hashé) puis IP
    cookie = req.cookies.get(SESSION_COOKIE_NAME)
    path = req.url.path
    if cookie:
        h = hashlib.sha256(cookie.encode("utf-8")).hexdigest()[:16]
        return f"session:{h}:{path}"
    ip = req.client.host if req.client else "local"
    return f"ip:{ip}:{path}"

def optional_rate_limit(times: int, seconds: int):
    """
    Dépendance FastAPI: limite `times` requêtes par fenêtre de `seconds` secondes.
    - LOCAL_RATE_LIMIT_FALLBACK=1: compteur en mémoire (app.state), utile en dev
    - app.state.rate_limit_enabled is False: aucune limite
    - sinon fastapi-limiter (Redis), sans 429 si le limiter n'est pas prêt
    """
    async def _dep(request: Request, response: Response):
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            now = time.time()
            key = _client_key(request)
            store = getattr(request.app.state, "_rl_store", {})
            hits = [t for t in store.get(key, []) if now - t < seconds]
            if len(hits) >= times:
                raise HTTPException(status_code=429, detail="Too Many Requests")
            hits.append(now)
            store[key] = hits
            request.app.state._rl_store = store
            return

        if getattr(request.app.state, "rate_limit_enabled", None) is False:
            return

        try:
            from fastapi_limiter.depends import RateLimiter
        except ImportError:
            return

        async def _identifier(req: Request) -> str:
            return _client_key(req)

        try:
            return await RateLimiter(times=times, seconds=seconds, identifier=_identifier)(request, response)
        except HTTPException:
            raise
        except Exception:
            # fastapi-limiter non initialisé ou Redis indisponible: pas de 429
            return
    return _dep

def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)

    limiter_ready = False
    backend = None
    try:
        from fastapi_limiter import FastAPILimiter
        limiter_ready = getattr(FastAPILimiter, "redis", None) is not None
        backend = "redis" if limiter_ready else None
    except ImportError:
        pass

    return {
        "enabled": (bool(enabled) if enabled is not None else None),
        "ready": limiter_ready,
        "backend": backend,
    }
