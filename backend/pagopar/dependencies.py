"""
Câblage du client PagoPar dans l'application FastAPI.
- build_client_from_config: construit LE client unique au démarrage (lifespan)
- get_pagopar: dépendance FastAPI qui renvoie l'instance portée par app.state
"""
import logging
from fastapi import HTTPException, Request

from backend import config
from .client import PagoPar

logger = logging.getLogger(__name__)

def build_client_from_config() -> PagoPar:
    """
    Construit le client depuis backend.config.
    Lève PagoParConfigError si PAGOPAR_PUBLIC_KEY / PAGOPAR_PRIVATE_KEY manquent.
    """
    client = PagoPar(
        config.PAGOPAR_PUBLIC_KEY,
        config.PAGOPAR_PRIVATE_KEY,
        base_url=config.PAGOPAR_API_URL,
        version=config.PAGOPAR_API_VERSION,
        timeout=config.PAGOPAR_TIMEOUT_MS,
        logger=logging.getLogger("backend.pagopar.client"),
    )
    logger.info("pagopar.client ready base_url=%s version=%s", client.base_url, client.version)
    return client

def get_pagopar(request: Request) -> PagoPar:
    client = getattr(request.app.state, "pagopar", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Cliente PagoPar no inicializado")
    return client
