"""
Gestionnaires d'exceptions.
- HTTPException: réponse JSON standard {"detail": ...}.
- PagoParError non interceptée par une route: 400 pour une validation locale,
  502 pour une erreur de la passerelle ou du réseau, corps {"detail": error.to_dict()}.
"""
import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from backend.pagopar import PagoParError, PagoParValidationError

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_json(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)

    @app.exception_handler(PagoParError)
    async def pagopar_error_json(request: Request, exc: PagoParError):
        status_code = 400 if isinstance(exc, PagoParValidationError) else 502
        logger.warning("pagopar.error path=%s kind=%s code=%s", request.url.path, exc.kind, exc.code)
        return JSONResponse(status_code=status_code, content={"detail": exc.to_dict()})
