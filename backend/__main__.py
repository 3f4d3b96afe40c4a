"""
Lance la boutique en local: `python -m backend`.

Variables lues:
- HOST / PORT: adresse d'écoute (127.0.0.1:8000 par défaut)
- UVICORN_RELOAD: "1"/"true"/"yes" pour le rechargement auto
- LOG_LEVEL: niveau des logs (les erreurs PagoPar sortent sur le logger backend.pagopar.client)
"""
import logging
import os

import uvicorn


def main() -> None:
    log_level = os.environ.get("LOG_LEVEL", "info").lower()
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "backend.asgi:app",
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", 8000)),
        reload=os.environ.get("UVICORN_RELOAD", "").lower() in ("1", "true", "yes"),
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
