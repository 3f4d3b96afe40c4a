"""
Point d'entrée ASGI de la boutique (`uvicorn backend.asgi:app`).
Le client PagoPar est créé au démarrage: sans PAGOPAR_PUBLIC_KEY / PAGOPAR_PRIVATE_KEY le serveur refuse de démarrer.
"""

from backend.app import app

__all__ = ["app"]
