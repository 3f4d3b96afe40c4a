"""
Factory d'application recommandée pour les entrypoints (ex: backend.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import Optional
from fastapi import FastAPI

from backend.pagopar import PagoPar
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_force_https_middleware
from .static import mount_static_files
from .security import register_security_middleware
from .exceptions import register_exception_handlers
from .routes import register_routes
from .routers import register_routers

def create_app(pagopar: Optional[PagoPar] = None) -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de base, statiques, en-têtes de sécurité
      - gestionnaires d'exceptions et routes simples
      - tous les routers (checkout, catalogue, panier, paiements, health)
      - le middleware HTTPS en dernier (il s'exécute en premier)
    pagopar: client déjà construit (tests, scripts); sinon construit au démarrage.
    """
    app = FastAPI(title="Tienda PagoPar", lifespan=lifespan)
    app.state.pagopar = pagopar
    register_basic_middlewares(app)
    mount_static_files(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    register_force_https_middleware(app)
    return app
