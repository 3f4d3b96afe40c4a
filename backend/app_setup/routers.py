"""
Registre central des routers.
- API: checkout (/api/checkout), catalogue, panier, paiements PagoPar (lecture)
- Health: health_router
"""
from fastapi import FastAPI
from backend.catalog import views as catalog_views
from backend.cart import views as cart_views
from backend.payments import views as payments_views
from backend.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.checkout_router)
    app.include_router(payments_views.router)
    app.include_router(catalog_views.router)
    app.include_router(cart_views.router)
    app.include_router(health_router)
