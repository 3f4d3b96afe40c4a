from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from backend.pagopar import PagoPar
from backend.pagopar.dependencies import get_pagopar
from backend.utils.rate_limit import optional_rate_limit
from .models import CheckoutRequest, CheckoutResponse
from .service import process_checkout

checkout_router = APIRouter(prefix="/api", tags=["Checkout"])
router = APIRouter(prefix="/api/v1/payments", tags=["Payments API"])

# module backend.payments.views
@checkout_router.post(
    "/checkout",
    responses={200: {"model": CheckoutResponse}},
    dependencies=[Depends(optional_rate_limit(times=10, seconds=60))],
)
def checkout(payload: CheckoutRequest, pagopar: PagoPar = Depends(get_pagopar)):
    """
    Crée une transaction PagoPar pour le panier envoyé par la boutique.
    - Entrée JSON: {nombre, email, telefono, documento, items: [{name, price}], monto_total}
    - Sortie: {url, token_transaccion} (le navigateur est redirigé vers url)
    - Erreurs: 500 {"error": message} quel que soit le type d'erreur
    """
    result = process_checkout(pagopar, payload)
    if not result.success:
        return JSONResponse(status_code=500, content=result.to_response())
    return JSONResponse(result.to_response())

@router.get("/transactions/{token_transaccion}")
def get_transaction(token_transaccion: str, pagopar: PagoPar = Depends(get_pagopar)) -> Any:
    """État courant d'une transaction (pedidos/traer). Les erreurs PagoPar remontent au handler global."""
    return pagopar.get_transaction(token_transaccion)

@router.get("/methods")
def list_payment_methods(pagopar: PagoPar = Depends(get_pagopar)) -> Any:
    return pagopar.list_payment_methods()

@router.get("/cities")
def list_cities(pagopar: PagoPar = Depends(get_pagopar)) -> Any:
    return pagopar.list_cities()
