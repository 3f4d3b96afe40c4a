from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from backend.catalog.repository import get_product
from backend.pagopar import PagoPar
from backend.pagopar.dependencies import get_pagopar
from backend.payments.models import Buyer, CheckoutRequest
from backend.payments.service import process_checkout
from backend.utils.formatters import format_pyg
from backend.utils.rate_limit import optional_rate_limit
from .service import Cart, CartFullError

router = APIRouter(prefix="/api/v1/cart", tags=["Panier API"])


class AddItemRequest(BaseModel):
    product_id: int


def get_cart(request: Request) -> Cart:
    return Cart(request.session)

def _cart_payload(cart: Cart) -> Dict[str, Any]:
    data = cart.to_dict()
    data["total_display"] = format_pyg(data["total"])
    data["can_checkout"] = not cart.is_empty
    return data

# module backend.cart.views
@router.get("")
def read_cart(cart: Cart = Depends(get_cart)) -> Dict[str, Any]:
    """Contenu du panier de la session: {items, count, total, total_display, can_checkout}."""
    return _cart_payload(cart)

@router.post("/items")
def add_item(body: AddItemRequest, cart: Cart = Depends(get_cart)) -> Dict[str, Any]:
    """
    Ajoute une unité du produit au panier.
    - 404 si le produit n'existe pas dans le catalogue
    - 400 si le panier est plein (MAX_ITEMS lignes)
    """
    product = get_product(body.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Producto no encontrado")
    try:
        item = cart.add(product)
    except CartFullError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"item": item, "cart": _cart_payload(cart)}

@router.delete("/items/{cart_id}")
def remove_item(cart_id: int, cart: Cart = Depends(get_cart)) -> Dict[str, Any]:
    if cart.remove(cart_id) is None:
        raise HTTPException(status_code=404, detail="Artículo no encontrado en el carrito")
    return _cart_payload(cart)

@router.delete("")
def clear_cart(cart: Cart = Depends(get_cart)) -> Dict[str, Any]:
    cart.clear()
    return _cart_payload(cart)

@router.post("/checkout", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def checkout_cart(
    buyer: Buyer,
    cart: Cart = Depends(get_cart),
    pagopar: PagoPar = Depends(get_pagopar),
):
    """
    Variante serveur du checkout: utilise le panier de la session.
    - 400 si le panier est vide
    - sinon même contrat que POST /api/checkout
    """
    if cart.is_empty:
        raise HTTPException(status_code=400, detail="Carrito vacío")
    payload = CheckoutRequest(
        **buyer.model_dump(),
        items=cart.to_checkout_items(),
        monto_total=cart.total,
    )
    result = process_checkout(pagopar, payload)
    if not result.success:
        return JSONResponse(status_code=500, content=result.to_response())
    return JSONResponse(result.to_response())
