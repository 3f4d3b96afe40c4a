from typing import Any, Dict

from fastapi import APIRouter

from backend.utils.formatters import format_pyg
from . import repository

router = APIRouter(prefix="/api/v1/products", tags=["Catalogue API"])

# module backend.catalog.views
@router.get("")
def list_products() -> Dict[str, Any]:
    """
    Catalogue complet avec prix formaté (es-PY) pour l'affichage.
    Réponse: {"products": [{id, name, price, description, price_display}, ...]}
    """
    products = [
        {**p.to_dict(), "price_display": format_pyg(p.price)}
        for p in repository.list_products()
    ]
    return {"products": products}
