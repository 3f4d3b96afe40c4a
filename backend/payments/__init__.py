"""
Module 'payments' (feature-first): point d'entrée public.
Réunit schémas du checkout, construction de la transaction PagoPar et services.
"""

from .models import Buyer, CheckoutItem, CheckoutRequest, CheckoutResponse
from .service import (
    CheckoutResult,
    build_transaction_request,
    to_compras_items,
    to_checkout_response,
    process_checkout,
)

__all__ = [
    # schémas
    "Buyer",
    "CheckoutItem",
    "CheckoutRequest",
    "CheckoutResponse",
    # services
    "CheckoutResult",
    "build_transaction_request",
    "to_compras_items",
    "to_checkout_response",
    "process_checkout",
]
