"""
Cas d'usage 'payments': construit la transaction PagoPar depuis le panier
et délègue la création au client PagoPar.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from backend import config
from backend.pagopar import PagoPar, PagoParError
from .models import CheckoutRequest

logger = logging.getLogger(__name__)

GENERIC_CHECKOUT_ERROR = "Error en el proceso de pago"


class CheckoutResult:
    def __init__(
        self,
        success: bool,
        url: Optional[str] = None,
        token_transaccion: Optional[str] = None,
        error: Optional[str] = None,
        error_kind: Optional[str] = None,
    ):
        self.success = success
        self.url = url
        self.token_transaccion = token_transaccion
        self.error = error
        self.error_kind = error_kind

    def to_response(self) -> Dict[str, Any]:
        if self.success:
            return {"url": self.url, "token_transaccion": self.token_transaccion}
        return {"error": self.error or GENERIC_CHECKOUT_ERROR}

def to_compras_items(checkout: CheckoutRequest) -> List[Dict[str, Any]]:
    # Une ligne par article du panier, quantité toujours 1
    return [{"nombre": it.name, "cantidad": 1, "precio": it.price} for it in checkout.items]

def build_transaction_request(
    checkout: CheckoutRequest,
    public_key: str,
    now: Optional[datetime] = None,
    expiry_hours: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Construit le payload 'pedidos/crear' attendu par PagoPar:
    - monto_total: fourni par la boutique, sinon somme des prix des articles
    - fecha_maxima_pago: now + CHECKOUT_EXPIRY_HOURS (24h par défaut)
    - compras_items: [{nombre, cantidad=1, precio}]
    - comprador: {nombre, email, telefono, documento}
    """
    now = now or datetime.now(timezone.utc)
    hours = expiry_hours if expiry_hours is not None else config.CHECKOUT_EXPIRY_HOURS
    monto_total = checkout.monto_total
    if monto_total is None:
        monto_total = sum(it.price for it in checkout.items)

    return {
        "token_publico": public_key,
        "monto_total": monto_total,
        "tipo_pedido": config.CHECKOUT_ORDER_TYPE,
        "fecha_maxima_pago": now + timedelta(hours=hours),
        "compras_items": to_compras_items(checkout),
        "comprador": checkout.to_comprador(),
    }

def to_checkout_response(transaccion: Dict[str, Any]) -> Dict[str, Any]:
    """Ne garde que ce dont la boutique a besoin pour rediriger le navigateur."""
    transaccion = transaccion if isinstance(transaccion, dict) else {}
    return {
        "url": transaccion.get("url_pago"),
        "token_transaccion": transaccion.get("token_transaccion"),
    }

def process_checkout(
    client: PagoPar,
    checkout: CheckoutRequest,
    now: Optional[datetime] = None,
) -> CheckoutResult:
    """
    Crée la transaction PagoPar et renvoie un CheckoutResult.
    - Succès: url (url_pago) + token_transaccion
    - Échec (validation, gateway, réseau, autre): message d'erreur, type d'erreur conservé
    """
    try:
        transaction_data = build_transaction_request(checkout, client.public_key, now=now)
        transaccion = client.create_transaction(transaction_data)
        out = to_checkout_response(transaccion)
        logger.info(
            "payments.checkout created token=%s items=%s monto_total=%s",
            out["token_transaccion"], len(checkout.items), transaction_data["monto_total"],
        )
        return CheckoutResult(True, url=out["url"], token_transaccion=out["token_transaccion"])
    except PagoParError as e:
        logger.exception("Erreur checkout (%s)", e.kind)
        return CheckoutResult(False, error=e.message, error_kind=e.kind)
    except Exception as e:
        logger.exception("Erreur checkout")
        return CheckoutResult(False, error=str(e) or GENERIC_CHECKOUT_ERROR, error_kind="internal")
