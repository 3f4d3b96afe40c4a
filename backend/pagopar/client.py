"""
Client PagoPar: centralise les appels à l'API de paiement PagoPar.

- Chaque opération valide ses champs requis AVANT tout appel réseau.
- Chaque requête ajoute `token` (clé publique) et `firma` (sha256 clé privée + payload).
- POST JSON sur {base_url}/{version}{endpoint}, timeout configurable (ms).
- Les erreurs HTTP/réseau sont journalisées avec l'URL puis relevées sous forme
  de PagoParGatewayError / PagoParNetworkError (jamais d'exception requests brute).

Exemple:
    client = PagoPar(public_key, private_key)
    transaccion = client.create_transaction({...})
    transaccion["url_pago"]
"""
import json
import logging
from typing import Any, Dict, Iterable, Optional

import requests

from .errors import (
    PagoParConfigError,
    PagoParGatewayError,
    PagoParNetworkError,
    PagoParValidationError,
)
from .signature import format_date, generate_signature, serialize_payload

DEFAULT_BASE_URL = "https://api.pagopar.com/api"
DEFAULT_VERSION = "1.2"
DEFAULT_TIMEOUT_MS = 10000

TRANSACTION_FIELDS = (
    "token_publico", "monto_total", "tipo_pedido",
    "fecha_maxima_pago", "compras_items", "comprador",
)
REFUND_FIELDS = ("token_transaccion", "monto")
SHIPMENT_FIELDS = (
    "destinatario", "direccion", "ciudad",
    "telefono", "email", "productos",
    "monto_total", "peso_total",
)

default_logger = logging.getLogger(__name__)


class PagoPar:
    def __init__(
        self,
        public_key: str,
        private_key: str,
        *,
        base_url: Optional[str] = None,
        version: Optional[str] = None,
        timeout: Optional[int] = None,
        logger: Any = None,
        session: Any = None,
    ):
        if not public_key or not private_key:
            raise PagoParConfigError()

        self.public_key = public_key
        self._private_key = private_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.version = version or DEFAULT_VERSION
        self.timeout = timeout or DEFAULT_TIMEOUT_MS
        self.logger = logger or default_logger
        self._session = session if session is not None else requests.Session()

    def __repr__(self) -> str:
        # Ne jamais exposer la clé privée
        return f"PagoPar(base_url={self.base_url!r}, version={self.version!r})"

    def __enter__(self) -> "PagoPar":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self._session, "close", None)
        if callable(close):
            close()

    # --- Opérations exposées ---

    def create_transaction(self, transaction_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Crée une transaction (pedido) et renvoie la réponse PagoPar
        (contient notamment url_pago et token_transaccion).
        - Champs requis: TRANSACTION_FIELDS
        - fecha_maxima_pago est normalisée en ISO 8601 UTC
        """
        self._validate_fields(transaction_data, TRANSACTION_FIELDS)
        try:
            fecha = format_date(transaction_data["fecha_maxima_pago"])
        except ValueError as e:
            raise PagoParValidationError("fecha_maxima_pago", str(e)) from e

        data = {
            **transaction_data,
            "token": self.public_key,
            "fecha_maxima_pago": fecha,
        }
        return self._make_request("/pedidos/crear/", data)

    def get_transaction(self, token_transaccion: str) -> Dict[str, Any]:
        """Consulte l'état courant d'une transaction par son token."""
        if not token_transaccion:
            raise PagoParValidationError("token_transaccion")
        data = {"token": self.public_key, "token_transaccion": token_transaccion}
        return self._make_request("/pedidos/traer/", data)

    def list_payment_methods(self) -> Dict[str, Any]:
        return self._make_request("/medios-de-pago/lista/", {"token": self.public_key})

    def create_refund(self, refund_data: Dict[str, Any]) -> Dict[str, Any]:
        """Demande un remboursement (token_transaccion, monto)."""
        self._validate_fields(refund_data, REFUND_FIELDS)
        data = {"token": self.public_key, **refund_data}
        return self._make_request("/reembolsos/crear/", data)

    def create_shipment(self, shipping_data: Dict[str, Any]) -> Dict[str, Any]:
        """Crée un envoi (destinataire, adresse, produits, poids...)."""
        self._validate_fields(shipping_data, SHIPMENT_FIELDS)
        data = {"token": self.public_key, **shipping_data}
        return self._make_request("/envios/crear/", data)

    def get_shipment_status(self, codigo_envio: str) -> Dict[str, Any]:
        if not codigo_envio:
            raise PagoParValidationError("codigo_envio")
        data = {"token": self.public_key, "codigo_envio": codigo_envio}
        return self._make_request("/envios/estado/", data)

    def list_cities(self) -> Dict[str, Any]:
        return self._make_request("/ciudades/lista/", {"token": self.public_key})

    # --- Helpers internes ---

    @staticmethod
    def _validate_fields(data: Optional[Dict[str, Any]], required_fields: Iterable[str]) -> None:
        data = data or {}
        for field in required_fields:
            if not data.get(field):
                raise PagoParValidationError(field)

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{self.version}{endpoint}"

    @staticmethod
    def _wire_payload(data: Dict[str, Any]) -> Dict[str, Any]:
        """Payload tel qu'il part sur le fil (Decimal, dates convertis); sinon PagoParValidationError."""
        try:
            return json.loads(serialize_payload(data))
        except TypeError as e:
            for field, value in data.items():
                try:
                    serialize_payload([value])
                except TypeError:
                    raise PagoParValidationError(field, f"El campo {field} no es serializable: {e}") from e
            raise PagoParValidationError("payload", str(e)) from e

    def _make_request(self, endpoint: str, data: Dict[str, Any]) -> Any:
        url = self._url(endpoint)
        payload = self._wire_payload(data)
        firma = generate_signature(self._private_key, payload)

        try:
            resp = self._session.post(
                url,
                json={**payload, "firma": firma},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout / 1000,
            )
            resp.raise_for_status()
        except requests.HTTPError as e:
            body = _response_body(e.response)
            self.logger.error("PagoPar API Error: %s %s", url, body)
            status = e.response.status_code if e.response is not None else None
            raise PagoParGatewayError.from_response(status, body) from e
        except requests.RequestException as e:
            self.logger.error("PagoPar API Error: %s %s", url, str(e))
            raise PagoParNetworkError(str(e)) from e

        body = _response_body(resp)
        self.logger.debug("PagoPar API Response: %s %s", url, body)
        return body


def _response_body(resp: Any) -> Any:
    """Corps JSON décodé si possible, texte brut sinon."""
    if resp is None:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text
