"""
Module 'pagopar': client de l'API PagoPar (signature, requêtes, erreurs normalisées).
"""

from .client import PagoPar, DEFAULT_BASE_URL, DEFAULT_VERSION, DEFAULT_TIMEOUT_MS
from .errors import (
    PagoParError,
    PagoParConfigError,
    PagoParValidationError,
    PagoParGatewayError,
    PagoParNetworkError,
    API_ERROR,
    NETWORK_ERROR,
)
from .signature import format_date, serialize_payload, generate_signature

__all__ = [
    # client
    "PagoPar",
    "DEFAULT_BASE_URL",
    "DEFAULT_VERSION",
    "DEFAULT_TIMEOUT_MS",
    # erreurs
    "PagoParError",
    "PagoParConfigError",
    "PagoParValidationError",
    "PagoParGatewayError",
    "PagoParNetworkError",
    "API_ERROR",
    "NETWORK_ERROR",
    # signature
    "format_date",
    "serialize_payload",
    "generate_signature",
]
