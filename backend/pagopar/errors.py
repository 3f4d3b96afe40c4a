"""
Erreurs normalisées du client PagoPar.

Une seule famille d'exceptions (PagoParError), discriminée par `kind`:
- "config": clés manquantes à la construction du client
- "validation": champ requis absent, levée avant tout appel réseau
- "gateway": réponse HTTP en erreur (status >= 400) renvoyée par PagoPar
- "network": aucune réponse obtenue (connexion refusée, timeout, DNS...)
"""
from typing import Any, Dict, Optional

API_ERROR = "API_ERROR"
NETWORK_ERROR = "NETWORK_ERROR"
VALIDATION_ERROR = "VALIDATION_ERROR"
CONFIG_ERROR = "CONFIG_ERROR"

DEFAULT_API_MESSAGE = "Error en la API PagoPar"
DEFAULT_NETWORK_MESSAGE = "Error de conexión con PagoPar"


class PagoParError(Exception):
    kind = "error"

    def __init__(
        self,
        message: str,
        code: str,
        status: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.data = data

    def to_dict(self) -> Dict[str, Any]:
        """Forme sérialisable (JSON) de l'erreur, sans les champs vides."""
        out: Dict[str, Any] = {"kind": self.kind, "code": self.code, "message": self.message}
        if self.status is not None:
            out["status"] = self.status
        if self.data is not None:
            out["data"] = self.data
        return out


class PagoParConfigError(PagoParError):
    kind = "config"

    def __init__(self, message: str = "Claves pública y privada son requeridas"):
        super().__init__(message, code=CONFIG_ERROR)


class PagoParValidationError(PagoParError):
    kind = "validation"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"El campo {field} es requerido", code=VALIDATION_ERROR)
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["field"] = self.field
        return out


class PagoParGatewayError(PagoParError):
    kind = "gateway"

    @classmethod
    def from_response(cls, status: int, body: Any) -> "PagoParGatewayError":
        """
        Construit l'erreur depuis le corps renvoyé par PagoPar.
        - code: body["codigo"] sinon API_ERROR
        - message: body["mensaje"] sinon message générique
        - data: corps brut conservé pour diagnostic
        """
        payload = body if isinstance(body, dict) else {}
        return cls(
            message=payload.get("mensaje") or DEFAULT_API_MESSAGE,
            code=payload.get("codigo") or API_ERROR,
            status=status,
            data=body,
        )


class PagoParNetworkError(PagoParError):
    kind = "network"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or DEFAULT_NETWORK_MESSAGE, code=NETWORK_ERROR)
