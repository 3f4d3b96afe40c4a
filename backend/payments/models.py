"""
Schémas pydantic du checkout (corps JSON envoyé par la boutique).
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Buyer(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    nombre: str = Field(min_length=1)
    email: EmailStr
    telefono: str = Field(min_length=1)
    documento: str = Field(min_length=1)

    def to_comprador(self) -> dict:
        return {
            "nombre": self.nombre,
            "email": str(self.email),
            "telefono": self.telefono,
            "documento": self.documento,
        }


class CheckoutItem(BaseModel):
    # La boutique envoie aussi cartId/description: ignorés
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    name: str = Field(min_length=1)
    price: int = Field(ge=0)
    description: Optional[str] = None


class CheckoutRequest(Buyer):
    items: List[CheckoutItem] = Field(min_length=1)
    monto_total: Optional[int] = Field(default=None, ge=0)


class CheckoutResponse(BaseModel):
    url: str
    token_transaccion: str
