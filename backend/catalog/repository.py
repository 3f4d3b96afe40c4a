"""
Catalogue statique de la boutique (pas de base de données).
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    price: int  # guaraníes, sans décimales
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


PRODUCTS: List[Product] = [
    Product(1, "Producto 1", 100000, "Descripción del producto 1"),
    Product(2, "Producto 2", 150000, "Descripción del producto 2"),
    Product(3, "Producto 3", 200000, "Descripción del producto 3"),
]

def list_products() -> List[Product]:
    return list(PRODUCTS)

def get_product(product_id: Any) -> Optional[Product]:
    try:
        pid = int(product_id)
    except (TypeError, ValueError):
        return None
    for product in PRODUCTS:
        if product.id == pid:
            return product
    return None
