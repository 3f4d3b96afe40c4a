"""
Panier de la session navigateur, sans persistance.

Le cookie de session est limité à ~4 Ko: on n'y garde que des références
    {"lines": [{"cart_id": 1, "product_id": 2}, ...], "next_id": <int>}
et les lignes complètes (nom, prix...) sont reconstruites depuis le catalogue.
Les cart_id proviennent d'un compteur monotone propre au panier:
deux ajouts successifs ne peuvent jamais produire le même identifiant.
"""
from typing import Any, Dict, List, MutableMapping, Optional

from backend.catalog.repository import Product, get_product

SESSION_KEY = "cart"
MAX_ITEMS = 50


class CartFullError(Exception):
    """Le panier contient déjà MAX_ITEMS lignes."""


class Cart:
    def __init__(self, store: MutableMapping[str, Any]):
        self._store = store
        state = store.get(SESSION_KEY)
        if not isinstance(state, dict) or "lines" not in state:
            state = {"lines": [], "next_id": 1}
            store[SESSION_KEY] = state
        self._state = state

    @property
    def lines(self) -> List[Dict[str, int]]:
        return list(self._state.get("lines") or [])

    @property
    def items(self) -> List[Dict[str, Any]]:
        """Lignes complètes {cart_id, id, name, price, description}; un produit retiré du catalogue est ignoré."""
        items = []
        for line in self.lines:
            product = get_product(line.get("product_id"))
            if product:
                items.append({"cart_id": line.get("cart_id"), **product.to_dict()})
        return items

    @property
    def total(self) -> int:
        return sum(int(it.get("price") or 0) for it in self.items)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def is_full(self) -> bool:
        return len(self.lines) >= MAX_ITEMS

    def add(self, product: Product) -> Dict[str, Any]:
        """Ajoute un produit (une unité) et renvoie la ligne créée."""
        if self.is_full:
            raise CartFullError(f"Máximo {MAX_ITEMS} artículos por carrito")
        cart_id = int(self._state.get("next_id") or 1)
        line = {"cart_id": cart_id, "product_id": product.id}
        self._commit(self.lines + [line], next_id=cart_id + 1)
        return {"cart_id": cart_id, **product.to_dict()}

    def remove(self, cart_id: int) -> Optional[Dict[str, Any]]:
        """Retire la ligne cart_id; renvoie None si elle n'existe pas."""
        removed = next((it for it in self.items if it["cart_id"] == cart_id), None)
        if removed is None:
            return None
        self._commit([line for line in self.lines if line.get("cart_id") != cart_id])
        return removed

    def clear(self) -> None:
        # Le compteur n'est pas remis à zéro: pas de réutilisation d'identifiants
        self._commit([])

    def to_checkout_items(self) -> List[Dict[str, Any]]:
        """Lignes au format attendu par le checkout: [{id, name, price, description}]."""
        return [
            {"id": it["id"], "name": it["name"], "price": it["price"], "description": it["description"]}
            for it in self.items
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {"items": self.items, "count": self.count, "total": self.total}

    def _commit(self, lines: List[Dict[str, int]], next_id: Optional[int] = None) -> None:
        # Réaffectation complète pour que la session soit bien marquée modifiée
        state = {"lines": lines, "next_id": next_id if next_id is not None else self._state.get("next_id", 1)}
        self._state = state
        self._store[SESSION_KEY] = state
