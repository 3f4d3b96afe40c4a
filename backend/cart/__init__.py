from .service import Cart, CartFullError, MAX_ITEMS, SESSION_KEY

__all__ = ["Cart", "CartFullError", "MAX_ITEMS", "SESSION_KEY"]
