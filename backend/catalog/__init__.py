from .repository import Product, PRODUCTS, list_products, get_product

__all__ = ["Product", "PRODUCTS", "list_products", "get_product"]
