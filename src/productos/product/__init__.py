"""
Product

This package provides the product record types and their repository.
"""

from productos.product.model import Product, ProductExport
from productos.product.repository import ProductRepository

__all__ = ["Product", "ProductExport", "ProductRepository"]
