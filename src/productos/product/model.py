from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Product:
    """A row of the productos table."""

    id: int
    producto: str
    precio: Decimal
    stock_minimo: int
    stock_maximo: int
    existencias: int
    sku: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @classmethod
    def from_row(cls, row: dict) -> "Product":
        """Build a Product from a dict row, ignoring columns it doesn't know."""
        return cls(**{f.name: row.get(f.name) for f in fields(cls)})


@dataclass
class ProductExport:
    """Export projection: no id, no timestamps."""

    producto: str
    precio: Decimal
    stock_minimo: int
    stock_maximo: int
    existencias: int
    sku: str

    @classmethod
    def from_row(cls, row: dict) -> "ProductExport":
        return cls(**{f.name: row.get(f.name) for f in fields(cls)})


EXPORT_COLUMNS = [f.name for f in fields(ProductExport)]
