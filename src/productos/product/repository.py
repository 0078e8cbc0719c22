import logging
from typing import List, Mapping, Optional

import pandas as pd

from productos.db import QueryExecutor
from productos.product.model import EXPORT_COLUMNS, Product, ProductExport

logger = logging.getLogger(__name__)


def like_pattern(term) -> str:
    """Wrap a term as %term% with LIKE wildcards in it escaped."""
    text = str(term).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{text}%"


class ProductRepository:
    """
    Repository for product data access.
    Encapsulates all SQL and queries for the productos table.

    No method filters out soft-deleted rows unless its name says so.
    """

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    @staticmethod
    def _field_values(fields: Mapping) -> tuple:
        """
        The six mutable columns in statement order. Missing keys go through as
        NULL and are left for the store to reject.
        """
        sku = fields["sku"] if "sku" in fields else fields.get("SKU")
        return (
            fields.get("producto"),
            fields.get("precio"),
            fields.get("stock_minimo"),
            fields.get("stock_maximo"),
            fields.get("existencias"),
            sku,
        )

    def _one(self, query: str, params: tuple) -> Optional[Product]:
        row = self.executor.fetch_one(query, params)
        if row is None:
            logger.debug("No product matched %r", params)
            return None
        return Product.from_row(row)

    def list_all(self) -> List[Product]:
        """List every product, deleted ones included."""
        rows = self.executor.fetch_all("SELECT * FROM productos ORDER BY id")
        return [Product.from_row(row) for row in rows]

    def list_active(self) -> List[Product]:
        """List products that have not been soft-deleted."""
        rows = self.executor.fetch_all(
            "SELECT * FROM productos WHERE deleted_at IS NULL ORDER BY id"
        )
        return [Product.from_row(row) for row in rows]

    def create(self, fields: Mapping) -> Product:
        """Insert a product. The store assigns id, created_at and updated_at."""
        product = Product.from_row(
            self.executor.fetch_one(
                """
                INSERT INTO productos (producto, precio, stock_minimo, stock_maximo, existencias, sku)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                self._field_values(fields),
            )
        )
        logger.info("Created product %s (sku=%s)", product.id, product.sku)
        return product

    def find_by_id(self, product_id: int) -> Optional[Product]:
        """Get a product by ID, whether or not it is deleted."""
        return self._one("SELECT * FROM productos WHERE id = %s", (product_id,))

    def update(self, product_id: int, fields: Mapping) -> Optional[Product]:
        """
        Replace all six mutable fields of a product and refresh updated_at.

        This is a full replace, not a patch. deleted_at is left untouched, so a
        deleted product stays deleted.
        """
        product = self._one(
            """
            UPDATE productos
            SET producto = %s, precio = %s, stock_minimo = %s, stock_maximo = %s,
                existencias = %s, sku = %s, updated_at = clock_timestamp()
            WHERE id = %s
            RETURNING *
            """,
            self._field_values(fields) + (product_id,),
        )
        if product:
            logger.info("Updated product %s", product.id)
        return product

    def delete(self, product_id: int) -> Optional[Product]:
        """
        Soft-delete a product by stamping deleted_at.
        Calling it again re-stamps deleted_at with a later time.
        """
        product = self._one(
            "UPDATE productos SET deleted_at = clock_timestamp() WHERE id = %s RETURNING *",
            (product_id,),
        )
        if product:
            logger.info("Deleted product %s at %s", product.id, product.deleted_at)
        return product

    def search_all_columns(self, term: str) -> List[Product]:
        """
        Substring search over name, SKU and the text form of every numeric column.
        LIKE is case-sensitive. The term matches literally: \\, % and _ are escaped.
        """
        rows = self.executor.fetch_all(
            """
            SELECT * FROM productos
            WHERE producto LIKE %s ESCAPE '\\'
               OR precio::text LIKE %s ESCAPE '\\'
               OR stock_minimo::text LIKE %s ESCAPE '\\'
               OR stock_maximo::text LIKE %s ESCAPE '\\'
               OR existencias::text LIKE %s ESCAPE '\\'
               OR sku LIKE %s ESCAPE '\\'
            ORDER BY id
            """,
            (like_pattern(term),) * 6,
        )
        return [Product.from_row(row) for row in rows]

    def list_for_export(self) -> List[ProductExport]:
        """List every product, deleted ones included, reduced to the export columns."""
        rows = self.executor.fetch_all(
            """
            SELECT producto, precio, stock_minimo, stock_maximo, existencias, sku
            FROM productos
            ORDER BY id
            """
        )
        return [ProductExport.from_row(row) for row in rows]

    def export_frame(self) -> pd.DataFrame:
        """
        The export projection as a pandas DataFrame.
        precio is converted from Decimal to float for numeric compatibility.
        """
        df = pd.DataFrame(
            [vars(p) for p in self.list_for_export()],
            columns=EXPORT_COLUMNS,
        )
        df["precio"] = df["precio"].astype(float)
        return df
