#!/usr/bin/env python3
"""Productos CLI for daily catalog operations."""

import argparse
from typing import List

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from productos.config import config
from productos.db import Database
from productos.log import configure_logging
from productos.product import Product, ProductRepository

console = Console()


def build_repository() -> ProductRepository:
    return ProductRepository(Database(config.database_url))


def render_products(products: List[Product]) -> Table:
    """Render products as a rich table, marking soft-deleted rows."""
    table = Table()
    for column in ("ID", "Producto", "Precio", "Min", "Max", "Existencias", "SKU", "Estado"):
        table.add_column(column)
    for p in products:
        table.add_row(
            str(p.id),
            escape(p.producto),
            str(p.precio),
            str(p.stock_minimo),
            str(p.stock_maximo),
            str(p.existencias),
            escape(p.sku),
            "[red]eliminado[/]" if p.is_deleted else "[green]activo[/]",
        )
    return table


def list_products(repo: ProductRepository, active_only: bool = False):
    """Print all products, or only active ones."""
    products = repo.list_active() if active_only else repo.list_all()
    if not products:
        console.print("[red]No products found.[/]")
        return
    console.print(render_products(products))


def search_products(repo: ProductRepository, term: str):
    """Print products matching a search term in any column."""
    products = repo.search_all_columns(term)
    if not products:
        console.print(f"[red]No products match '{escape(term)}'.[/]")
        return
    console.print(render_products(products))


def export_products(repo: ProductRepository, path: str):
    """Write the export projection to a CSV file."""
    df = repo.export_frame()
    df.to_csv(path, index=False)
    console.print(f"[green]Exported {len(df)} products to {escape(path)}.[/]")


def delete_product(repo: ProductRepository, product_id: int):
    """Soft-delete a product after confirmation."""
    product = repo.find_by_id(product_id)
    if not product:
        console.print(f"[red]Product {product_id} not found.[/]")
        return

    summary = f"Will mark [bold]{escape(product.producto)}[/] ({escape(product.sku)}) as deleted."
    if product.is_deleted:
        summary += f" It is already deleted since {product.deleted_at}."
    console.print(f"[yellow]{summary}[/]")

    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    deleted = repo.delete(product_id)
    if deleted is None:
        console.print(f"[red]Product {product_id} not found.[/]")
        return
    console.print(f"[green]Deleted {escape(deleted.sku)} at {deleted.deleted_at}.[/]")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Productos CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List products")
    list_parser.add_argument("--active", action="store_true", help="Hide deleted products")

    search_parser = subparsers.add_parser("search", help="Search products in every column")
    search_parser.add_argument("term")

    export_parser = subparsers.add_parser("export", help="Export products to CSV")
    export_parser.add_argument("path")

    delete_parser = subparsers.add_parser("delete", help="Soft-delete a product")
    delete_parser.add_argument("id", type=int)

    args = parser.parse_args(argv)

    configure_logging(config.log_level)
    repo = build_repository()

    if args.command == "list":
        list_products(repo, active_only=args.active)
    elif args.command == "search":
        search_products(repo, args.term)
    elif args.command == "export":
        export_products(repo, args.path)
    elif args.command == "delete":
        delete_product(repo, args.id)


if __name__ == "__main__":
    main()
