"""Seed a starter catalog into the productos table."""
from productos.config import config
from productos.db import Database
from productos.errors import ConstraintViolation
from productos.log import configure_logging
from productos.product import ProductRepository

INITIAL_PRODUCTS = [
    {"producto": "Widget", "precio": "9.99", "stock_minimo": 5, "stock_maximo": 50, "existencias": 20, "sku": "WID-001"},
    {"producto": "Tornillo 3/8", "precio": "0.35", "stock_minimo": 100, "stock_maximo": 2000, "existencias": 850, "sku": "TOR-038"},
    {"producto": "Tuerca hexagonal", "precio": "0.20", "stock_minimo": 100, "stock_maximo": 2000, "existencias": 1200, "sku": "TUE-HEX"},
    {"producto": "Llave inglesa 10in", "precio": "149.90", "stock_minimo": 2, "stock_maximo": 15, "existencias": 6, "sku": "LLA-010"},
]


def main():
    configure_logging(config.log_level)
    products_repo = ProductRepository(Database(config.database_url))

    for product in INITIAL_PRODUCTS:
        try:
            result = products_repo.create(product)
        except ConstraintViolation as e:
            if e.constraint != "productos_sku_key":
                raise
            print(f"Skipping {product['sku']} - already exists")
            continue
        print(f"Created: {result.sku} (id={result.id})")


if __name__ == "__main__":
    main()
