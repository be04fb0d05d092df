#!/usr/bin/env python3
"""
Seed products from a JSON file through the product repository.

The file holds either a list of product objects or an object with an
``items`` list. Every entry goes through the same validation as the API;
invalid entries and duplicate SKUs are reported and skipped.

Usage:
    python scripts/seed_products.py --file products.json
    python scripts/seed_products.py --sample
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from shop_inventory.config import settings
from shop_inventory.db import init_db, make_engine, make_session_factory
from shop_inventory.repositories.product_repo import DuplicateSku, ProductRepository
from shop_inventory.services.validation import ProductValidationError, validate_product_input

SAMPLE_PRODUCTS = [
    {"name": "Basic Tee", "sku": "TS-BASIC-BLK", "price": 19.99, "size": "M", "color": "black", "quantity": 25, "brand": "Acme", "category": "t-shirts"},
    {"name": "Basic Tee", "sku": "TS-BASIC-WHT", "price": 19.99, "size": "L", "color": "white", "quantity": 12, "brand": "Acme", "category": "t-shirts"},
    {"name": "Slim Jeans", "sku": "JN-SLIM-32", "price": 59.0, "size": "M", "color": "navy", "quantity": 4, "brand": "Denimco", "category": "jeans"},
    {"name": "Hoodie", "sku": "HD-ZIP-GRY", "price": 45.5, "size": "XL", "color": "grey", "quantity": 0, "category": "hoodies"},
    {"name": "Rain Jacket", "sku": "JK-RAIN-YLW", "price": 89.0, "size": "S", "color": "#f5c518", "quantity": 7},
]


def load_entries(path: str) -> list:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        return data["items"]
    if isinstance(data, list):
        return data
    raise RuntimeError(f"{path}: expected a list or an object with 'items'")


def seed(entries: list, database_url: str = settings.DATABASE_URL) -> dict:
    """Insert ``entries``; return counts of created, invalid and duplicate rows."""
    engine = make_engine(database_url)
    init_db(engine, auth_enabled=False)
    counts = {"created": 0, "invalid": 0, "duplicate": 0}
    db = make_session_factory(engine)()
    repo = ProductRepository(db)
    try:
        for entry in entries:
            if not isinstance(entry, dict):
                counts["invalid"] += 1
                continue
            try:
                repo.create(validate_product_input(entry))
                counts["created"] += 1
            except ProductValidationError as e:
                print(f"skip {entry.get('sku')!r}: {e}")
                counts["invalid"] += 1
            except DuplicateSku as e:
                print(f"skip {e.sku!r}: {e}")
                counts["duplicate"] += 1
    finally:
        db.close()
        engine.dispose()
    return counts


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", help="Path to a JSON list of products")
    parser.add_argument("--sample", action="store_true", help="Load a few built-in sample products")
    parser.add_argument("--database-url", default=settings.DATABASE_URL)
    args = parser.parse_args()
    if args.file:
        if not os.path.exists(args.file):
            print("File not found:", args.file)
            sys.exit(1)
        entries = load_entries(args.file)
    elif args.sample:
        entries = SAMPLE_PRODUCTS
    else:
        parser.error("one of --file or --sample is required")
    print("Seeded products:", seed(entries, args.database_url))
