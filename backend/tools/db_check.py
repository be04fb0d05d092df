import os
import sys

from sqlalchemy import inspect, text

# allow running from repo/tools
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from shop_inventory.db import make_engine

DB = sys.argv[1] if len(sys.argv) > 1 else "database.db"
SKU = sys.argv[2] if len(sys.argv) > 2 else None

engine = make_engine(f"sqlite:///{DB}")
insp = inspect(engine)

print("=== Schema ===")
for table in insp.get_table_names():
    cols = ", ".join(f"{c['name']} {c['type']}" for c in insp.get_columns(table))
    print(f"{table}: {cols}")

with engine.connect() as conn:
    if "products" in insp.get_table_names():
        print("\n=== Recent Products ===")
        if SKU:
            rows = conn.execute(
                text("SELECT id, sku, name, price, size, quantity FROM products WHERE sku = :sku"),
                {"sku": SKU.strip().upper()},
            )
        else:
            rows = conn.execute(
                text("SELECT id, sku, name, price, size, quantity FROM products ORDER BY id DESC LIMIT 20")
            )
        for r in rows:
            print(tuple(r))

    if "users" in insp.get_table_names():
        print("\n=== Users ===")
        for r in conn.execute(text("SELECT id, email, name FROM users ORDER BY id")):
            print(tuple(r))

engine.dispose()
