import re
from typing import List, Tuple

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from shop_inventory.db import Base
from shop_inventory.utils.log import get_logger

log = get_logger("schema")

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_TYPE_SQL = re.compile(r"[A-Za-z][A-Za-z0-9_ (),]*")

# Columns that were added to ``products`` after its first release. Existing
# databases get them through ensure_column on every startup.
PRODUCT_COLUMN_MIGRATIONS: List[Tuple[str, str]] = [
    ("brand", "TEXT"),
    ("category", "TEXT"),
]


def ensure_schema(engine: Engine, auth_enabled: bool = True) -> None:
    """
    Create the products table (and the users table when auth is enabled) if
    missing, then add any columns an older products table lacks.

    Safe to call on every startup: nothing is ever dropped or renamed.
    """
    from shop_inventory.models.product import Product
    from shop_inventory.models.user import User

    tables = [Product.__table__]
    if auth_enabled:
        tables.append(User.__table__)

    existing = set(inspect(engine).get_table_names())
    missing = [t.name for t in tables if t.name not in existing]
    Base.metadata.create_all(bind=engine, tables=tables)
    if missing:
        log.info("created tables: %s", ", ".join(missing))

    for column, type_sql in PRODUCT_COLUMN_MIGRATIONS:
        ensure_column(engine, Product.__tablename__, column, type_sql)


def ensure_column(engine: Engine, table: str, column: str, type_sql: str) -> bool:
    """
    Add ``column`` to ``table`` unless it already exists.

    Returns True when the column was added, False when it was already present.
    Raises ValueError for a malformed identifier/type or a missing table.
    """
    if not _IDENTIFIER.fullmatch(table) or not _IDENTIFIER.fullmatch(column):
        raise ValueError(f"Invalid identifier: {table}.{column}")
    if not _TYPE_SQL.fullmatch(type_sql):
        raise ValueError(f"Invalid column type: {type_sql!r}")

    if table not in inspect(engine).get_table_names():
        raise ValueError(f"Table {table} does not exist")
    if column in column_names(engine, table):
        return False

    with engine.begin() as conn:
        conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {type_sql}"))
    log.info("added column %s.%s %s", table, column, type_sql)
    return True


def column_names(engine: Engine, table: str) -> List[str]:
    return [c["name"] for c in inspect(engine).get_columns(table)]
