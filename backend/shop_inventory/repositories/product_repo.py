from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shop_inventory.models.product import Product
from shop_inventory.schemas.product_schema import ProductData
from shop_inventory.utils.log import get_logger

log = get_logger("products")

# driver error codes for a UNIQUE violation
_SQLITE_UNIQUE = "SQLITE_CONSTRAINT_UNIQUE"
_PG_UNIQUE = "23505"


class ProductStoreError(Exception):
    pass


class ProductNotFound(ProductStoreError):
    def __init__(self):
        super().__init__("Product not found.")


class DuplicateSku(ProductStoreError):
    def __init__(self, sku: str):
        super().__init__("SKU must be unique.")
        self.sku = sku


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    Classify an IntegrityError by the driver's structured error code.

    Drivers that expose no code at all (sqlite3 before Python 3.11) are
    treated as a unique violation: validated input cannot trip the CHECK
    constraints, so UNIQUE(sku) is the only constraint left.
    """
    orig = exc.orig
    errorname = getattr(orig, "sqlite_errorname", None)
    # psycopg2 exposes pgcode, psycopg 3 sqlstate
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if errorname is None and pgcode is None:
        return True
    return errorname == _SQLITE_UNIQUE or pgcode == _PG_UNIQUE


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Product]:
        return list(self.db.scalars(select(Product).order_by(Product.id.desc())))

    def get(self, product_id: int) -> Product:
        p = self.db.get(Product, product_id, populate_existing=True)
        if p is None:
            raise ProductNotFound()
        return p

    def create(self, data: ProductData) -> Product:
        p = Product(**data.model_dump())
        self.db.add(p)
        self._commit(data.sku)
        log.info("created product id=%s sku=%s", p.id, p.sku)
        return p

    def update(self, product_id: int, data: ProductData) -> Product:
        """Replace every mutable field of the product with ``data``."""
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(**data.model_dump())
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
        except IntegrityError as e:
            self._rollback_integrity(e, data.sku)
        if result.rowcount == 0:
            self.db.rollback()
            raise ProductNotFound()
        self._commit(data.sku)
        log.info("updated product id=%s sku=%s", product_id, data.sku)
        return self.get(product_id)

    def delete(self, product_id: int) -> None:
        result = self.db.execute(
            delete(Product)
            .where(Product.id == product_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise ProductNotFound()
        self.db.commit()
        log.info("deleted product id=%s", product_id)

    def _commit(self, sku: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self._rollback_integrity(e, sku)

    def _rollback_integrity(self, exc: IntegrityError, sku: str):
        self.db.rollback()
        if is_unique_violation(exc):
            log.info("rejected duplicate sku=%s", sku)
            raise DuplicateSku(sku) from exc
        raise exc
