import math
import re
from typing import Any, Mapping, Optional

from shop_inventory.models.product import SIZES
from shop_inventory.schemas.product_schema import ProductData

REQUIRED_FIELDS = ("name", "sku", "price", "size", "quantity")

# largest value an SQLite INTEGER column holds
MAX_INTEGER = 2**63 - 1

_DIGITS = re.compile(r"[+-]?[0-9]{1,30}")


class ProductValidationError(Exception):
    """A product submission was rejected; ``str(exc)`` is the user-facing reason."""

    message = "Invalid product."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class MissingField(ProductValidationError):
    message = "Required: name, sku, price, size, quantity."


class InvalidPrice(ProductValidationError):
    message = "Invalid price."


class InvalidSize(ProductValidationError):
    message = "Invalid size. Allowed: " + ", ".join(SIZES) + "."


class InvalidQuantity(ProductValidationError):
    message = "Invalid quantity."


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    s = _text(value)
    return s or None


def _number(value: Any) -> Optional[float]:
    # bool is an int subclass; "true" is not a price
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            num = float(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if not math.isfinite(num):
        return None
    return num


def parse_price(value: Any) -> float:
    num = _number(value)
    if num is None or num < 0:
        raise InvalidPrice()
    return num


def parse_size(value: Any) -> str:
    size = (_text(value) or "").upper()
    if size not in SIZES:
        raise InvalidSize()
    return size


def parse_quantity(value: Any) -> int:
    """
    Integers and digit strings convert exactly; floats and strings such as
    "3.0" are accepted only when integral.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        qty = value
    elif isinstance(value, str) and _DIGITS.fullmatch(value.strip()):
        qty = int(value.strip())
    else:
        num = _number(value)
        if num is None or not num.is_integer():
            raise InvalidQuantity()
        qty = int(num)
    if qty < 0 or qty > MAX_INTEGER:
        raise InvalidQuantity()
    return qty


def validate_product_input(raw: Mapping[str, Any]) -> ProductData:
    """
    Normalize and validate a raw product submission.

    ``raw`` is a decoded JSON object. Checks run in order (required
    fields, price, size, quantity) and the first failure is raised. Text is
    trimmed, ``sku`` and ``size`` are upper-cased, blank optional fields
    become None. Invalid sizes are rejected, never defaulted.
    """
    for field in REQUIRED_FIELDS:
        if raw.get(field) is None:
            raise MissingField()
    name = _text(raw["name"])
    sku = _text(raw["sku"]).upper()
    if not name or not sku or not _text(raw["size"]):
        raise MissingField()

    price = parse_price(raw["price"])
    size = parse_size(raw["size"])
    quantity = parse_quantity(raw["quantity"])

    return ProductData(
        name=name,
        sku=sku,
        price=price,
        size=size,
        color=_optional_text(raw.get("color")),
        quantity=quantity,
        brand=_optional_text(raw.get("brand")),
        category=_optional_text(raw.get("category")),
    )
