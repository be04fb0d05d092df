from typing import Optional

from pydantic import BaseModel, ConfigDict


class ProductData(BaseModel):
    """A normalized product submission, ready to be written."""

    name: str
    sku: str
    price: float
    size: str
    color: Optional[str] = None
    quantity: int
    brand: Optional[str] = None
    category: Optional[str] = None


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    sku: str
    price: float
    size: str
    color: Optional[str] = None
    quantity: int
    brand: Optional[str] = None
    category: Optional[str] = None
