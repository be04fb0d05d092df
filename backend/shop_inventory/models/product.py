from sqlalchemy import CheckConstraint, Column, Float, Integer, String, Text

from shop_inventory.db import Base

SIZES = ("XS", "S", "M", "L", "XL")


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price"),
        CheckConstraint(
            "size IN (" + ", ".join(f"'{s}'" for s in SIZES) + ")",
            name="ck_products_size",
        ),
        CheckConstraint("quantity >= 0", name="ck_products_quantity"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    sku = Column(String(64), unique=True, index=True, nullable=False)
    price = Column(Float, nullable=False)
    size = Column(String(2), nullable=False)
    color = Column(Text, nullable=True)
    quantity = Column(Integer, nullable=False)
    brand = Column(Text, nullable=True)
    category = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Product id={self.id} sku={self.sku} name={self.name}>"
