from sqlalchemy import Column, Integer, String

from shop_inventory.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # bcrypt hash, never the plaintext
    password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
