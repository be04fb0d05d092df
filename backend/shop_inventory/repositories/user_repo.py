from typing import Optional

import bcrypt
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from shop_inventory.models.user import User
from shop_inventory.utils.log import get_logger

log = get_logger("users")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        # malformed stored hash
        return False


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(
            select(User).where(User.email == normalize_email(email))
        ).first()

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(User)) or 0

    def create(self, email: str, password: str, name: Optional[str] = None) -> User:
        u = User(email=normalize_email(email), password=hash_password(password), name=name)
        self.db.add(u)
        self.db.commit()
        return u

    def seed_if_empty(self, email: str, password: str, name: Optional[str] = None) -> Optional[User]:
        """Insert the bootstrap user when no user exists yet."""
        if self.count():
            return None
        u = self.create(email, password, name)
        log.warning("seeded default user %s; change its password", u.email)
        return u
