import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from shop_inventory.repositories.user_repo import UserRepository, hash_password, verify_password
from shop_inventory.schemas.auth_schema import UserIdentity
from shop_inventory.utils.log import get_logger

log = get_logger("auth")

# compared against when the email is unknown, so both failure paths hash once
_DUMMY_HASH = hash_password(secrets.token_urlsafe(16))


class AuthError(Exception):
    pass


class InvalidCredentials(AuthError):
    def __init__(self):
        super().__init__("Invalid email or password.")


@dataclass
class SessionRecord:
    identity: UserIdentity
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    """
    In-process session map keyed by an opaque token.

    Sessions live for ``ttl_seconds`` from creation. Expired entries are
    dropped when read and by ``purge_expired``.
    """

    def __init__(self, ttl_seconds: int, clock: Callable[[], datetime] = _utcnow):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def create(self, identity: UserIdentity) -> str:
        token = secrets.token_urlsafe(32)
        now = self._clock()
        with self._lock:
            self._sessions[token] = SessionRecord(identity, now + self.ttl)
        return token

    def get(self, token: Optional[str]) -> Optional[UserIdentity]:
        if not token:
            return None
        with self._lock:
            rec = self._sessions.get(token)
            if rec is None:
                return None
            if rec.expires_at <= self._clock():
                del self._sessions[token]
                return None
            return rec.identity

    def delete(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [t for t, rec in self._sessions.items() if rec.expires_at <= now]
            for t in expired:
                del self._sessions[t]
        return len(expired)

    def __len__(self):
        with self._lock:
            return len(self._sessions)


class AuthService:
    def __init__(self, db: Session, sessions: SessionStore):
        self.db = db
        self.sessions = sessions
        self.users = UserRepository(db)

    def login(self, email: str, password: str) -> str:
        user = self.users.get_by_email(email)
        if user is None:
            verify_password(password, _DUMMY_HASH)
            log.info("login failed for %s", email)
            raise InvalidCredentials()
        if not verify_password(password, user.password):
            log.info("login failed for %s", email)
            raise InvalidCredentials()
        token = self.sessions.create(UserIdentity.model_validate(user))
        log.info("login ok for %s", user.email)
        return token

    def current_user(self, token: Optional[str]) -> Optional[UserIdentity]:
        return self.sessions.get(token)

    def logout(self, token: Optional[str]) -> None:
        self.sessions.delete(token)
