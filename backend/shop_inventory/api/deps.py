import re
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from shop_inventory.config import Settings
from shop_inventory.db import get_db
from shop_inventory.schemas.auth_schema import UserIdentity
from shop_inventory.services.auth_service import AuthService, SessionStore
from shop_inventory.services.validation import MAX_INTEGER

_ID = re.compile(r"-?[0-9]{1,20}")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_auth_service(
    db: Session = Depends(get_db), sessions: SessionStore = Depends(get_sessions)
) -> AuthService:
    return AuthService(db, sessions)


def session_token(request: Request) -> Optional[str]:
    return request.cookies.get(get_settings(request).SESSION_COOKIE_NAME)


def require_auth(
    request: Request, sessions: SessionStore = Depends(get_sessions)
) -> UserIdentity:
    identity = sessions.get(session_token(request))
    if identity is None:
        raise HTTPException(status_code=401, detail="Unauthorized.")
    return identity


def parse_id(raw: str) -> int:
    """Path ids are plain decimal integers that fit an SQLite INTEGER."""
    if not _ID.fullmatch(raw):
        raise HTTPException(status_code=400, detail="Invalid id.")
    value = int(raw)
    if not -MAX_INTEGER - 1 <= value <= MAX_INTEGER:
        raise HTTPException(status_code=400, detail="Invalid id.")
    return value
