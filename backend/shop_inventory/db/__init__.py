from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # request handlers run in FastAPI's threadpool
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, future=True, echo=False, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _sqlite_on_connect)
    return engine


def _sqlite_on_connect(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA busy_timeout = 5000")
    cur.close()


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def init_db(engine: Engine, auth_enabled: bool = True, seed_user: dict = None) -> None:
    """
    Initialize the DB schema and bootstrap data.

    Behavior:
      - Creates missing tables and additively migrates missing columns.
      - When auth is enabled and ``seed_user`` is given, inserts that user if
        the users table is empty.
    """
    from shop_inventory.db.schema import ensure_schema

    ensure_schema(engine, auth_enabled=auth_enabled)

    if auth_enabled and seed_user:
        from shop_inventory.repositories.user_repo import UserRepository

        with make_session_factory(engine)() as s:
            UserRepository(s).seed_if_empty(**seed_user)


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
