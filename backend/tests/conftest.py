import pytest
from fastapi.testclient import TestClient

from shop_inventory.config import Settings
from shop_inventory.db import init_db, make_engine, make_session_factory
from shop_inventory.main import create_app

SEED_EMAIL = "admin@example.com"
SEED_PASSWORD = "admin123"


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
        "SESSION_SWEEP_SECONDS": 3600,
        "SEED_USER_EMAIL": SEED_EMAIL,
        "SEED_USER_PASSWORD": SEED_PASSWORD,
        "STATIC_DIR": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'repo.db'}")
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    init_db(engine, auth_enabled=True)
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(tmp_path):
    """Client for an app with the product API open (auth disabled)."""
    app = create_app(make_settings(tmp_path, AUTH_ENABLED=False))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_app(tmp_path):
    return create_app(make_settings(tmp_path, AUTH_ENABLED=True))


@pytest.fixture
def auth_client(auth_app):
    with TestClient(auth_app) as c:
        yield c


