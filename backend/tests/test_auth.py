from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from shop_inventory.services.auth_service import SessionStore

SEED_EMAIL = "admin@example.com"

TEE = {"name": "Basic Tee", "sku": "ts-1", "price": 19.99, "size": "m", "quantity": 10}


def login(c, email=SEED_EMAIL, password="admin123"):
    return c.post("/api/auth/login", json={"email": email, "password": password})


def test_products_require_session(auth_client):
    for method, path in [
        ("get", "/api/products"),
        ("get", "/api/products/1"),
        ("post", "/api/products"),
        ("put", "/api/products/1"),
        ("delete", "/api/products/1"),
    ]:
        kwargs = {"json": TEE} if method in ("post", "put") else {}
        res = getattr(auth_client, method)(path, **kwargs)
        assert res.status_code == 401, (method, path)
        assert res.json() == {"error": "Unauthorized."}


def test_me_without_session(auth_client):
    res = auth_client.get("/api/auth/me")
    assert res.status_code == 200
    assert res.json() == {"user": None}


def test_login_requires_fields(auth_client):
    for body in [{}, {"email": SEED_EMAIL}, {"password": "x"}, {"email": "", "password": ""}]:
        res = auth_client.post("/api/auth/login", json=body)
        assert res.status_code == 400
        assert res.json() == {"error": "Email and password are required."}


def test_bad_credentials_are_indistinguishable(auth_client):
    wrong_password = login(auth_client, password="nope")
    unknown_email = login(auth_client, email="ghost@example.com")
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid email or password."}
    assert "sid" not in auth_client.cookies


def test_login_session_logout(auth_client):
    res = login(auth_client, email="  ADMIN@example.com ")
    assert res.status_code == 200
    assert res.json() == {"ok": True}
    assert auth_client.cookies.get("sid")

    me = auth_client.get("/api/auth/me").json()
    assert me["user"]["email"] == SEED_EMAIL
    assert me["user"]["name"] == "Admin"
    assert isinstance(me["user"]["id"], int)

    created = auth_client.post("/api/products", json=TEE)
    assert created.status_code == 201
    assert auth_client.get("/api/products").status_code == 200

    res = auth_client.post("/api/auth/logout")
    assert res.status_code == 200
    assert res.json() == {"ok": True}
    assert auth_client.get("/api/products").status_code == 401
    assert auth_client.get("/api/auth/me").json() == {"user": None}

    # logging out again is fine
    assert auth_client.post("/api/auth/logout").status_code == 200


def test_session_expires(auth_app):
    now = [datetime(2030, 1, 1, tzinfo=timezone.utc)]
    auth_app.state.sessions = SessionStore(60, clock=lambda: now[0])

    with TestClient(auth_app) as c:
        assert login(c).status_code == 200
        assert c.get("/api/products").status_code == 200

        now[0] += timedelta(seconds=61)
        assert c.get("/api/products").status_code == 401
        assert c.get("/api/auth/me").json() == {"user": None}
        # logging out an expired session is not an error
        assert c.post("/api/auth/logout").status_code == 200


def test_forged_token_is_rejected(auth_client):
    res = auth_client.get("/api/products", headers={"Cookie": "sid=forged"})
    assert res.status_code == 401
