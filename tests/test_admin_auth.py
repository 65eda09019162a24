import pytest

from storefront.config import Settings
from storefront.schemas import UserCreate
from storefront.security import create_access_token, decode_access_token


@pytest.fixture
def settings():
    return Settings(storage_backend="memory", log_level="WARNING", admin_auth_required=True)


async def login(client, username="admin", password="admin123"):
    return await client.post("/api/admin/login", json={"username": username, "password": password})


async def test_admin_routes_need_a_token(client, seeded):
    resp = await client.get("/api/admin/orders")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"
    assert resp.json() == {"message": "Not authenticated"}


async def test_public_routes_stay_open(client, seeded):
    assert (await client.get("/api/categories")).status_code == 200
    assert (await client.get("/api/contact-info")).status_code == 200


async def test_bad_credentials(client, seeded):
    resp = await login(client, password="wrong")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid username or password"
    assert (await login(client, username="ghost")).status_code == 401


async def test_login_then_use_token(client, seeded, settings):
    resp = await login(client)
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"accessToken", "tokenType"}
    assert body["tokenType"] == "bearer"
    assert decode_access_token(body["accessToken"], settings.jwt_secret, settings.jwt_algorithm)["sub"] == "admin"

    headers = {"Authorization": f"Bearer {body['accessToken']}"}
    resp = await client.get("/api/admin/stats", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["totalServices"] == 14


async def test_garbage_or_foreign_token_rejected(client, seeded, settings):
    resp = await client.get("/api/admin/orders", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401

    forged = create_access_token({"sub": "admin"}, "other-secret", settings.jwt_algorithm, 5)
    resp = await client.get("/api/admin/orders", headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401

    expired = create_access_token({"sub": "admin"}, settings.jwt_secret, settings.jwt_algorithm, -1)
    resp = await client.get("/api/admin/orders", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401


async def test_token_for_deleted_user_rejected(client, seeded, settings):
    token = create_access_token({"sub": "nobody"}, settings.jwt_secret, settings.jwt_algorithm, 5)
    resp = await client.get("/api/admin/orders", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "User not found"}


async def test_non_admin_user_is_forbidden(client, seeded, settings):
    await seeded.create_user(UserCreate(username="clerk", password="clerk-pass"))

    resp = await login(client, "clerk", "clerk-pass")
    assert resp.status_code == 403

    token = create_access_token({"sub": "clerk"}, settings.jwt_secret, settings.jwt_algorithm, 5)
    resp = await client.get("/api/admin/orders", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
    assert resp.json() == {"message": "Admin access required"}
    assert "www-authenticate" not in resp.headers
