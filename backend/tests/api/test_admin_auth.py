"""Admin Auth: login/logout/session round trips, uniform credential errors, registration.

Invariants:
    - login -> session true; logout -> session false
    - Unknown user and wrong password are indistinguishable
    - Session cookie is HttpOnly, SameSite=Lax, 7-day max-age
    - Registration conflicts are 409 and never log anyone in
"""

from sqlalchemy import select

from gallery.models.admin_user import AdminUser


async def _session_state(client) -> bool:
    res = await client.get("/api/admin/session")
    assert res.status_code == 200
    return res.json()["authenticated"]


async def test_session_is_false_without_cookie(client):
    assert await _session_state(client) is False


async def test_login_then_session_check_is_authenticated(client, admin_user, admin_credentials):
    res = await client.post(
        "/api/admin/login",
        json=admin_credentials,
    )
    assert res.status_code == 200
    assert res.json() == {"success": True}
    assert await _session_state(client) is True


async def test_logout_then_session_check_is_unauthenticated(admin_client):
    res = await admin_client.post("/api/admin/logout")
    assert res.status_code == 200
    assert res.json() == {"success": True}
    assert await _session_state(admin_client) is False


async def test_session_cookie_attributes(client, admin_user, admin_credentials):
    res = await client.post(
        "/api/admin/login",
        json=admin_credentials,
    )
    cookie = res.headers["set-cookie"].lower()
    assert "httponly" in cookie
    assert "samesite=lax" in cookie
    assert "max-age=604800" in cookie


async def test_wrong_password_and_unknown_user_fail_identically(client, admin_user, admin_credentials):
    wrong_password = await client.post(
        "/api/admin/login",
        json={**admin_credentials, "password": "nope"},
    )
    unknown_user = await client.post(
        "/api/admin/login",
        json={**admin_credentials, "username": "nobody"},
    )
    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid credentials"}
    assert await _session_state(client) is False


async def test_login_with_missing_fields_returns_400(client):
    res = await client.post("/api/admin/login", json={"username": "admin"})
    assert res.status_code == 400
    assert isinstance(res.json()["error"], str)


async def test_logout_without_session_succeeds(client):
    res = await client.post("/api/admin/logout")
    assert res.status_code == 200
    assert res.json() == {"success": True}


async def test_token_is_rejected_after_logout(admin_client):
    token = next(iter(admin_client.cookies.values()))
    await admin_client.post("/api/admin/logout")

    admin_client.cookies.clear()
    admin_client.cookies.set("gallery_session", token)
    res = await admin_client.post(
        "/api/settings", json={"key": "telegram_link", "value": "https://t.me/x"},
    )
    assert res.status_code == 401


async def test_forged_token_is_unauthorized(client):
    client.cookies.set("gallery_session", "forged-token")
    assert await _session_state(client) is False
    res = await client.post("/api/settings", json={"key": "k", "value": "v"})
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}


async def test_relogin_invalidates_previous_token(admin_client, admin_credentials):
    first_token = admin_client.cookies.get("gallery_session")
    res = await admin_client.post(
        "/api/admin/login",
        json=admin_credentials,
    )
    assert res.status_code == 200
    second_token = admin_client.cookies.get("gallery_session")
    assert second_token != first_token

    admin_client.cookies.clear()
    admin_client.cookies.set("gallery_session", first_token)
    assert await _session_state(admin_client) is False


# --- Registration ---------------------------------------------------------------

async def test_register_then_duplicate_returns_409(client):
    first = await client.post(
        "/api/admin/register", json={"username": "bob", "password": "pw"},
    )
    assert first.status_code == 201
    assert first.json() == {"success": True}

    second = await client.post(
        "/api/admin/register", json={"username": "bob", "password": "pw"},
    )
    assert second.status_code == 409
    assert second.json() == {"error": "Username already exists"}


async def test_register_does_not_establish_session(client):
    await client.post("/api/admin/register", json={"username": "bob", "password": "pw"})
    assert await _session_state(client) is False


async def test_registered_admin_can_log_in(client):
    await client.post("/api/admin/register", json={"username": "bob", "password": "pw"})
    res = await client.post("/api/admin/login", json={"username": "bob", "password": "pw"})
    assert res.status_code == 200
    assert await _session_state(client) is True


async def test_register_stores_hash_not_plaintext(client, test_db):
    await client.post("/api/admin/register", json={"username": "bob", "password": "pw"})
    result = await test_db.execute(select(AdminUser).where(AdminUser.username == "bob"))
    user = result.scalar_one()
    assert user.password != "pw"
    assert user.password.startswith("$2")


async def test_register_with_empty_password_returns_400(client):
    res = await client.post("/api/admin/register", json={"username": "bob", "password": ""})
    assert res.status_code == 400
