"""Auth Routes — login, current user and the optional mutation gate.

Invariants:
    - Missing fields → 400 with errors; wrong password or unknown user → 401
    - A successful login returns {token, user: {id, username}}, valid for one day
    - /api/auth/me requires a valid bearer credential
    - With protect_mutations on, writes without a credential are 401
"""

from jose import jwt


async def _login(client, username="admin", password="s3cret"):
    return await client.post(
        "/api/auth/login", json={"username": username, "password": password},
    )


async def test_login_missing_fields_is_400(client):
    res = await client.post("/api/auth/login", json={"username": "admin"})
    assert res.status_code == 400
    assert res.json()["errors"] == [
        {"param": "password", "msg": "password is required", "value": None},
    ]


async def test_login_wrong_password_is_401(client, seed_user):
    res = await _login(client, password="nope")
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials"}


async def test_login_unknown_user_is_401(client, seed_user):
    res = await _login(client, username="ghost")
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials"}


async def test_login_success(client, seed_user):
    res = await _login(client)
    assert res.status_code == 200
    body = res.json()
    assert body["user"] == {"id": str(seed_user["id"]), "username": "admin"}

    claims = jwt.get_unverified_claims(body["token"])
    assert claims["userId"] == str(seed_user["id"])
    assert claims["username"] == "admin"
    assert claims["exp"] - claims["iat"] == 24 * 3600


async def test_me_with_credential(client, seed_user):
    token = (await _login(client)).json()["token"]
    res = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 200
    assert res.json() == {"id": str(seed_user["id"]), "username": "admin"}


async def test_me_without_credential_is_401(client):
    res = await client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json() == {"error": "Authentication required"}


async def test_me_with_bad_token_is_401(client):
    res = await client.get(
        "/api/auth/me", headers={"Authorization": "Bearer garbage"},
    )
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid token"}


async def test_mutations_open_by_default(client):
    res = await client.post("/api/categories", json={"name": "Open"})
    assert res.status_code == 201


async def test_protected_mutations_require_credential(
    client, seed_user, settings_override,
):
    settings_override(protect_mutations=True)

    res = await client.post("/api/categories", json={"name": "Locked"})
    assert res.status_code == 401

    token = (await _login(client)).json()["token"]
    res = await client.post(
        "/api/categories", json={"name": "Locked"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 201


async def test_protected_mode_leaves_reads_open(client, settings_override):
    settings_override(protect_mutations=True)
    res = await client.get("/api/categories")
    assert res.status_code == 200
