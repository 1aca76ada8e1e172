from conftest import PASSWORD


def test_register_sets_cookie_and_me(client):
    r = client.post("/api/auth/register", json={"username": "alice", "password": PASSWORD, "email": "alice@example.com"})
    assert r.status_code == 201
    body = r.json()
    assert body["user"]["username"] == "alice"
    assert body["user"]["email"] == "alice@example.com"
    assert body["tokenType"] == "bearer"
    assert "passwordHash" not in body["user"]

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["username"] == "alice"


def test_duplicate_username_conflicts(client):
    client.post("/api/auth/register", json={"username": "alice", "password": PASSWORD})
    r = client.post("/api/auth/register", json={"username": "alice", "password": PASSWORD})
    assert r.status_code == 409
    assert r.json() == {"detail": "Username already taken", "error": "conflict"}


def test_short_password_is_rejected(client):
    r = client.post("/api/auth/register", json={"username": "alice", "password": "abc"})
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "validation_error"
    assert body["fields"] == ["password"]
    assert "password" in body["detail"]


def test_login_with_wrong_password(client):
    client.post("/api/auth/register", json={"username": "alice", "password": PASSWORD})
    client.cookies.clear()
    r = client.post("/api/auth/login", json={"username": "alice", "password": "wrong-password"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials"


def test_login_unknown_user(client):
    r = client.post("/api/auth/login", json={"username": "ghost", "password": PASSWORD})
    assert r.status_code == 401


def test_login_then_bearer_token(client):
    client.post("/api/auth/register", json={"username": "alice", "password": PASSWORD})
    client.cookies.clear()
    r = client.post("/api/auth/login", json={"username": "alice", "password": PASSWORD})
    assert r.status_code == 200
    token = r.json()["accessToken"]
    client.cookies.clear()

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "alice"


def test_logout_clears_session(client):
    client.post("/api/auth/register", json={"username": "alice", "password": PASSWORD})
    assert client.get("/api/auth/me").status_code == 200
    r = client.post("/api/auth/logout")
    assert r.status_code == 204
    assert client.get("/api/auth/me").status_code == 401


def test_me_without_session(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json()["error"] == "unauthorized"


def test_garbage_token_is_unauthorized(client):
    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
