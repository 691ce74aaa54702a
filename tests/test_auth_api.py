from database.models import Customer


def test_register_creates_customer_with_profile_page(client, db_session):
    response = client.post(
        "/api/auth/register",
        json={"email": "Neha@Example.com", "password": "secret-pass", "fullName": "Neha Gupta"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["email"] == "neha@example.com"
    assert body["user"]["role"] == "customer"
    assert body["slug"].startswith("neha-gupta-")
    assert db_session.query(Customer).filter(Customer.slug == body["slug"]).count() == 1


def test_register_duplicate_email(client, customer):
    response = client.post(
        "/api/auth/register",
        json={"email": "jane@example.com", "password": "secret-pass", "fullName": "Jane Again"},
    )
    assert response.status_code == 400


def test_register_short_password(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "x@example.com", "password": "short", "fullName": "Xavier"},
    )
    assert response.status_code == 422


def test_login_and_me(client, agent):
    bad = client.post("/api/auth/login", json={"email": "priya@agents.example.com", "password": "wrong-password"})
    assert bad.status_code == 401

    token = client.post("/api/auth/login", json={"email": "PRIYA@agents.example.com", "password": "agent-password"}).json()["accessToken"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).json()
    assert me["role"] == "agent"
    assert me["referralCode"] == "PRIYAS42"
    assert "submit_orders" in me["permissions"]
    assert "manage_orders" not in me["permissions"]


def test_me_rejects_bad_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401
