from auth.utils import verify_password
from database.models import Customer, Order, Profile


def place_agent_order(client, agent_headers, design_id, **overrides):
    payload = {
        "cardDesignId": design_id,
        "customerName": "Rahul Verma",
        "customerPhone": "9988776655",
        "customerEmail": "rahul@example.com",
        "line1Text": "Rahul Verma",
        "salePrice": 700,
    }
    payload.update(overrides)
    return client.post("/api/agent/orders", json=payload, headers=agent_headers).json()


def claim_token(db_session, order_id):
    return db_session.query(Order).filter(Order.id == order_id).one().claim_token


def test_claim_link_is_emailed_not_returned(client, db_session, outbox, agent_headers, design):
    placed = place_agent_order(client, agent_headers, design.id)

    assert "claimToken" not in placed
    token = claim_token(db_session, placed["orderId"])
    sent = outbox.sent[-1]
    assert sent["to"]["email"] == "rahul@example.com"
    assert f"/claim-account?token={token}" in sent["html"]


def test_validate_claim_token(client, db_session, agent_headers, design):
    placed = place_agent_order(client, agent_headers, design.id)

    response = client.get("/api/auth/claim-account", params={"token": claim_token(db_session, placed["orderId"])})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "orderNumber": placed["orderNumber"],
        "customerName": "Rahul Verma",
        "customerEmail": "rahul@example.com",
    }
    assert client.get("/api/auth/claim-account", params={"token": "bogus"}).status_code == 404


def test_claim_creates_account_once(client, db_session, agent_headers, design):
    placed = place_agent_order(client, agent_headers, design.id)
    token = claim_token(db_session, placed["orderId"])

    response = client.post("/api/auth/claim-account", json={"token": token, "password": "my-new-pass"})

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "rahul@example.com"
    assert body["accessToken"]

    order = db_session.query(Order).filter(Order.id == placed["orderId"]).one()
    db_session.refresh(order)
    customer = db_session.query(Customer).filter(Customer.slug == body["slug"]).one()
    assert order.claim_token_used is True
    assert order.customer_id == customer.id
    assert order.portfolio_slug == customer.slug

    login = client.post("/api/auth/login", json={"email": "rahul@example.com", "password": "my-new-pass"})
    assert login.status_code == 200

    again = client.get("/api/auth/claim-account", params={"token": token})
    assert again.status_code == 400
    assert again.json()["detail"]["alreadyClaimed"] is True

    reclaim = client.post("/api/auth/claim-account", json={"token": token, "password": "another-pass"})
    assert reclaim.status_code == 400


def test_claim_for_existing_login_resets_password(client, db_session, customer, agent_headers, design):
    placed = place_agent_order(
        client, agent_headers, design.id,
        customerName="Jane Doe", customerPhone="9123456780", customerEmail="jane@example.com",
        line1Text="Jane Doe", salePrice=650,
    )
    token = claim_token(db_session, placed["orderId"])

    body = client.post("/api/auth/claim-account", json={"token": token, "password": "fresh-password"}).json()

    assert body["slug"] == customer.slug
    assert db_session.query(Profile).filter(Profile.email == "jane@example.com").count() == 1
    assert client.post("/api/auth/login", json={"email": "jane@example.com", "password": "fresh-password"}).status_code == 200


def test_claim_cannot_take_over_admin_login(client, db_session, admin, agent_headers, design):
    placed = place_agent_order(
        client, agent_headers, design.id,
        customerName="The Boss", customerEmail=admin.email, line1Text="The Boss",
    )
    token = claim_token(db_session, placed["orderId"])

    response = client.post("/api/auth/claim-account", json={"token": token, "password": "hijacked-pass"})

    assert response.status_code == 400
    db_session.refresh(admin)
    assert verify_password("admin-password", admin.password_hash)
    assert db_session.query(Customer).filter(Customer.profile_id == admin.id).count() == 0
    order = db_session.query(Order).filter(Order.id == placed["orderId"]).one()
    db_session.refresh(order)
    assert order.claim_token_used is False
    assert client.post("/api/auth/login", json={"email": admin.email, "password": "admin-password"}).status_code == 200


def test_claim_cannot_take_over_agent_login(client, db_session, agent, agent_headers, design):
    placed = place_agent_order(
        client, agent_headers, design.id,
        customerName="Priya Sharma", customerEmail="priya@agents.example.com", line1Text="Priya Sharma",
    )
    token = claim_token(db_session, placed["orderId"])

    response = client.post("/api/auth/claim-account", json={"token": token, "password": "hijacked-pass"})

    assert response.status_code == 400
    assert client.post("/api/auth/login", json={"email": "priya@agents.example.com", "password": "agent-password"}).status_code == 200


def test_claim_rejects_short_password(client, db_session, agent_headers, design):
    placed = place_agent_order(client, agent_headers, design.id)

    response = client.post("/api/auth/claim-account", json={"token": claim_token(db_session, placed["orderId"]), "password": "short"})
    assert response.status_code == 422
