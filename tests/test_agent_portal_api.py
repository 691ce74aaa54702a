from database.models import AgentStatus, Order
from services.agent_service import create_agent


def agent_order(design_id, **overrides):
    payload = {
        "cardDesignId": design_id,
        "customerName": "Rahul Verma",
        "customerPhone": "9988776655",
        "customerEmail": "rahul@example.com",
        "line1Text": "Rahul Verma",
        "line2Text": "Architect",
        "salePrice": 800,
    }
    payload.update(overrides)
    return payload


def test_portal_requires_active_agent(client, db_session, agent, agent_headers, customer_headers):
    assert client.get("/api/agent/dashboard", headers=customer_headers).status_code == 403

    agent.status = AgentStatus.INACTIVE
    db_session.commit()
    assert client.get("/api/agent/dashboard", headers=agent_headers).status_code == 403


def test_commission_preview(client, agent_headers, design):
    above = client.post(
        "/api/agent/commission/preview",
        json={"cardDesignId": design.id, "salePrice": 800},
        headers=agent_headers,
    ).json()
    assert above == {"msp": 600, "salePrice": 800, "base": 100, "bonus": 100, "total": 200, "isBelowMsp": False}

    below = client.post(
        "/api/agent/commission/preview",
        json={"cardDesignId": design.id, "salePrice": 500},
        headers=agent_headers,
    ).json()
    assert below["total"] == 0
    assert below["isBelowMsp"] is True


def test_catalog_shows_agent_msp(client, admin_headers, agent, agent_headers, design):
    assert client.get("/api/agent/catalog", headers=agent_headers).json()[0]["msp"] == 600

    response = client.put(f"/api/admin/agents/{agent.id}/msps/{design.id}", json={"mspAmount": 450}, headers=admin_headers)
    assert response.status_code == 200

    catalog = client.get("/api/agent/catalog", headers=agent_headers).json()
    assert catalog[0]["msp"] == 450
    assert catalog[0]["baseMsp"] == 600

    overrides = client.get(f"/api/admin/agents/{agent.id}/msps", headers=admin_headers).json()
    assert [o["mspAmount"] for o in overrides] == [450]

    assert client.delete(f"/api/admin/agents/{agent.id}/msps/{design.id}", headers=admin_headers).status_code == 200
    assert client.get("/api/agent/catalog", headers=agent_headers).json()[0]["msp"] == 600


def test_create_order_with_commission(client, db_session, admin, agent, agent_headers, design):
    response = client.post("/api/agent/orders", json=agent_order(design.id), headers=agent_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["commissionAmount"] == 200
    assert body["isBelowMsp"] is False
    assert "claimToken" not in body

    order = db_session.query(Order).filter(Order.id == body["orderId"]).one()
    assert order.agent_id == agent.id
    assert order.line1_text == "RAHUL VERMA"
    assert order.is_direct_sale is False

    # Balance only moves on approval
    db_session.refresh(agent)
    assert float(agent.available_balance) == 0


def test_below_msp_order_needs_confirmation(client, agent_headers, design):
    refused = client.post("/api/agent/orders", json=agent_order(design.id, salePrice=500), headers=agent_headers)
    assert refused.status_code == 400
    assert "below the minimum selling price" in refused.json()["detail"]

    confirmed = client.post(
        "/api/agent/orders",
        json=agent_order(design.id, salePrice=500, confirmBelowMsp=True),
        headers=agent_headers,
    )
    assert confirmed.status_code == 201
    assert confirmed.json()["isBelowMsp"] is True
    assert confirmed.json()["commissionAmount"] == 0


def test_unknown_design(client, agent_headers):
    response = client.post("/api/agent/orders", json=agent_order("missing"), headers=agent_headers)
    assert response.status_code == 404


def test_dashboard_and_order_list(client, agent_headers, design):
    client.post("/api/agent/orders", json=agent_order(design.id), headers=agent_headers)
    client.post("/api/agent/orders", json=agent_order(design.id, customerName="Anita Rao"), headers=agent_headers)

    dashboard = client.get("/api/agent/dashboard", headers=agent_headers).json()
    assert dashboard["agent"]["referralCode"] == "PRIYAS42"
    assert dashboard["agent"]["referralLink"].endswith("/become-agent?ref=PRIYAS42")
    assert dashboard["pendingOrders"] == 2
    assert dashboard["ordersByStatus"]["approved"] == 0
    assert len(dashboard["recentOrders"]) == 2

    orders = client.get("/api/agent/orders", params={"status": "pending_approval"}, headers=agent_headers).json()
    assert {o["customerName"] for o in orders} == {"Rahul Verma", "Anita Rao"}
    assert client.get("/api/agent/orders", params={"status": "shipped"}, headers=agent_headers).json() == []


def test_network_lists_sub_agents(client, db_session, agent, agent_headers):
    recruit = create_agent(db_session, full_name="Karan Malhotra", email="karan@agents.example.com", referral_code="KARAN7", parent_agent_id=agent.id)
    recruit.total_sales = 3
    db_session.commit()

    network = client.get("/api/agent/network", headers=agent_headers).json()

    assert network["referralCode"] == "PRIYAS42"
    assert [s["referralCode"] for s in network["subAgents"]] == ["KARAN7"]
    assert network["subAgents"][0]["overrideEarnings"] == 42
    assert network["totalOverrideEarnings"] == 42
