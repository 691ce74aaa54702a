from database.models import DesignStatus


def test_card_design_crud(client, admin_headers):
    created = client.post(
        "/api/admin/card-designs",
        json={"name": "Rose Gold Edition", "baseMsp": 900, "previewUrl": "/cards/rose.png"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    design = created.json()
    assert design["baseMsp"] == 900
    assert design["status"] == "active"

    updated = client.patch(
        f"/api/admin/card-designs/{design['id']}",
        json={"status": "inactive", "baseMsp": 950},
        headers=admin_headers,
    ).json()
    assert updated["status"] == "inactive"
    assert updated["baseMsp"] == 950

    active = client.get("/api/admin/card-designs", params={"status": "active"}, headers=admin_headers).json()
    assert active == []
    assert client.patch("/api/admin/card-designs/missing", json={"name": "Nope"}, headers=admin_headers).status_code == 404


def test_inactive_designs_hidden_from_agents(client, db_session, agent_headers, design):
    design.status = DesignStatus.INACTIVE
    db_session.commit()

    assert client.get("/api/agent/catalog", headers=agent_headers).json() == []


def test_msp_override_for_unknown_agent(client, admin_headers, design):
    response = client.put(f"/api/admin/agents/missing/msps/{design.id}", json={"mspAmount": 500}, headers=admin_headers)
    assert response.status_code == 404
