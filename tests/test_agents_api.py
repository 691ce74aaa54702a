import pytest

from database.models import Agent, AgentApplication, ApplicationStatus, Notification, Profile
from services.agent_service import DuplicateAgentError, create_agent


def application(**overrides):
    payload = {
        "fullName": "Karan Malhotra",
        "email": "karan@example.com",
        "phone": "+91 98111 22233",
        "city": "Delhi",
        "experience": "Sold insurance for 3 years",
    }
    payload.update(overrides)
    return payload


def test_apply_creates_pending_application(client, db_session, admin, outbox):
    response = client.post("/api/agents/apply", json=application())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    stored = db_session.query(AgentApplication).filter(AgentApplication.id == body["applicationId"]).one()
    assert stored.status == ApplicationStatus.PENDING
    assert stored.phone == "9811122233"
    assert stored.generated_referral_code.startswith("KARANM")

    assert outbox.sent[0]["subject"] == "Application Received - TapOnce Agent Program"
    assert db_session.query(Notification).filter(Notification.user_id == admin.id).count() == 1


def test_apply_links_recruiting_agent(client, db_session, agent):
    response = client.post("/api/agents/apply", json=application(referralCode="priyas42"))

    stored = db_session.query(AgentApplication).filter(AgentApplication.id == response.json()["applicationId"]).one()
    assert stored.parent_agent_id == agent.id
    assert stored.referral_code_used == "PRIYAS42"


def test_apply_validation(client):
    assert client.post("/api/agents/apply", json=application(phone="12345")).status_code == 422
    assert client.post("/api/agents/apply", json=application(email="not-an-email")).status_code == 422
    assert client.post("/api/agents/apply", json=application(fullName="K")).status_code == 422


def test_duplicate_application_is_refused(client):
    client.post("/api/agents/apply", json=application())

    response = client.post("/api/agents/apply", json=application(email="other@example.com"))

    assert response.status_code == 400
    assert response.json()["detail"] == "Your application is already under review."


def test_existing_account_cannot_apply(client, agent):
    response = client.post("/api/agents/apply", json=application(email="priya@agents.example.com"))
    assert response.status_code == 400


def test_approve_application_creates_agent(client, db_session, admin_headers, agent, outbox):
    applied = client.post("/api/agents/apply", json=application(referralCode="PRIYAS42")).json()

    pending = client.get("/api/admin/agents/applications", headers=admin_headers).json()
    assert [a["id"] for a in pending] == [applied["applicationId"]]

    response = client.post(f"/api/admin/agents/applications/{applied['applicationId']}/approve", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["agent"]["email"] == "karan@example.com"
    assert body["agent"]["parentAgentId"] == agent.id
    assert len(body["temporaryPassword"]) == 12
    assert outbox.sent[-1]["subject"] == "You're In - TapOnce Agent Program"

    login = client.post("/api/auth/login", json={"email": "karan@example.com", "password": body["temporaryPassword"]})
    assert login.status_code == 200

    again = client.post(f"/api/admin/agents/applications/{applied['applicationId']}/approve", headers=admin_headers)
    assert again.status_code == 400


def test_reject_application(client, db_session, admin_headers):
    applied = client.post("/api/agents/apply", json=application()).json()

    response = client.post(
        f"/api/admin/agents/applications/{applied['applicationId']}/reject",
        json={"reason": "Outside service area"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["application"]["status"] == "rejected"
    assert client.get("/api/admin/agents/applications", headers=admin_headers).json() == []


def test_admin_creates_agent(client, db_session, admin_headers, agent, outbox):
    response = client.post(
        "/api/admin/agents",
        json={
            "fullName": "Sneha Patil",
            "email": "sneha@agents.example.com",
            "phone": "9000011111",
            "city": "Pune",
            "referralCode": "sneha1",
            "parentReferralCode": "PRIYAS42",
            "upiId": "sneha@upi",
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["agent"]["referralCode"] == "SNEHA1"
    assert body["agent"]["parentAgentId"] == agent.id
    assert body["agent"]["upiId"] == "sneha@upi"
    assert body["temporaryPassword"]
    assert outbox.sent[-1]["to"]["email"] == "sneha@agents.example.com"


def test_admin_create_agent_conflicts(client, admin_headers, agent):
    base = {"fullName": "Sneha Patil", "phone": "9000011111", "city": "Pune"}

    same_code = client.post(
        "/api/admin/agents",
        json={**base, "email": "sneha@agents.example.com", "referralCode": "PRIYAS42"},
        headers=admin_headers,
    )
    assert same_code.status_code == 409

    same_email = client.post("/api/admin/agents", json={**base, "email": "priya@agents.example.com"}, headers=admin_headers)
    assert same_email.status_code == 409

    unknown_parent = client.post(
        "/api/admin/agents",
        json={**base, "email": "sneha@agents.example.com", "parentReferralCode": "NOPE99"},
        headers=admin_headers,
    )
    assert unknown_parent.status_code == 400


def test_list_and_update_agents(client, admin_headers, agent):
    listing = client.get("/api/admin/agents", params={"search": "priya"}, headers=admin_headers).json()
    assert [a["referralCode"] for a in listing["agents"]] == ["PRIYAS42"]
    assert listing["stats"]["total"] == 1

    response = client.patch(f"/api/admin/agents/{agent.id}", json={"status": "inactive", "baseCommission": 120}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["agent"]["status"] == "inactive"
    assert response.json()["agent"]["baseCommission"] == 120

    assert client.get("/api/admin/agents", params={"status": "active"}, headers=admin_headers).json()["agents"] == []
    assert client.patch("/api/admin/agents/missing", json={"city": "Goa"}, headers=admin_headers).status_code == 404


def test_duplicate_referral_code_leaves_rollback_to_caller(db_session, agent):
    with pytest.raises(DuplicateAgentError):
        create_agent(db_session, full_name="Sneha Patil", email="sneha@agents.example.com", referral_code="priyas42")

    # The failed flush is still pending a rollback; the service must not have issued one
    assert db_session.is_active is False
    db_session.rollback()

    assert db_session.query(Profile).filter(Profile.email == "sneha@agents.example.com").count() == 0
    assert db_session.query(Agent).filter(Agent.referral_code == "PRIYAS42").count() == 1
