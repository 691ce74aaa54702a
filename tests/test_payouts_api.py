from decimal import Decimal

import pytest

from database.models import Expense, ExpenseCategory, Notification, OrderStatus, Payout, PayoutStatus


@pytest.fixture
def funded_agent(db_session, agent):
    agent.available_balance = 500
    agent.total_earnings = 500
    db_session.commit()
    return agent


def test_payout_above_balance_is_refused(client, db_session, admin_headers, funded_agent):
    response = client.post(
        "/api/admin/payouts",
        json={"agentId": funded_agent.id, "amount": 600, "paymentMethod": "upi"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Amount exceeds available balance"
    assert db_session.query(Payout).count() == 0


def test_payout_decrements_balance_and_books_expense(client, db_session, admin_headers, funded_agent):
    response = client.post(
        "/api/admin/payouts",
        json={"agentId": funded_agent.id, "amount": 300, "paymentMethod": "upi", "reference": "UTR123"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["newBalance"] == 200
    assert body["payout"]["status"] == "completed"
    assert body["payout"]["reference"] == "UTR123"

    expense = db_session.query(Expense).one()
    assert expense.category == ExpenseCategory.AGENT_COMMISSION
    assert Decimal(str(expense.amount)) == Decimal("300")
    assert expense.agent_payout_id == body["payout"]["id"]
    assert db_session.query(Notification).filter(Notification.user_id == funded_agent.profile_id).count() == 1


def test_payout_for_unknown_agent(client, admin_headers):
    response = client.post(
        "/api/admin/payouts",
        json={"agentId": "missing", "amount": 10, "paymentMethod": "cash"},
        headers=admin_headers,
    )
    assert response.status_code == 404


def test_agent_request_then_admin_completes(client, db_session, admin_headers, agent_headers, funded_agent):
    requested = client.post("/api/agent/payouts/request", json={"amount": 400}, headers=agent_headers)
    assert requested.status_code == 201
    payout_id = requested.json()["payoutId"]

    second = client.post("/api/agent/payouts/request", json={"amount": 50}, headers=agent_headers)
    assert second.status_code == 400

    pending = client.get("/api/admin/payouts", params={"status": "pending"}, headers=admin_headers).json()
    assert [p["id"] for p in pending] == [payout_id]

    response = client.post(
        "/api/admin/payouts",
        json={"agentId": funded_agent.id, "amount": 400, "paymentMethod": "upi", "payoutId": payout_id},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert db_session.query(Payout).count() == 1
    assert db_session.query(Payout).one().status == PayoutStatus.COMPLETED

    history = client.get("/api/agent/payouts", headers=agent_headers).json()["payouts"]
    assert [p["status"] for p in history] == ["completed"]


def test_liabilities_and_finance_summary(client, db_session, admin_headers, funded_agent, make_order):
    make_order(agent=funded_agent, status=OrderStatus.SHIPPED, sale_price=800)
    make_order(status=OrderStatus.PENDING_APPROVAL, sale_price=999)

    client.post(
        "/api/admin/expenses",
        json={"category": "printing", "amount": 150, "description": "PVC batch"},
        headers=admin_headers,
    )

    liabilities = client.get("/api/admin/finance/liabilities", headers=admin_headers).json()
    assert liabilities["totalOwed"] == 500
    assert liabilities["liabilities"][0]["referralCode"] == "PRIYAS42"
    assert liabilities["liabilities"][0]["lastPayoutDate"] is None

    summary = client.get("/api/admin/finance/summary", headers=admin_headers).json()
    assert summary["revenue"] == 800
    assert summary["expenses"]["printing"] == 150
    assert summary["totalExpenses"] == 150
    assert summary["outstandingLiabilities"] == 500
    assert summary["netProfit"] == 650

    expenses = client.get("/api/admin/expenses", params={"category": "printing"}, headers=admin_headers).json()
    assert [e["description"] for e in expenses] == ["PVC batch"]
