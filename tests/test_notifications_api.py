from services.notification_service import NotificationService


def test_notifications_are_scoped_to_user(client, db_session, admin, admin_headers, agent, agent_headers):
    service = NotificationService(db_session)
    service.notify_new_order(1001, "Rahul Verma", "website")
    service.notify_payout_completed(agent.profile_id, 250)
    db_session.commit()

    admin_view = client.get("/api/notifications", headers=admin_headers).json()
    assert admin_view["unreadCount"] == 1
    assert admin_view["notifications"][0]["title"] == "New order #1001"

    agent_view = client.get("/api/notifications", headers=agent_headers).json()
    assert agent_view["unreadCount"] == 1

    notification_id = admin_view["notifications"][0]["id"]
    assert client.put(f"/api/notifications/{notification_id}/read", headers=agent_headers).status_code == 404
    assert client.put(f"/api/notifications/{notification_id}/read", headers=admin_headers).status_code == 200
    assert client.get("/api/notifications", headers=admin_headers).json()["unreadCount"] == 0


def test_mark_all_read(client, db_session, agent, agent_headers):
    service = NotificationService(db_session)
    service.notify_order_decision(agent.profile_id, 1001, approved=True)
    service.notify_order_decision(agent.profile_id, 1002, approved=False, reason="Blurry photo")
    db_session.commit()

    response = client.put("/api/notifications/read-all", headers=agent_headers)

    assert response.json() == {"success": True, "marked": 2}
    unread = client.get("/api/notifications", params={"unreadOnly": True}, headers=agent_headers).json()
    assert unread == {"notifications": [], "unreadCount": 0}


def test_notifications_require_login(client):
    assert client.get("/api/notifications").status_code == 401
