import pytest

from clients.admin_client import AdminApiError, AdminClient
from database.models import OrderStatus


@pytest.fixture
def admin_client(client, admin):
    api = AdminClient(client)
    api.login("admin@taponce.in", "admin-password")
    return api


def test_login_failure_raises(client, admin):
    with pytest.raises(AdminApiError) as exc:
        AdminClient(client).login("admin@taponce.in", "wrong")
    assert exc.value.status_code == 401


def test_refresh_loads_board(admin_client, make_order):
    make_order()
    make_order(status=OrderStatus.SHIPPED)

    orders = admin_client.refresh()

    assert len(orders) == 2
    columns = {c["id"]: len(c["orders"]) for c in admin_client.columns()}
    assert columns["pending_approval"] == 1
    assert columns["shipped"] == 1


def test_move_confirmed_by_server(admin_client, db_session, make_order):
    order = make_order(status=OrderStatus.APPROVED)
    admin_client.refresh()

    result = admin_client.move(order.id, OrderStatus.PRINTING)

    assert result.applied is True
    assert admin_client.board.get(order.id).status == OrderStatus.PRINTING
    db_session.refresh(order)
    assert order.status == OrderStatus.PRINTING


def test_rejected_move_reverts(admin_client, db_session, make_order):
    order = make_order(status=OrderStatus.APPROVED)
    admin_client.refresh()

    result = admin_client.move(order.id, OrderStatus.DELIVERED)

    assert result.applied is False
    assert "Invalid status transition" in result.error
    assert admin_client.board.get(order.id).status == OrderStatus.APPROVED
    db_session.refresh(order)
    assert order.status == OrderStatus.APPROVED
