from decimal import Decimal

import pytest

from core.commission import calculate_commission, commission_on_approval, estimate_override_earnings, resolve_msp
from database.models import AgentMsp, Order


@pytest.mark.parametrize("sale_price, bonus, total", [
    (600, 0, 100),
    (800, 100, 200),
    (701, 50, 150),
    (1000, 200, 300),
])
def test_commission_at_or_above_msp(sale_price, bonus, total):
    result = calculate_commission(600, sale_price, base=100)

    assert result["bonus"] == Decimal(bonus)
    assert result["total"] == Decimal(total)
    assert result["is_below_msp"] is False


def test_commission_below_msp_is_zero_until_approved():
    result = calculate_commission(600, 500, base=100)

    assert result["total"] == 0
    assert result["bonus"] == 0
    assert result["is_below_msp"] is True


def test_zero_sale_price_is_not_flagged_below_msp():
    assert calculate_commission(600, 0)["is_below_msp"] is False


def test_override_estimate_uses_average_card_price():
    assert estimate_override_earnings(3) == 42
    assert estimate_override_earnings(0) == 0
    assert estimate_override_earnings(None) == 0


def test_approval_credit_for_regular_agent_order():
    order = Order(agent_id="a1", is_direct_sale=False, is_below_msp=False, commission_amount=Decimal("200"))
    assert commission_on_approval(order) == Decimal("200")


def test_approval_credit_for_below_msp_order():
    order = Order(agent_id="a1", is_direct_sale=False, is_below_msp=True, commission_amount=0)

    assert commission_on_approval(order, base=100) == Decimal("100")
    assert commission_on_approval(order, base=100, approved_amount=60) == Decimal("60")


def test_direct_sale_never_earns_commission():
    order = Order(agent_id=None, is_direct_sale=True, is_below_msp=False, commission_amount=0)
    assert commission_on_approval(order) == 0


def test_resolve_msp_prefers_agent_override(db_session, agent, design):
    assert resolve_msp(db_session, agent.id, design) == Decimal("600")

    db_session.add(AgentMsp(agent_id=agent.id, card_design_id=design.id, msp_amount=450))
    db_session.commit()

    assert resolve_msp(db_session, agent.id, design) == Decimal("450")
    assert resolve_msp(db_session, None, design) == Decimal("600")
