# Agent commission rules
#
# Agents earn a flat base commission per card plus half of whatever they
# negotiate above the minimum selling price (MSP). Orders priced below MSP
# earn nothing until an admin approves them.

from decimal import Decimal, ROUND_FLOOR
from typing import Optional, Union

from sqlalchemy.orm import Session

from config.app_config import BASE_COMMISSION, BONUS_RATE, OVERRIDE_RATE, OVERRIDE_AVG_CARD_PRICE
from database.models import AgentMsp, CardDesign, Order

Number = Union[int, float, Decimal]


def _to_decimal(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def calculate_commission(msp: Number, sale_price: Number, base: Number = BASE_COMMISSION) -> dict:
    """
    Commission breakdown for a single card.

    bonus = floor((sale_price - msp) * BONUS_RATE) when sale_price >= msp
    total = base + bonus when sale_price >= msp, else 0 (pending admin approval)
    """
    msp = _to_decimal(msp)
    sale_price = _to_decimal(sale_price)
    base = _to_decimal(base)

    at_or_above_msp = sale_price >= msp
    if at_or_above_msp:
        bonus = ((sale_price - msp) * _to_decimal(BONUS_RATE)).to_integral_value(rounding=ROUND_FLOOR)
        total = base + bonus
    else:
        bonus = Decimal(0)
        total = Decimal(0)

    return {
        "msp": msp,
        "sale_price": sale_price,
        "base": base,
        "bonus": bonus,
        "total": total,
        "is_below_msp": sale_price > 0 and sale_price < msp,
    }


def resolve_msp(db: Session, agent_id: Optional[str], card_design: CardDesign) -> Decimal:
    """Agent-specific MSP override if one exists, otherwise the design's base MSP."""
    if agent_id:
        override = db.query(AgentMsp).filter(
            AgentMsp.agent_id == agent_id,
            AgentMsp.card_design_id == card_design.id
        ).first()
        if override:
            return _to_decimal(override.msp_amount)
    return _to_decimal(card_design.base_msp)


def commission_on_approval(order: Order, base: Number = BASE_COMMISSION, approved_amount: Optional[Number] = None) -> Decimal:
    """
    Amount credited to the selling agent when an order is approved.

    Below-MSP orders only carry commission once approved: the admin may pass
    an explicit amount, otherwise the base commission is paid with no bonus.
    """
    if order.is_direct_sale or not order.agent_id:
        return Decimal(0)
    if not order.is_below_msp:
        return _to_decimal(order.commission_amount or 0)
    if approved_amount is not None:
        return _to_decimal(approved_amount)
    return _to_decimal(base)


def estimate_override_earnings(total_sales: int) -> int:
    """Display-only estimate of a recruiter's override on a sub-agent's sales."""
    estimate = (total_sales or 0) * OVERRIDE_AVG_CARD_PRICE * _to_decimal(OVERRIDE_RATE)
    return int(estimate.to_integral_value(rounding=ROUND_FLOOR))
