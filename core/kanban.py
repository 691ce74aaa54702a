# Kanban projection of the order pipeline
#
# The board works over the full order list held in memory: grouping and
# filtering are recomputed on every call, and moves are applied locally
# first, then confirmed through a caller-supplied request. A failed request
# restores the card to its previous state.

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from config.order_statuses import KANBAN_STATUSES, ORDER_STATUSES
from database.models import Order, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)

DIRECT_SALES_FILTER = "direct"


class KanbanOrder(BaseModel):
    id: str
    order_number: int
    customer_name: str
    customer_company: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_photo_url: Optional[str] = None
    card_design_name: Optional[str] = None
    sale_price: float = 0
    commission_amount: float = 0
    status: OrderStatus
    payment_status: PaymentStatus = PaymentStatus.PENDING
    is_direct_sale: bool = False
    is_below_msp: bool = False
    agent_id: Optional[str] = None
    agent_name: Optional[str] = None
    agent_referral_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    days_in_status: int = 0

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_order(cls, order: Order, now: Optional[datetime] = None) -> "KanbanOrder":
        now = now or datetime.utcnow()
        since = order.updated_at or order.created_at
        agent = order.agent
        return cls(
            id=order.id,
            order_number=order.order_number,
            customer_name=order.customer_name,
            customer_company=order.customer_company,
            customer_phone=order.customer_phone,
            customer_photo_url=order.customer_photo_url,
            card_design_name=order.card_design.name if order.card_design else None,
            sale_price=float(order.sale_price or 0),
            commission_amount=float(order.commission_amount or 0),
            status=order.status,
            payment_status=order.payment_status,
            is_direct_sale=bool(order.is_direct_sale),
            is_below_msp=bool(order.is_below_msp),
            agent_id=order.agent_id,
            agent_name=agent.profile.full_name if agent and agent.profile else None,
            agent_referral_code=agent.referral_code if agent else None,
            created_at=order.created_at,
            updated_at=order.updated_at,
            days_in_status=max((now - since).days, 0) if since else 0,
        )


class MoveResult(BaseModel):
    """Outcome of an optimistic move: whether it stuck, why not, and what it replaced."""
    applied: bool
    error: Optional[str] = None
    previous_state: Optional[KanbanOrder] = None


# ============================================================================
# PROJECTIONS
# ============================================================================

def filter_orders(
    orders: Iterable[KanbanOrder],
    search: Optional[str] = None,
    agent: Optional[str] = None,
) -> List[KanbanOrder]:
    """
    Search matches customer name (case-insensitive) or order number.
    agent="direct" keeps direct website sales, any other value an agent id.
    """
    result = list(orders)

    if search:
        query = search.strip().lower()
        result = [
            o for o in result
            if query in o.customer_name.lower() or query in str(o.order_number)
        ]

    if agent:
        if agent == DIRECT_SALES_FILTER:
            result = [o for o in result if o.is_direct_sale]
        else:
            result = [o for o in result if o.agent_id == agent]

    return result


def group_by_status(orders: Iterable[KanbanOrder]) -> Dict[OrderStatus, List[KanbanOrder]]:
    groups: Dict[OrderStatus, List[KanbanOrder]] = {s: [] for s in OrderStatus}
    for order in orders:
        groups[OrderStatus(order.status)].append(order)
    return groups


def build_columns(orders: Iterable[KanbanOrder], statuses: Optional[List[OrderStatus]] = None) -> List[dict]:
    groups = group_by_status(orders)
    columns = []
    for status in statuses or KANBAN_STATUSES:
        config = ORDER_STATUSES[status]
        columns.append({
            "id": status.value,
            "title": config["label"],
            "color": config["color"],
            "icon": config["icon"],
            "orders": groups[status],
        })
    return columns


# ============================================================================
# BOARD STATE
# ============================================================================

class KanbanBoard:
    """
    In-memory board state with optimistic status moves.

    send(order_id, new_status) performs the server request and raises on
    failure. If it returns a KanbanOrder, that copy replaces the local card.
    """

    def __init__(self, orders: Optional[Iterable[KanbanOrder]] = None):
        self.orders: List[KanbanOrder] = list(orders or [])

    def load(self, orders: Iterable[KanbanOrder]) -> None:
        self.orders = list(orders)

    def get(self, order_id: str) -> Optional[KanbanOrder]:
        return next((o for o in self.orders if o.id == order_id), None)

    def columns(self, search: Optional[str] = None, agent: Optional[str] = None) -> List[dict]:
        return build_columns(filter_orders(self.orders, search=search, agent=agent))

    def _replace(self, updated: KanbanOrder) -> None:
        self.orders = [updated if o.id == updated.id else o for o in self.orders]

    def move(self, order_id: str, new_status: OrderStatus, send: Callable[[str, OrderStatus], Any]) -> MoveResult:
        current = self.get(order_id)
        if current is None:
            return MoveResult(applied=False, error=f"Order {order_id} is not on the board")

        new_status = OrderStatus(new_status)
        if current.status == new_status:
            return MoveResult(applied=False, previous_state=current)

        snapshot = current.model_copy()
        self._replace(current.model_copy(update={"status": new_status}))

        try:
            confirmed = send(order_id, new_status)
        except Exception as e:
            logger.warning(f"Reverting order {order_id} to {snapshot.status.value}: {e}")
            self._replace(snapshot)
            return MoveResult(applied=False, error=str(e), previous_state=snapshot)

        if isinstance(confirmed, KanbanOrder):
            self._replace(confirmed)
        return MoveResult(applied=True, previous_state=snapshot)
