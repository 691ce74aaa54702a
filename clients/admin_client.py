# Admin API client driving the order Kanban board
#
# Loads every order once, then moves cards optimistically through
# KanbanBoard; a rejected PUT puts the card back where it was.

import logging
from typing import List, Optional

import httpx

from core.kanban import KanbanBoard, KanbanOrder, MoveResult
from database.models import OrderStatus

logger = logging.getLogger(__name__)


class AdminApiError(Exception):
    def __init__(self, status_code: int, detail):
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail if isinstance(detail, str) else str(detail))


class AdminClient:
    """
    Usage:
        client = AdminClient(httpx.Client(base_url="https://api.taponce.in"))
        client.login("admin@taponce.in", "secret")
        client.refresh()
        client.move("order-id", OrderStatus.PRINTING)
    """

    def __init__(self, http: httpx.Client, token: Optional[str] = None, api_prefix: str = "/api"):
        self.http = http
        self.api_prefix = api_prefix.rstrip("/")
        self.token = token
        self.board = KanbanBoard()

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def _request(self, method: str, path: str, **kwargs) -> dict:
        response = self.http.request(method, f"{self.api_prefix}{path}", headers=self._headers(), **kwargs)
        if response.status_code >= 400:
            try:
                detail = response.json().get("detail")
            except ValueError:
                detail = response.text
            raise AdminApiError(response.status_code, detail or response.reason_phrase)
        return response.json()

    def login(self, email: str, password: str) -> str:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["accessToken"]
        return self.token

    def fetch_orders(self) -> List[KanbanOrder]:
        return [KanbanOrder.model_validate(o) for o in self._request("GET", "/admin/orders")]

    def refresh(self) -> List[KanbanOrder]:
        self.board.load(self.fetch_orders())
        logger.info(f"Loaded {len(self.board.orders)} orders onto the board")
        return self.board.orders

    def update_status(self, order_id: str, new_status: OrderStatus, **extra) -> KanbanOrder:
        body = {"status": OrderStatus(new_status).value}
        body.update({k: v for k, v in extra.items() if v is not None})
        data = self._request("PUT", f"/admin/orders/{order_id}/status", json=body)
        return KanbanOrder.model_validate(data["order"])

    def move(self, order_id: str, new_status: OrderStatus, **extra) -> MoveResult:
        return self.board.move(
            order_id,
            new_status,
            lambda oid, status: self.update_status(oid, status, **extra),
        )

    def columns(self, search: Optional[str] = None, agent: Optional[str] = None) -> List[dict]:
        return self.board.columns(search=search, agent=agent)
