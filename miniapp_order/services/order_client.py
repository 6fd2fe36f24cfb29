"""HTTP client for the remote order service.

The service exposes a single endpoint. Every call is a POST whose JSON body
carries an ``action`` discriminator, sent as ``text/plain`` so the endpoint
can be reached without a CORS preflight.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from miniapp_order.core.config import settings
from miniapp_order.schemas.api import ApiResponse
from miniapp_order.schemas.history import HistoryOrder
from miniapp_order.schemas.menu import MenuItem
from miniapp_order.schemas.order import CreateOrderResult, OrderPayload

logger = logging.getLogger(__name__)

NETWORK_FAILURE_MESSAGE: str = "Network failure, please check your connection and the server status"
MENU_FAILURE_MESSAGE: str = "Failed to load menu"
SUBMIT_FAILURE_MESSAGE: str = "Order submission failed"
QUERY_FAILURE_MESSAGE: str = "Query failed"

REQUEST_HEADERS: dict[str, str] = {"Content-Type": "text/plain;charset=utf-8"}


class OrderServiceError(Exception):
    """Raised for any failed order service call, with a human-readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class OrderServiceClient:
    """Thin RPC wrapper around the order service endpoint."""

    def __init__(self, endpoint: str | None = None, http_client: httpx.Client | None = None) -> None:
        self.endpoint: str = endpoint or settings.order_service_url
        self._http: httpx.Client = http_client or httpx.Client()
        self._owns_http = http_client is None

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> OrderServiceClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def request(self, payload: dict[str, Any]) -> ApiResponse:
        """POST one action and return the decoded envelope.

        Transport failures, non-2xx statuses and undecodable bodies all become
        the same generic `OrderServiceError`.
        """
        action = payload.get("action")
        try:
            response = self._http.post(
                self.endpoint,
                content=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                headers=REQUEST_HEADERS,
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("[API] %s request failed: %s", action, exc)
            raise OrderServiceError(NETWORK_FAILURE_MESSAGE) from exc

        if not isinstance(body, dict):
            logger.warning("[API] %s returned a non-object body", action)
            return ApiResponse(success=False)
        try:
            return ApiResponse.model_validate(body)
        except ValidationError:
            logger.warning("[API] %s returned a malformed envelope", action)
            return ApiResponse(success=False)

    def get_menu(self) -> list[MenuItem]:
        """Fetch the current catalog."""
        result = self.request({"action": "getMenu"})
        if not result.success or not isinstance(result.data, list):
            raise OrderServiceError(MENU_FAILURE_MESSAGE)
        try:
            return [MenuItem.model_validate(item) for item in result.data]
        except ValidationError as exc:
            raise OrderServiceError(MENU_FAILURE_MESSAGE) from exc

    def create_order(self, order: OrderPayload, id_token: str | None) -> CreateOrderResult:
        """Create an order and return whatever identifiers the service confirmed."""
        result = self.request(
            {
                "action": "createOrder",
                "idToken": id_token,
                "orderData": order.model_dump(by_alias=True),
            }
        )
        if not result.success:
            raise OrderServiceError(result.message or SUBMIT_FAILURE_MESSAGE)
        if not isinstance(result.data, dict):
            return CreateOrderResult()
        try:
            return CreateOrderResult.model_validate(result.data)
        except ValidationError:
            logger.warning("[API] createOrder confirmation unreadable; using local values")
            return CreateOrderResult()

    def get_orders(
        self,
        *,
        customer_name: str,
        start_date: str,
        end_date: str,
        customer_phone: str | None = None,
        id_token: str | None = None,
    ) -> list[HistoryOrder]:
        """Query past orders; matching is always exact."""
        result = self.request(
            {
                "action": "getOrders",
                "customerName": customer_name,
                "customerPhone": customer_phone.strip() if customer_phone else "",
                "idToken": id_token,
                "startDate": start_date,
                "endDate": end_date,
                "exactMatch": True,
            }
        )
        if not result.success:
            raise OrderServiceError(result.message or QUERY_FAILURE_MESSAGE)
        if not result.data:
            return []
        try:
            return [HistoryOrder.model_validate(order) for order in result.data]
        except (TypeError, ValidationError) as exc:
            raise OrderServiceError(QUERY_FAILURE_MESSAGE) from exc
