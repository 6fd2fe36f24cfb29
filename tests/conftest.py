"""Shared fixtures: a FastAPI stand-in for the remote order service."""

import json
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.testclient import TestClient

from miniapp_order.services.order_client import OrderServiceClient

SERVICE_ENDPOINT = "http://testserver/exec"


class FakeOrderService:
    """Records every request and answers with canned per-action bodies."""

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self.content_types: list[str | None] = []
        self.status_code: int = 200
        self.raw_body: str | None = None
        # Called with the decoded payload while the request is being handled.
        self.on_request: Callable[[dict[str, Any]], None] | None = None
        self.responses: dict[str, Any] = {
            "getMenu": {
                "success": True,
                "data": [
                    {"name": "Soup", "price": 60, "icon": "🍜", "status": "供應中"},
                    {"name": "Tea", "price": 30, "icon": "🥤", "status": "售完"},
                ],
            },
            "createOrder": {"success": True, "data": {"orderId": "A1", "totalAmount": 100}},
            "getOrders": {"success": True, "data": []},
        }

    def actions(self) -> list[str]:
        return [payload["action"] for payload in self.requests]


def build_service_app(service: FakeOrderService) -> FastAPI:
    app = FastAPI()

    @app.post("/exec")
    async def execute(request: Request):
        payload = json.loads(await request.body())
        service.requests.append(payload)
        service.content_types.append(request.headers.get("content-type"))
        if service.on_request is not None:
            service.on_request(payload)
        if service.status_code != 200:
            return JSONResponse({"error": "unavailable"}, status_code=service.status_code)
        if service.raw_body is not None:
            return PlainTextResponse(service.raw_body)
        return JSONResponse(service.responses[payload["action"]])

    return app


@pytest.fixture
def fake_service() -> FakeOrderService:
    return FakeOrderService()


@pytest.fixture
def order_client(fake_service: FakeOrderService) -> Iterator[OrderServiceClient]:
    http_client = TestClient(build_service_app(fake_service))
    client = OrderServiceClient(endpoint=SERVICE_ENDPOINT, http_client=http_client)
    yield client
    http_client.close()
