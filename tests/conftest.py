"""
Shared fixtures: sample payloads and a fake Firebase + Resend backend.
"""

import json

import httpx
import pytest
import pytest_asyncio


@pytest.fixture
def shopify_order():
    """Shopify orders/create payload (trimmed to the fields we read)."""
    return {
        "id": 5550001,
        "order_number": 1001,
        "email": "jane@example.com",
        "created_at": "2024-01-05T10:00:00Z",
        "customer": {
            "first_name": "Jane",
            "last_name": "Doe",
            "email": "jane@example.com",
        },
        "shipping_address": {"zip": "BS1 4DJ"},
    }


@pytest.fixture
def guest_order():
    return {
        "order_number": 1001,
        "email": "a@b.com",
        "created_at": "2024-01-05T10:00:00Z",
    }


@pytest.fixture
def message_history():
    return [
        {"sender": "customer", "message": "first"},
        {"sender": "team", "message": "second"},
        {"sender": "customer", "message": "third"},
        {"sender": "team", "message": "fourth"},
        {"sender": "customer", "message": "fifth"},
    ]


class FakeBackend:
    """In-memory Firebase RTDB + Resend, served through httpx.MockTransport."""

    def __init__(self):
        self.orders: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.emails: list[dict] = []
        self.store_status = 200
        self.email_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.startswith("/orders/"):
            if self.store_status != 200:
                return httpx.Response(self.store_status, json={"error": "Permission denied"})
            key = path[len("/orders/"):-len(".json")]
            if request.method == "PUT":
                self.orders[key] = json.loads(request.content)
                return httpx.Response(200, json=self.orders[key])
            return httpx.Response(200, content=json.dumps(self.orders.get(key)).encode())

        if path == "/emails":
            if self.email_status != 200:
                return httpx.Response(self.email_status, json={"message": "Invalid `to` field"})
            self.emails.append(json.loads(request.content))
            return httpx.Response(200, json={"id": f"email-{len(self.emails)}"})

        return httpx.Response(404)

    def calls(self, method: str, prefix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path.startswith(prefix)]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest_asyncio.fixture
async def http_client(backend):
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as client:
        yield client
