"""
Tests for the outbound HTTP clients (mailer.client, store.client).
Upstreams are served by httpx.MockTransport.
"""

import json

import httpx
import pytest

from mailer.client import send_email
from orders.models import OrderRecord
from store.client import StoreError, get_order, order_url, put_order


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ── Resend ───────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_send_email_success(monkeypatch):
    monkeypatch.setattr("mailer.client.RESEND_API_KEY", "re_test")
    monkeypatch.setattr("mailer.client.EMAIL_SENDER", "Lumbr <lumbr@lumbr.uk>")
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"id": "4ef9a417-02e9-4d39-ad75-9611e0fcc33c"})

    async with _client(handler) as client:
        result = await send_email("jane@example.com", "Subject", "<p>hi</p>", client=client)

    assert result.success
    assert result.message_id == "4ef9a417-02e9-4d39-ad75-9611e0fcc33c"
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/emails"
    assert request.headers["Authorization"] == "Bearer re_test"
    assert json.loads(request.content) == {
        "from": "Lumbr <lumbr@lumbr.uk>",
        "to": ["jane@example.com"],
        "subject": "Subject",
        "html": "<p>hi</p>",
    }


@pytest.mark.asyncio
async def test_send_email_non_200_is_failure_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(422, text='{"message":"Invalid `to` field"}')

    async with _client(handler) as client:
        result = await send_email("bad", "Subject", "<p>hi</p>", client=client)

    assert not result.success
    assert result.status_code == 422
    assert "Invalid `to` field" in result.error
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_send_email_transport_error():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("Name or service not known", request=request)

    async with _client(handler) as client:
        result = await send_email("jane@example.com", "Subject", "<p>hi</p>", client=client)

    assert not result.success
    assert result.status_code is None
    assert "Name or service not known" in result.error
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_send_email_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with _client(handler) as client:
        result = await send_email("jane@example.com", "Subject", "<p>hi</p>", client=client)

    assert not result.success
    assert "ReadTimeout" in result.error


@pytest.mark.asyncio
@pytest.mark.parametrize("to, subject, html", [("", "s", "h"), ("a@b.com", "", "h"), ("a@b.com", "s", "")])
async def test_send_email_requires_envelope(to, subject, html):
    calls = []

    async with _client(lambda r: calls.append(r) or httpx.Response(200, json={})) as client:
        result = await send_email(to, subject, html, client=client)

    assert not result.success
    assert calls == []


# ── Firebase ─────────────────────────────────────────────────────────────────


def _record() -> OrderRecord:
    return OrderRecord(
        orderNumber="1001",
        trackingToken="f" * 64,
        customerName="Guest",
        email="a@b.com",
        orderDate="2024-01-05",
    )


def test_order_url(monkeypatch):
    monkeypatch.setattr("store.client.FIREBASE_DB_URL", "https://example.firebaseio.com")
    assert order_url("1001") == "https://example.firebaseio.com/orders/1001.json"
    assert order_url("a/b") == "https://example.firebaseio.com/orders/a%2Fb.json"


@pytest.mark.asyncio
async def test_put_order_sends_full_document():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=request.content)

    async with _client(handler) as client:
        echoed = await put_order(_record(), client=client)

    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/orders/1001.json"
    body = json.loads(seen[0].content)
    assert body == echoed
    assert body == {
        "orderNumber": "1001",
        "trackingToken": "f" * 64,
        "customerName": "Guest",
        "email": "a@b.com",
        "deliveryPostcode": "",
        "orderDate": "2024-01-05",
        "stage": "confirmed",
        "deliveryDate": "",
        "eta": "",
        "messages": [],
    }


@pytest.mark.asyncio
async def test_put_order_rejected():
    async with _client(lambda r: httpx.Response(401, json={"error": "Permission denied"})) as client:
        with pytest.raises(StoreError) as exc_info:
            await put_order(_record(), client=client)

    assert exc_info.value.status_code == 401
    assert "Permission denied" in exc_info.value.body


@pytest.mark.asyncio
async def test_put_order_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(StoreError) as exc_info:
            await put_order(_record(), client=client)

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_get_order_unknown_returns_none():
    async with _client(lambda r: httpx.Response(200, content=b"null")) as client:
        assert await get_order("404", client=client) is None


@pytest.mark.asyncio
async def test_get_order_reads_firebase_shapes():
    stored = {
        "orderNumber": 1001,
        "customerName": "Jane Doe",
        "email": "jane@example.com",
        "stage": "dispatched",
        "messages": {
            "-Nb2": {"sender": "team", "message": "On its way"},
            "-Na1": {"sender": "customer", "message": "Any news?"},
        },
    }

    async with _client(lambda r: httpx.Response(200, json=stored)) as client:
        record = await get_order("1001", client=client)

    assert record.orderNumber == "1001"
    assert record.stage == "dispatched"
    assert [m.message for m in record.messages] == ["Any news?", "On its way"]
    assert record.messages[0].from_customer
