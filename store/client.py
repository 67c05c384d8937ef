"""
Firebase Realtime Database REST client for order records.

Records live at /orders/{orderNumber}.json. Writes replace the whole
document (last writer wins); there are no partial updates here.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from config import FIREBASE_DB_URL, HTTP_TIMEOUT
from orders.models import OrderRecord

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Record store rejected the request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def order_url(order_number: str) -> str:
    return f"{FIREBASE_DB_URL}/orders/{quote(str(order_number), safe='')}.json"


async def _request(
    method: str,
    order_number: str,
    client: Optional[httpx.AsyncClient],
    payload: Optional[dict] = None,
) -> httpx.Response:
    url = order_url(order_number)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as own_client:
                response = await own_client.request(method, url, json=payload)
        else:
            response = await client.request(method, url, json=payload)
    except httpx.HTTPError as e:
        logger.error(f"Firebase {method} orders/{order_number} failed: {e!r}")
        raise StoreError(f"Firebase request failed: {e!r}") from e

    if response.status_code != 200:
        logger.error(
            f"Firebase {method} orders/{order_number} returned {response.status_code}: "
            f"{response.text[:500]}"
        )
        raise StoreError(
            f"Firebase returned status {response.status_code}",
            status_code=response.status_code,
            body=response.text,
        )
    return response


async def put_order(record: OrderRecord, client: Optional[httpx.AsyncClient] = None) -> dict:
    """Write the full record, replacing whatever is stored under its order number."""
    response = await _request("PUT", record.orderNumber, client, payload=record.model_dump(mode="json"))
    logger.info(f"Stored order {record.orderNumber} (stage={record.stage})")
    return response.json()


async def get_order(order_number: str, client: Optional[httpx.AsyncClient] = None) -> Optional[OrderRecord]:
    """Fetch a stored record. Firebase answers `null` for unknown keys."""
    response = await _request("GET", order_number, client)
    data = response.json()
    if not data:
        return None
    data.setdefault("orderNumber", order_number)
    return OrderRecord(**data)
