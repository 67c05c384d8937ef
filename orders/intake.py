"""
Order intake: Shopify order event → stored OrderRecord → confirmation email.
"""

import logging
import secrets
from datetime import date
from typing import Optional

import httpx

from orders.models import (
    IntakeResult,
    IntakeStatus,
    OrderRecord,
    OrderStage,
    ShopifyOrderEvent,
)
from store.client import StoreError, put_order
from mailer.client import send_email
from mailer.templates import render_confirmation

logger = logging.getLogger(__name__)

TRACKING_TOKEN_BYTES = 32


class InvalidOrderEvent(ValueError):
    """The webhook payload lacks what is needed to build an OrderRecord."""


def generate_tracking_token() -> str:
    """256-bit random token, hex encoded (64 characters)."""
    return secrets.token_hex(TRACKING_TOKEN_BYTES)


def _customer_name(event: ShopifyOrderEvent) -> str:
    if not event.customer:
        return "Guest"
    parts = [event.customer.first_name or "", event.customer.last_name or ""]
    name = " ".join(p.strip() for p in parts if p and p.strip())
    return name or "Guest"


def _order_date(created_at: Optional[str]) -> str:
    """Calendar day of the event timestamp, as Shopify wrote it (store-local)."""
    day = (created_at or "").strip().split("T")[0]
    try:
        return date.fromisoformat(day).isoformat()
    except ValueError:
        raise InvalidOrderEvent(f"Invalid created_at: {created_at!r}")


def build_order_record(event: ShopifyOrderEvent, token: Optional[str] = None) -> OrderRecord:
    """Normalize a Shopify order event into a fresh OrderRecord."""
    order_number = str(event.order_number).strip() if event.order_number is not None else ""
    if not order_number:
        raise InvalidOrderEvent("Missing order_number")
    if not event.created_at:
        raise InvalidOrderEvent(f"Order {order_number}: missing created_at")

    email = ""
    if event.customer and event.customer.email:
        email = event.customer.email
    email = (email or event.email or "").strip()
    if not email:
        raise InvalidOrderEvent(f"Order {order_number}: missing customer email")

    postcode = ""
    if event.shipping_address and event.shipping_address.zip:
        postcode = event.shipping_address.zip.strip()

    return OrderRecord(
        orderNumber=order_number,
        trackingToken=token or generate_tracking_token(),
        customerName=_customer_name(event),
        email=email,
        deliveryPostcode=postcode,
        orderDate=_order_date(event.created_at),
        stage=OrderStage.CONFIRMED.value,
        deliveryDate="",
        eta="",
        messages=[],
    )


async def process_order_event(
    event: ShopifyOrderEvent,
    client: Optional[httpx.AsyncClient] = None,
) -> IntakeResult:
    """Store the order, then send the confirmation email.

    The email is only sent once the record is stored. Raises
    InvalidOrderEvent before any outbound call when the event is malformed.
    """
    record = build_order_record(event)

    try:
        await put_order(record, client=client)
    except StoreError as e:
        logger.error(f"Order {record.orderNumber} not stored, confirmation skipped: {e}")
        return IntakeResult(status=IntakeStatus.STORE_FAILED, order=record, error=str(e))

    rendered = render_confirmation(record)
    delivery = await send_email(record.email, rendered.subject, rendered.html, client=client)
    if not delivery.success:
        logger.error(f"Order {record.orderNumber} stored but confirmation failed: {delivery.error}")
        return IntakeResult(
            status=IntakeStatus.EMAIL_FAILED,
            order=record,
            delivery=delivery,
            error=delivery.error,
        )

    logger.info(f"Order {record.orderNumber} created for {record.email}")
    return IntakeResult(status=IntakeStatus.SUCCESS, order=record, delivery=delivery)
