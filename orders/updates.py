"""Customer update emails (new message, status change, generic update)."""

import logging
from typing import Optional

import httpx

from orders.models import DeliveryResult, NotificationRequest
from mailer.client import send_email
from mailer.templates import render_update

logger = logging.getLogger(__name__)


async def send_update_notification(
    request: NotificationRequest,
    client: Optional[httpx.AsyncClient] = None,
) -> DeliveryResult:
    """Render and deliver an update email. Callers check required fields first."""
    rendered = render_update(request)
    result = await send_email(request.email or "", rendered.subject, rendered.html, client=client)
    if result.success:
        logger.info(f"[{request.orderNumber}] {request.update_type.value} notification sent")
    return result
