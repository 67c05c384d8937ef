"""
Resend API client for transactional email.

One POST per call: failures are reported in the DeliveryResult and never
retried.
"""

import logging
from typing import Optional

import httpx

from config import RESEND_API_BASE, RESEND_API_KEY, EMAIL_SENDER, HTTP_TIMEOUT
from orders.models import DeliveryResult

logger = logging.getLogger(__name__)


def _failure(error: str, status_code: Optional[int] = None) -> DeliveryResult:
    return DeliveryResult(success=False, status_code=status_code, error=error)


async def _post(client: httpx.AsyncClient, payload: dict) -> httpx.Response:
    return await client.post(
        f"{RESEND_API_BASE}/emails",
        json=payload,
        headers={"Authorization": f"Bearer {RESEND_API_KEY}"},
    )


async def send_email(
    to: str,
    subject: str,
    html: str,
    client: Optional[httpx.AsyncClient] = None,
) -> DeliveryResult:
    """Submit one email to Resend and normalize the outcome."""
    if not to or not subject or not html:
        logger.error(f"Refusing to send incomplete email to={to!r} subject={subject!r}")
        return _failure("Email recipient, subject and body are required")

    payload = {
        "from": EMAIL_SENDER,
        "to": [to],
        "subject": subject,
        "html": html,
    }

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as own_client:
                response = await _post(own_client, payload)
        else:
            response = await _post(client, payload)
    except httpx.HTTPError as e:
        logger.error(f"Resend request failed for {to}: {e!r}")
        return _failure(f"Email delivery failed: {e!r}")

    if response.status_code != 200:
        logger.error(f"Resend API error {response.status_code}: {response.text[:500]}")
        return _failure(
            f"Resend returned status {response.status_code}: {response.text}",
            status_code=response.status_code,
        )

    try:
        body = response.json()
    except ValueError:
        body = {}
    message_id = body.get("id") if isinstance(body, dict) else None

    logger.info(f"Sent email to {to}: {subject} (id={message_id})")
    return DeliveryResult(success=True, message_id=message_id, status_code=200)
