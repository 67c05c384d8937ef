"""
Operator alerts over Telegram.

Failed order intakes and failed customer emails are reported to the shop
owner, at most once per error type per throttle window, so a Firebase or
Resend outage does not flood the chat.
"""
import logging
import time
from typing import Optional

import httpx

from config import TELEGRAM_ALERT_BOT_TOKEN, TELEGRAM_ALERT_CHAT_ID, BRAND_NAME, HTTP_TIMEOUT

logger = logging.getLogger(__name__)

_last_sent: dict[str, float] = {}
_THROTTLE_SECONDS = 600  # 10 minutes per error type


def format_alert(error_type: str, message: str, order_number: Optional[str] = None) -> str:
    lines = [f"⚠️ {BRAND_NAME} order tracking", f"Type: {error_type}"]
    if order_number:
        lines.append(f"Order: #{order_number}")
    lines.append(message[:1000])
    return "\n".join(lines)


async def notify_error(error_type: str, message: str, order_number: Optional[str] = None) -> bool:
    """Alert the owner. Returns False when disabled, throttled or Telegram is unreachable."""
    if not TELEGRAM_ALERT_BOT_TOKEN or not TELEGRAM_ALERT_CHAT_ID:
        return False
    now = time.time()
    if now - _last_sent.get(error_type, 0) < _THROTTLE_SECONDS:
        logger.debug(f"Alert {error_type} throttled")
        return False
    _last_sent[error_type] = now

    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
            response = await client.post(
                f"https://api.telegram.org/bot{TELEGRAM_ALERT_BOT_TOKEN}/sendMessage",
                json={
                    "chat_id": TELEGRAM_ALERT_CHAT_ID,
                    "text": format_alert(error_type, message, order_number),
                },
            )
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"Failed to send Telegram alert: {e}")
        return False
    return True
