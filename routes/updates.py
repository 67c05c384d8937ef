"""
FastAPI router for customer update notifications sent from the tracking UI.
"""

import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError

from notifications import notify_error
from orders.models import NotificationRequest
from orders.updates import send_update_notification
from routes.cors import (
    OTHER_METHODS,
    error_response,
    json_response,
    method_not_allowed,
    preflight_response,
)

logger = logging.getLogger(__name__)

router = APIRouter()

PATH = "/send-update-notification"
MISSING_FIELDS = "Missing required fields"


@router.options(PATH)
async def update_notification_preflight():
    return preflight_response()


@router.api_route(PATH, methods=OTHER_METHODS)
async def update_notification_wrong_method():
    return method_not_allowed()


@router.post(PATH)
async def update_notification(request: Request):
    try:
        body = await request.json()
    except ValueError:
        return error_response(400, MISSING_FIELDS)

    if not isinstance(body, dict):
        return error_response(400, MISSING_FIELDS)

    try:
        notification = NotificationRequest.model_validate(body)
    except ValidationError as e:
        logger.warning(f"Invalid update notification request: {e}")
        return error_response(500, str(e))

    if notification.missing_required():
        return error_response(400, MISSING_FIELDS)

    try:
        result = await send_update_notification(notification)
    except Exception as e:
        logger.error(f"[{notification.orderNumber}] Error sending notification: {e}", exc_info=True)
        await notify_error("update_notification", str(e), order_number=notification.orderNumber)
        return error_response(500, str(e))

    if not result.success:
        await notify_error(
            "update_notification",
            result.error or "",
            order_number=notification.orderNumber,
        )
        return error_response(500, result.error or "Notification failed")

    return json_response(200, {"success": True, "message": "Notification sent"})
