"""
FastAPI router for Shopify order-created webhooks.
"""

import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError

from notifications import notify_error
from orders.intake import InvalidOrderEvent, process_order_event
from orders.models import ShopifyOrderEvent
from routes.cors import (
    OTHER_METHODS,
    error_response,
    json_response,
    method_not_allowed,
    preflight_response,
)

logger = logging.getLogger(__name__)

router = APIRouter()

PATH = "/shopify-webhook"


@router.options(PATH)
async def shopify_webhook_preflight():
    return preflight_response()


@router.api_route(PATH, methods=OTHER_METHODS)
async def shopify_webhook_wrong_method():
    return method_not_allowed()


@router.post(PATH)
async def shopify_webhook(request: Request):
    """Receives orders/create events from Shopify."""
    try:
        body = await request.json()
    except ValueError:
        logger.warning("Shopify webhook with unreadable JSON body")
        return error_response(500, "Invalid JSON body")

    try:
        event = ShopifyOrderEvent.model_validate(body)
    except ValidationError as e:
        logger.warning(f"Rejected Shopify order event: {e}")
        return error_response(500, str(e))

    try:
        result = await process_order_event(event)
    except InvalidOrderEvent as e:
        logger.warning(f"Rejected Shopify order event: {e}")
        return error_response(500, str(e))
    except Exception as e:
        logger.error(f"Shopify webhook failed: {e}", exc_info=True)
        await notify_error("shopify_webhook", str(e), order_number=str(event.order_number))
        return error_response(500, str(e))

    if not result.ok:
        await notify_error(
            f"intake_{result.status.value}",
            result.error or "",
            order_number=result.order.orderNumber if result.order else None,
        )
        return error_response(500, result.error or "Order processing failed")

    return json_response(200, {"success": True, "message": "Order created"})
