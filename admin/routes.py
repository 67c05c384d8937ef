"""
Admin endpoints for order lookup.
Protected by ADMIN_API_KEY header.
"""
import logging

from fastapi import APIRouter, Header, HTTPException

from config import ADMIN_API_KEY
from store.client import StoreError, get_order

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


async def _verify_key(x_api_key: str = Header(...)):
    if not ADMIN_API_KEY or x_api_key != ADMIN_API_KEY:
        raise HTTPException(status_code=401, detail="Invalid API key")


@router.get("/orders/{order_number}")
async def get_order_record(order_number: str, x_api_key: str = Header(...)):
    await _verify_key(x_api_key)
    try:
        record = await get_order(order_number)
    except StoreError as e:
        logger.error(f"Admin lookup for order {order_number} failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    if record is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return record.model_dump(mode="json")
