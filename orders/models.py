"""
Pydantic models for order records, Shopify webhooks and notification requests.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, field_validator


class OrderStage(str, Enum):
    CONFIRMED = "confirmed"
    IN_PRODUCTION = "in_production"
    DISPATCHED = "dispatched"
    DELIVERED = "delivered"


class Sender(str, Enum):
    CUSTOMER = "customer"
    TEAM = "team"


class UpdateType(str, Enum):
    MESSAGE = "message"
    STATUS = "status"
    UPDATE = "update"

    @classmethod
    def parse(cls, value: Optional[str]) -> "UpdateType":
        """Exact match only; unknown or missing kinds fall back to the generic update."""
        try:
            return cls(value)
        except ValueError:
            return cls.UPDATE


def _to_str(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return value


class ChatMessage(BaseModel):
    sender: str = Sender.TEAM.value
    message: str = ""

    @property
    def from_customer(self) -> bool:
        return self.sender == Sender.CUSTOMER.value


# ── Stored record ────────────────────────────────────────────

class OrderRecord(BaseModel):
    orderNumber: str
    trackingToken: str = ""
    customerName: str = "Guest"
    email: str = ""
    deliveryPostcode: str = ""
    orderDate: str = ""
    stage: str = OrderStage.CONFIRMED.value
    deliveryDate: str = ""
    eta: str = ""
    messages: list[ChatMessage] = []

    @field_validator("orderNumber", mode="before")
    @classmethod
    def order_number_as_str(cls, value):
        return _to_str(value)

    @field_validator("messages", mode="before")
    @classmethod
    def messages_as_list(cls, value):
        # Firebase drops empty arrays and returns pushed children as a keyed object
        if value is None:
            return []
        if isinstance(value, dict):
            return [value[k] for k in sorted(value)]
        return value


# ── Shopify webhook ──────────────────────────────────────────

class ShopifyCustomer(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class ShopifyAddress(BaseModel):
    zip: Optional[str] = None


class ShopifyOrderEvent(BaseModel):
    order_number: Optional[Union[int, str]] = None
    customer: Optional[ShopifyCustomer] = None
    email: Optional[str] = None
    created_at: Optional[str] = None
    shipping_address: Optional[ShopifyAddress] = None


# ── Update notification ──────────────────────────────────────

class NotificationRequest(BaseModel):
    orderNumber: Optional[str] = None
    customerName: Optional[str] = None
    email: Optional[str] = None
    updateType: Optional[str] = None
    message: Optional[str] = None
    messageHistory: Optional[list[ChatMessage]] = None

    @field_validator("orderNumber", mode="before")
    @classmethod
    def order_number_as_str(cls, value):
        return _to_str(value)

    @property
    def update_type(self) -> UpdateType:
        return UpdateType.parse(self.updateType)

    def missing_required(self) -> bool:
        return not (self.orderNumber or "").strip() or not (self.email or "").strip()


# ── Outcomes ─────────────────────────────────────────────────

class DeliveryResult(BaseModel):
    """Outcome of a single email submission."""
    success: bool
    message_id: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None


class IntakeStatus(str, Enum):
    SUCCESS = "success"
    STORE_FAILED = "store_failed"
    EMAIL_FAILED = "email_failed"


class IntakeResult(BaseModel):
    status: IntakeStatus
    order: Optional[OrderRecord] = None
    delivery: Optional[DeliveryResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == IntakeStatus.SUCCESS
