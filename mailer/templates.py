"""
Branded HTML email templates for order confirmations and order updates.

Every template returns a RenderedEmail (subject + self-contained HTML with
inline styles only). Rendering is pure: no I/O, the footer year comes from
`today`.
"""

import html
from datetime import date
from enum import Enum
from typing import NamedTuple, Optional
from urllib.parse import quote

from config import (
    BRAND_NAME,
    LOGO_URL,
    TRACKING_PAGE_URL,
    MESSAGE_HISTORY_LIMIT,
    ESCAPE_MESSAGE_HTML,
)
from orders.models import ChatMessage, NotificationRequest, OrderRecord, UpdateType

# Branding
COLOR_SAND = "#E8E4DC"
COLOR_GOLD = "#BAA684"
COLOR_INK = "#000000"
COLOR_MUTED = "#666666"
SERIF = "Georgia, 'Times New Roman', serif"
SANS = "-apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif"

NO_MESSAGES_TEXT = "No messages yet."


class TemplateVariant(str, Enum):
    CONFIRMATION = "confirmation"
    MESSAGE_UPDATE = "message_update"
    STATUS_UPDATE = "status_update"
    GENERIC_UPDATE = "generic_update"


class RenderedEmail(NamedTuple):
    subject: str
    html: str


# (subject prefix, heading) per variant
_COPY = {
    TemplateVariant.CONFIRMATION: ("Order Confirmed", "Thank you for your order"),
    TemplateVariant.MESSAGE_UPDATE: ("New Message", "You have a new message"),
    TemplateVariant.STATUS_UPDATE: ("Status Update", "Your order status has changed"),
    TemplateVariant.GENERIC_UPDATE: ("Order Update", "Your order has been updated"),
}

_VARIANT_BY_UPDATE_TYPE = {
    UpdateType.MESSAGE: TemplateVariant.MESSAGE_UPDATE,
    UpdateType.STATUS: TemplateVariant.STATUS_UPDATE,
    UpdateType.UPDATE: TemplateVariant.GENERIC_UPDATE,
}


def tracking_url(order_number: str) -> str:
    return f"{TRACKING_PAGE_URL}?order={quote(str(order_number), safe='')}"


def subject_for(variant: TemplateVariant, order_number: str) -> str:
    prefix, _ = _COPY[variant]
    return f"{prefix} - Order #{order_number}"


def variant_for(update_type: UpdateType) -> TemplateVariant:
    return _VARIANT_BY_UPDATE_TYPE.get(update_type, TemplateVariant.GENERIC_UPDATE)


def _text(value: str) -> str:
    """Interpolate free text supplied by customers or staff."""
    value = value or ""
    if ESCAPE_MESSAGE_HTML:
        return html.escape(value).replace("\n", "<br>")
    return value


# ── Building blocks ──────────────────────────────────────────

def _header() -> str:
    return f"""
        <div style="background-color: {COLOR_SAND}; padding: 40px; text-align: center;">
            <img src="{LOGO_URL}" alt="{BRAND_NAME}" width="160" style="display: block; margin: 0 auto; border: 0;">
        </div>
    """


def _footer(today: date) -> str:
    return f"""
        <div style="background-color: {COLOR_SAND}; padding: 40px; text-align: center;">
            <p style="font-family: {SANS}; font-size: 12px; color: #999999; margin: 0; line-height: 1.6;">Handmade in England using kiln dried, sub 10% best grade timber</p>
            <p style="font-family: {SANS}; font-size: 12px; color: #999999; margin: 8px 0 0 0; line-height: 1.6;">&copy; {today.year} {BRAND_NAME}. All rights reserved.</p>
        </div>
    """


def _paragraph(text: str, extra_style: str = "") -> str:
    return (
        f'<p style="font-family: {SANS}; font-size: 15px; line-height: 1.6; '
        f'color: {COLOR_MUTED}; margin: 0 0 16px 0;{extra_style}">{text}</p>'
    )


def _detail_row(label: str, value: str) -> str:
    return f"""
            <tr>
                <td style="font-family: {SANS}; padding: 8px 0; color: #999999; text-transform: uppercase; font-size: 11px; letter-spacing: 0.5px;">{label}</td>
                <td style="font-family: {SANS}; padding: 8px 0; color: {COLOR_INK}; font-weight: 500; font-size: 14px; text-align: right;">{value}</td>
            </tr>"""


def _details(rows: list[tuple[str, str]]) -> str:
    body = "".join(_detail_row(label, value) for label, value in rows)
    return f"""
        <table role="presentation" width="100%" cellpadding="0" cellspacing="0" style="background-color: #FAFAFA; border: 1px solid {COLOR_SAND}; padding: 24px; margin: 32px 0;">{body}
        </table>
    """


def _button(label: str, href: str) -> str:
    return f"""
        <div style="text-align: center;">
            <a href="{href}" style="display: inline-block; padding: 16px 40px; background-color: {COLOR_INK}; color: #ffffff; text-decoration: none; font-family: {SANS}; font-size: 14px; font-weight: 500; letter-spacing: 0.5px; margin: 32px 0; border-radius: 2px;">{label}</a>
        </div>
    """


def _message_box(message: str) -> str:
    return f"""
        <div style="background-color: #FAFAFA; border-left: 3px solid {COLOR_GOLD}; padding: 20px 24px; margin: 24px 0; font-family: {SANS}; font-size: 15px; line-height: 1.6; color: #333333;">{_text(message)}</div>
    """


def _bubble(entry: ChatMessage) -> str:
    if entry.from_customer:
        label, align, background, color = "You", "right", "#1A1A1A", "#ffffff"
    else:
        label, align, background, color = f"{BRAND_NAME} Team", "left", "#F3F1EC", "#333333"
    return f"""
            <div style="text-align: {align}; margin: 0 0 12px 0;">
                <div style="font-family: {SANS}; font-size: 11px; color: #999999; text-transform: uppercase; letter-spacing: 0.5px; margin: 0 0 4px 0;">{label}</div>
                <div style="display: inline-block; max-width: 80%; text-align: left; background-color: {background}; color: {color}; padding: 12px 16px; border-radius: 12px; font-family: {SANS}; font-size: 14px; line-height: 1.5;">{_text(entry.message)}</div>
            </div>"""


def _conversation(order_number: str, history: Optional[list[ChatMessage]]) -> str:
    """Recent conversation, or an invitation to start one. Both link to the tracking page."""
    href = tracking_url(order_number)
    recent = (history or [])[-MESSAGE_HISTORY_LIMIT:] if MESSAGE_HISTORY_LIMIT > 0 else []

    if not recent:
        return f"""
        <a href="{href}" style="display: block; text-decoration: none; background-color: #FAFAFA; border: 1px dashed {COLOR_SAND}; padding: 24px; margin: 24px 0; text-align: center;">
            <p style="font-family: {SANS}; font-size: 14px; color: {COLOR_MUTED}; margin: 0;">{NO_MESSAGES_TEXT} Have a question about your order? Start a conversation with us from your tracking page.</p>
        </a>
    """

    bubbles = "".join(_bubble(entry) for entry in recent)
    return f"""
        <h3 style="font-family: {SERIF}; font-size: 18px; font-weight: 400; color: {COLOR_INK}; margin: 32px 0 16px 0;">Recent messages</h3>
        <a href="{href}" style="display: block; text-decoration: none; background-color: #FAFAFA; border: 1px solid {COLOR_SAND}; padding: 20px; margin: 0 0 24px 0;">{bubbles}
            <p style="font-family: {SANS}; font-size: 12px; color: {COLOR_GOLD}; margin: 8px 0 0 0; text-align: center;">Reply from your tracking page</p>
        </a>
    """


def _document(subject: str, heading: str, content: str, today: date) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(subject)}</title>
</head>
<body style="margin: 0; padding: 0; font-family: {SERIF}; background-color: #f5f5f5;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff;">
        {_header()}
        <div style="padding: 48px 40px; background-color: #ffffff;">
            <h2 style="font-family: {SERIF}; font-size: 28px; font-weight: 400; color: {COLOR_INK}; margin: 0 0 24px 0; line-height: 1.3;">{heading}</h2>
            {content}
            <div style="height: 1px; background-color: {COLOR_SAND}; margin: 32px 0;"></div>
            {_paragraph("If you have any questions, simply reply to this email or send a message through your order tracking page.")}
            {_paragraph(f"&mdash; The {BRAND_NAME} Team", " margin-top: 24px;")}
        </div>
        {_footer(today)}
    </div>
</body>
</html>
"""


def _greeting(name: Optional[str], fallback: str = "there") -> str:
    name = (name or "").strip() or fallback
    return _paragraph(f"Hi {_text(name)},")


# ── Templates ────────────────────────────────────────────────

def render_update(request: NotificationRequest, today: Optional[date] = None) -> RenderedEmail:
    """Update email for a message, a status change or a generic update."""
    today = today or date.today()
    order_number = request.orderNumber or ""
    variant = variant_for(request.update_type)
    subject = subject_for(variant, order_number)
    _, heading = _COPY[variant]
    if variant == TemplateVariant.MESSAGE_UPDATE and not request.message:
        # nothing to quote: keep the generic heading to match the generic sentence
        _, heading = _COPY[TemplateVariant.GENERIC_UPDATE]

    if variant == TemplateVariant.MESSAGE_UPDATE and request.message:
        body = _message_box(request.message)
    elif variant == TemplateVariant.STATUS_UPDATE:
        body = _paragraph(
            "The status of your order has changed. "
            "Visit your tracking page to see the latest progress and delivery details."
        )
    else:
        body = _paragraph(
            "There has been an update to your order. "
            "View the tracking page for the latest status and details."
        )

    content = (
        _greeting(request.customerName)
        + body
        + _details([("Order Number", f"#{_text(order_number)}")])
        + _conversation(order_number, request.messageHistory)
        + _button("VIEW ORDER STATUS", tracking_url(order_number))
    )
    return RenderedEmail(subject, _document(subject, heading, content, today))


def render_confirmation(record: OrderRecord, today: Optional[date] = None) -> RenderedEmail:
    """Confirmation email sent once, right after the order is stored."""
    today = today or date.today()
    variant = TemplateVariant.CONFIRMATION
    subject = subject_for(variant, record.orderNumber)
    _, heading = _COPY[variant]

    first_name = (record.customerName or "").split(" ")[0]
    if first_name == "Guest":
        first_name = ""

    content = (
        _greeting(first_name)
        + _paragraph(
            "We've received your order and our workshop will be in touch as it progresses. "
            "You can follow every stage from your tracking page."
        )
        + _details([
            ("Order Number", f"#{_text(record.orderNumber)}"),
            ("Order Date", _text(record.orderDate)),
            ("Status", "Order Confirmed"),
        ])
        + _button("Track Your Order", tracking_url(record.orderNumber))
    )
    return RenderedEmail(subject, _document(subject, heading, content, today))
