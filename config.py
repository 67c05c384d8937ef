"""
Configuration for the Lumbr order tracking service.
All secrets are loaded from the .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the project root
BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# Resend (email delivery)
RESEND_API_KEY = os.getenv("RESEND_API_KEY", "")
RESEND_API_BASE = os.getenv("RESEND_API_BASE", "https://api.resend.com").rstrip("/")
EMAIL_SENDER = os.getenv("EMAIL_SENDER", "Lumbr <lumbr@lumbr.uk>")

# Firebase Realtime Database (order records)
FIREBASE_DB_URL = os.getenv(
    "FIREBASE_DB_URL",
    "https://lumbr-order-tracking-default-rtdb.europe-west1.firebasedatabase.app",
).rstrip("/")

# Email content
TRACKING_PAGE_URL = os.getenv("TRACKING_PAGE_URL", "https://lumbr.uk/pages/track-order")
BRAND_NAME = os.getenv("BRAND_NAME", "Lumbr")
LOGO_URL = os.getenv("LOGO_URL", "https://lumbr.uk/cdn/shop/files/lumbr-logo.png")
MESSAGE_HISTORY_LIMIT = int(os.getenv("MESSAGE_HISTORY_LIMIT", "3"))
ESCAPE_MESSAGE_HTML = _flag("ESCAPE_MESSAGE_HTML", "1")

# Outbound HTTP
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

# Server
WEBHOOK_HOST = os.getenv("WEBHOOK_HOST", "0.0.0.0")
WEBHOOK_PORT = int(os.getenv("WEBHOOK_PORT", "8080"))
LOG_PATH = os.getenv("LOG_PATH", "data/service.log")

# Admin API
ADMIN_API_KEY = os.getenv("ADMIN_API_KEY", "")

# Telegram alerts
TELEGRAM_ALERT_BOT_TOKEN = os.getenv("TELEGRAM_ALERT_BOT_TOKEN", "")
TELEGRAM_ALERT_CHAT_ID = os.getenv("TELEGRAM_ALERT_CHAT_ID", "")
