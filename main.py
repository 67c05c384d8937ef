"""Lumbr order tracking: entry point. FastAPI webhooks + email notifications."""

import logging
from logging.handlers import RotatingFileHandler
import time as _time
from pathlib import Path
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import WEBHOOK_HOST, WEBHOOK_PORT, LOG_PATH, RESEND_API_KEY
from admin.routes import router as admin_router
from routes.shopify import router as shopify_router
from routes.updates import router as updates_router

# ── Logging ──────────────────────────────────────────────────

Path(LOG_PATH).parent.mkdir(parents=True, exist_ok=True)

logging.basicConfig(
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
    level=logging.INFO,
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(LOG_PATH, maxBytes=10*1024*1024, backupCount=5, encoding="utf-8"),
    ],
)
logger = logging.getLogger(__name__)


# ── App ──────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Lumbr order tracking...")
    if not RESEND_API_KEY:
        logger.warning("RESEND_API_KEY is not set, emails will be rejected by Resend")
    yield
    logger.info("Service stopped.")


app = FastAPI(title="Lumbr order tracking", lifespan=lifespan)
app.include_router(shopify_router)
app.include_router(updates_router)
app.include_router(admin_router)
_start = _time.time()


@app.get("/health")
async def health():
    return {"status": "ok", "uptime": int(_time.time() - _start)}


if __name__ == "__main__":
    uvicorn.run("main:app", host=WEBHOOK_HOST, port=WEBHOOK_PORT, reload=False)
