import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from wemeet_webhook.api import webhook
from wemeet_webhook.core.config import WebhookCredentials, get_settings
from wemeet_webhook.errors import WebhookError
from wemeet_webhook.middleware.body_size import BodySizeLimitMiddleware

settings = get_settings()

app = FastAPI(
    title="Tencent Meeting Webhook Receiver",
    description="Verifies, decrypts and dispatches Tencent Meeting callbacks",
    version="1.0.0",
)

app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)

app.include_router(webhook.router, prefix=settings.webhook_path, tags=["webhook"])

logger = logging.getLogger(__name__)


@app.exception_handler(WebhookError)
async def webhook_error_handler(request: Request, exc: WebhookError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.get("/health", include_in_schema=False)
async def health():
    credentials = WebhookCredentials.from_settings(get_settings())
    return {
        "status": "ok",
        "webhook_path": settings.webhook_path,
        "encrypted": credentials.encrypted,
    }
