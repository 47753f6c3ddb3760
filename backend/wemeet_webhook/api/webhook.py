import logging
from functools import lru_cache

from fastapi import APIRouter, BackgroundTasks, Depends, Header, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from wemeet_webhook.controller import ACK_BODY, WebhookController
from wemeet_webhook.core.config import WebhookCredentials, get_settings
from wemeet_webhook.errors import BadRequest
from wemeet_webhook.schemas.events import CallbackBody

router = APIRouter()
logger = logging.getLogger(__name__)


@lru_cache
def get_controller() -> WebhookController:
    credentials = WebhookCredentials.from_settings(get_settings())
    return WebhookController(credentials, logger=logger)


@router.get("", response_class=PlainTextResponse)
def verify_callback_url(
    check_str: str | None = None,
    timestamp: str | None = Header(None),
    nonce: str | None = Header(None),
    signature: str | None = Header(None),
    controller: WebhookController = Depends(get_controller),
):
    # The platform compares the body byte for byte: no quotes, no newline.
    plaintext = controller.handle_verification(timestamp, nonce, signature, check_str)
    return PlainTextResponse(plaintext)


@router.post("", response_class=PlainTextResponse)
async def receive_event(
    request: Request,
    background_tasks: BackgroundTasks,
    timestamp: str | None = Header(None),
    nonce: str | None = Header(None),
    signature: str | None = Header(None),
    controller: WebhookController = Depends(get_controller),
):
    raw = await request.body()
    try:
        body = CallbackBody.model_validate_json(raw)
    except ValidationError as ve:
        logger.error(f"Invalid callback body: {ve}")
        raise BadRequest("Invalid callback body")

    event = controller.handle_event(timestamp, nonce, signature, body.data)

    # Runs after the acknowledgement has been sent.
    background_tasks.add_task(controller.dispatch, event)
    return PlainTextResponse(ACK_BODY)
