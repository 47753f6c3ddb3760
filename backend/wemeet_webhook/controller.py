import logging
from dataclasses import dataclass
from typing import Any

from wemeet_webhook.core.config import WebhookCredentials
from wemeet_webhook.errors import (
    CallbackFailed,
    InvalidSignature,
    MissingHeaders,
    WebhookError,
)
from wemeet_webhook.schemas.events import Event
from wemeet_webhook.services.events import EventDispatcher, default_dispatcher
from wemeet_webhook.services.payload_codec import PayloadCodec
from wemeet_webhook.services.signature import verify_signature

ACK_BODY = "successfully received callback"


@dataclass(frozen=True)
class VerificationRequest:
    timestamp: str
    nonce: str
    signature: str
    data: str


class WebhookController:
    """Authenticates callbacks, then decodes them and hands events on.

    The signature is always checked before anything in the request is
    decoded. Every failure surfaces as a WebhookError.
    """

    def __init__(
        self,
        credentials: WebhookCredentials,
        codec: PayloadCodec | None = None,
        dispatcher: EventDispatcher | None = None,
        logger: logging.Logger | None = None,
    ):
        self.credentials = credentials
        self.logger = logger or logging.getLogger(__name__)
        self.codec = codec or PayloadCodec(credentials, self.logger)
        self.dispatcher = dispatcher or default_dispatcher(self.logger)

    def authenticate(
        self,
        timestamp: str | None,
        nonce: str | None,
        signature: str | None,
        data: str | None,
    ) -> VerificationRequest:
        if not (timestamp and nonce and signature and data):
            self.logger.error(
                "Missing required headers: "
                f"timestamp={bool(timestamp)} nonce={bool(nonce)} "
                f"signature={bool(signature)} data={bool(data)}"
            )
            raise MissingHeaders()

        request = VerificationRequest(timestamp, nonce, signature, data)
        if not verify_signature(
            self.credentials.token,
            request.timestamp,
            request.nonce,
            request.data,
            request.signature,
        ):
            self.logger.error(f"Invalid signature for nonce {nonce}")
            raise InvalidSignature()
        return request

    def handle_verification(
        self,
        timestamp: str | None,
        nonce: str | None,
        signature: str | None,
        check_str: str | None,
    ) -> str:
        """Answer the platform's URL verification with the decoded check_str."""
        request = self.authenticate(timestamp, nonce, signature, check_str)
        try:
            return self.codec.decode_check_str(request.data)
        except Exception as exc:
            raise CallbackFailed(f"Verification failed: {_reason(exc)}") from exc

    def handle_event(
        self,
        timestamp: str | None,
        nonce: str | None,
        signature: str | None,
        data: str | None,
    ) -> Event:
        """Authenticate, decode and parse an event callback.

        Dispatching is left to the caller so it can run after the response.
        """
        request = self.authenticate(timestamp, nonce, signature, data)
        try:
            decoded = self.codec.decode(request.data)
            return self.dispatcher.parse(decoded)
        except Exception as exc:
            raise CallbackFailed(f"Event processing failed: {_reason(exc)}") from exc

    def dispatch(self, event: Event) -> Any:
        try:
            return self.dispatcher.route(event)
        except Exception:
            self.logger.exception(f"Handler for {event.event} failed")
            return None


def _reason(exc: Exception) -> str:
    if isinstance(exc, WebhookError):
        return exc.message
    return str(exc)
