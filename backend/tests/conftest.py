import base64
import os
import time

import pytest
from fastapi.testclient import TestClient

AES_KEY = b"0123456789abcdef0123456789abcdef"
# The platform hands out the key as 43 base64 characters, padding stripped.
ENCODING_AES_KEY = base64.b64encode(AES_KEY).decode().rstrip("=")
TOKEN = "test_token"

# Set test environment variables
os.environ.update(
    {
        "WEMEET_WEBHOOK_TOKEN": TOKEN,
        "WEMEET_WEBHOOK_AES_KEY": ENCODING_AES_KEY,
        "WEBHOOK_PATH": "/webhook",
    }
)

# Import app modules after setting environment variables
from wemeet_webhook.api.webhook import get_controller
from wemeet_webhook.controller import WebhookController
from wemeet_webhook.core.config import WebhookCredentials, get_settings
from wemeet_webhook.main import app
from wemeet_webhook.services.payload_codec import PayloadCodec
from wemeet_webhook.services.signature import compute_signature


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def credentials() -> WebhookCredentials:
    return WebhookCredentials(token=TOKEN, encoding_aes_key=ENCODING_AES_KEY)


@pytest.fixture
def plain_credentials() -> WebhookCredentials:
    return WebhookCredentials(token=TOKEN)


@pytest.fixture
def codec(credentials) -> PayloadCodec:
    return PayloadCodec(credentials)


@pytest.fixture
def plain_codec(plain_credentials) -> PayloadCodec:
    return PayloadCodec(plain_credentials)


@pytest.fixture
def client():
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_controller():
    """Serve requests with the given controller instead of the configured one."""

    def _use(controller: WebhookController) -> WebhookController:
        app.dependency_overrides[get_controller] = lambda: controller
        return controller

    yield _use
    app.dependency_overrides.pop(get_controller, None)


def signed_headers(data: str, token: str = TOKEN, nonce: str = "1234567") -> dict:
    timestamp = str(int(time.time()))
    return {
        "timestamp": timestamp,
        "nonce": nonce,
        "signature": compute_signature(token, timestamp, nonce, data),
    }
