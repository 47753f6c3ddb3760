import base64
import binascii
from dataclasses import dataclass
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wemeet_webhook.errors import InvalidInput

AES_KEY_SIZE = 32


class Settings(BaseSettings):
    wemeet_webhook_token: str
    wemeet_webhook_aes_key: str = ""
    webhook_path: str = "/webhook"
    host: str = "0.0.0.0"
    api_port: int = Field(
        default=2306, validation_alias=AliasChoices("PORT", "API_PORT", "api_port")
    )
    log_level: str = "info"
    log_dir: str | None = None
    max_body_size: int = 1_048_576  # 1 MiB

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


def resolve_aes_key(encoding_aes_key: str) -> bytes:
    """Turn the platform's 43-character EncodingAESKey into raw key bytes.

    The key is shipped without its trailing ``=``, so one is appended before
    base64 decoding. Raises InvalidInput unless the result is 32 bytes.
    """
    try:
        key = base64.b64decode(encoding_aes_key + "=")
    except (binascii.Error, ValueError) as exc:
        raise InvalidInput(f"AES key is not valid base64: {exc}") from exc
    if len(key) != AES_KEY_SIZE:
        raise InvalidInput(
            f"AES key must decode to {AES_KEY_SIZE} bytes, got {len(key)}"
        )
    return key


@dataclass(frozen=True)
class WebhookCredentials:
    token: str
    encoding_aes_key: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "WebhookCredentials":
        return cls(
            token=settings.wemeet_webhook_token,
            encoding_aes_key=settings.wemeet_webhook_aes_key,
        )

    @property
    def encrypted(self) -> bool:
        return bool(self.encoding_aes_key)

    def aes_key(self) -> bytes | None:
        if not self.encrypted:
            return None
        return resolve_aes_key(self.encoding_aes_key)
