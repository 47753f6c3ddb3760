import logging

import uvicorn

from wemeet_webhook.core.config import get_settings
from wemeet_webhook.core.logging import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger.info(f"server is starting, listening on port {settings.api_port}")
    uvicorn.run(
        "wemeet_webhook.main:app",
        host=settings.host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
