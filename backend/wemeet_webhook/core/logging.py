import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from wemeet_webhook.core.config import Settings

LOG_FORMAT = "%(asctime)s [%(filename)s:%(lineno)d] %(levelname)s: %(message)s"
LOG_RETENTION_DAYS = 30


def configure_logging(
    settings: Settings, logger: logging.Logger | None = None
) -> None:
    """Send logs to the console and, if ``log_dir`` is set, a daily file.

    Configures the root logger unless another one is given.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {settings.log_level}")

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            TimedRotatingFileHandler(
                log_dir / "webhook.log",
                when="midnight",
                backupCount=LOG_RETENTION_DAYS,
                encoding="utf-8",
            )
        )

    target = logger or logging.getLogger()
    target.setLevel(level)
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        target.addHandler(handler)
