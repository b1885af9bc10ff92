"""Logging initialization for suite runs."""
from __future__ import annotations

import logging

from parabank_e2e.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once, at LOG_LEVEL (default INFO)."""
    global _configured
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    if not _configured:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(stream_handler)
        _configured = True
        # Playwright and httpx are chatty at DEBUG
        logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
        logging.getLogger("httpcore").setLevel(max(log_level, logging.WARNING))

    logging.getLogger(__name__).debug("Logging initialized at level %s", level_name)
