from __future__ import annotations

import logging

from .settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # httpx logs full request URLs at INFO, which include the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logging.getLogger("sqlsketch")
