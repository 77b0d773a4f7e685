"""
Logging configuration for stdout output.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# libraries that flood DEBUG with gateway/http chatter
QUIET_LOGGERS = (
    "discord",
    "discord.gateway",
    "discord.http",
    "discord.client",
    "httpx",
    "uvicorn.access",
)


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Configure root logger with a stdout handler.

    Third-party loggers listed in QUIET_LOGGERS never go below INFO,
    even when the root logger runs at DEBUG.
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # clear existing handlers to avoid duplicates on repeated calls
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    logging.getLogger(__name__).debug("logging initialized")
