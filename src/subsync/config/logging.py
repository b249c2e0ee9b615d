"""Root logger setup for the CLI."""

from __future__ import annotations

import logging
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT: Final[str] = "%H:%M:%S"

# Third-party loggers that narrate every request at INFO.
_CHATTY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for terminal output.

    ``force=True`` replaces handlers installed by an earlier call, which is how
    ``--verbose`` switches a running CLI to DEBUG. Request-level chatter from the
    HTTP stack only shows up at DEBUG.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT, force=force)
    http_level = level if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
