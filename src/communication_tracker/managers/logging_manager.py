"""
# Logging Manager

Central logger factory for the Communication Tracker.

Every module obtains its logger through `get_logger()`, optionally with a prefix that
is prepended to each message so log lines can be traced back to a subsystem:

```python
from communication_tracker.managers.logging_manager import get_logger

logger = get_logger(prefix="[Company Routes]")
logger.info("Created company %s", company_id)
# 2024-01-01 12:00:00 | INFO | communication_tracker | [Company Routes] Created company 65a...
```

The root application logger is configured once, on first use, with a console handler
at the level given by `settings.LOG_LEVEL`.
"""

import logging
import sys
from typing import Any, MutableMapping, Optional, Tuple

from communication_tracker.config import settings

DEFAULT_LOGGER_NAME = "communication_tracker"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


class PrefixedLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that prepends a fixed prefix to every message."""

    def __init__(self, logger: logging.Logger, prefix: str):
        super().__init__(logger, {})
        self.prefix = prefix

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"{self.prefix} {msg}", kwargs


def _configure_root_logger() -> None:
    global _configured
    if _configured:
        return

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    app_logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    app_logger.setLevel(level)
    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        app_logger.addHandler(handler)
    app_logger.propagate = False
    _configured = True


def get_logger(name: str = DEFAULT_LOGGER_NAME, prefix: Optional[str] = None):
    """
    Return an application logger, optionally wrapped to prefix every message.

    Args:
        name (str): Logger name. Defaults to the package logger so all output shares one handler.
        prefix (Optional[str]): Text such as `"[DATABASE]"` prepended to each message.

    Returns:
        logging.Logger | PrefixedLoggerAdapter: A logger ready for use.
    """
    _configure_root_logger()
    logger = logging.getLogger(name)
    if prefix:
        return PrefixedLoggerAdapter(logger, prefix)
    return logger
