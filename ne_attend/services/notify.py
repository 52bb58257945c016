from __future__ import annotations

import logging
from typing import Protocol

from ..logging.init import get_logger

"""User-facing notifications.

The pipelines return values and never notify; the orchestrator reports
outcomes through an injected ``Notifier``. The default implementation writes
through the application logger.
"""

__all__ = [
    "Notifier",
    "LoggingNotifier",
]


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or get_logger()

    def success(self, message: str) -> None:
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._logger.error(message)
