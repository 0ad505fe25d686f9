from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Outbound channel to an employee (push, socket, mail ...)."""

    def notify(self, employee_id: int, *, title: str, body: str, data: Optional[Mapping[str, Any]] = None) -> None:
        raise NotImplementedError


class LoggingNotifier:
    """Default notifier: records the message in the application log."""

    def notify(self, employee_id: int, *, title: str, body: str, data: Optional[Mapping[str, Any]] = None) -> None:
        logger.info("notify employee=%s title=%r body=%r data=%s", employee_id, title, body, dict(data or {}))
