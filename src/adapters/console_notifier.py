"""Console notification adapter — implements NotificationPort.

Writes reminders to stdout and the log. Permission is granted unless the
user turned notifications off for this adapter.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from src.ports.notification_port import NotificationPermissionError, Permission

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Console implementation of NotificationPort."""

    def __init__(self, stream: TextIO | None = None, permission: Permission = "default") -> None:
        self._stream = stream or sys.stdout
        self._permission: Permission = permission

    @property
    def permission(self) -> Permission:
        return self._permission

    async def request_permission(self) -> Permission:
        if self._permission == "default":
            self._permission = "granted"
        return self._permission

    async def notify(self, title: str, body: str) -> None:
        if self._permission != "granted":
            raise NotificationPermissionError(f"Notifications are {self._permission}")
        print(f"[{title}] {body}", file=self._stream, flush=True)
        logger.info("Notification shown: %s: %s", title, body)
