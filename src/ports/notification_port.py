"""Notification port — abstract interface for reminder delivery.

Core modules depend on this protocol, never on a specific notifier.
"""

from __future__ import annotations

from typing import Literal, Protocol

Permission = Literal["granted", "denied", "default"]


class NotificationPermissionError(Exception):
    """Raised when the user has blocked notifications."""


class NotificationPort(Protocol):
    """Abstract notification interface used by core modules."""

    @property
    def permission(self) -> Permission: ...

    async def request_permission(self) -> Permission: ...

    async def notify(self, title: str, body: str) -> None: ...
