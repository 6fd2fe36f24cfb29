"""Transient user notifications.

Only one notification is visible at a time: showing a new one replaces the
current one, and each one expires after a fixed duration.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from pydantic import BaseModel

from miniapp_order.core.config import settings
from miniapp_order.schemas.session import StatusLevel


class Notification(BaseModel):
    """Visible notification and the monotonic time it was raised."""

    message: str
    level: StatusLevel
    shown_at: float


class Notifier:
    """Single-slot notification holder with auto-dismiss."""

    def __init__(
        self,
        duration_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.duration_seconds: float = (
            settings.notification_seconds if duration_seconds is None else duration_seconds
        )
        self._clock = clock
        self._current: Notification | None = None

    def show(self, message: str, level: StatusLevel = StatusLevel.SUCCESS) -> Notification:
        """Raise a notification, replacing whatever is visible."""
        self._current = Notification(message=message, level=level, shown_at=self._clock())
        return self._current

    def current(self) -> Notification | None:
        """Return the visible notification, dropping it once it has expired."""
        if self._current is None:
            return None
        if self._clock() - self._current.shown_at >= self.duration_seconds:
            self._current = None
        return self._current

    def dismiss(self) -> None:
        self._current = None
