"""Transient user-facing notices.

A board shows one notice at a time; posting a new notice replaces the
current one. Notices expire after their TTL.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog

logger = structlog.get_logger()


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    message: str
    level: NoticeLevel
    posted_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return now >= self.posted_at + self.ttl


class NoticeBoard:
    """Single-slot notice area with auto-dismissal."""

    def __init__(
        self,
        ttl: float = 5.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._current: Notice | None = None
        self._listeners: list[Callable[[Notice], None]] = []
        self._log = logger.bind(service="notices")

    def post(
        self,
        message: str,
        level: NoticeLevel = NoticeLevel.INFO,
        *,
        ttl: float | None = None,
    ) -> Notice:
        notice = Notice(
            message=message,
            level=level,
            posted_at=self._clock(),
            ttl=self._ttl if ttl is None else ttl,
        )
        self._current = notice
        self._log.debug("notice.posted", level=level.value)
        for listener in list(self._listeners):
            listener(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.post(message, NoticeLevel.SUCCESS)

    def error(self, message: str) -> Notice:
        return self.post(message, NoticeLevel.ERROR)

    def warning(self, message: str) -> Notice:
        return self.post(message, NoticeLevel.WARNING)

    @property
    def current(self) -> Notice | None:
        """The visible notice, or None once it has expired."""
        if self._current is not None and self._current.expired(self._clock()):
            self._current = None
        return self._current

    def subscribe(self, listener: Callable[[Notice], None]) -> Callable[[], None]:
        """Register a callback receiving every posted notice."""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Callable[[Notice], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dismiss(self) -> None:
        self._current = None
