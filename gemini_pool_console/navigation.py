"""Navigation between the console's two entry points."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

import structlog

logger = structlog.get_logger()


class Route(str, Enum):
    """Console entry points."""

    LOGIN = "login"  # Unauthenticated entry
    MANAGEMENT = "management"  # Protected view


class Navigator:
    """Tracks the current route and records every transition.

    Every call to go() is a transition, even to the route already shown,
    the same way assigning a location reloads a page.
    """

    def __init__(self, initial: Route = Route.LOGIN) -> None:
        self._current = initial
        self._history: list[Route] = []
        self._listeners: list[Callable[[Route], None]] = []
        self._log = logger.bind(service="navigation")

    @property
    def current(self) -> Route:
        return self._current

    @property
    def history(self) -> tuple[Route, ...]:
        """Routes navigated to, oldest first."""
        return tuple(self._history)

    def go(self, route: Route) -> None:
        self._log.info("navigation.go", src=self._current.value, dst=route.value)
        self._current = route
        self._history.append(route)
        for listener in list(self._listeners):
            listener(route)

    def subscribe(self, listener: Callable[[Route], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Callable[[Route], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
