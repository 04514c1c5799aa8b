"""Session guard.

Owns the bearer token. No other component reads or writes the persisted
token except through this class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from gemini_pool_console.errors import ConsoleError, UnauthorizedError
from gemini_pool_console.navigation import Navigator, Route
from gemini_pool_console.storage import TOKEN_KEY, KeyValueStore

if TYPE_CHECKING:
    from gemini_pool_console._http import HTTPClient

logger = structlog.get_logger()


class SessionGuard:
    """Gatekeeper for the protected management view.

    Lifecycle:
    - bootstrap(): verify a persisted token on startup (fail closed)
    - acquire(): store the token from a successful sign-in
    - invalidate(): drop the token and return to sign-in; also triggered by
      any 401 from a protected call
    """

    def __init__(
        self,
        http: HTTPClient,
        store: KeyValueStore,
        navigator: Navigator,
    ) -> None:
        self._http = http
        self._store = store
        self._navigator = navigator
        self._log = logger.bind(service="session")

    @property
    def token(self) -> str | None:
        """The persisted bearer token, if any."""
        return self._store.get(TOKEN_KEY) or None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def require_token(self) -> str:
        """Return the token, or raise when no session exists.

        Raises:
            UnauthorizedError: If no token is persisted
        """
        token = self.token
        if token is None:
            raise UnauthorizedError("No active session")
        return token

    async def bootstrap(self) -> bool:
        """Verify a persisted token against the server.

        On success the management view is shown. Any failure, including a
        transport error, clears the token.

        Returns:
            True if a valid session exists
        """
        token = self.token
        if token is None:
            self._log.debug("session.bootstrap.no_token")
            return False

        try:
            await self._http.get("/auth/verify", token=token)
        except ConsoleError as e:
            self._log.info(
                "session.bootstrap.rejected",
                reason=e.code,
                status=e.status_code,
            )
            self._store.remove(TOKEN_KEY)
            return False

        self._log.info("session.bootstrap.verified")
        self._navigator.go(Route.MANAGEMENT)
        return True

    def acquire(self, token: str) -> None:
        """Persist the token from a successful credential exchange."""
        if not token:
            raise ValueError("token must be a non-empty string")
        self._store.set(TOKEN_KEY, token)
        self._log.info("session.acquired")

    def invalidate(self) -> None:
        """Clear the token and navigate to sign-in.

        Concurrent authorization failures navigate only once.
        """
        had_token = self.token is not None
        self._store.remove(TOKEN_KEY)
        if had_token or self._navigator.current is not Route.LOGIN:
            self._log.info("session.invalidated")
            self._navigator.go(Route.LOGIN)

    def logout(self) -> None:
        """Operator-initiated sign-out."""
        self._log.info("session.logout")
        self.invalidate()

    def guard_protected_view(self) -> bool:
        """Send the operator to sign-in when the protected view has no session.

        Returns:
            True if the protected view may be shown
        """
        if self.is_authenticated:
            return True
        self._log.info("session.guard.redirect")
        self._navigator.go(Route.LOGIN)
        return False
