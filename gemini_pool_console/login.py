"""Sign-in flow."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pydantic
import structlog

from gemini_pool_console import render
from gemini_pool_console.errors import ConsoleError, NetworkError
from gemini_pool_console.navigation import Navigator, Route
from gemini_pool_console.notices import NoticeBoard
from gemini_pool_console.types import LoginResult, _LoginRequest

if TYPE_CHECKING:
    from gemini_pool_console._http import HTTPClient
    from gemini_pool_console.i18n import LocalizationRuntime
    from gemini_pool_console.session import SessionGuard

logger = structlog.get_logger()


class LoginFlow:
    """Collects credentials and exchanges them for a session token.

    Failures are reported through notices; submit() never raises for
    server or transport errors.
    """

    def __init__(
        self,
        http: HTTPClient,
        session: SessionGuard,
        i18n: LocalizationRuntime,
        navigator: Navigator,
        *,
        notices: NoticeBoard | None = None,
        redirect_delay: float = 1.0,
    ) -> None:
        """Initialize the flow.

        Args:
            http: HTTP client for the credential exchange
            session: Receives the token on success
            i18n: Localization runtime for messages and the view
            navigator: Used for the post-login redirect
            notices: Notice board (defaults to a 3 second TTL board)
            redirect_delay: Seconds between the success notice and navigation
        """
        self._http = http
        self._session = session
        self._i18n = i18n
        self._navigator = navigator
        self._notices = notices if notices is not None else NoticeBoard(ttl=3.0)
        self._redirect_delay = redirect_delay
        self._log = logger.bind(service="login")

        self._loading = False
        self._pending_redirect: asyncio.Task | None = None
        self._view = render.login_view(i18n)
        self._unsubscribe = i18n.subscribe(self._on_language_changed)

    @property
    def loading(self) -> bool:
        """True while a credential exchange is in flight."""
        return self._loading

    @property
    def notices(self) -> NoticeBoard:
        return self._notices

    @property
    def pending_redirect(self) -> asyncio.Task | None:
        """Scheduled navigation after a successful sign-in, if any."""
        return self._pending_redirect

    @property
    def button_label(self) -> str:
        return self._i18n.t("login_button")

    @property
    def view(self) -> render.LoginView:
        # An expired or replaced notice forces a fresh render.
        if self._view.notice is not self._notices.current:
            self.render()
        return self._view

    def render(self) -> render.LoginView:
        self._view = render.login_view(
            self._i18n,
            loading=self._loading,
            notice=self._notices.current,
        )
        return self._view

    def _on_language_changed(self, _language: str) -> None:
        self.render()

    def close(self) -> None:
        """Detach from the localization runtime and drop a pending redirect."""
        self._unsubscribe()
        if self._pending_redirect is not None and not self._pending_redirect.done():
            self._pending_redirect.cancel()

    async def submit(self, username: str, password: str) -> bool:
        """Exchange credentials for a token.

        Returns:
            True if the sign-in succeeded
        """
        if self._loading:
            self._log.debug("login.submit.ignored_while_loading")
            return False

        username = username.strip()
        password = password.strip()
        t = self._i18n.t

        if not username or not password:
            self._notices.error(t("missing_credentials"))
            self.render()
            return False

        self._loading = True
        self.render()
        try:
            response = await self._http.post(
                "/auth/login",
                json=_LoginRequest(username=username, password=password).model_dump(),
                auth=False,
            )
            result = LoginResult.model_validate(response)
        except NetworkError as e:
            self._log.warning("login.network_error", error=str(e))
            self._notices.error(t("network_error"))
            return False
        except ConsoleError as e:
            self._log.info("login.rejected", status=e.status_code)
            self._notices.error(e.server_message or t("login_failed"))
            return False
        except pydantic.ValidationError:
            self._log.warning("login.malformed_response")
            self._notices.error(t("login_failed"))
            return False
        else:
            self._session.acquire(result.token)
            self._notices.success(t("login_success"))
            self._pending_redirect = asyncio.create_task(self._redirect())
            self._log.info("login.succeeded", username=username)
            return True
        finally:
            self._loading = False
            self.render()

    async def _redirect(self) -> None:
        await asyncio.sleep(self._redirect_delay)
        self._navigator.go(Route.MANAGEMENT)
