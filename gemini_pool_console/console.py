"""AdminConsole - main entry point for the console runtime."""

from __future__ import annotations

import asyncio
from datetime import tzinfo
from types import TracebackType

import structlog

from gemini_pool_console import render
from gemini_pool_console._http import HTTPClient
from gemini_pool_console.config import ConsoleSettings, get_settings
from gemini_pool_console.i18n import LocalizationRuntime
from gemini_pool_console.keys import ApiKeyManager, Confirmer
from gemini_pool_console.login import LoginFlow
from gemini_pool_console.navigation import Navigator, Route
from gemini_pool_console.notices import NoticeBoard
from gemini_pool_console.session import SessionGuard
from gemini_pool_console.storage import JsonFileStore, KeyValueStore

logger = structlog.get_logger()


class AdminConsole:
    """Wires the session guard, sign-in flow, key manager and localization.

    One instance of each service exists per console; they are passed to each
    other by reference. Use as an async context manager to ensure cleanup.

    Example:
        async with AdminConsole("http://localhost:8080", confirm=ask) as console:
            if await console.start() is Route.LOGIN:
                await console.login.submit("admin", "secret")
                await console.settle()
            print(console.view.as_text())
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        *,
        settings: ConsoleSettings | None = None,
        store: KeyValueStore | None = None,
        confirm: Confirmer | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the console.

        Args:
            endpoint_url: Gateway base URL. Falls back to GEMINI_POOL_ENDPOINT / console.yaml.
            settings: Explicit settings; defaults to get_settings()
            store: Persisted state; defaults to a JSON file at settings.storage.path
            confirm: Asked before destructive actions
            tz: Timezone for dates; None means local time
        """
        settings = settings or get_settings()
        if endpoint_url:
            settings = settings.model_copy(update={"endpoint": endpoint_url})
        if not settings.endpoint:
            raise ValueError("endpoint_url required (or set GEMINI_POOL_ENDPOINT env var)")

        self._settings = settings
        self._store = store if store is not None else JsonFileStore(settings.storage.path)
        self._confirm = confirm
        self._tz = tz
        self._log = logger.bind(service="console")

        self._http: HTTPClient | None = None
        self._navigator: Navigator | None = None
        self._i18n: LocalizationRuntime | None = None
        self._session: SessionGuard | None = None
        self._login: LoginFlow | None = None
        self._keys: ApiKeyManager | None = None
        self._unsubscribe_navigation = None
        self._transitions: set[asyncio.Task] = set()

    async def __aenter__(self) -> AdminConsole:
        """Enter async context, wiring all services."""
        settings = self._settings
        self._http = HTTPClient(
            base_url=settings.api_base_url,
            timeout=settings.http.timeout,
            max_retries=settings.http.max_retries,
        )
        await self._http.__aenter__()

        self._navigator = Navigator()
        self._i18n = LocalizationRuntime(
            self._store,
            default_language=settings.ui.default_language,
            tz=self._tz,
        )
        self._session = SessionGuard(self._http, self._store, self._navigator)
        session = self._session
        self._http.set_token_provider(lambda: session.token)

        self._login = LoginFlow(
            self._http,
            self._session,
            self._i18n,
            self._navigator,
            notices=NoticeBoard(ttl=settings.ui.login_notice_ttl),
            redirect_delay=settings.ui.redirect_delay,
        )
        self._keys = ApiKeyManager(
            self._http,
            self._session,
            self._i18n,
            notices=NoticeBoard(ttl=settings.ui.notice_ttl),
            confirm=self._confirm,
            refresh_interval=settings.refresh.interval_seconds,
            strict_ordering=settings.refresh.strict_ordering,
        )
        self._unsubscribe_navigation = self._navigator.subscribe(self._on_navigate)
        self._log.info("console.opened", endpoint=settings.endpoint)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context, tearing down views and closing HTTP client."""
        if self._unsubscribe_navigation is not None:
            self._unsubscribe_navigation()
            self._unsubscribe_navigation = None
        await self.settle()
        if self._login is not None:
            self._login.close()
        if self._keys is not None:
            await self._keys.unmount()
            await self._keys.scheduler.drain()
        if self._http:
            await self._http.__aexit__(exc_type, exc_val, exc_tb)
            self._http = None
        self._log.info("console.closed")

    def _require(self, service: object | None, name: str):
        if service is None:
            raise RuntimeError(f"AdminConsole not initialized ({name}). Use 'async with' context.")
        return service

    @property
    def settings(self) -> ConsoleSettings:
        return self._settings

    @property
    def http(self) -> HTTPClient:
        return self._require(self._http, "http")

    @property
    def navigator(self) -> Navigator:
        return self._require(self._navigator, "navigator")

    @property
    def i18n(self) -> LocalizationRuntime:
        return self._require(self._i18n, "i18n")

    @property
    def session(self) -> SessionGuard:
        return self._require(self._session, "session")

    @property
    def login(self) -> LoginFlow:
        return self._require(self._login, "login")

    @property
    def keys(self) -> ApiKeyManager:
        return self._require(self._keys, "keys")

    @property
    def view(self) -> render.LoginView | render.ManagementView:
        """The view for the current route."""
        if self.navigator.current is Route.MANAGEMENT:
            return self.keys.view
        return self.login.view

    def _on_navigate(self, route: Route) -> None:
        if route is Route.MANAGEMENT:
            task = asyncio.create_task(self.keys.mount())
        else:
            task = asyncio.create_task(self.keys.unmount())
        self._transitions.add(task)
        task.add_done_callback(self._transitions.discard)

    async def settle(self) -> None:
        """Wait for view transitions triggered by navigation."""
        while True:
            pending = [task for task in self._transitions if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def start(self) -> Route:
        """Verify a persisted session and show the matching view.

        Returns:
            The route shown after startup
        """
        await self.session.bootstrap()
        await self.settle()
        return self.navigator.current

    def switch_language(self, language: str) -> bool:
        return self.i18n.switch_language(language)

    async def logout(self) -> None:
        self.session.logout()
        await self.settle()
