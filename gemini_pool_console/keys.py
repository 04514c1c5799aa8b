"""API key lifecycle management.

ApiKeyManager performs CRUD against the gateway's key collection, keeps the
rendered management view in sync with the latest applied list fetch, runs the
periodic background refresh, and owns the transient edit state including the
secret reveal toggle.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import pydantic
import structlog

from gemini_pool_console import render
from gemini_pool_console.errors import ConsoleError, NetworkError, UnauthorizedError
from gemini_pool_console.masking import mask_secret
from gemini_pool_console.notices import NoticeBoard
from gemini_pool_console.refresh import RefreshScheduler
from gemini_pool_console.types import (
    ApiKeyList,
    ApiKeyRecord,
    CreatedApiKey,
    DashboardSummary,
    EditSession,
    RevealState,
    _CreateApiKeyRequest,
    _UpdateApiKeyRequest,
)

if TYPE_CHECKING:
    from gemini_pool_console._http import HTTPClient
    from gemini_pool_console.i18n import LocalizationRuntime
    from gemini_pool_console.session import SessionGuard

logger = structlog.get_logger()

Confirmer = Callable[[str], "bool | Awaitable[bool]"]


def _decline(prompt: str) -> bool:
    logger.warning("keys.confirm.no_confirmer", prompt=prompt)
    return False


class ApiKeyManager:
    """API key management for the protected view.

    Every operation needs an active session. A missing token or a 401 from
    the gateway invalidates the session (back to sign-in) and is never
    retried. Other failures are reported as notices and leave the state as
    it was before the attempt.

    Usage:
        manager = ApiKeyManager(http, session, i18n, confirm=ask_operator)
        await manager.mount()           # first load + periodic refresh
        await manager.create("ci-bot")  # generated secret shown once
        await manager.unmount()
    """

    mask_secret = staticmethod(mask_secret)

    def __init__(
        self,
        http: HTTPClient,
        session: SessionGuard,
        i18n: LocalizationRuntime,
        *,
        notices: NoticeBoard | None = None,
        confirm: Confirmer | None = None,
        refresh_interval: float = 30.0,
        strict_ordering: bool = False,
    ) -> None:
        """Initialize the manager.

        Args:
            http: HTTP client for the admin API
            session: Provides the token and handles authorization failures
            i18n: Localization runtime for messages and the view
            notices: Notice board (defaults to a 5 second TTL board)
            confirm: Asked before deleting; returns True to proceed
            refresh_interval: Seconds between background refreshes
            strict_ordering: Discard list responses older than the latest applied one
        """
        self._http = http
        self._session = session
        self._i18n = i18n
        self._notices = notices if notices is not None else NoticeBoard(ttl=5.0)
        self._confirm = confirm or _decline
        self._strict_ordering = strict_ordering
        self._log = logger.bind(service="keys")

        self._records: tuple[ApiKeyRecord, ...] = ()
        self._summary = DashboardSummary()
        self._edit: EditSession | None = None
        self._create_open = False
        self._creating = False
        self._saving = False

        # Sequence numbers of issued and applied list requests
        self._list_issued = 0
        self._list_applied = 0

        self._mounted = False
        self._unsubscribe_language: Callable[[], None] | None = None
        self._teardown: asyncio.Task | None = None
        self._scheduler = RefreshScheduler(self.refresh, refresh_interval)
        self._view = self._build_view()

    # State

    @property
    def records(self) -> tuple[ApiKeyRecord, ...]:
        """Records of the latest applied list fetch, in server order."""
        return self._records

    @property
    def summary(self) -> DashboardSummary:
        return self._summary

    @property
    def edit_session(self) -> EditSession | None:
        return self._edit

    @property
    def create_open(self) -> bool:
        return self._create_open

    @property
    def creating(self) -> bool:
        return self._creating

    @property
    def saving(self) -> bool:
        return self._saving

    @property
    def notices(self) -> NoticeBoard:
        return self._notices

    @property
    def scheduler(self) -> RefreshScheduler:
        return self._scheduler

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def view(self) -> render.ManagementView:
        """The most recently rendered management view.

        Re-rendered on access when the notice it shows has expired or been
        replaced.
        """
        if self._view.notice is not self._notices.current:
            self.render()
        return self._view

    # Rendering

    def _build_view(self) -> render.ManagementView:
        return render.management_view(
            self._i18n,
            records=self._records,
            summary=self._summary,
            edit=self._edit,
            create_open=self._create_open,
            saving=self._saving,
            creating=self._creating,
            notice=self._notices.current,
        )

    def render(self) -> render.ManagementView:
        """Re-derive the whole view from current state."""
        self._view = self._build_view()
        return self._view

    def _on_language_changed(self, _language: str) -> None:
        # Cached records are re-rendered; no network round-trip.
        self.render()

    # Mounting

    async def mount(self) -> bool:
        """Show the protected view: first load, then periodic refresh.

        Returns:
            False if there is no session (the operator is sent to sign-in)
        """
        if self._mounted:
            return True
        if not self._session.guard_protected_view():
            return False

        self._mounted = True
        self._unsubscribe_language = self._i18n.subscribe(self._on_language_changed)
        self._log.info("keys.mounted")

        await self.refresh()
        if not self._session.is_authenticated:
            return False
        if self._mounted:
            await self._scheduler.start()
        return self._mounted

    async def unmount(self) -> None:
        """Tear down the view. Requests already in flight are left alone."""
        if not self._mounted:
            return
        self._mounted = False
        await self._scheduler.stop()
        if self._unsubscribe_language is not None:
            self._unsubscribe_language()
            self._unsubscribe_language = None
        # Nothing from this session, the edit secret included, survives in
        # the rendered view.
        self._edit = None
        self._create_open = False
        self._records = ()
        self._summary = DashboardSummary()
        self.render()
        self._log.info("keys.unmounted")

    # Requests

    def _handle_unauthorized(self) -> None:
        self._notices.error(self._i18n.t("session_expired"))
        self._session.invalidate()
        if self._mounted and (self._teardown is None or self._teardown.done()):
            self._teardown = asyncio.create_task(self.unmount())

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            token = self._session.require_token()
            return await self._http.request(method, path, json=json, token=token)
        except UnauthorizedError:
            self._log.info("keys.unauthorized", method=method, path=path)
            self._handle_unauthorized()
            raise

    def _report_failure(self, error: ConsoleError, fallback_key: str) -> None:
        t = self._i18n.t
        if isinstance(error, NetworkError):
            self._notices.error(t("network_error"))
        else:
            self._notices.error(error.server_message or t(fallback_key))

    # Operations

    async def list(self) -> tuple[ApiKeyRecord, ...] | None:
        """Fetch the full collection and replace the table.

        The dashboard summary is fetched concurrently; its failures are only
        logged and never affect the table.

        Returns:
            The applied records, or None if the fetch failed or was discarded
        """
        records, _summary = await asyncio.gather(
            self._fetch_list(), self.load_dashboard()
        )
        return records

    async def _fetch_list(self) -> tuple[ApiKeyRecord, ...] | None:
        """Replace the table with the collection from the gateway.

        Returns:
            The applied records, or None if the fetch failed or was discarded
        """
        self._list_issued += 1
        seq = self._list_issued

        try:
            response = await self._request("GET", "/api-keys")
            listing = ApiKeyList.model_validate(response)
        except UnauthorizedError:
            return None
        except ConsoleError as e:
            self._log.warning("keys.list.failed", error=e.code, status=e.status_code)
            self._notices.error(self._i18n.t("load_failed"))
            self.render()
            return None
        except pydantic.ValidationError as e:
            self._log.warning("keys.list.malformed_response", error=str(e))
            self._notices.error(self._i18n.t("load_failed"))
            self.render()
            return None

        if self._strict_ordering and seq < self._list_applied:
            self._log.debug("keys.list.stale_discarded", seq=seq, applied=self._list_applied)
            return None

        self._list_applied = seq
        self._records = tuple(listing.api_keys)
        self.render()
        return self._records

    async def load_dashboard(self) -> DashboardSummary | None:
        """Fetch the aggregate usage summary. Failures are only logged."""
        try:
            response = await self._request("GET", "/dashboard")
            summary = DashboardSummary.model_validate(response)
        except UnauthorizedError:
            return None
        except (ConsoleError, pydantic.ValidationError) as e:
            self._log.warning("keys.dashboard.failed", error=str(e))
            return None

        self._summary = summary
        self.render()
        return summary

    async def refresh(self) -> None:
        """Reload the table and the dashboard."""
        await self.list()

    def open_create(self) -> None:
        self._create_open = True
        self.render()

    def close_create(self) -> None:
        self._create_open = False
        self.render()

    async def create(self, name: str, secret: str | None = None) -> CreatedApiKey | None:
        """Create a key. Without a secret the server generates one.

        A generated secret is shown exactly once, in a warning notice.

        Returns:
            The create response, or None on failure
        """
        t = self._i18n.t
        name = (name or "").strip()
        if not name:
            self._notices.error(t("missing_api_key_name"))
            self.render()
            return None
        secret = (secret or "").strip() or None

        self._creating = True
        self.render()
        try:
            body = _CreateApiKeyRequest(key_name=name, api_key=secret).model_dump(
                exclude_none=True
            )
            response = await self._request("POST", "/api-keys", json=body)
            created = CreatedApiKey.model_validate(response)
        except UnauthorizedError:
            return None
        except ConsoleError as e:
            self._log.warning("keys.create.failed", error=e.code, status=e.status_code)
            self._report_failure(e, "api_key_creation_failed")
            return None
        except pydantic.ValidationError as e:
            self._log.warning("keys.create.malformed_response", error=str(e))
            self._notices.error(t("api_key_creation_failed"))
            return None
        finally:
            self._creating = False
            self.render()

        self._log.info("keys.created", key_name=name, generated=secret is None)
        self._notices.success(t("api_key_created"))
        self.close_create()
        await self.refresh()

        if secret is None and created.api_key:
            self._notices.warning(f"{t('new_api_key')}: {created.api_key}")
            self.render()
        return created

    async def fetch_one(self, key_id: str) -> EditSession | None:
        """Load one record with its true secret and open the edit view.

        Opening replaces any previous edit session. The secret starts hidden.
        """
        try:
            response = await self._request("GET", f"/api-keys/{key_id}")
            record = ApiKeyRecord.model_validate(response)
        except UnauthorizedError:
            return None
        except ConsoleError as e:
            self._log.warning("keys.fetch.failed", key_id=key_id, error=e.code)
            self._report_failure(e, "load_failed")
            self.render()
            return None
        except pydantic.ValidationError as e:
            self._log.warning("keys.fetch.malformed_response", error=str(e))
            self._notices.error(self._i18n.t("load_failed"))
            self.render()
            return None

        self._edit = EditSession(
            key_id=record.id,
            key_name=record.key_name,
            is_active=record.is_active,
            secret=record.api_key,
        )
        self.render()
        return self._edit

    def close_edit(self) -> None:
        """Close the edit view, dropping the secret and reveal state."""
        self._edit = None
        self.render()

    def toggle_reveal(self) -> RevealState | None:
        """Flip the secret between masked and full in the open edit view."""
        if self._edit is None:
            return None
        if self._edit.reveal is RevealState.HIDDEN:
            reveal = RevealState.REVEALED
        else:
            reveal = RevealState.HIDDEN
        self._edit = self._edit.model_copy(update={"reveal": reveal})
        self.render()
        return reveal

    async def update(self, key_id: str, name: str, is_active: bool) -> bool:
        """Save the name and active flag.

        On failure the edit view stays open for correction.
        """
        t = self._i18n.t
        name = (name or "").strip()
        if not name:
            self._notices.error(t("missing_api_key_name"))
            self.render()
            return False

        self._saving = True
        self.render()
        try:
            body = _UpdateApiKeyRequest(key_name=name, is_active=is_active).model_dump()
            await self._request("PUT", f"/api-keys/{key_id}", json=body)
        except UnauthorizedError:
            return False
        except ConsoleError as e:
            self._log.warning("keys.update.failed", key_id=key_id, error=e.code)
            self._report_failure(e, "api_key_update_failed")
            return False
        finally:
            self._saving = False
            self.render()

        self._log.info("keys.updated", key_id=key_id, is_active=is_active)
        self._notices.success(t("api_key_updated"))
        self.close_edit()
        await self.refresh()
        return True

    async def remove(self, key_id: str) -> bool:
        """Delete a key after the operator confirms."""
        t = self._i18n.t
        answer = self._confirm(t("delete_api_key_confirm"))
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            self._log.debug("keys.delete.declined", key_id=key_id)
            return False

        try:
            await self._request("DELETE", f"/api-keys/{key_id}")
        except UnauthorizedError:
            return False
        except ConsoleError as e:
            self._log.warning("keys.delete.failed", key_id=key_id, error=e.code)
            self._report_failure(e, "api_key_delete_failed")
            self.render()
            return False

        self._log.info("keys.deleted", key_id=key_id)
        self._notices.success(t("api_key_deleted"))
        await self.refresh()
        return True
