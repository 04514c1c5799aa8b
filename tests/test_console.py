"""End-to-end console tests against a mocked gateway."""

from __future__ import annotations

from datetime import timezone

import pytest

from gemini_pool_console import AdminConsole, ConsoleSettings, Route
from gemini_pool_console.config import UIConfig
from gemini_pool_console.render import LoginView, ManagementView
from gemini_pool_console.storage import LANGUAGE_KEY, TOKEN_KEY, MemoryStore
from tests.fakes import API, ENDPOINT, TOKEN, dashboard_payload, key_payload


@pytest.fixture
def settings():
    return ConsoleSettings(endpoint=ENDPOINT, ui=UIConfig(redirect_delay=0))


def _mock_management_load(httpx_mock, *, keys=None):
    httpx_mock.add_response(
        method="GET",
        url=f"{API}/api-keys",
        json={"api_keys": keys if keys is not None else [key_payload()]},
    )
    httpx_mock.add_response(
        method="GET",
        url=f"{API}/dashboard",
        json=dashboard_payload(),
    )


@pytest.mark.asyncio
async def test_uninitialized_console_raises(settings):
    console = AdminConsole(settings=settings, store=MemoryStore())
    with pytest.raises(RuntimeError):
        console.session


@pytest.mark.asyncio
async def test_startup_without_token_shows_login(settings, httpx_mock):
    async with AdminConsole(settings=settings, store=MemoryStore()) as console:
        assert await console.start() is Route.LOGIN
        assert isinstance(console.view, LoginView)

    assert httpx_mock.get_requests() == []


@pytest.mark.asyncio
async def test_startup_with_valid_token_loads_management(settings, httpx_mock):
    httpx_mock.add_response(method="GET", url=f"{API}/auth/verify", json={"valid": True})
    _mock_management_load(httpx_mock)
    store = MemoryStore({TOKEN_KEY: TOKEN})

    async with AdminConsole(settings=settings, store=store, tz=timezone.utc) as console:
        assert await console.start() is Route.MANAGEMENT

        view = console.view
        assert isinstance(view, ManagementView)
        assert [row.name for row in view.rows] == ["ci-bot"]
        assert view.rows[0].api_key == "sk-l****cdef"
        assert console.keys.scheduler.is_running

    assert not console.keys.scheduler.is_running
    for request in httpx_mock.get_requests():
        assert request.headers["Authorization"] == f"Bearer {TOKEN}"


@pytest.mark.asyncio
async def test_startup_with_rejected_token_clears_it(settings, httpx_mock):
    httpx_mock.add_response(
        method="GET",
        url=f"{API}/auth/verify",
        status_code=401,
        json={"error": "invalid token"},
    )
    store = MemoryStore({TOKEN_KEY: "expired"})

    async with AdminConsole(settings=settings, store=store) as console:
        assert await console.start() is Route.LOGIN

    assert store.get(TOKEN_KEY) is None


@pytest.mark.asyncio
async def test_login_then_manage(settings, httpx_mock):
    httpx_mock.add_response(
        method="POST",
        url=f"{API}/auth/login",
        json={"token": TOKEN},
    )
    _mock_management_load(httpx_mock)
    store = MemoryStore()

    async with AdminConsole(settings=settings, store=store) as console:
        await console.start()
        assert await console.login.submit("admin", "secret") is True
        await console.login.pending_redirect
        await console.settle()

        assert console.navigator.current is Route.MANAGEMENT
        assert console.keys.mounted
        assert len(console.view.rows) == 1

    login_request = httpx_mock.get_requests()[0]
    assert "Authorization" not in login_request.headers
    assert store.get(TOKEN_KEY) == TOKEN


@pytest.mark.asyncio
async def test_logout_returns_to_login(settings, httpx_mock):
    httpx_mock.add_response(method="GET", url=f"{API}/auth/verify", json={})
    _mock_management_load(httpx_mock)
    store = MemoryStore({TOKEN_KEY: TOKEN})

    async with AdminConsole(settings=settings, store=store) as console:
        await console.start()
        await console.logout()

        assert console.navigator.current is Route.LOGIN
        assert not console.keys.mounted
        assert not console.keys.scheduler.is_running
        assert isinstance(console.view, LoginView)

    assert store.get(TOKEN_KEY) is None


@pytest.mark.asyncio
async def test_expired_session_mid_use(settings, httpx_mock):
    httpx_mock.add_response(method="GET", url=f"{API}/auth/verify", json={})
    _mock_management_load(httpx_mock)
    httpx_mock.add_response(
        method="GET",
        url=f"{API}/api-keys/1",
        status_code=401,
        json={"error": "token expired"},
    )
    store = MemoryStore({TOKEN_KEY: TOKEN})

    async with AdminConsole(settings=settings, store=store) as console:
        await console.start()

        assert await console.keys.fetch_one("1") is None
        await console.settle()

        assert console.navigator.current is Route.LOGIN
        assert not console.keys.mounted
        assert store.get(TOKEN_KEY) is None


@pytest.mark.asyncio
async def test_language_switch_persists(settings, httpx_mock):
    store = MemoryStore()

    async with AdminConsole(settings=settings, store=store) as console:
        await console.start()
        assert console.view.button_label == "登录系统"

        assert console.switch_language("en") is True
        assert console.view.button_label == "Login System"

    assert store.get(LANGUAGE_KEY) == "en"

    async with AdminConsole(settings=settings, store=store) as console:
        assert console.i18n.language == "en"


@pytest.mark.asyncio
async def test_create_with_generated_secret(settings, httpx_mock):
    httpx_mock.add_response(method="GET", url=f"{API}/auth/verify", json={})
    _mock_management_load(httpx_mock, keys=[])
    httpx_mock.add_response(
        method="POST",
        url=f"{API}/api-keys",
        json={"id": "2", "key_name": "ci-bot", "api_key": "sk-generated-abcdef123456"},
    )
    _mock_management_load(httpx_mock)
    store = MemoryStore({TOKEN_KEY: TOKEN})

    async with AdminConsole(settings=settings, store=store) as console:
        await console.start()
        console.switch_language("en")

        created = await console.keys.create("ci-bot")

        assert created.api_key == "sk-generated-abcdef123456"
        assert console.view.notice.message == "New API Key: sk-generated-abcdef123456"
        assert len(console.view.rows) == 1
