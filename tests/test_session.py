"""Tests for the session guard."""

from __future__ import annotations

import pytest

from gemini_pool_console.errors import NetworkError, UnauthorizedError
from gemini_pool_console.navigation import Route
from gemini_pool_console.session import SessionGuard
from gemini_pool_console.storage import TOKEN_KEY
from tests.fakes import TOKEN, FakeHTTP


def _raise(error: Exception):
    def handler(_body):
        raise error

    return handler


class TestBootstrap:
    @pytest.mark.asyncio
    async def test_no_token_makes_no_request(self, store, navigator):
        http = FakeHTTP()
        guard = SessionGuard(http, store, navigator)

        assert await guard.bootstrap() is False
        assert http.calls == []
        assert navigator.current is Route.LOGIN

    @pytest.mark.asyncio
    async def test_valid_token_enters_management(self, authed_store, navigator):
        http = FakeHTTP()
        http.respond("GET", "/auth/verify", {"valid": True})
        guard = SessionGuard(http, authed_store, navigator)

        assert await guard.bootstrap() is True
        assert navigator.current is Route.MANAGEMENT
        assert http.calls[0].token == TOKEN
        assert authed_store.get(TOKEN_KEY) == TOKEN

    @pytest.mark.asyncio
    async def test_rejected_token_is_cleared(self, authed_store, navigator):
        http = FakeHTTP()
        http.on("GET", "/auth/verify", _raise(UnauthorizedError("invalid token")))
        guard = SessionGuard(http, authed_store, navigator)

        assert await guard.bootstrap() is False
        assert authed_store.get(TOKEN_KEY) is None
        assert navigator.current is Route.LOGIN

    @pytest.mark.asyncio
    async def test_transport_failure_fails_closed(self, authed_store, navigator):
        http = FakeHTTP()
        http.on("GET", "/auth/verify", _raise(NetworkError()))
        guard = SessionGuard(http, authed_store, navigator)

        assert await guard.bootstrap() is False
        assert guard.is_authenticated is False


class TestTokenLifecycle:
    def test_acquire_persists_token(self, store, navigator):
        guard = SessionGuard(FakeHTTP(), store, navigator)
        guard.acquire(TOKEN)

        assert store.get(TOKEN_KEY) == TOKEN
        assert guard.require_token() == TOKEN

    def test_acquire_rejects_empty_token(self, store, navigator):
        guard = SessionGuard(FakeHTTP(), store, navigator)
        with pytest.raises(ValueError):
            guard.acquire("")

    def test_require_token_without_session(self, store, navigator):
        guard = SessionGuard(FakeHTTP(), store, navigator)
        with pytest.raises(UnauthorizedError):
            guard.require_token()

    def test_invalidate_clears_and_navigates(self, authed_store, navigator):
        navigator.go(Route.MANAGEMENT)
        guard = SessionGuard(FakeHTTP(), authed_store, navigator)

        guard.invalidate()

        assert authed_store.get(TOKEN_KEY) is None
        assert navigator.current is Route.LOGIN

    def test_repeated_invalidate_navigates_once(self, authed_store, navigator):
        navigator.go(Route.MANAGEMENT)
        guard = SessionGuard(FakeHTTP(), authed_store, navigator)

        guard.invalidate()
        guard.invalidate()

        assert navigator.history == (Route.MANAGEMENT, Route.LOGIN)

    def test_logout(self, authed_store, navigator):
        navigator.go(Route.MANAGEMENT)
        guard = SessionGuard(FakeHTTP(), authed_store, navigator)

        guard.logout()

        assert guard.token is None
        assert navigator.current is Route.LOGIN


class TestGuard:
    def test_allows_authenticated(self, authed_store, navigator):
        guard = SessionGuard(FakeHTTP(), authed_store, navigator)
        assert guard.guard_protected_view() is True
        assert navigator.history == ()

    def test_redirects_without_token(self, store, navigator):
        guard = SessionGuard(FakeHTTP(), store, navigator)
        assert guard.guard_protected_view() is False
        assert navigator.history == (Route.LOGIN,)
