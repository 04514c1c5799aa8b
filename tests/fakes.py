"""Fake collaborators and payload builders for tests.

FakeHTTP stands in for HTTPClient where tests need to control when a
response lands; HTTP-level behavior is tested against pytest-httpx instead.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

ENDPOINT = "http://localhost:8080"
API = f"{ENDPOINT}/admin/api"
TOKEN = "tok_abc123"


def key_payload(
    key_id: str = "1",
    name: str = "ci-bot",
    secret: str = "sk-live-0123456789abcdef",
    *,
    is_active: bool = True,
    requests: int = 1500,
) -> dict[str, Any]:
    return {
        "id": key_id,
        "key_name": name,
        "api_key": secret,
        "is_active": is_active,
        "created_at": "2026-02-06T08:30:05Z",
        "total_requests": requests,
        "total_input_tokens": 12000,
        "total_output_tokens": 999,
    }


def dashboard_payload(total: int = 1, active: int = 1) -> dict[str, Any]:
    return {
        "total_api_keys": total,
        "total_requests": 1500,
        "total_tokens": 2000000,
        "active_keys": active,
    }


@dataclass
class RecordedCall:
    method: str
    path: str
    json: dict[str, Any] | None
    token: str | None


Handler = Callable[[dict[str, Any] | None], Any]


@dataclass
class FakeHTTP:
    """Routes (method, path) to handlers; handlers may be async or raise."""

    routes: dict[tuple[str, str], Handler] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)

    def on(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def respond(self, method: str, path: str, payload: dict[str, Any]) -> None:
        self.on(method, path, lambda _body: payload)

    def count(self, method: str, path: str) -> int:
        return sum(1 for c in self.calls if c.method == method and c.path == path)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        auth: bool = True,
        token: str | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        self.calls.append(RecordedCall(method, path, json, token))
        handler = self.routes[(method, path)]
        result = handler(json)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def get(self, path: str, *, token: str | None = None, timeout: float | None = None):
        return await self.request("GET", path, token=token)

    async def post(self, path: str, *, json=None, auth: bool = True, timeout: float | None = None):
        return await self.request("POST", path, json=json, auth=auth)


class Gate:
    """Holds a handler until released, then returns the given payload."""

    def __init__(self, payload: dict[str, Any]) -> None:
        self.payload = payload
        self.entered = asyncio.Event()
        self._release = asyncio.Event()

    def release(self) -> None:
        self._release.set()

    async def __call__(self, _body: dict[str, Any] | None) -> dict[str, Any]:
        self.entered.set()
        await self._release.wait()
        return self.payload
