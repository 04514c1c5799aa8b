"""Gemini Pool admin console.

Client-side runtime for the Gemini Pool API gateway's admin surface:
sign-in and session handling, API key lifecycle management, and a
bilingual localization layer driving explicit view rendering.
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from gemini_pool_console.config import ConsoleSettings, get_settings
from gemini_pool_console.console import AdminConsole
from gemini_pool_console.errors import (
    ConflictError,
    ConsoleError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from gemini_pool_console.i18n import LanguageOption, LocalizationRuntime
from gemini_pool_console.keys import ApiKeyManager
from gemini_pool_console.login import LoginFlow
from gemini_pool_console.masking import mask_secret
from gemini_pool_console.navigation import Navigator, Route
from gemini_pool_console.notices import Notice, NoticeBoard, NoticeLevel
from gemini_pool_console.refresh import RefreshScheduler
from gemini_pool_console.session import SessionGuard
from gemini_pool_console.storage import JsonFileStore, KeyValueStore, MemoryStore
from gemini_pool_console.types import (
    ApiKeyList,
    ApiKeyRecord,
    CreatedApiKey,
    DashboardSummary,
    EditSession,
    LoginResult,
    RevealState,
)

__all__ = [
    # Entry point
    "AdminConsole",
    "ConsoleSettings",
    "get_settings",
    # Services
    "ApiKeyManager",
    "LocalizationRuntime",
    "LoginFlow",
    "Navigator",
    "NoticeBoard",
    "RefreshScheduler",
    "SessionGuard",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "mask_secret",
    # Types
    "ApiKeyList",
    "ApiKeyRecord",
    "CreatedApiKey",
    "DashboardSummary",
    "EditSession",
    "LanguageOption",
    "LoginResult",
    "Notice",
    "NoticeLevel",
    "RevealState",
    "Route",
    # Errors
    "ConsoleError",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "ServerError",
    "NetworkError",
]

try:
    __version__ = _pkg_version("gemini-pool-console")
except PackageNotFoundError:
    __version__ = "unknown"
