"""Type definitions for the admin API.

Pydantic models for request/response serialization.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RevealState(str, Enum):
    """Secret visibility inside the edit view."""

    HIDDEN = "hidden"
    REVEALED = "revealed"


class ApiKeyRecord(BaseModel):
    """API key as returned by the gateway.

    Usage counters and timestamps are computed by the server and are never
    sent back.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    key_name: str
    api_key: str
    is_active: bool = True
    created_at: str = ""
    total_requests: int = 0
    total_input_tokens: int = 0
    total_output_tokens: int = 0

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator(
        "total_requests", "total_input_tokens", "total_output_tokens", mode="before"
    )
    @classmethod
    def _missing_counter_is_zero(cls, value: object) -> object:
        return 0 if value is None else value


class ApiKeyList(BaseModel):
    """Full API key collection, in server order."""

    api_keys: list[ApiKeyRecord] = Field(default_factory=list)


class CreatedApiKey(BaseModel):
    """Create response.

    ``api_key`` is only populated when the server generated the secret.
    """

    id: str | int | None = None
    key_name: str | None = None
    api_key: str | None = None
    is_active: bool | None = None
    created_at: str | None = None


class DashboardSummary(BaseModel):
    """Aggregate usage, recomputed by the server on each fetch."""

    model_config = ConfigDict(frozen=True)

    total_api_keys: int = 0
    total_requests: int = 0
    total_tokens: int = 0
    active_keys: int = 0

    @field_validator(
        "total_api_keys", "total_requests", "total_tokens", "active_keys", mode="before"
    )
    @classmethod
    def _missing_is_zero(cls, value: object) -> object:
        return 0 if value is None else value


class LoginResult(BaseModel):
    """Credential exchange response."""

    token: str = Field(..., min_length=1)


class EditSession(BaseModel):
    """Transient state of the edit view for a single record.

    Holds the true secret so that masking and revealing are always derived
    from it, never from the displayed text.
    """

    key_id: str
    key_name: str
    is_active: bool
    secret: str
    reveal: RevealState = RevealState.HIDDEN


# Internal request models (not exported)


class _LoginRequest(BaseModel):
    """Internal: credential exchange request body."""

    username: str
    password: str


class _CreateApiKeyRequest(BaseModel):
    """Internal: create API key request body."""

    key_name: str = Field(..., min_length=1)
    api_key: str | None = None


class _UpdateApiKeyRequest(BaseModel):
    """Internal: update API key request body."""

    key_name: str
    is_active: bool
