"""Secret masking for display."""

from __future__ import annotations

MASK_MARKER = "****"


def mask_secret(value: str) -> str:
    """Redact the middle of a secret, keeping 4 characters on each side.

    Values of 8 characters or fewer are returned unchanged. Always call this
    on the true secret; masking an already masked string is not the same.
    """
    if len(value) <= 8:
        return value
    return value[:4] + MASK_MARKER + value[-4:]
