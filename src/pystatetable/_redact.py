"""Helpers for safe debug logging.

State keys are free-form, and control systems routinely park credentials
(device passwords, API tokens, PINs) in the same table as levels and mutes.
This module decides what a state value looks like once it reaches a log line.
"""

from __future__ import annotations

_SENSITIVE_KEY_MARKERS: tuple[str, ...] = (
    "password",
    "passwd",
    "passcode",
    "secret",
    "token",
    "apikey",
    "api_key",
    "credential",
)

# Too short to match inside words ("Mapping"); only whole segments count.
_SENSITIVE_SEGMENTS: frozenset[str] = frozenset({"pin", "pincode"})


def is_sensitive_key(key: str) -> bool:
    """Return ``True`` when any colon-separated segment of *key* looks secret."""
    for segment in key.lower().split(":"):
        if segment in _SENSITIVE_SEGMENTS or any(marker in segment for marker in _SENSITIVE_KEY_MARKERS):
            return True
    return False


def redact_for_log(key: str, value: str | None, *, max_string: int = 256) -> str | None:
    """Return *value* as it may appear in a debug log for *key*."""
    if value is None:
        return None
    if is_sensitive_key(key):
        return "<redacted>"
    if len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value
