"""State table configuration for pystatetable."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pystatetable.exceptions import StateTableConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, kind: type[int] | type[float]) -> int | float:
    try:
        return kind(value.strip())
    except ValueError as exc:
        raise StateTableConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class StateTableConfig:
    """State table configuration.

    Parameters
    ----------
    lock_timeout : float or None
        Seconds to wait for the table lock before raising
        :class:`~pystatetable.exceptions.StateTableLockTimeoutError`.
        ``None`` waits forever.
    log_values : bool
        Include state values in DEBUG logs.  Values of sensitive-looking
        keys are redacted regardless.
    channel_maxsize : int
        Default queue bound for
        :class:`~pystatetable.state.channel.StateChangeChannel`.
        ``0`` means unbounded.
    """

    lock_timeout: float | None = None
    log_values: bool = False
    channel_maxsize: int = 1024

    def __post_init__(self) -> None:
        if self.lock_timeout is not None and self.lock_timeout < 0:
            raise StateTableConfigError("lock_timeout must be >= 0 or None")
        if self.channel_maxsize < 0:
            raise StateTableConfigError("channel_maxsize must be >= 0")

    @classmethod
    def from_env(cls, **overrides: Any) -> StateTableConfig:
        """Create configuration from environment variables.

        Reads ``STATETABLE_LOCK_TIMEOUT``, ``STATETABLE_LOG_VALUES`` and
        ``STATETABLE_CHANNEL_MAXSIZE``. An empty or negative lock timeout
        means "wait forever". Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        StateTableConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        timeout_env = env.get("STATETABLE_LOCK_TIMEOUT")
        if timeout_env is not None and "lock_timeout" not in overrides:
            if timeout_env.strip():
                timeout = float(_env_number("STATETABLE_LOCK_TIMEOUT", timeout_env, float))
                config_kwargs["lock_timeout"] = timeout if timeout >= 0 else None
            else:
                config_kwargs["lock_timeout"] = None

        if "log_values" not in overrides:
            config_kwargs["log_values"] = _env_bool(env.get("STATETABLE_LOG_VALUES"), False)

        maxsize_env = env.get("STATETABLE_CHANNEL_MAXSIZE")
        if maxsize_env is not None and "channel_maxsize" not in overrides:
            config_kwargs["channel_maxsize"] = int(_env_number("STATETABLE_CHANNEL_MAXSIZE", maxsize_env, int))

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
