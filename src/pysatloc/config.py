"""Stream configuration for pysatloc."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pysatloc._constants import (
    BASE_URL,
    CALCULATE_CHANGE,
    DEFAULT_INTERVAL_MS,
    DEFAULT_SATELLITE_ID,
    INTERVAL_MIN_MS,
    OPTION_ALIASES,
    SUPPORTED_OPTIONS,
    VALID_SATELLITE_IDS,
)
from pysatloc.exceptions import SatLocConfigError
from pysatloc.normalize import safe_float


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def resolve_satellite_id(satellite_id: Any) -> str:
    """Return *satellite_id* if it is supported, otherwise the default id."""
    if satellite_id is None:
        return DEFAULT_SATELLITE_ID
    candidate = str(satellite_id).strip()
    return candidate if candidate in VALID_SATELLITE_IDS else DEFAULT_SATELLITE_ID


def resolve_interval(interval_ms: Any) -> float:
    """Return *interval_ms* when it is at least the floor, otherwise the default."""
    value = safe_float(interval_ms)
    if value is None or value < INTERVAL_MIN_MS:
        return DEFAULT_INTERVAL_MS
    return value


def normalize_options(options: Mapping[str, Any] | None) -> dict[str, bool]:
    """Keep recognized option flags only, coerced to ``bool``."""
    normalized: dict[str, bool] = {}
    if not options:
        return normalized
    for key, value in options.items():
        flag = OPTION_ALIASES.get(key, key)
        if flag in SUPPORTED_OPTIONS:
            normalized[flag] = bool(value)
    return normalized


@dataclasses.dataclass(frozen=True)
class StreamConfig:
    """Polling configuration.

    Out-of-range values are corrected on construction rather than
    rejected, so every instance is valid.

    Parameters
    ----------
    satellite_id : str
        NORAD catalog number to poll. Unsupported ids fall back to the ISS.
    interval_ms : float
        Desired delay between deliveries, in milliseconds. Values below
        the floor fall back to the default.
    options : Mapping[str, bool]
        Recognized stream flags (``calculateChange``).
    base_url : str
        Satellites collection URL of the position service.
    request_timeout : float or None
        Hard per-request timeout in seconds. ``None`` waits indefinitely.
    """

    satellite_id: str = DEFAULT_SATELLITE_ID
    interval_ms: float = DEFAULT_INTERVAL_MS
    options: Mapping[str, bool] = dataclasses.field(default_factory=dict)
    base_url: str = BASE_URL
    request_timeout: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "satellite_id", resolve_satellite_id(self.satellite_id))
        object.__setattr__(self, "interval_ms", resolve_interval(self.interval_ms))
        object.__setattr__(self, "options", MappingProxyType(normalize_options(self.options)))
        object.__setattr__(self, "base_url", str(self.base_url).rstrip("/"))

    @property
    def calculate_change(self) -> bool:
        return self.options.get(CALCULATE_CHANGE, False)

    @classmethod
    def from_env(cls, **overrides: Any) -> StreamConfig:
        """Create configuration from ``SATLOC_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        SatLocConfigError
            If ``SATLOC_REQUEST_TIMEOUT`` is set but not numeric.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_CONFIG_MAP = {
            "SATLOC_SATELLITE_ID": "satellite_id",
            "SATLOC_INTERVAL_MS": "interval_ms",
            "SATLOC_BASE_URL": "base_url",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "options" not in overrides:
            config_kwargs["options"] = {
                CALCULATE_CHANGE: _env_bool(env.get("SATLOC_CALCULATE_CHANGE"), False),
            }

        timeout_env = env.get("SATLOC_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            timeout = safe_float(timeout_env)
            if timeout is None:
                raise SatLocConfigError(f"SATLOC_REQUEST_TIMEOUT must be numeric, got {timeout_env!r}")
            config_kwargs["request_timeout"] = timeout

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
