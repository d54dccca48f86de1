"""Scanner configuration for pyalpr."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable
from typing import Any

from pyalpr import _constants as const
from pyalpr.exceptions import AlprConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, convert: Callable[[str], Any]) -> Any:
    try:
        return convert(value)
    except ValueError as exc:
        raise AlprConfigError(f"{env_key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class AlprConfig:
    """Scanner configuration.

    Parameters
    ----------
    database_path : str or None
        Path to the SQLite registry database. Takes precedence over
        ``registry_url`` when both are set.
    registry_url : str or None
        Base URL of an HTTP registry service.
    scan_interval : float
        Seconds between directional scans while active.
    scan_range : float
        Maximum distance at which a vehicle can be selected as front/rear.
    alignment_threshold : float
        Minimum bearing alignment (cosine) for a front/rear candidate.
    cache_ttl : float
        Seconds a scan result stays fresh for the same vehicle.
    cache_range : float
        Cached vehicles farther than this from the observer are evicted.
    marker_range : float
        Markers on vehicles farther than this from the observer are removed.
    marker_max_age : float
        Markers older than this many seconds are removed.
    notification_cooldown : float
        Minimum seconds between two hit notifications (any vehicle).
    toggle_debounce : float
        Minimum seconds between two accepted enable/disable toggles.
    enabled : bool
        Initial value of the enable flag.
    play_sounds : bool
        Whether hit notifications request an audible cue.
    toggle_key : str
        Key label shown in the status footer.
    http_timeout : float
        Total request timeout for the HTTP registry, in seconds.
    """

    database_path: str | None = None
    registry_url: str | None = None
    scan_interval: float = const.SCAN_INTERVAL
    scan_range: float = const.SCAN_RANGE
    alignment_threshold: float = const.ALIGNMENT_THRESHOLD
    cache_ttl: float = const.CACHE_TTL
    cache_range: float = const.CACHE_RANGE
    marker_range: float = const.MARKER_RANGE
    marker_max_age: float = const.MARKER_MAX_AGE
    notification_cooldown: float = const.NOTIFICATION_COOLDOWN
    toggle_debounce: float = const.TOGGLE_DEBOUNCE
    enabled: bool = True
    play_sounds: bool = True
    toggle_key: str = "F7"
    http_timeout: float = 2.0

    def __post_init__(self) -> None:
        for name in ("scan_range", "cache_range", "marker_range", "http_timeout"):
            if getattr(self, name) <= 0:
                raise AlprConfigError(f"{name} must be positive, got {getattr(self, name)}")
        for name in (
            "scan_interval",
            "cache_ttl",
            "marker_max_age",
            "notification_cooldown",
            "toggle_debounce",
        ):
            if getattr(self, name) < 0:
                raise AlprConfigError(f"{name} must not be negative, got {getattr(self, name)}")
        if not -1.0 < self.alignment_threshold < 1.0:
            raise AlprConfigError(f"alignment_threshold must lie in (-1, 1), got {self.alignment_threshold}")

    @classmethod
    def from_env(cls, **overrides: Any) -> AlprConfig:
        """Create configuration from environment variables.

        Reads ``ALPR_*`` variables. Explicit keyword arguments override
        environment values.

        Raises
        ------
        AlprConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "ALPR_DATABASE_PATH": "database_path",
            "ALPR_REGISTRY_URL": "registry_url",
            "ALPR_TOGGLE_KEY": "toggle_key",
        }
        _ENV_FLOAT_MAP = {
            "ALPR_SCAN_INTERVAL": "scan_interval",
            "ALPR_SCAN_RANGE": "scan_range",
            "ALPR_ALIGNMENT_THRESHOLD": "alignment_threshold",
            "ALPR_CACHE_TTL": "cache_ttl",
            "ALPR_CACHE_RANGE": "cache_range",
            "ALPR_MARKER_RANGE": "marker_range",
            "ALPR_MARKER_MAX_AGE": "marker_max_age",
            "ALPR_NOTIFICATION_COOLDOWN": "notification_cooldown",
            "ALPR_TOGGLE_DEBOUNCE": "toggle_debounce",
            "ALPR_HTTP_TIMEOUT": "http_timeout",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = val

        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, float)

        if "enabled" not in overrides:
            config_kwargs["enabled"] = _env_bool(env.get("ALPR_ENABLED"), True)
        if "play_sounds" not in overrides:
            config_kwargs["play_sounds"] = _env_bool(env.get("ALPR_PLAY_SOUNDS"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
