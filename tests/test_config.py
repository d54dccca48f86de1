from __future__ import annotations

import pytest

from pyalpr.config import AlprConfig
from pyalpr.exceptions import AlprConfigError


def test_defaults_match_scanner_tunables() -> None:
    config = AlprConfig()

    assert config.scan_range == 40.0
    assert config.alignment_threshold == 0.7
    assert config.scan_interval == 0.25
    assert config.cache_ttl == 30.0
    assert config.cache_range == 60.0
    assert config.marker_range == 100.0
    assert config.marker_max_age == 25.0
    assert config.notification_cooldown == 5.0
    assert config.toggle_debounce == 0.5
    assert config.enabled is True


def test_from_env_reads_alpr_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALPR_DATABASE_PATH", "/tmp/alpr.db")
    monkeypatch.setenv("ALPR_CACHE_TTL", "12.5")
    monkeypatch.setenv("ALPR_ENABLED", "off")
    monkeypatch.setenv("ALPR_TOGGLE_KEY", "F9")

    config = AlprConfig.from_env()

    assert config.database_path == "/tmp/alpr.db"
    assert config.cache_ttl == 12.5
    assert config.enabled is False
    assert config.toggle_key == "F9"


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALPR_SCAN_RANGE", "80")
    monkeypatch.setenv("ALPR_PLAY_SOUNDS", "0")

    config = AlprConfig.from_env(scan_range=20.0, play_sounds=True)

    assert config.scan_range == 20.0
    assert config.play_sounds is True


def test_from_env_rejects_non_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALPR_SCAN_INTERVAL", "fast")
    with pytest.raises(AlprConfigError, match="ALPR_SCAN_INTERVAL"):
        AlprConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"scan_range": 0.0},
        {"cache_ttl": -1.0},
        {"alignment_threshold": 1.0},
        {"http_timeout": 0.0},
    ],
)
def test_invalid_values_raise(kwargs: dict[str, float]) -> None:
    with pytest.raises(AlprConfigError):
        AlprConfig(**kwargs)
