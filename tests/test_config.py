from __future__ import annotations

import pytest

from pysatloc._constants import DEFAULT_INTERVAL_MS, DEFAULT_SATELLITE_ID, INTERVAL_MIN_MS
from pysatloc.config import StreamConfig, normalize_options, resolve_interval, resolve_satellite_id
from pysatloc.exceptions import SatLocConfigError

_ENV_KEYS = (
    "SATLOC_SATELLITE_ID",
    "SATLOC_INTERVAL_MS",
    "SATLOC_CALCULATE_CHANGE",
    "SATLOC_BASE_URL",
    "SATLOC_REQUEST_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.mark.parametrize("value", [None, "", "99999", "iss", 12345, "25544x"])
def test_unsupported_satellite_id_falls_back_to_default(value: object) -> None:
    assert resolve_satellite_id(value) == DEFAULT_SATELLITE_ID


def test_supported_satellite_id_is_kept() -> None:
    assert resolve_satellite_id("25544") == "25544"
    assert resolve_satellite_id(" 25544 ") == "25544"
    assert resolve_satellite_id(25544) == "25544"


@pytest.mark.parametrize("value", [None, 0, -5, INTERVAL_MIN_MS - 1, "soon", float("nan"), True])
def test_interval_below_floor_or_missing_uses_default(value: object) -> None:
    assert resolve_interval(value) == DEFAULT_INTERVAL_MS


@pytest.mark.parametrize("value", [INTERVAL_MIN_MS, 750, 5000, "2500"])
def test_interval_at_or_above_floor_is_used(value: object) -> None:
    assert resolve_interval(value) == float(value)


def test_options_keep_only_recognized_flags_as_bool() -> None:
    assert normalize_options({"calculateChange": 1, "colour": "blue"}) == {"calculateChange": True}
    assert normalize_options({"calculateChange": ""}) == {"calculateChange": False}
    assert normalize_options({"calculate_change": "yes"}) == {"calculateChange": True}
    assert normalize_options(None) == {}


def test_config_corrects_values_on_construction() -> None:
    config = StreamConfig(
        satellite_id="00001",
        interval_ms=10,
        options={"calculateChange": 1, "unknown": True},
        base_url="http://localhost:8080/v1/satellites/",
    )

    assert config.satellite_id == DEFAULT_SATELLITE_ID
    assert config.interval_ms == DEFAULT_INTERVAL_MS
    assert dict(config.options) == {"calculateChange": True}
    assert config.calculate_change is True
    assert config.base_url == "http://localhost:8080/v1/satellites"
    assert config.request_timeout is None


def test_config_is_immutable() -> None:
    config = StreamConfig()

    with pytest.raises(AttributeError):
        config.interval_ms = 2000  # type: ignore[misc]
    with pytest.raises(TypeError):
        config.options["calculateChange"] = True  # type: ignore[index]


def test_from_env_reads_satloc_variables(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("SATLOC_SATELLITE_ID", "25544")
    clean_env.setenv("SATLOC_INTERVAL_MS", "1500")
    clean_env.setenv("SATLOC_CALCULATE_CHANGE", "on")
    clean_env.setenv("SATLOC_REQUEST_TIMEOUT", "2.5")

    config = StreamConfig.from_env()

    assert config.satellite_id == "25544"
    assert config.interval_ms == 1500
    assert config.calculate_change is True
    assert config.request_timeout == 2.5


def test_from_env_overrides_take_precedence(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("SATLOC_INTERVAL_MS", "1500")
    clean_env.setenv("SATLOC_CALCULATE_CHANGE", "1")

    config = StreamConfig.from_env(interval_ms=900, options={})

    assert config.interval_ms == 900
    assert config.calculate_change is False


def test_from_env_defaults_without_variables(clean_env: pytest.MonkeyPatch) -> None:
    config = StreamConfig.from_env()

    assert config.satellite_id == DEFAULT_SATELLITE_ID
    assert config.interval_ms == DEFAULT_INTERVAL_MS
    assert dict(config.options) == {"calculateChange": False}
    assert config.calculate_change is False
    assert config.request_timeout is None


def test_from_env_rejects_non_numeric_timeout(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("SATLOC_REQUEST_TIMEOUT", "forever")

    with pytest.raises(SatLocConfigError):
        StreamConfig.from_env()
