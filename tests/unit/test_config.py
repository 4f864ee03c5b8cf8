"""Tests for dashboard configuration.

Covers:
- Default values match the bundled sample sources
- Loading from environment variables
- Comma-separated list parsing
- Fail-fast range validation
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from land_overlap.core.config import ConfigValidationError, DashboardConfig
from land_overlap.core.exceptions import PermanentError


class TestDashboardConfigDefaults:
    """Verify default configuration values."""

    def test_default_sources(self) -> None:
        cfg = DashboardConfig()
        assert cfg.left_source_path == "data/imoveis_fake_100.geojson"
        assert cfg.right_source_path == "data/terras_indigenas_fake.geojson"

    def test_default_region_codes(self) -> None:
        cfg = DashboardConfig()
        assert cfg.known_region_codes == ("AM", "PA", "MG")

    def test_default_region_keys(self) -> None:
        cfg = DashboardConfig()
        assert cfg.region_code_keys == ("sigla_uf", "UF", "estado")

    def test_default_padding(self) -> None:
        cfg = DashboardConfig()
        assert cfg.fit_bounds_padding_px == 50


class TestDashboardConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        """All env vars are read and coerced to correct types."""
        env = {
            "LEFT_SOURCE_PATH": "/srv/data/parcels.geojson",
            "RIGHT_SOURCE_PATH": "/srv/data/territories.geojson",
            "KNOWN_REGION_CODES": "AM, PA ,MG,RO",
            "REGION_CODE_KEYS": "uf,sigla_uf",
            "FIT_BOUNDS_PADDING_PX": "20",
        }
        with patch.dict(os.environ, env, clear=False):
            cfg = DashboardConfig.from_env()

        assert cfg.left_source_path == "/srv/data/parcels.geojson"
        assert cfg.right_source_path == "/srv/data/territories.geojson"
        assert cfg.known_region_codes == ("AM", "PA", "MG", "RO")
        assert cfg.region_code_keys == ("uf", "sigla_uf")
        assert cfg.fit_bounds_padding_px == 20

    def test_defaults_when_env_missing(self) -> None:
        keys = (
            "LEFT_SOURCE_PATH",
            "RIGHT_SOURCE_PATH",
            "KNOWN_REGION_CODES",
            "REGION_CODE_KEYS",
            "FIT_BOUNDS_PADDING_PX",
        )
        env = {k: v for k, v in os.environ.items() if k not in keys}
        with patch.dict(os.environ, env, clear=True):
            cfg = DashboardConfig.from_env()
        assert cfg == DashboardConfig()

    def test_blank_list_entries_dropped(self) -> None:
        with patch.dict(os.environ, {"KNOWN_REGION_CODES": "AM,,PA,"}, clear=False):
            cfg = DashboardConfig.from_env()
        assert cfg.known_region_codes == ("AM", "PA")

    def test_non_numeric_padding_raises(self) -> None:
        with (
            patch.dict(os.environ, {"FIT_BOUNDS_PADDING_PX": "wide"}, clear=False),
            pytest.raises(ValueError),
        ):
            DashboardConfig.from_env()

    def test_config_is_frozen(self) -> None:
        cfg = DashboardConfig()
        with pytest.raises(AttributeError):
            cfg.fit_bounds_padding_px = 10  # type: ignore[misc]


class TestDashboardConfigValidation:
    """Fail-fast validation of out-of-range values."""

    @pytest.mark.parametrize(
        ("env", "key"),
        [
            ({"LEFT_SOURCE_PATH": ""}, "LEFT_SOURCE_PATH"),
            ({"RIGHT_SOURCE_PATH": ""}, "RIGHT_SOURCE_PATH"),
            ({"KNOWN_REGION_CODES": " , "}, "KNOWN_REGION_CODES"),
            ({"KNOWN_REGION_CODES": "AM,PA,AM"}, "KNOWN_REGION_CODES"),
            ({"REGION_CODE_KEYS": ""}, "REGION_CODE_KEYS"),
            ({"FIT_BOUNDS_PADDING_PX": "-1"}, "FIT_BOUNDS_PADDING_PX"),
        ],
    )
    def test_invalid_values_rejected(self, env: dict[str, str], key: str) -> None:
        with patch.dict(os.environ, env, clear=False), pytest.raises(ConfigValidationError) as exc:
            DashboardConfig.from_env()
        assert exc.value.key == key

    def test_error_message_names_key_and_value(self) -> None:
        with (
            patch.dict(os.environ, {"FIT_BOUNDS_PADDING_PX": "-5"}, clear=False),
            pytest.raises(ConfigValidationError, match=r"FIT_BOUNDS_PADDING_PX=-5"),
        ):
            DashboardConfig.from_env()

    def test_invalid_config_is_permanent_error(self) -> None:
        with (
            patch.dict(os.environ, {"LEFT_SOURCE_PATH": ""}, clear=False),
            pytest.raises(PermanentError) as exc,
        ):
            DashboardConfig.from_env()
        payload = exc.value.to_error_dict()
        assert payload["category"] == "permanent"
        assert payload["code"] == "CONFIG_VALIDATION_FAILED"
        assert payload["retryable"] is False

    def test_zero_padding_allowed(self) -> None:
        with patch.dict(os.environ, {"FIT_BOUNDS_PADDING_PX": "0"}, clear=False):
            assert DashboardConfig.from_env().fit_bounds_padding_px == 0
