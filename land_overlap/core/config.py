"""Dashboard configuration loaded from environment variables.

All configuration values have sensible defaults matching the bundled
sample data.  Function app settings (or ``local.settings.json`` for
local dev) are the source of truth in deployment.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range.  This catches bad configuration at startup
    instead of on the first recompute.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from land_overlap.core.constants import (
    DEFAULT_FIT_BOUNDS_PADDING_PX,
    DEFAULT_LEFT_SOURCE,
    DEFAULT_RIGHT_SOURCE,
    KNOWN_REGION_CODES,
    REGION_CODE_KEYS,
)
from land_overlap.core.exceptions import PermanentError


class ConfigValidationError(PermanentError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Full human-readable message including the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class DashboardConfig:
    """Immutable dashboard configuration.

    Loaded once at startup and handed to the session and the HTTP wiring.

    Attributes:
        left_source_path: GeoJSON file with the rural land parcels.
        right_source_path: GeoJSON file with the indigenous territories.
        known_region_codes: Region codes offered for filtering, in chart order.
        region_code_keys: Property names tried, in order, to resolve a
            feature's region code.
        fit_bounds_padding_px: Map padding applied when fitting bounds.
    """

    left_source_path: str = DEFAULT_LEFT_SOURCE
    right_source_path: str = DEFAULT_RIGHT_SOURCE
    known_region_codes: tuple[str, ...] = KNOWN_REGION_CODES
    region_code_keys: tuple[str, ...] = REGION_CODE_KEYS
    fit_bounds_padding_px: int = DEFAULT_FIT_BOUNDS_PADDING_PX

    @classmethod
    def from_env(cls) -> DashboardConfig:
        """Load and validate configuration from environment variables.

        List-valued settings are comma separated
        (e.g. ``KNOWN_REGION_CODES=AM,PA,MG``); blank entries are dropped.

        Raises:
            ConfigValidationError: If a value is out of range or a
                required value is empty.
            ValueError: If ``FIT_BOUNDS_PADDING_PX`` cannot be parsed
                as an integer.
        """
        config = cls(
            left_source_path=os.getenv("LEFT_SOURCE_PATH", DEFAULT_LEFT_SOURCE),
            right_source_path=os.getenv("RIGHT_SOURCE_PATH", DEFAULT_RIGHT_SOURCE),
            known_region_codes=_split_csv(
                os.getenv("KNOWN_REGION_CODES", ",".join(KNOWN_REGION_CODES))
            ),
            region_code_keys=_split_csv(os.getenv("REGION_CODE_KEYS", ",".join(REGION_CODE_KEYS))),
            fit_bounds_padding_px=int(
                os.getenv("FIT_BOUNDS_PADDING_PX", str(DEFAULT_FIT_BOUNDS_PADDING_PX))
            ),
        )
        _validate(config)
        return config


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _validate(config: DashboardConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.left_source_path:
        raise ConfigValidationError(
            "LEFT_SOURCE_PATH",
            config.left_source_path,
            "must not be empty",
        )

    if not config.right_source_path:
        raise ConfigValidationError(
            "RIGHT_SOURCE_PATH",
            config.right_source_path,
            "must not be empty",
        )

    if not config.known_region_codes:
        raise ConfigValidationError(
            "KNOWN_REGION_CODES",
            config.known_region_codes,
            "must list at least one region code",
        )

    if len(set(config.known_region_codes)) != len(config.known_region_codes):
        raise ConfigValidationError(
            "KNOWN_REGION_CODES",
            config.known_region_codes,
            "must not contain duplicate codes",
        )

    if not config.region_code_keys:
        raise ConfigValidationError(
            "REGION_CODE_KEYS",
            config.region_code_keys,
            "must list at least one property name",
        )

    if config.fit_bounds_padding_px < 0:
        raise ConfigValidationError(
            "FIT_BOUNDS_PADDING_PX",
            config.fit_bounds_padding_px,
            "must be >= 0 (pixels)",
        )
