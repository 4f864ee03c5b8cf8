"""Unified exception taxonomy.

Provides a shared base exception hierarchy for the dashboard engine.
Every domain exception inherits from ``OverlapError`` and carries
structured context fields that let the hosting layer report failures
consistently.

Taxonomy categories
-------------------
- ``ValidationError``   — input/contract violations, never retryable.
- ``TransientError``    — temporary failures (unreadable source), retryable.
- ``PermanentError``    — unrecoverable failures (invalid configuration), not retryable.
- ``ContractError``     — payload/schema drift at the data boundary, never retryable.

Geometric problems inside individual features are deliberately absent
from this taxonomy: they degrade to zero/empty contributions and are
never raised.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for HTTP responses and logging.
"""

from __future__ import annotations


class OverlapError(Exception):
    """Base exception for all dashboard-engine errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred
            (e.g. ``"load_source"``, ``"region_filter"``).
        code: Machine-readable error code (e.g. ``"SOURCE_READ_FAILED"``).
        retryable: Whether the caller may retry the operation.
        correlation_id: Request correlation identifier.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(OverlapError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(OverlapError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(OverlapError):
    """Unrecoverable domain failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(OverlapError):
    """Payload or schema drift at the data boundary. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Concrete domain errors
# ---------------------------------------------------------------------------


class CollectionContractError(ContractError):
    """Raised when an input is not a well-formed GeoJSON FeatureCollection."""

    default_stage = "load_source"
    default_code = "COLLECTION_CONTRACT_VIOLATION"


class DataSourceError(TransientError):
    """Raised when a source file cannot be read or decoded."""

    default_stage = "load_source"
    default_code = "SOURCE_READ_FAILED"


class RegionSelectionError(ValidationError):
    """Raised when a selection names a region code outside the known list."""

    default_stage = "region_filter"
    default_code = "REGION_CODE_UNKNOWN"
