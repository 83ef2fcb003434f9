"""
Domain models and value objects.

Contains the Period value type and instant helpers.
"""

from datetime_period.core.domain.instant import (
    Granule,
    format_instant,
    parse_instant,
    resolved_offset,
    to_utc,
    truncate,
    utc_offset_seconds,
    zone_name,
)
from datetime_period.core.domain.period import (
    DEFAULT_PERIOD_CONFIG,
    ERROR_CODE_NEGATIVE_PERIOD,
    ERROR_CODE_OFFSET_MISMATCH,
    NegativePeriod,
    OffsetMismatch,
    Period,
    PeriodConfig,
    PeriodConstructionError,
    PeriodDuration,
    PeriodError,
    PeriodResult,
    check_boundaries,
    construct_period,
)

__all__ = [
    # Instant helpers
    "Granule",
    "format_instant",
    "parse_instant",
    "resolved_offset",
    "to_utc",
    "truncate",
    "utc_offset_seconds",
    "zone_name",
    # Period model
    "Period",
    "PeriodDuration",
    # Construction
    "DEFAULT_PERIOD_CONFIG",
    "PeriodConfig",
    "PeriodResult",
    "construct_period",
    "check_boundaries",
    # Errors
    "ERROR_CODE_NEGATIVE_PERIOD",
    "ERROR_CODE_OFFSET_MISMATCH",
    "NegativePeriod",
    "OffsetMismatch",
    "PeriodError",
    "PeriodConstructionError",
]
