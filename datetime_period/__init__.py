"""
datetime-period

Полуоткрытые периоды времени [start, end) и алгебра интервалов Аллена.
"""

from datetime_period.core.domain.instant import Granule, resolved_offset, truncate
from datetime_period.core.domain.period import (
    NegativePeriod,
    OffsetMismatch,
    Period,
    PeriodConfig,
    PeriodConstructionError,
    PeriodDuration,
    PeriodResult,
    construct_period,
)
from datetime_period.relations import AllenRelation, relate

__all__ = [
    "Granule",
    "resolved_offset",
    "truncate",
    "NegativePeriod",
    "OffsetMismatch",
    "Period",
    "PeriodConfig",
    "PeriodConstructionError",
    "PeriodDuration",
    "PeriodResult",
    "construct_period",
    "AllenRelation",
    "relate",
]
