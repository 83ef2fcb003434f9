"""
Period — Полуоткрытый интервал времени [start, end)

Immutable Pydantic модель периода между двумя instant, разделяющими один
и тот же фактический UTC offset, и 13 отношений алгебры интервалов Аллена.

Инварианты (проверяются при создании):
1. Offset consistency: resolved_offset(start) == resolved_offset(end).
   Строже, чем "одинаковая зона": Europe/London летом (+01:00) и зимой
   (+00:00) — это разные offset, такой период отклоняется.
2. Non-negativity: start <= end. start == end допустим (нулевой период).

Создание:
- construct_period(start, end) → PeriodResult (период или tagged ошибка,
  без исключений)
- Period(start=..., end=...) → pydantic ValidationError при нарушении
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Final, Optional, Tuple, Union

from dateutil.relativedelta import relativedelta
from pydantic import AwareDatetime, BaseModel, Field, model_validator

from datetime_period.core.domain.instant import (
    format_instant,
    resolved_offset,
    to_utc,
    utc_offset_seconds,
    zone_name,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

ERROR_CODE_OFFSET_MISMATCH: Final[str] = "offset_mismatch"
ERROR_CODE_NEGATIVE_PERIOD: Final[str] = "negative_period"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class PeriodConfig:
    """Конфигурация создания периода.

    По умолчанию действует строгая проверка offset. Нормализация в UTC
    включается только явно: она меняет множество допустимых периодов
    (период между зонами с разными offset становится допустимым).
    """

    # Перевести start и end в UTC до проверок
    normalize_to_utc: bool = False


DEFAULT_PERIOD_CONFIG: Final[PeriodConfig] = PeriodConfig()


# =============================================================================
# ERRORS
# =============================================================================


@dataclass(frozen=True)
class OffsetMismatch:
    """start и end имеют разный фактический UTC offset."""

    start_offset: str
    end_offset: str
    start_zone: str
    end_zone: str

    code: str = ERROR_CODE_OFFSET_MISMATCH

    def message(self) -> str:
        return (
            f"Start date UTC offset {self.start_offset} ({self.start_zone}) "
            f"and end date UTC offset {self.end_offset} ({self.end_zone}) differ"
        )


@dataclass(frozen=True)
class NegativePeriod:
    """start строго позже end."""

    start: str
    end: str

    code: str = ERROR_CODE_NEGATIVE_PERIOD

    def message(self) -> str:
        return f'Start date "{self.start}" cannot be after end date "{self.end}".'


PeriodError = Union[OffsetMismatch, NegativePeriod]


class PeriodConstructionError(ValueError):
    """Исключение для вызывающего кода, предпочитающего raise (PeriodResult.unwrap)."""

    def __init__(self, error: PeriodError):
        super().__init__(error.message())
        self.error = error


def check_boundaries(start: datetime, end: datetime) -> Optional[PeriodError]:
    """
    Проверка инвариантов периода без исключений.

    Порядок проверок:
    1. Offset consistency → OffsetMismatch
    2. start > end → NegativePeriod

    Args:
        start: Aware datetime начала
        end: Aware datetime конца

    Returns:
        None если оба инварианта выполнены, иначе ошибка

    Raises:
        ValueError: Если start или end naive (нарушение предусловия)
    """
    if utc_offset_seconds(start) != utc_offset_seconds(end):
        return OffsetMismatch(
            start_offset=resolved_offset(start),
            end_offset=resolved_offset(end),
            start_zone=zone_name(start),
            end_zone=zone_name(end),
        )

    if to_utc(start) > to_utc(end):
        return NegativePeriod(start=format_instant(start), end=format_instant(end))

    return None


# =============================================================================
# DURATION
# =============================================================================


@dataclass(frozen=True)
class PeriodDuration:
    """Календарная разбивка длительности периода."""

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    microseconds: int = 0

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "PeriodDuration":
        """
        Разбивка между двумя instant по календарным правилам dateutil.

        start и end имеют одинаковый offset, поэтому разница настенного
        времени равна абсолютной разнице.
        """
        delta = relativedelta(end.replace(tzinfo=None), start.replace(tzinfo=None))
        return cls(
            years=delta.years,
            months=delta.months,
            days=delta.days,
            hours=delta.hours,
            minutes=delta.minutes,
            seconds=delta.seconds,
            microseconds=delta.microseconds,
        )

    def is_zero(self) -> bool:
        return not any(
            (
                self.years,
                self.months,
                self.days,
                self.hours,
                self.minutes,
                self.seconds,
                self.microseconds,
            )
        )

    def to_relativedelta(self) -> relativedelta:
        return relativedelta(
            years=self.years,
            months=self.months,
            days=self.days,
            hours=self.hours,
            minutes=self.minutes,
            seconds=self.seconds,
            microseconds=self.microseconds,
        )


# =============================================================================
# PERIOD MODEL
# =============================================================================


class Period(BaseModel):
    """
    Полуоткрытый период [start, end).

    Immutable модель (frozen=True). start и end возвращаются ровно такими,
    какими были переданы (без усечения и перевода зоны). Все отношения
    вычисляются по абсолютной шкале времени (UTC).
    """

    start: AwareDatetime = Field(..., description="Начало периода (включительно)")
    end: AwareDatetime = Field(..., description="Конец периода (исключительно)")

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="after")
    def validate_boundaries(self) -> "Period":
        """Offset consistency и start <= end."""
        error = check_boundaries(self.start, self.end)
        if error is not None:
            raise ValueError(error.message())
        return self

    def __eq__(self, other: object) -> bool:
        """Равенство по абсолютным границам (UTC), как equals()."""
        if not isinstance(other, Period):
            return NotImplemented
        return self._bounds() == other._bounds()

    def __hash__(self) -> int:
        return hash(self._bounds())

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    def duration(self) -> PeriodDuration:
        """Календарная разбивка (годы, месяцы, дни, часы, минуты, секунды, мкс)."""
        return PeriodDuration.between(self.start, self.end)

    def number_of_days(self) -> int:
        """
        Количество полных 24-часовых суток в периоде (с усечением).

        Examples:
            2017-01-01T12:00 → 2017-01-02T11:59:59 = 0
            2017-01-01T12:00 → 2017-01-02T12:00:00 = 1
        """
        return (to_utc(self.end) - to_utc(self.start)).days

    def total_seconds(self) -> float:
        return (to_utc(self.end) - to_utc(self.start)).total_seconds()

    def utc_offset(self) -> str:
        """Общий UTC offset периода (±HH:MM)."""
        return resolved_offset(self.start)

    def is_empty(self) -> bool:
        """Нулевой период (start == end)."""
        return to_utc(self.start) == to_utc(self.end)

    def _bounds(self) -> Tuple[datetime, datetime]:
        return to_utc(self.start), to_utc(self.end)

    # -------------------------------------------------------------------------
    # Allen relations: a = self = [a1, a2), b = other = [b1, b2)
    # -------------------------------------------------------------------------

    def precedes(self, other: "Period") -> bool:
        """
        a2 < b1

        |--a--|
                 |--b--|
        """
        _, a2 = self._bounds()
        b1, _ = other._bounds()
        return a2 < b1

    def meets(self, other: "Period") -> bool:
        """
        a2 = b1

        |--a--|
              |--b--|
        """
        _, a2 = self._bounds()
        b1, _ = other._bounds()
        return a2 == b1

    def overlaps(self, other: "Period") -> bool:
        """
        a1 < b1 and a2 < b2 and b1 < a2

        |--a--|
           |--b--|
        """
        a1, a2 = self._bounds()
        b1, b2 = other._bounds()
        return a1 < b1 and a2 < b2 and b1 < a2

    def finished_by(self, other: "Period") -> bool:
        """
        a1 < b1 and a2 = b2

        |----a----|
            |--b--|
        """
        a1, a2 = self._bounds()
        b1, b2 = other._bounds()
        return a1 < b1 and a2 == b2

    def contains(self, other: "Period") -> bool:
        """
        a1 < b1 and b2 < a2

        |----a----|
          |--b--|
        """
        a1, a2 = self._bounds()
        b1, b2 = other._bounds()
        return a1 < b1 and b2 < a2

    def starts(self, other: "Period") -> bool:
        """
        a1 = b1 and a2 < b2

        |--a--|
        |----b----|
        """
        a1, a2 = self._bounds()
        b1, b2 = other._bounds()
        return a1 == b1 and a2 < b2

    def equals(self, other: "Period") -> bool:
        """
        a1 = b1 and a2 = b2 (равенство значений, не идентичность)

        |--a--|
        |--b--|
        """
        a1, a2 = self._bounds()
        b1, b2 = other._bounds()
        return a1 == b1 and a2 == b2

    def started_by(self, other: "Period") -> bool:
        """
        a1 = b1 and b2 < a2

        |----a----|
        |--b--|
        """
        a1, a2 = self._bounds()
        b1, b2 = other._bounds()
        return a1 == b1 and b2 < a2

    def during(self, other: "Period") -> bool:
        """
        b1 < a1 and a2 < b2

          |--a--|
        |----b----|
        """
        a1, a2 = self._bounds()
        b1, b2 = other._bounds()
        return b1 < a1 and a2 < b2

    def finishes(self, other: "Period") -> bool:
        """
        b1 < a1 and a2 = b2

            |--a--|
        |----b----|
        """
        a1, a2 = self._bounds()
        b1, b2 = other._bounds()
        return b1 < a1 and a2 == b2

    def overlapped_by(self, other: "Period") -> bool:
        """
        b1 < a1 and b2 < a2 and a1 < b2

           |--a--|
        |--b--|
        """
        a1, a2 = self._bounds()
        b1, b2 = other._bounds()
        return b1 < a1 and b2 < a2 and a1 < b2

    def met_by(self, other: "Period") -> bool:
        """
        b2 = a1

              |--a--|
        |--b--|
        """
        a1, _ = self._bounds()
        _, b2 = other._bounds()
        return b2 == a1

    def preceded_by(self, other: "Period") -> bool:
        """
        b2 < a1

                 |--a--|
        |--b--|
        """
        a1, _ = self._bounds()
        _, b2 = other._bounds()
        return b2 < a1


# =============================================================================
# CONSTRUCTION RESULT
# =============================================================================


@dataclass(frozen=True)
class PeriodResult:
    """Результат создания периода: либо period, либо error."""

    period: Optional[Period]
    error: Optional[PeriodError]

    def __post_init__(self) -> None:
        """Ровно одно из period / error."""
        if (self.period is None) == (self.error is None):
            raise ValueError("PeriodResult requires exactly one of period or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Period:
        """
        Period при успехе.

        Raises:
            PeriodConstructionError: Если создание отклонено
        """
        if self.error is not None:
            raise PeriodConstructionError(self.error)
        return self.period


def construct_period(
    start: datetime,
    end: datetime,
    config: PeriodConfig = DEFAULT_PERIOD_CONFIG,
) -> PeriodResult:
    """
    Создание периода с проверкой инвариантов.

    Порядок:
    1. (opt-in) нормализация start/end в UTC
    2. Offset check → OffsetMismatch
    3. Ordering check → NegativePeriod
    4. PASS → Period

    Ошибки возвращаются в PeriodResult, исключения не используются.

    Args:
        start: Aware datetime начала
        end: Aware datetime конца
        config: Конфигурация создания

    Returns:
        PeriodResult с периодом или ошибкой

    Raises:
        ValueError: Если start или end naive (нарушение предусловия)
    """
    if config.normalize_to_utc:
        start = to_utc(start)
        end = to_utc(end)

    error = check_boundaries(start, end)
    if error is not None:
        logger.debug("period rejected: %s: %s", error.code, error.message())
        return PeriodResult(period=None, error=error)

    return PeriodResult(period=Period(start=start, end=end), error=None)
