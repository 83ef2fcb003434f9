"""
Instant — Примитивы для работы с моментами времени

Instant в этой библиотеке — это aware `datetime.datetime` (tzinfo задан).
Модуль обеспечивает:
- Вычисление фактического UTC offset в конкретный момент (с учётом DST)
- Форматирование offset в виде ±HH:MM
- Нормализацию в UTC для сравнений по абсолютной шкале времени
- Разбор ISO-8601 строк и локального времени в IANA зоне
- Явное усечение до гранулы (hour, minute, ...)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Offset всегда берётся на конкретный момент, а не "стандартный" offset зоны
2. Naive datetime никогда не принимается как instant
3. Библиотека никогда не округляет время неявно (только через truncate)
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Final, Optional
from zoneinfo import ZoneInfo

# =============================================================================
# CONSTANTS
# =============================================================================

SECONDS_PER_HOUR: Final[int] = 3600
SECONDS_PER_MINUTE: Final[int] = 60

# Формат ISO-8601 с явным offset (аналог DATE_ATOM)
ISO_FORMAT_SECONDS: Final[str] = "seconds"
ISO_FORMAT_MICROSECONDS: Final[str] = "microseconds"


# =============================================================================
# ENUMS
# =============================================================================


class Granule(str, Enum):
    """Гранула временной шкалы для явного усечения instant."""

    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MICROSECOND = "microsecond"


# =============================================================================
# OFFSET
# =============================================================================


def utc_offset_seconds(instant: datetime) -> int:
    """
    UTC offset в секундах, действующий в момент instant.

    Для зон с DST (Europe/London, America/New_York, ...) результат зависит
    от даты: один и тот же ZoneInfo даёт разные offset летом и зимой.

    Args:
        instant: Aware datetime

    Returns:
        Offset в секундах (отрицательный к западу от Гринвича)

    Raises:
        ValueError: Если instant naive (tzinfo отсутствует)
    """
    offset = instant.utcoffset()
    if offset is None:
        raise ValueError(f"instant {instant.isoformat()} has no UTC offset (naive datetime)")
    return int(offset.total_seconds())


def resolved_offset(instant: datetime) -> str:
    """
    Фактический UTC offset в момент instant в формате ±HH:MM.

    Знак: '+' для offset >= 0, '-' для отрицательного.
    HH = |offset| // 3600, MM = (|offset| % 3600) // 60.

    Args:
        instant: Aware datetime

    Returns:
        Строка вида '+01:00', '-02:30'

    Examples:
        >>> resolved_offset(datetime(2018, 3, 26, 8, tzinfo=ZoneInfo("Europe/London")))
        '+01:00'
        >>> resolved_offset(datetime(2019, 3, 26, 8, tzinfo=ZoneInfo("Europe/London")))
        '+00:00'
        >>> resolved_offset(datetime(2018, 3, 11, 8, tzinfo=ZoneInfo("America/St_Johns")))
        '-02:30'
    """
    seconds = utc_offset_seconds(instant)
    sign = "+" if seconds >= 0 else "-"
    abs_seconds = abs(seconds)
    hours = abs_seconds // SECONDS_PER_HOUR
    minutes = (abs_seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    return f"{sign}{hours:02d}:{minutes:02d}"


def zone_name(instant: datetime) -> str:
    """
    Имя зоны instant для диагностики.

    ZoneInfo → IANA ключ ('Europe/London'), фиксированный offset → его имя
    ('UTC', 'UTC+01:00').
    """
    tz = instant.tzinfo
    if tz is None:
        return "naive"
    key = getattr(tz, "key", None)
    if key:
        return key
    return tz.tzname(instant) or resolved_offset(instant)


# =============================================================================
# NORMALIZATION & FORMATTING
# =============================================================================


def to_utc(instant: datetime) -> datetime:
    """
    Нормализация instant в UTC.

    Python сравнивает два datetime с одним и тем же tzinfo объектом по
    настенному времени, игнорируя offset. Сравнение UTC значений всегда
    идёт по абсолютной шкале.

    Raises:
        ValueError: Если instant naive
    """
    utc_offset_seconds(instant)
    return instant.astimezone(timezone.utc)


def format_instant(instant: datetime) -> str:
    """
    ISO-8601 представление с явным offset.

    Микросекунды выводятся только если они ненулевые.

    Examples:
        >>> format_instant(datetime(2017, 1, 1, 10, tzinfo=timezone.utc))
        '2017-01-01T10:00:00+00:00'
    """
    timespec = ISO_FORMAT_MICROSECONDS if instant.microsecond else ISO_FORMAT_SECONDS
    return instant.isoformat(timespec=timespec)


def parse_instant(text: str, timezone_name: Optional[str] = None) -> datetime:
    """
    Разбор instant из строки.

    Два режима:
    - timezone_name не задан: ISO-8601 с явным offset
      ('2017-01-01T10:00:00+00:00', '2017-01-01T10:00:00Z')
    - timezone_name задан: локальное время без offset в IANA зоне
      ('2018-03-26T08:00:00' + 'Europe/London'); offset вычисляется
      по правилам зоны на эту дату

    Args:
        text: ISO-8601 строка
        timezone_name: IANA имя зоны (опционально)

    Returns:
        Aware datetime

    Raises:
        ValueError: Некорректная строка, отсутствующий offset,
            или offset одновременно с timezone_name
        zoneinfo.ZoneInfoNotFoundError: Неизвестная зона
    """
    parsed = datetime.fromisoformat(text)

    if timezone_name is None:
        if parsed.tzinfo is None:
            raise ValueError(f"instant '{text}' has no explicit UTC offset")
        return parsed

    if parsed.tzinfo is not None:
        raise ValueError(
            f"instant '{text}' already carries an offset, cannot localize to {timezone_name}"
        )
    return parsed.replace(tzinfo=ZoneInfo(timezone_name))


# =============================================================================
# GRANULARITY
# =============================================================================


def truncate(instant: datetime, granule: Granule) -> datetime:
    """
    Усечение instant до гранулы (по настенному времени, tzinfo сохраняется).

    Отношения между периодами зависят от гранулы: два периода, разделённые
    на микросекундной шкале, могут встречаться (meets) на часовой. Решение
    о грануле принимает вызывающий код до построения Period.

    Args:
        instant: Aware datetime
        granule: Гранула шкалы

    Returns:
        Новый datetime, усечённый до гранулы
    """
    granule = Granule(granule)

    if granule == Granule.MICROSECOND:
        return instant
    if granule == Granule.SECOND:
        return instant.replace(microsecond=0)
    if granule == Granule.MINUTE:
        return instant.replace(second=0, microsecond=0)
    if granule == Granule.HOUR:
        return instant.replace(minute=0, second=0, microsecond=0)
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)
