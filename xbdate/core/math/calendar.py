"""
Calendar — Календарные примитивы UTC

Модуль отвечает за:
- Разбор входных значений в UTC instant (parse_instant)
- Сборку instant из календарных полей с переполнением (utc_from_fields)
- Замену одного календарного поля (replace_calendar_field)
- Форматирование в ISO-8601 UTC (format_iso)

Правила переполнения совпадают с Date.UTC: месяц 12 становится январём
следующего года, день 0 последним днём предыдущего месяца, 31 февраля 2 или 3 марта.

Внутри модуля невалидная дата представлена значением None. Функции модуля
никогда не бросают исключений на некорректных данных: они возвращают None,
а проверку валидности выполняет вызывающий код. Наружу (XBDate.get())
невалидная дата отдаётся как INVALID_INSTANT: None на входе означает
"текущий момент".
"""

import math
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Final, Optional

import structlog

from xbdate.core.domain.units import DateUnit

logger = structlog.get_logger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Начало Unix-эпохи (UTC)
EPOCH_UTC: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Строковое представление невалидной даты
INVALID_DATE_STRING: Final[str] = "Invalid Date"

ONE_MILLISECOND: Final[timedelta] = timedelta(milliseconds=1)


class InvalidInstant(Enum):
    """Маркер невалидного instant (аналог Date с NaN time value)."""

    INVALID = INVALID_DATE_STRING


# Значение XBDate.get() для невалидной даты; parse_instant разбирает его в None
INVALID_INSTANT: Final[InvalidInstant] = InvalidInstant.INVALID


# =============================================================================
# СБОРКА INSTANT ИЗ ПОЛЕЙ
# =============================================================================


def _to_integer(value: Any) -> Optional[int]:
    """Усечение к целому (как ToIntegerOrInfinity); None для NaN/Inf/нечисел."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def utc_from_fields(
    year: Any,
    month: Any,
    day: Any,
    hours: Any = 0,
    minutes: Any = 0,
    seconds: Any = 0,
    milliseconds: Any = 0,
) -> Optional[datetime]:
    """
    Сборка UTC instant из календарных полей с переполнением.

    Args:
        year: Год
        month: Месяц (zero-based: 0 = январь)
        day: День месяца (1-based)
        hours: Часы
        minutes: Минуты
        seconds: Секунды
        milliseconds: Миллисекунды

    Returns:
        datetime (tzinfo=UTC) или None, если поля невалидны или
        результат вне диапазона datetime

    Examples:
        >>> utc_from_fields(2024, 12, 1)
        datetime.datetime(2025, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
        >>> utc_from_fields(2024, 2, 0)
        datetime.datetime(2024, 2, 29, 0, 0, tzinfo=datetime.timezone.utc)
    """
    fields = [_to_integer(v) for v in (year, month, day, hours, minutes, seconds, milliseconds)]
    if any(f is None for f in fields):
        return None
    y, mo, d, h, mi, s, ms = fields

    # Переполнение месяца переносится в год (floor division корректна и для < 0)
    y += mo // 12
    mo %= 12

    try:
        first_of_month = datetime(y, mo + 1, 1, tzinfo=timezone.utc)
        return first_of_month + timedelta(
            days=d - 1, hours=h, minutes=mi, seconds=s, milliseconds=ms
        )
    except (ValueError, OverflowError):
        return None


def calendar_fields(instant: datetime) -> tuple[int, int, int, int, int, int, int]:
    """
    Разбор instant на UTC поля.

    Returns:
        (year, month zero-based, day, hours, minutes, seconds, milliseconds)
    """
    return (
        instant.year,
        instant.month - 1,
        instant.day,
        instant.hour,
        instant.minute,
        instant.second,
        instant.microsecond // 1000,
    )


def replace_calendar_field(
    instant: Optional[datetime], unit: DateUnit, value: Any
) -> Optional[datetime]:
    """
    Замена одного календарного поля с переполнением (setUTCFullYear/Month/Date).

    Остальные поля, включая время суток, сохраняются.

    Args:
        instant: Исходный instant (None: невалидная дата)
        unit: Заменяемое поле
        value: Новое значение (month zero-based)

    Returns:
        Новый instant или None
    """
    if instant is None:
        return None

    year, month, day, hours, minutes, seconds, milliseconds = calendar_fields(instant)
    if unit is DateUnit.YEAR:
        year = value
    elif unit is DateUnit.MONTH:
        month = value
    else:
        day = value

    return utc_from_fields(year, month, day, hours, minutes, seconds, milliseconds)


def shift_calendar_fields(
    instant: Optional[datetime], years: Any = 0, months: Any = 0, days: Any = 0
) -> Optional[datetime]:
    """
    Календарное сложение (не elapsed-time): к полям добавляются приращения,
    после чего instant пересобирается с переполнением.

    Returns:
        Новый instant или None
    """
    if instant is None:
        return None

    year, month, day, hours, minutes, seconds, milliseconds = calendar_fields(instant)
    deltas = [_to_integer(v) for v in (years, months, days)]
    if any(d is None for d in deltas):
        return None

    return utc_from_fields(
        year + deltas[0],
        month + deltas[1],
        day + deltas[2],
        hours,
        minutes,
        seconds,
        milliseconds,
    )


def negate_amount(value: Any) -> Optional[int]:
    """Приращение с обратным знаком; None для NaN/Inf/нечисел (как -1 * undefined)."""
    amount = _to_integer(value)
    return None if amount is None else -amount


# =============================================================================
# РАЗБОР ВХОДНЫХ ЗНАЧЕНИЙ
# =============================================================================


def _truncate_to_milliseconds(instant: datetime) -> datetime:
    return instant.replace(microsecond=instant.microsecond // 1000 * 1000)


def _from_datetime(value: datetime) -> datetime:
    # naive datetime трактуется как UTC
    if value.tzinfo is None or value.utcoffset() is None:
        return _truncate_to_milliseconds(value.replace(tzinfo=timezone.utc))
    return _truncate_to_milliseconds(value.astimezone(timezone.utc))


def _from_timestamp_ms(value: Any) -> Optional[datetime]:
    milliseconds = _to_integer(value)
    if milliseconds is None:
        return None
    try:
        return EPOCH_UTC + timedelta(milliseconds=milliseconds)
    except OverflowError:
        return None


def _from_string(value: str) -> Optional[datetime]:
    text = value.strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _from_datetime(parsed)


def parse_instant(value: Any = None) -> Optional[datetime]:
    """
    Разбор входного значения в UTC instant.

    Поддерживаемые входы:
    - None → текущий момент
    - int/float → миллисекунды от Unix-эпохи
    - str → ISO 8601 дата или дата-время (`YYYY-MM-DD`,
      `YYYY-MM-DDTHH:mm:ss.sssZ`, `YYYY-MM-DDTHH:mm:ss.sss+00:00`);
      значение без смещения трактуется как UTC
    - datetime → naive трактуется как UTC, aware переводится в UTC
    - date → полночь UTC этого дня
    - INVALID_INSTANT → None (невалидная дата остаётся невалидной)

    Args:
        value: Входное значение

    Returns:
        datetime (tzinfo=UTC, точность до миллисекунд) или None, если значение
        не удалось разобрать
    """
    if value is None:
        return _truncate_to_milliseconds(datetime.now(timezone.utc))

    if value is INVALID_INSTANT:
        return None

    if isinstance(value, datetime):
        return _from_datetime(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, str):
        instant = _from_string(value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        instant = _from_timestamp_ms(value)
    else:
        instant = None

    if instant is None:
        logger.debug("xbdate_parse_invalid", input=repr(value), input_type=type(value).__name__)
    return instant


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def to_epoch_milliseconds(instant: datetime) -> int:
    """Миллисекунды от Unix-эпохи (getTime)."""
    return (instant - EPOCH_UTC) // ONE_MILLISECOND


def format_iso(instant: Optional[datetime]) -> str:
    """
    ISO-8601 UTC строка `YYYY-MM-DDTHH:mm:ss.sssZ`.

    Для невалидной даты возвращается INVALID_DATE_STRING.
    """
    if not isinstance(instant, datetime):
        return INVALID_DATE_STRING

    return (
        f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"
        f"T{instant.hour:02d}:{instant.minute:02d}:{instant.second:02d}"
        f".{instant.microsecond // 1000:03d}Z"
    )
