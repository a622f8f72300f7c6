"""
XBDate — Дата, нормализованная к UTC

Обёртка над одним календарным instant (datetime, tzinfo=UTC):
- Аксессоры UTC полей
- Календарная арифметика (add/subtract): возвращает новый XBDate
- Замена полей (set): изменяет XBDate на месте
- Сравнение с точностью year/month/day (is_)
- Проверка ограничений (matches)

Рекомендуемые форматы строк:
- `YYYY-MM-DD`
- `YYYY-MM-DDTHH:mm:ss.sssZ`
- `YYYY-MM-DDTHH:mm:ss.sss+00:00`

Вход должен содержать смещение или быть UTC.

По умолчанию время суток нормализуется к 12:00:00 UTC; это упрощает
сравнение дат. Отключается через options={"normalize": False}.

ВАЖНО (aliasing): set() изменяет XBDate на месте, а add()/subtract()
создают новые экземпляры. Все держатели ссылки на XBDate увидят изменения
после set(). Блокировок нет: предполагается однопоточное использование.

Невалидный вход не вызывает исключение: создаётся невалидная дата
(is_valid() == False), аксессоры возвращают math.nan, сравнения дают False.
get() невалидной даты возвращает INVALID_INSTANT, а не None, поэтому
XBDate(invalid.get()) тоже невалиден.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional, Union

from xbdate.constraints.evaluator import get_constraint_evaluator
from xbdate.core.domain.options import OptionsInput, XBDateOptions, resolve_options
from xbdate.core.domain.units import CALENDAR_FIELDS_ORDER, DEFAULT_PRECISION, DateUnit
from xbdate.core.math.calendar import (
    INVALID_INSTANT,
    InvalidInstant,
    calendar_fields,
    format_iso,
    negate_amount,
    parse_instant,
    replace_calendar_field,
    shift_calendar_fields,
    to_epoch_milliseconds,
    utc_from_fields,
)
from xbdate.core.math.comparison import ComparisonOperator, comparable_date, compare
from xbdate.core.utils import is_empty

DateInput = Union[None, int, float, str, datetime, date, InvalidInstant, "XBDate"]

# Поле значение → float, так как невалидная дата отдаёт math.nan
FieldValue = Union[int, float]


class XBDate:
    """Дата, нормализованная к UTC."""

    def __init__(self, date_input: DateInput = None, options: OptionsInput = None) -> None:
        """
        Args:
            date_input: None (текущий момент), timestamp в мс, ISO строка,
                datetime/date, результат get() (включая INVALID_INSTANT)
                или другой XBDate
            options: XBDateOptions или mapping (накладывается на DEFAULT_OPTIONS)

        Raises:
            pydantic.ValidationError: Если options некорректны
        """
        self._options: XBDateOptions = resolve_options(options)

        if isinstance(date_input, XBDate):
            source = date_input._instant
        else:
            source = parse_instant(date_input)

        self._instant: Optional[datetime] = self._normalize_to_utc(source)

    @classmethod
    def _from_instant(cls, instant: Optional[datetime], options: XBDateOptions) -> "XBDate":
        # Новый XBDate из готового instant (None означает невалидную дату, а не "сейчас")
        date_value = cls.__new__(cls)
        date_value._options = options
        date_value._instant = date_value._normalize_to_utc(instant)
        return date_value

    def _normalize_to_utc(self, source: Optional[datetime]) -> Optional[datetime]:
        if source is None:
            return None

        year, month, day, hours, minutes, seconds, milliseconds = calendar_fields(source)
        if self._options.normalize:
            return utc_from_fields(year, month, day, 12, 0, 0, 0)
        return utc_from_fields(year, month, day, hours, minutes, seconds, milliseconds)

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def options(self) -> XBDateOptions:
        return self._options

    def get(self) -> Union[datetime, InvalidInstant]:
        """Внутренний UTC datetime (INVALID_INSTANT для невалидной даты)."""
        return INVALID_INSTANT if self._instant is None else self._instant

    def is_valid(self) -> bool:
        return self._instant is not None

    def get_year(self) -> FieldValue:
        return math.nan if self._instant is None else self._instant.year

    def get_month(self) -> FieldValue:
        """Месяц, zero-based (0 = январь)."""
        return math.nan if self._instant is None else self._instant.month - 1

    def get_date(self) -> FieldValue:
        """День месяца (1-31)."""
        return math.nan if self._instant is None else self._instant.day

    def get_time(self) -> FieldValue:
        """Миллисекунды от Unix-эпохи."""
        return math.nan if self._instant is None else to_epoch_milliseconds(self._instant)

    def get_weekday(self) -> FieldValue:
        """День недели, zero-based с воскресенья (0 = воскресенье)."""
        # datetime.weekday(): 0 = понедельник
        return math.nan if self._instant is None else (self._instant.weekday() + 1) % 7

    def get_hours(self) -> FieldValue:
        return math.nan if self._instant is None else self._instant.hour

    def get_minutes(self) -> FieldValue:
        return math.nan if self._instant is None else self._instant.minute

    def get_seconds(self) -> FieldValue:
        return math.nan if self._instant is None else self._instant.second

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def add(self, summands: Optional[Mapping[Union[DateUnit, str], int]] = None) -> "XBDate":
        """
        Календарное сложение.

        Единицы применяются последовательно в порядке ключей mapping'а; после
        каждого шага поля пересобираются с переполнением (месяц 12 → январь
        следующего года). Каждый шаг строит новый instant, исходный XBDate
        не меняется. Неизвестные единицы ничего не добавляют.

        Args:
            summands: {'year': n, 'month': n, 'day': n} (любое подмножество)

        Returns:
            Новый XBDate с теми же options
        """
        result = self.copy()
        for unit, amount in (summands or {}).items():
            result = result._shifted(unit, amount)
        return result

    def subtract(self, subtrahends: Optional[Mapping[Union[DateUnit, str], int]] = None) -> "XBDate":
        """Календарное вычитание: add() с противоположными знаками."""
        return self.add(
            {unit: negate_amount(amount) for unit, amount in (subtrahends or {}).items()}
        )

    def _shifted(self, unit: Union[DateUnit, str], amount: int) -> "XBDate":
        increment = {DateUnit.YEAR: 0, DateUnit.MONTH: 0, DateUnit.DAY: 0}
        parsed_unit = DateUnit.coerce(unit)
        if parsed_unit is not None:
            increment[parsed_unit] = amount

        instant = shift_calendar_fields(
            self._instant,
            years=increment[DateUnit.YEAR],
            months=increment[DateUnit.MONTH],
            days=increment[DateUnit.DAY],
        )
        return XBDate._from_instant(instant, self._options)

    def set(self, values: Optional[Mapping[Union[DateUnit, str], int]] = None) -> "XBDate":
        """
        Замена календарных полей НА МЕСТЕ.

        Пропущенные поля берутся из текущего значения. Поля применяются по
        очереди год → месяц → день, каждое с переполнением: set({'month': 12})
        переносит дату на январь следующего года.

        Args:
            values: {'year': ..., 'month': ... (zero-based), 'day': ...}

        Returns:
            self (для chaining)
        """
        if self._instant is None:
            return self

        new_value: dict[DateUnit, Any] = {
            DateUnit.YEAR: self.get_year(),
            DateUnit.MONTH: self.get_month(),
            DateUnit.DAY: self.get_date(),
        }
        for key, value in (values or {}).items():
            unit = DateUnit.coerce(key)
            if unit is not None:
                new_value[unit] = value

        instant = self._instant
        for unit in CALENDAR_FIELDS_ORDER:
            instant = replace_calendar_field(instant, unit, new_value[unit])

        self._instant = instant
        return self

    def copy(self) -> "XBDate":
        """Независимая копия с тем же instant и options."""
        return XBDate._from_instant(self._instant, self._options)

    # =========================================================================
    # COMPARISON & CONSTRAINTS
    # =========================================================================

    def matches(self, *constraints: Any) -> bool:
        """
        Проверка ограничений (логическое ИЛИ).

        Evaluator'ы получают не сам self, а новый XBDate с DEFAULT_OPTIONS:
        кандидат всегда нормализован к 12:00:00 UTC, даже если self
        построен с normalize=False.

        Args:
            *constraints: Tagged constraints, callables, mappings или даты

        Returns:
            False без ограничений; иначе True, если хотя бы одно выполнено
        """
        if is_empty(constraints):
            return False

        evaluators = [get_constraint_evaluator(constraint) for constraint in constraints]
        candidate = XBDate(self)

        return any(evaluator(candidate) for evaluator in evaluators)

    def is_(
        self,
        operator: Union[ComparisonOperator, str],
        other_date: "XBDate",
        precision: Union[DateUnit, str] = DEFAULT_PRECISION,
    ) -> bool:
        """
        Сравнение с другой датой с заданной точностью.

        Args:
            operator: '>=', '>', '=', '<', '<='; любое иное значение → '='
            other_date: Другой XBDate
            precision: 'year' | 'month' | 'day' (default 'day')

        Returns:
            Результат сравнения; False, если одна из дат невалидна
        """
        return compare(
            comparable_date(self._instant, precision),
            comparable_date(other_date.get(), precision),
            operator,
        )

    # =========================================================================
    # FORMATTING
    # =========================================================================

    def to_string(self) -> str:
        """ISO-8601 UTC: `YYYY-MM-DDTHH:mm:ss.sssZ` (или 'Invalid Date')."""
        return format_iso(self._instant)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"XBDate('{self.to_string()}')"
