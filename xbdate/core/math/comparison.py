"""
Comparison — Сравнение дат с заданной точностью

Дата кодируется целым числом из конкатенации UTC года, месяца (zero-based,
два знака) и дня (два знака), усечённой до precision:
- year  → YYYY
- month → YYYYMM
- day   → YYYYMMDD

Такое число монотонно по календарю при одинаковой точности, поэтому
сравнение "тот же месяц, день не важен" сводится к сравнению двух целых.

Невалидная дата кодируется как NaN: любое сравнение с ней даёт False.
"""

import math
import operator
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Final, Optional, Union

from xbdate.core.domain.units import DEFAULT_PRECISION, DateUnit


# =============================================================================
# ОПЕРАТОРЫ
# =============================================================================


class ComparisonOperator(str, Enum):
    """Оператор сравнения дат.

    Разбор оператора permissive: любое неизвестное значение трактуется как
    строгое равенство, исключение не бросается.
    """

    GTE = ">="
    GT = ">"
    EQ = "="
    LT = "<"
    LTE = "<="

    @classmethod
    def _missing_(cls, value: object) -> "ComparisonOperator":
        return cls.EQ


_OPERATOR_FUNCTIONS: Final[dict[ComparisonOperator, Callable[[Any, Any], bool]]] = {
    ComparisonOperator.GTE: operator.ge,
    ComparisonOperator.GT: operator.gt,
    ComparisonOperator.EQ: operator.eq,
    ComparisonOperator.LT: operator.lt,
    ComparisonOperator.LTE: operator.le,
}

# Сколько компонент (год, месяц, день) входит в comparable для каждой точности
_COMPARE_TO: Final[dict[DateUnit, int]] = {
    DateUnit.YEAR: 1,
    DateUnit.MONTH: 2,
    DateUnit.DAY: 3,
}


# =============================================================================
# COMPARABLE
# =============================================================================


def comparable_date(
    instant: Optional[datetime], precision: Union[DateUnit, str] = DEFAULT_PRECISION
) -> Union[int, float]:
    """
    Целочисленный ключ даты для сравнения с заданной точностью.

    Args:
        instant: UTC instant (None или INVALID_INSTANT: невалидная дата)
        precision: 'year' | 'month' | 'day'; неизвестная точность → 'day'

    Returns:
        int ключ или math.nan для невалидной даты

    Examples:
        >>> comparable_date(datetime(2024, 3, 15), "month")
        202402
    """
    if not isinstance(instant, datetime):
        return math.nan

    unit = DateUnit.coerce(precision) or DEFAULT_PRECISION
    parts = [
        str(instant.year),
        f"{instant.month - 1:02d}",
        f"{instant.day:02d}",
    ]
    return int("".join(parts[: _COMPARE_TO[unit]]))


def compare(
    a: Union[int, float], b: Union[int, float], comparison: Union[ComparisonOperator, str]
) -> bool:
    """
    Сравнение двух ключей по оператору.

    Args:
        a: Левый операнд
        b: Правый операнд
        comparison: Оператор ('>=', '>', '=', '<', '<='); иное → '='

    Returns:
        Результат сравнения
    """
    return _OPERATOR_FUNCTIONS[ComparisonOperator(comparison)](a, b)
