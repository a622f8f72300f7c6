"""
DateUnit — Календарные единицы

Единицы, в которых выполняется календарная арифметика (add/subtract/set)
и задаётся точность сравнения дат (precision).
"""

from enum import Enum
from typing import Any, Final, Optional


# =============================================================================
# ENUMS
# =============================================================================


class DateUnit(str, Enum):
    """Календарная единица (она же precision для сравнения)"""

    YEAR = "year"
    MONTH = "month"
    DAY = "day"

    @classmethod
    def coerce(cls, value: Any) -> Optional["DateUnit"]:
        """
        Мягкое приведение к DateUnit.

        Args:
            value: DateUnit или строка ('year', 'month', 'day')

        Returns:
            DateUnit или None для неизвестной единицы
        """
        try:
            return cls(value)
        except ValueError:
            return None


# Точность сравнения по умолчанию
DEFAULT_PRECISION: Final[DateUnit] = DateUnit.DAY

# Порядок применения полей в set(): год → месяц → день
CALENDAR_FIELDS_ORDER: Final[tuple[DateUnit, ...]] = (
    DateUnit.YEAR,
    DateUnit.MONTH,
    DateUnit.DAY,
)
