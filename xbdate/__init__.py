"""
xbdate — дата, нормализованная к UTC, и проверка ограничений на дату.

Пример:
    >>> from xbdate import XBDate, DateRangeConstraint
    >>> d = XBDate("2024-01-15")
    >>> d.matches(DateRangeConstraint(start="2024-01-01", end="2024-01-31"))
    True
"""

# core.domain импортируется первым: date_value и constraints.evaluator
# ссылаются друг на друга
from xbdate.core.domain import (
    DEFAULT_OPTIONS,
    DEFAULT_PRECISION,
    DateConstraint,
    DateInput,
    DateRangeConstraint,
    DateUnit,
    PredicateConstraint,
    SingleDateConstraint,
    XBDate,
    XBDateOptions,
)
from xbdate.constraints import ConstraintEvaluator, get_constraint_evaluator
from xbdate.core.contracts import constraint_from_mapping, validate_date_constraint
from xbdate.core.math import INVALID_INSTANT, ComparisonOperator
from xbdate.core.utils import is_empty

__all__ = [
    # Date value
    "XBDate",
    "DateInput",
    "XBDateOptions",
    "DEFAULT_OPTIONS",
    "DateUnit",
    "DEFAULT_PRECISION",
    "ComparisonOperator",
    "INVALID_INSTANT",
    # Constraints
    "DateConstraint",
    "SingleDateConstraint",
    "DateRangeConstraint",
    "PredicateConstraint",
    "ConstraintEvaluator",
    "get_constraint_evaluator",
    "constraint_from_mapping",
    "validate_date_constraint",
    # Utils
    "is_empty",
]
