"""Constraint Evaluator — разрешение ограничения в предикат над XBDate

Превращает декларативное ограничение в функцию XBDate → bool:
- PredicateConstraint / callable → предикат без изменений
- DateRangeConstraint → start <= candidate <= end (точность 'day')
- SingleDateConstraint → candidate == date (точность 'day')
- Mapping → валидация контракта date_constraint, затем как выше
- Любое иное значение → одиночная дата

Разрешение детерминировано и тотально: каждое значение ограничения даёт
ровно один вид evaluator. Evaluator stateless.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Final

import structlog

from xbdate.core.contracts.validators import constraint_from_mapping
from xbdate.core.domain.constraints import (
    DateRangeConstraint,
    PredicateConstraint,
    SingleDateConstraint,
)
from xbdate.core.domain.units import DateUnit
from xbdate.core.math.comparison import ComparisonOperator

if TYPE_CHECKING:
    from xbdate.core.domain.date_value import XBDate

logger = structlog.get_logger(__name__)

Evaluator = Callable[["XBDate"], bool]


# =============================================================================
# EVALUATOR
# =============================================================================


class ConstraintEvaluator:
    """Разрешение ограничений в предикаты.

    Порядок проверок формы:
    1. PredicateConstraint
    2. DateRangeConstraint
    3. SingleDateConstraint
    4. callable
    5. Mapping (через контракт)
    6. иначе одиночная дата
    """

    def __init__(self):
        """Evaluator не требует зависимостей (stateless)."""
        pass

    def resolve(self, constraint: Any) -> Evaluator:
        """Разрешение ограничения.

        Args:
            constraint: Tagged constraint, callable, mapping или дата

        Returns:
            Функция XBDate → bool

        Raises:
            jsonschema.ValidationError: Если mapping нарушает контракт
        """
        if isinstance(constraint, PredicateConstraint):
            return constraint.predicate

        if isinstance(constraint, DateRangeConstraint):
            return self._range_evaluator(constraint)

        if isinstance(constraint, SingleDateConstraint):
            return self._single_date_evaluator(constraint)

        if callable(constraint):
            return constraint

        if isinstance(constraint, Mapping):
            logger.debug("xbdate_constraint_from_mapping", fields=sorted(map(str, constraint)))
            return self.resolve(constraint_from_mapping(constraint))

        return self._single_date_evaluator(SingleDateConstraint(date=constraint))

    def _range_evaluator(self, constraint: DateRangeConstraint) -> Evaluator:
        """Диапазон [start, end] включительно, точность 'day'."""
        start = _to_date_value(constraint.start)
        end = _to_date_value(constraint.end)

        def evaluate(candidate: "XBDate") -> bool:
            return candidate.is_(ComparisonOperator.GTE, start, DateUnit.DAY) and candidate.is_(
                ComparisonOperator.LTE, end, DateUnit.DAY
            )

        return evaluate

    def _single_date_evaluator(self, constraint: SingleDateConstraint) -> Evaluator:
        """Равенство с точностью 'day'."""
        expected = _to_date_value(constraint.date)

        def evaluate(candidate: "XBDate") -> bool:
            return candidate.is_(ComparisonOperator.EQ, expected, DateUnit.DAY)

        return evaluate


def _to_date_value(date_input: Any) -> "XBDate":
    # date_value импортирует этот модуль (matches), поэтому импорт отложен
    from xbdate.core.domain.date_value import XBDate

    return XBDate(date_input)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


_EVALUATOR: Final[ConstraintEvaluator] = ConstraintEvaluator()


def get_constraint_evaluator(constraint: Any) -> Evaluator:
    """Разрешение ограничения общим stateless evaluator."""
    return _EVALUATOR.resolve(constraint)
