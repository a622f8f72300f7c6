"""Constraints — разрешение декларативных ограничений на дату.

Формы ограничений:
- SingleDateConstraint: равенство с точностью до дня
- DateRangeConstraint: диапазон с включёнными границами
- PredicateConstraint: произвольная функция
"""

from .evaluator import ConstraintEvaluator, Evaluator, get_constraint_evaluator

__all__ = [
    "ConstraintEvaluator",
    "Evaluator",
    "get_constraint_evaluator",
]
