"""
DateConstraint — Декларативные ограничения на дату

Tagged variant из трёх форм:
- SingleDateConstraint: равенство с датой (точность 'day')
- DateRangeConstraint: диапазон [start, end], границы включены
- PredicateConstraint: произвольная функция XBDate → bool

Immutable Pydantic модели. Значения дат хранятся как есть (строка,
timestamp в мс, datetime, XBDate) и разбираются при построении evaluator.
"""

from typing import Any, Callable, Union

from pydantic import BaseModel, Field


# =============================================================================
# CONSTRAINT MODELS
# =============================================================================


class SingleDateConstraint(BaseModel):
    """Дата-кандидат должна совпадать с date с точностью до дня."""

    date: Any = Field(..., description="Дата для сравнения (любой вход XBDate)")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


class DateRangeConstraint(BaseModel):
    """
    Дата-кандидат должна лежать в [start, end] с точностью до дня.

    Предполагается start <= end; порядок границ не проверяется.
    """

    start: Any = Field(..., description="Начало диапазона (включительно)")
    end: Any = Field(..., description="Конец диапазона (включительно)")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


class PredicateConstraint(BaseModel):
    """Произвольный предикат; вызывается напрямую с датой-кандидатом."""

    predicate: Callable[[Any], bool] = Field(..., description="Функция XBDate → bool")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


DateConstraint = Union[SingleDateConstraint, DateRangeConstraint, PredicateConstraint]
