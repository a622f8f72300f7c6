"""
Contract Validation Module

Модуль для валидации декларативных ограничений на дату (JSON контракты).
"""

from .validators import (
    ContractValidator,
    DateConstraintValidator,
    SchemaLoader,
    constraint_from_mapping,
    validate_date_constraint,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DateConstraintValidator",
    # Functions
    "validate_date_constraint",
    "constraint_from_mapping",
]
