"""
JSON Schema Contract Validators

Модуль для валидации декларативных ограничений на дату, заданных mapping'ом
(например, из JSON/YAML конфигурации), согласно формальному JSON Schema
контракту. Использует библиотеку jsonschema.

Схемы:
- date_constraint.json (single date | date range)
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Final, Optional, Union

import jsonschema
import structlog
from jsonschema import Draft202012Validator

from xbdate.core.domain.constraints import DateRangeConstraint, SingleDateConstraint

logger = structlog.get_logger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Кэш JSON Schema контрактов xbdate.

    Схемы ограничений поставляются как package data (xbdate.core.contracts/schema).
    Каждая схема читается с диска и проходит meta-validation один раз.
    """

    SCHEMA_SUFFIX: Final[str] = ".json"

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"xbdate schema directory is missing: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема контракта по имени ('date_constraint').

        Raises:
            FileNotFoundError: Если контракт с таким именем не поставляется
            ValueError: Если файл не проходит meta-validation Draft 2020-12
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}{self.SCHEMA_SUFFIX}"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Unknown xbdate contract: {schema_name} ({schema_path})")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Contract {schema_name} is not a valid Draft 2020-12 schema: {e.message}") from e

        logger.debug("xbdate_schema_loaded", schema=schema_name, path=str(schema_path))
        self._schemas[schema_name] = schema
        return schema


# Общий кэш контрактов пакета
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(dict(data))

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        if not isinstance(data, Mapping):
            return False
        return self.validator.is_valid(dict(data))

    def iter_errors(self, data: Mapping[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(dict(data))


class DateConstraintValidator(ContractValidator):
    """Валидатор для date_constraint контракта."""

    def __init__(self):
        super().__init__("date_constraint")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_date_constraint(data: Mapping[str, Any]) -> None:
    """
    Валидация date_constraint данных.

    Mapping с полями и одиночной даты, и диапазона неоднозначен и
    отклоняется (oneOf).

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    DateConstraintValidator().validate(data)


def constraint_from_mapping(
    data: Mapping[str, Any],
) -> Union[SingleDateConstraint, DateRangeConstraint]:
    """
    Конверсия mapping → tagged constraint после валидации контракта.

    Args:
        data: {"date": ...} или {"start": ..., "end": ...}

    Returns:
        SingleDateConstraint или DateRangeConstraint

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    validate_date_constraint(data)

    if "date" in data:
        return SingleDateConstraint(date=data["date"])
    return DateRangeConstraint(start=data["start"], end=data["end"])
