"""
XBDateOptions — Опции построения XBDate

Immutable Pydantic модель. Опции, переданные mapping'ом, накладываются
поверх DEFAULT_OPTIONS.
"""

from collections.abc import Mapping
from typing import Any, Final, Union

from pydantic import BaseModel, Field


# =============================================================================
# OPTIONS MODEL
# =============================================================================


class XBDateOptions(BaseModel):
    """
    Опции XBDate.

    normalize=True (default): время суток приводится к 12:00:00.000 UTC при
    построении. Это делает сравнение дат по дню устойчивым к смещению
    часового пояса входной даты. Учитывайте это при работе со временем.
    """

    normalize: bool = Field(
        True, description="Приводить время суток к 12:00:00.000 UTC при построении"
    )

    model_config = {"frozen": True}


DEFAULT_OPTIONS: Final[XBDateOptions] = XBDateOptions()

OptionsInput = Union[XBDateOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsInput = None) -> XBDateOptions:
    """
    Слияние пользовательских опций с DEFAULT_OPTIONS.

    Args:
        options: XBDateOptions, mapping с частью полей или None

    Returns:
        XBDateOptions

    Raises:
        pydantic.ValidationError: Если значение опции некорректно
    """
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, XBDateOptions):
        return options
    return XBDateOptions.model_validate({**DEFAULT_OPTIONS.model_dump(), **dict(options)})
