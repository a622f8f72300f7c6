"""
Core math modules для xbdate

Календарные примитивы UTC и сравнение дат с заданной точностью.
"""

# Calendar primitives
from xbdate.core.math.calendar import (
    EPOCH_UTC,
    INVALID_DATE_STRING,
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

# Comparison
from xbdate.core.math.comparison import (
    ComparisonOperator,
    comparable_date,
    compare,
)

__all__ = [
    # Calendar — Constants
    "EPOCH_UTC",
    "INVALID_DATE_STRING",
    "INVALID_INSTANT",
    "InvalidInstant",
    # Calendar — Functions
    "calendar_fields",
    "format_iso",
    "negate_amount",
    "parse_instant",
    "replace_calendar_field",
    "shift_calendar_fields",
    "to_epoch_milliseconds",
    "utc_from_fields",
    # Comparison
    "ComparisonOperator",
    "comparable_date",
    "compare",
]
