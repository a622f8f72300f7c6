"""
Domain models and value objects.

Contains the UTC date value (XBDate), its options, calendar units and the
tagged constraint variants.
"""

from xbdate.core.domain.units import DEFAULT_PRECISION, DateUnit
from xbdate.core.domain.options import DEFAULT_OPTIONS, XBDateOptions, resolve_options
from xbdate.core.domain.constraints import (
    DateConstraint,
    DateRangeConstraint,
    PredicateConstraint,
    SingleDateConstraint,
)
from xbdate.core.domain.date_value import DateInput, XBDate

__all__ = [
    # Units
    "DateUnit",
    "DEFAULT_PRECISION",
    # Options
    "XBDateOptions",
    "DEFAULT_OPTIONS",
    "resolve_options",
    # Constraints
    "DateConstraint",
    "SingleDateConstraint",
    "DateRangeConstraint",
    "PredicateConstraint",
    # Date value
    "DateInput",
    "XBDate",
]
