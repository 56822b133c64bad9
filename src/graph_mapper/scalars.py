"""
Scalar and enum conversion.

Two levels of conversion are offered:

- ``convert``: faithful conversions only (same type, subclass, numeric
  widening, enum member lookup by name). Used in every mode.
- ``coerce``: best-effort conversion attempted outside strict mode once
  ``convert`` has failed.

Both return ``UNCONVERTED`` instead of raising when they cannot help.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any

from .constants import WIDENING_CONVERSIONS

UNCONVERTED = object()

_ISO_TYPES = (datetime, date, time)


def _lookup_member(enum_type: type[Enum], name: str) -> Any:
    member = enum_type.__members__.get(name)
    return UNCONVERTED if member is None else member


def convert(value: Any, target_type: type) -> Any:
    """
    Convert a scalar without losing information.

    Enums convert by member name, so reordering either enum never changes
    the result.
    """
    if isinstance(value, target_type):
        # Mixin enums (IntEnum, StrEnum) give up their plain value
        if isinstance(value, Enum) and not issubclass(target_type, Enum):
            return value.value
        return value

    if issubclass(target_type, Enum):
        if isinstance(value, Enum):
            return _lookup_member(target_type, value.name)
        return UNCONVERTED

    widens_to = WIDENING_CONVERSIONS.get(type(value), ())
    if target_type not in widens_to:
        return UNCONVERTED
    try:
        return target_type(value)
    except (TypeError, ValueError, ArithmeticError):
        return UNCONVERTED


def coerce(value: Any, target_type: type) -> Any:
    """Best-effort conversion used outside strict mode."""
    if isinstance(value, Enum) and not issubclass(target_type, Enum):
        value = value.value
        if isinstance(value, target_type):
            return value

    try:
        if issubclass(target_type, Enum):
            return _coerce_enum(value, target_type)
        if issubclass(target_type, _ISO_TYPES) and isinstance(value, str):
            return target_type.fromisoformat(value)
        return target_type(value)
    except (TypeError, ValueError, ArithmeticError):
        return UNCONVERTED


def _coerce_enum(value: Any, target_type: type[Enum]) -> Any:
    if isinstance(value, Enum):
        value = value.value
    try:
        return target_type(value)
    except ValueError:
        if isinstance(value, str):
            return _lookup_member(target_type, value)
        return UNCONVERTED
