"""
Constants and lookup tables for object-graph mapping.

Centralizes the scalar type table, numeric widening rules and
configuration defaults.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from uuid import UUID

# Target property name suffixes tried during name-variation matching.
# A source property ``test`` matches a target property ``testDTO`` or ``test_dto``.
DEFAULT_NAME_SUFFIXES: tuple[str, ...] = ("DTO", "_dto")

# Environment variables read by MapperConfig.from_env()
ENV_STRICT_MODE = "GRAPH_MAPPER_STRICT_MODE"
ENV_NAME_SUFFIXES = "GRAPH_MAPPER_NAME_SUFFIXES"

TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})

# Types copied by value conversion instead of property-by-property mapping.
# Subclasses count too, so every Enum is scalar-like.
SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    str,
    bytes,
    datetime,
    date,
    time,
    timedelta,
    UUID,
    PurePath,
    Enum,
)

# Lossless numeric conversions: source type -> targets it may widen into.
WIDENING_CONVERSIONS: dict[type, tuple[type, ...]] = {
    bool: (int, float, complex, Decimal, Fraction),
    int: (float, complex, Decimal, Fraction),
    Fraction: (float, complex),
    float: (complex,),
}

# Built-in containers mapped element by element.
SEQUENCE_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)
