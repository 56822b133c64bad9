"""
Interpretation of declared property types.

Target properties declare their types with ordinary annotations
(``Optional[BookDTO]``, ``list[EntryDTO]``, ``dict[int, EntryDTO]``).
These helpers reduce such annotations to what the graph mapper needs:
the element/key/value types of containers and the concrete class of
single values.
"""

import collections.abc
import types
from dataclasses import dataclass
from typing import Any, Optional, TypeVar, Union, get_args, get_origin

from .constants import SCALAR_TYPES

_NONE_TYPE = type(None)

_LIST_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Collection,
    collections.abc.Iterable,
)
_SET_ORIGINS = (set, collections.abc.Set, collections.abc.MutableSet)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


@dataclass(frozen=True)
class SequenceSpec:
    """Container kind and element type of a declared sequence type."""

    kind: type
    element_type: Any = None


@dataclass(frozen=True)
class MappingSpec:
    """Key and value types of a declared mapping type."""

    key_type: Any = None
    value_type: Any = None


def is_class(tp: Any) -> bool:
    """True for plain classes; parameterized generics such as ``list[int]`` are not."""
    return isinstance(tp, type) and get_origin(tp) is None


def is_untyped(tp: Any) -> bool:
    """True when a declared type gives no guidance (missing, Any, object, TypeVar)."""
    return tp is None or tp is Any or tp is object or isinstance(tp, TypeVar)


def is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def unwrap_optional(tp: Any) -> Any:
    """
    Strip ``None`` from a union.

    ``Optional[X]`` and ``X | None`` become ``X``; unions with several
    remaining members are returned without their ``None`` member.
    """
    if not is_union(tp):
        return tp
    members = tuple(arg for arg in get_args(tp) if arg is not _NONE_TYPE)
    if len(members) == 1:
        return members[0]
    return Union[members]


def is_scalar_type(tp: Any) -> bool:
    return is_class(tp) and issubclass(tp, SCALAR_TYPES)


def is_scalar_value(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


def sequence_spec(tp: Any) -> Optional[SequenceSpec]:
    """
    Describe a declared sequence type, or return None if it is not one.

    Abstract sequence annotations (``Sequence[X]``, ``Iterable[X]``) produce
    lists. Heterogeneous tuples (``tuple[int, str]``) have untyped elements.
    """
    origin = get_origin(tp) or tp
    args = get_args(tp)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return SequenceSpec(tuple, args[0])
        return SequenceSpec(tuple)
    if origin is frozenset:
        return SequenceSpec(frozenset, args[0] if args else None)
    if origin in _SET_ORIGINS:
        return SequenceSpec(set, args[0] if args else None)
    if origin in _LIST_ORIGINS:
        return SequenceSpec(list, args[0] if args else None)
    return None


def mapping_spec(tp: Any) -> Optional[MappingSpec]:
    """Describe a declared mapping type, or return None if it is not one."""
    origin = get_origin(tp) or tp
    if origin not in _MAPPING_ORIGINS:
        return None
    args = get_args(tp)
    if len(args) == 2:
        return MappingSpec(args[0], args[1])
    return MappingSpec()


def choose_union_member(value: Any, tp: Any) -> Any:
    """
    Pick the member of a union that a value should be mapped to.

    Prefers a member the value is already an instance of, then a member of
    the same kind (scalar or structured), then the first member.
    """
    members = [arg for arg in get_args(tp) if is_class(arg)]
    if not members:
        return None
    for member in members:
        if isinstance(value, member):
            return member
    scalar = is_scalar_value(value)
    for member in members:
        if is_scalar_type(member) == scalar:
            return member
    return members[0]


def type_label(tp: Any) -> str:
    """Readable name of a type for log and error messages."""
    if is_class(tp):
        return tp.__qualname__
    return repr(tp)
