"""
Property access for mapped classes.

Enumerates the properties of a class, matches source properties to target
properties by name, and reads, writes and instantiates objects.

Properties are discovered from class metadata, merged along the MRO:

- dataclass fields and class annotations (``ClassVar`` excluded)
- ``property`` objects (readable with a getter, writable with a setter)
- ``__slots__`` entries

Names starting with an underscore are never properties. A class with an
explicitly registered schema is not introspected at all.
"""

import dataclasses
import inspect
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, get_origin, get_type_hints

from .typespec import type_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyDescriptor:
    """A named property of a class and its declared type."""

    name: str
    declared_type: Any = None
    readable: bool = True
    writable: bool = True


@dataclass(frozen=True)
class Binding:
    """A source property paired with the target property it is copied into."""

    source: PropertyDescriptor
    target: PropertyDescriptor


@dataclass(frozen=True)
class BindingPlan:
    """
    How the properties of one type are copied into another.

    Attributes:
        source_type: Concrete source class
        target_type: Concrete target class
        bindings: Matched (source, target) property pairs, in source order
        unmatched_source: Readable source properties with no target
        unmatched_target: Writable target properties nothing is copied into
    """

    source_type: type
    target_type: type
    bindings: tuple[Binding, ...] = ()
    unmatched_source: tuple[str, ...] = ()
    unmatched_target: tuple[str, ...] = ()

    @property
    def is_complete(self) -> bool:
        """True when every property on both sides is matched."""
        return not self.unmatched_source and not self.unmatched_target


def _resolve_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError) as e:
        logger.warning(f"Could not resolve annotations of {type_label(cls)}: {e}")
        return {}


def _property_type(prop: property, hints: Mapping[str, Any], name: str) -> Any:
    if prop.fget is not None:
        try:
            return_type = get_type_hints(prop.fget).get("return")
        except (NameError, TypeError):
            return_type = None
        if return_type is not None:
            return return_type
    return hints.get(name)


def _slot_names(klass: type) -> Iterable[str]:
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return slots


def introspect(cls: type) -> dict[str, PropertyDescriptor]:
    """
    Discover the properties of a class.

    Base classes are visited first so properties keep declaration order;
    a subclass redefining a name replaces the base definition.
    """
    hints = _resolve_hints(cls)
    found: dict[str, PropertyDescriptor] = {}

    for klass in reversed(cls.__mro__):
        if klass is object:
            continue

        for name, annotation in inspect.get_annotations(klass).items():
            resolved = hints.get(name)
            if get_origin(resolved) is ClassVar or resolved is ClassVar:
                continue
            if isinstance(annotation, str) and annotation.startswith("ClassVar"):
                continue
            found[name] = PropertyDescriptor(name, resolved)

        for name in _slot_names(klass):
            if name not in found:
                found[name] = PropertyDescriptor(name, hints.get(name))

        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                found[name] = PropertyDescriptor(
                    name,
                    _property_type(attr, hints, name),
                    readable=attr.fget is not None,
                    writable=attr.fset is not None,
                )

    return {name: desc for name, desc in found.items() if not name.startswith("_")}


def _variations(name: str, suffixes: Iterable[str]) -> list[str]:
    """Alternative target names for a source property, in lookup order."""
    names = [name + suffix for suffix in suffixes]
    for suffix in suffixes:
        if name.endswith(suffix) and len(name) > len(suffix):
            names.append(name[: -len(suffix)])
    return names


class PropertyAccessor:
    """
    Reads, writes and describes the properties of mapped classes.

    Descriptors are computed once per class. Classes listed in ``schemas``
    use the registered ``{name: declared_type}`` table instead of
    introspection.
    """

    def __init__(self, schemas: Optional[Mapping[type, Mapping[str, Any]]] = None):
        self._schemas = dict(schemas or {})
        self._descriptors: dict[type, dict[str, PropertyDescriptor]] = {}
        self._plans: dict[tuple[type, type, tuple[str, ...]], BindingPlan] = {}

    def descriptors(self, cls: type) -> dict[str, PropertyDescriptor]:
        """All properties of ``cls`` keyed by name."""
        cached = self._descriptors.get(cls)
        if cached is None:
            if cls in self._schemas:
                cached = {
                    name: PropertyDescriptor(name, declared_type)
                    for name, declared_type in self._schemas[cls].items()
                }
            else:
                cached = introspect(cls)
            self._descriptors[cls] = cached
        return cached

    def readable(self, cls: type) -> list[PropertyDescriptor]:
        return [d for d in self.descriptors(cls).values() if d.readable]

    def writable(self, cls: type) -> list[PropertyDescriptor]:
        return [d for d in self.descriptors(cls).values() if d.writable]

    def plan(
        self, source_type: type, target_type: type, suffixes: tuple[str, ...]
    ) -> BindingPlan:
        """
        Match the readable properties of ``source_type`` to the writable
        properties of ``target_type``.

        Exact names are matched first. Remaining source properties then try
        ``name + suffix`` and, when the name ends with a suffix, the name
        without it. Matching is case-sensitive and each target property is
        bound at most once.
        """
        key = (source_type, target_type, suffixes)
        cached = self._plans.get(key)
        if cached is not None:
            return cached

        sources = self.readable(source_type)
        targets = {d.name: d for d in self.writable(target_type)}
        matched: dict[str, PropertyDescriptor] = {}

        for source in sources:
            if source.name in targets:
                matched[source.name] = targets.pop(source.name)

        for source in sources:
            if source.name in matched:
                continue
            for candidate in _variations(source.name, suffixes):
                if candidate in targets:
                    matched[source.name] = targets.pop(candidate)
                    break

        plan = BindingPlan(
            source_type=source_type,
            target_type=target_type,
            bindings=tuple(Binding(s, matched[s.name]) for s in sources if s.name in matched),
            unmatched_source=tuple(s.name for s in sources if s.name not in matched),
            unmatched_target=tuple(targets),
        )
        self._plans[key] = plan
        return plan

    @staticmethod
    def get(obj: Any, name: str) -> Any:
        try:
            return getattr(obj, name)
        except AttributeError:
            # Only a failing getter propagates; unassigned attributes and slots read as None
            if isinstance(inspect.getattr_static(type(obj), name, None), property):
                raise
            return None

    @staticmethod
    def set(obj: Any, name: str, value: Any) -> None:
        params = getattr(type(obj), "__dataclass_params__", None)
        if params is not None and params.frozen:
            object.__setattr__(obj, name, value)
        else:
            setattr(obj, name, value)

    @staticmethod
    def instantiate(cls: type) -> Any:
        """
        Create an empty instance of ``cls``.

        Classes whose constructor takes no required arguments are called
        directly. Others are allocated without running ``__init__``; dataclass
        defaults are applied so unmapped fields still exist.
        """
        if not _requires_arguments(cls):
            return cls()

        instance = cls.__new__(cls)
        if dataclasses.is_dataclass(cls):
            for f in dataclasses.fields(cls):
                if f.default is not dataclasses.MISSING:
                    PropertyAccessor.set(instance, f.name, f.default)
                elif f.default_factory is not dataclasses.MISSING:
                    PropertyAccessor.set(instance, f.name, f.default_factory())
        return instance


def _requires_arguments(cls: type) -> bool:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return False
    return any(
        p.default is inspect.Parameter.empty
        and p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)
        for p in signature.parameters.values()
    )
