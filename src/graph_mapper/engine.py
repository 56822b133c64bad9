"""
Graph mapper - the traversal that turns a source graph into a target graph.

This module provides the GraphMapper class which maps a single value, a
sequence or a mapping, consulting the type registry for concrete target
types, the identity cache for already mapped objects, and the hooks once
an object is fully populated.

Objects are not mapped by native recursion. When an object is first met,
its target is instantiated and cached immediately and two tasks are
pushed on a LIFO worklist: one that copies its properties and, beneath
it, one that runs its hook. Everything reachable through the properties
is therefore populated before the hook runs, and long chains of objects
never deepen the Python call stack.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from . import hooks, scalars
from .accessors import BindingPlan, PropertyAccessor
from .cache import IdentityCache
from .constants import DEFAULT_NAME_SUFFIXES, SEQUENCE_TYPES
from .registry import TypeRegistry
from .scalars import UNCONVERTED
from .typespec import (
    MappingSpec,
    SequenceSpec,
    is_class,
    is_scalar_type,
    is_scalar_value,
    mapping_spec,
    sequence_spec,
    type_label,
    unwrap_optional,
)
from .validator import StrictValidator

logger = logging.getLogger(__name__)

_FILL = "fill"
_FINISH = "finish"


@dataclass(frozen=True)
class MappingConfiguration:
    """
    Immutable snapshot of everything a mapping run reads.

    A Mapper publishes a new snapshot on every configuration change, so a
    running ``map`` call never observes a half-applied change.
    """

    registry: TypeRegistry = field(default_factory=TypeRegistry)
    accessor: PropertyAccessor = field(default_factory=PropertyAccessor)
    strict_mode: bool = False
    name_suffixes: tuple[str, ...] = DEFAULT_NAME_SUFFIXES

    def plan(self, source_type: type, target_type: type) -> BindingPlan:
        return self.accessor.plan(source_type, target_type, self.name_suffixes)


@dataclass
class MappingContext:
    """
    State of one top-level mapping call.

    Attributes:
        configuration: The snapshot this call runs against
        cache: Source object -> target object, by identity
        validator: Strict-mode checks
        worklist: Pending fill/finish tasks
        skipped: Values and properties dropped outside strict mode
        objects_mapped: Number of structured targets built
    """

    configuration: MappingConfiguration
    cache: IdentityCache = field(default_factory=IdentityCache)
    validator: StrictValidator = field(default_factory=StrictValidator)
    worklist: list[tuple] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    objects_mapped: int = 0

    def skip(self, message: str) -> None:
        logger.debug(f"Skipped: {message}")
        self.skipped.append(message)


@dataclass
class MappingResult:
    """
    Result of a top-level mapping call.

    Attributes:
        value: The mapped value (None when the source was None)
        skipped: What was dropped outside strict mode
        objects_mapped: Number of structured targets built
    """

    value: Any
    skipped: list[str] = field(default_factory=list)
    objects_mapped: int = 0

    @property
    def has_skips(self) -> bool:
        return len(self.skipped) > 0


def _container_kind(value: Any) -> type:
    for kind in SEQUENCE_TYPES:
        if isinstance(value, kind):
            return kind
    return list


class GraphMapper:
    """
    Maps values against one configuration snapshot.

    Example:
        engine = GraphMapper(MappingConfiguration(strict_mode=True))
        result = engine.map(book, BookDTO)
        book_dto = result.value
    """

    def __init__(self, configuration: MappingConfiguration):
        self.configuration = configuration

    def map(self, value: Any, requested: Any) -> MappingResult:
        """
        Map ``value`` to ``requested``.

        ``requested`` is a class, or a container annotation such as
        ``list[BookDTO]`` or ``dict[int, BookDTO]`` when ``value`` is a
        container. A fresh identity cache is used for every call.

        Raises:
            StrictModeViolation: In strict mode, when the graph cannot be
                mapped faithfully. No partial result is returned.
        """
        context = MappingContext(
            configuration=self.configuration,
            validator=StrictValidator(self.configuration.strict_mode),
        )
        mapped = self._map_value(value, requested, context)
        self._drain(context)

        if mapped is UNCONVERTED:
            mapped = None
        return MappingResult(
            value=mapped,
            skipped=context.skipped,
            objects_mapped=context.objects_mapped,
        )

    def _drain(self, context: MappingContext) -> None:
        while context.worklist:
            task = context.worklist.pop()
            if task[0] == _FILL:
                _, source, target, plan = task
                self._fill(source, target, plan, context)
            else:
                _, source, target = task
                hooks.dispatch(context.configuration.registry, source, target)

    def _map_value(
        self,
        value: Any,
        requested: Any,
        context: MappingContext,
        property_name: Optional[str] = None,
    ) -> Any:
        if value is None:
            return None

        requested = unwrap_optional(requested)

        # A container requested as a plain type maps its elements to that type
        if isinstance(value, Mapping):
            spec = mapping_spec(requested) or MappingSpec(value_type=requested)
            return self._map_mapping(value, spec, context)

        if isinstance(value, SEQUENCE_TYPES):
            spec = sequence_spec(requested) or SequenceSpec(_container_kind(value), requested)
            return self._map_sequence(value, spec, context)

        return self._map_object(value, requested, context, property_name)

    def _map_sequence(self, value: Any, spec: SequenceSpec, context: MappingContext) -> Any:
        items = []
        for element in value:
            mapped = self._map_value(element, spec.element_type, context)
            items.append(None if mapped is UNCONVERTED else mapped)
        if spec.kind is list:
            return items
        return spec.kind(items)

    def _map_mapping(self, value: Mapping, spec: MappingSpec, context: MappingContext) -> dict:
        result = {}
        for key, item in value.items():
            mapped_key = self._map_value(key, spec.key_type, context)
            if mapped_key is UNCONVERTED:
                continue
            mapped_item = self._map_value(item, spec.value_type, context)
            result[mapped_key] = None if mapped_item is UNCONVERTED else mapped_item
        return result

    def _map_object(
        self,
        value: Any,
        requested: Any,
        context: MappingContext,
        property_name: Optional[str],
    ) -> Any:
        cached = context.cache.get(value)
        if cached is not IdentityCache.MISS:
            logger.debug(f"Identity cache hit for {type_label(type(value))}")
            return cached

        configuration = context.configuration
        target_type = configuration.registry.resolve_target_type(value, requested)

        # A container annotation cannot hold a single value
        if sequence_spec(target_type) is not None or mapping_spec(target_type) is not None:
            return self._incompatible(value, target_type, context, property_name)

        # Untyped, or a typing construct that is not a class (Literal, Callable...)
        if target_type is None or not is_class(target_type):
            return value

        source_is_scalar = is_scalar_value(value)
        if source_is_scalar != is_scalar_type(target_type):
            return self._incompatible(value, target_type, context, property_name)
        if source_is_scalar:
            return self._map_scalar(value, target_type, context, property_name)

        target = configuration.accessor.instantiate(target_type)
        context.cache.put(value, target)
        context.objects_mapped += 1

        plan = configuration.plan(type(value), target_type)
        context.validator.check_plan(plan)
        for name in plan.unmatched_source:
            context.skip(
                f"{type_label(type(value))}.{name} has no counterpart in {type_label(target_type)}"
            )

        context.worklist.append((_FINISH, value, target))
        context.worklist.append((_FILL, value, target, plan))
        return target

    def _fill(self, source: Any, target: Any, plan: BindingPlan, context: MappingContext) -> None:
        accessor = context.configuration.accessor
        for binding in plan.bindings:
            raw = accessor.get(source, binding.source.name)
            mapped = self._map_value(raw, binding.target.declared_type, context, binding.target.name)
            if mapped is UNCONVERTED:
                continue
            accessor.set(target, binding.target.name, mapped)

    def _map_scalar(
        self,
        value: Any,
        target_type: type,
        context: MappingContext,
        property_name: Optional[str],
    ) -> Any:
        converted = scalars.convert(value, target_type)
        if converted is not UNCONVERTED:
            return converted

        context.validator.incompatible(value, target_type, property_name)
        coerced = scalars.coerce(value, target_type)
        if coerced is UNCONVERTED:
            context.skip(f"{value!r} could not be converted to {type_label(target_type)}")
        return coerced

    def _incompatible(
        self,
        value: Any,
        target_type: Any,
        context: MappingContext,
        property_name: Optional[str],
    ) -> Any:
        context.validator.incompatible(value, target_type, property_name)
        context.skip(f"{type_label(type(value))} cannot be mapped to {type_label(target_type)}")
        return UNCONVERTED
