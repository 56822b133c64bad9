"""
Public mapping API.

This module provides the Mapper class: a fluent configuration surface
over the graph mapper.

Example:
    from graph_mapper import Mapper

    mapper = (
        Mapper()
        .mapping(PhoneEntry, PhoneEntryDTO)
        .mapping(AddressEntry, AddressEntryDTO)
        .strict_mode(True)
    )

    book_dto = mapper.map(book, BookDTO)
    dtos = mapper.map([book1, book2], BookDTO)
    by_id = mapper.map({1: book1, 2: book2}, int, BookDTO)
"""

import logging
import threading
from dataclasses import replace
from typing import Any, Optional

from .accessors import BindingPlan, PropertyAccessor
from .config import MapperConfig
from .engine import GraphMapper, MappingConfiguration, MappingResult
from .hooks import hook_types
from .registry import HookCallback
from .typespec import type_label

logger = logging.getLogger(__name__)


def _top_level_request(target_type: Any, value_type: Any) -> Any:
    """Fold the key and value types of a mapping call into ``dict[K, V]``."""
    if value_type is not None:
        return dict[target_type, value_type]
    return target_type


class Mapper:
    """
    Maps object graphs between structurally related types.

    Configuration methods return the mapper itself so they can be chained.
    Each of them publishes a new immutable configuration snapshot; a
    ``map`` call reads the snapshot once, so concurrent calls are safe and
    unaffected by later reconfiguration.

    Attributes:
        configuration: The current configuration snapshot
    """

    def __init__(self, config: Optional[MapperConfig] = None):
        """
        Initialize the mapper.

        Args:
            config: Optional starting settings. Defaults to MapperConfig().
        """
        config = config or MapperConfig()
        self._lock = threading.Lock()
        self._schemas: dict[type, dict[str, Any]] = {}
        self.configuration = MappingConfiguration(
            strict_mode=config.strict_mode,
            name_suffixes=tuple(config.name_suffixes),
        )

    @classmethod
    def from_config(cls, config: MapperConfig) -> "Mapper":
        return cls(config)

    @classmethod
    def from_env(cls) -> "Mapper":
        """Create a mapper configured from GRAPH_MAPPER_* environment variables."""
        return cls(MapperConfig.from_env())

    @property
    def is_strict(self) -> bool:
        return self.configuration.strict_mode

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def mapping(self, source_type: type, target_type: type) -> "Mapper":
        """Register a one-directional explicit mapping."""
        self._register(source_type, target_type, bidirectional=False)
        return self

    def bi_mapping(self, source_type: type, target_type: type) -> "Mapper":
        """Register an explicit mapping in both directions."""
        self._register(source_type, target_type, bidirectional=True)
        return self

    def _register(self, source_type: type, target_type: type, bidirectional: bool) -> None:
        with self._lock:
            registry = self.configuration.registry.copy()
            registry.register(source_type, target_type, bidirectional)
            self.configuration = replace(self.configuration, registry=registry)
        arrow = "<->" if bidirectional else "->"
        logger.info(f"Mapping {type_label(source_type)} {arrow} {type_label(target_type)}")

    def hook(
        self,
        callback: HookCallback,
        source_type: Optional[type] = None,
        target_type: Optional[type] = None,
    ) -> "Mapper":
        """
        Register a post-copy hook.

        Args:
            callback: A Hook instance, a function with annotated
                ``(source, target)`` parameters, or any callable
            source_type: Source type, if not declared by the callback
            target_type: Target type, if not declared by the callback

        Raises:
            HookDefinitionError: If the type pair cannot be determined
        """
        source_type, target_type = hook_types(callback, source_type, target_type)
        with self._lock:
            registry = self.configuration.registry.copy()
            registry.add_hook(source_type, target_type, callback)
            self.configuration = replace(self.configuration, registry=registry)
        logger.info(f"Hook {type_label(source_type)} -> {type_label(target_type)}")
        return self

    def strict_mode(self, enabled: bool = True) -> "Mapper":
        """Enable or disable strict validation."""
        with self._lock:
            self.configuration = replace(self.configuration, strict_mode=enabled)
        logger.info(f"Strict mode {'enabled' if enabled else 'disabled'}")
        return self

    def name_suffixes(self, *suffixes: str) -> "Mapper":
        """Replace the suffixes tolerated between source and target property names."""
        with self._lock:
            self.configuration = replace(self.configuration, name_suffixes=tuple(suffixes))
        logger.info(f"Name suffixes set to {suffixes}")
        return self

    def schema(self, cls: type, **property_types: Any) -> "Mapper":
        """
        Declare the properties of ``cls`` explicitly instead of introspecting it.

        Example:
            mapper.schema(LegacyBook, id=int, name=str)
        """
        with self._lock:
            self._schemas[cls] = dict(property_types)
            accessor = PropertyAccessor(self._schemas)
            self.configuration = replace(self.configuration, accessor=accessor)
        logger.info(f"Schema for {type_label(cls)}: {sorted(property_types)}")
        return self

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def binding_plan(self, source_type: type, target_type: type) -> BindingPlan:
        """Show how properties of ``source_type`` would be copied into ``target_type``."""
        return self.configuration.plan(source_type, target_type)

    def convert(self, value: Any, target_type: Any, value_type: Any = None) -> MappingResult:
        """
        Map ``value`` and report what was skipped.

        Takes the same arguments as ``map``.
        """
        request = _top_level_request(target_type, value_type)
        return GraphMapper(self.configuration).map(value, request)

    def map(self, value: Any, target_type: Any, value_type: Any = None) -> Any:
        """
        Map a value, a sequence or a mapping.

        Args:
            value: Source object, list/tuple/set of objects, or dict
            target_type: Target class; for a sequence the element class; for
                a dict the key class when ``value_type`` is given, otherwise
                the value class. Container annotations (``list[BookDTO]``,
                ``dict[int, BookDTO]``) are accepted as well.
            value_type: Target class of dict values

        Returns:
            The mapped value; None if ``value`` is None

        Raises:
            StrictModeViolation: In strict mode, if the graph cannot be
                mapped faithfully
        """
        return self.convert(value, target_type, value_type).value
