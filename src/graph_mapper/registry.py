"""
Type registry: explicit type mappings and hook registrations.
"""

import logging
from collections.abc import Callable
from typing import Any, Optional, get_args

from .typespec import choose_union_member, is_class, is_union, is_untyped, type_label

logger = logging.getLogger(__name__)

HookCallback = Callable[[Any, Any], None]


def _accepts(target_type: type, requested: Any) -> bool:
    if is_untyped(requested):
        return True
    if is_union(requested):
        return any(_accepts(target_type, member) for member in get_args(requested))
    return is_class(requested) and issubclass(target_type, requested)


class TypeRegistry:
    """
    Explicit (source type, target type) mappings and post-copy hooks.

    Explicit mappings drive polymorphic mapping: an element declared as a
    base DTO is built as the DTO registered for the element's runtime type.

    A registry is mutated only while a Mapper is being configured; the
    Mapper publishes copies, so a registry seen by a running ``map`` call
    never changes.
    """

    def __init__(self) -> None:
        self._mappings: dict[type, list[type]] = {}
        self._hooks: dict[tuple[type, type], HookCallback] = {}

    def copy(self) -> "TypeRegistry":
        clone = TypeRegistry()
        clone._mappings = {source: list(targets) for source, targets in self._mappings.items()}
        clone._hooks = dict(self._hooks)
        return clone

    @property
    def mappings(self) -> list[tuple[type, type]]:
        """All registered (source, target) pairs, both directions included."""
        return [(source, target) for source, targets in self._mappings.items() for target in targets]

    @property
    def hooks(self) -> dict[tuple[type, type], HookCallback]:
        return dict(self._hooks)

    def register(self, source_type: type, target_type: type, bidirectional: bool = False) -> None:
        """
        Register an explicit mapping.

        With ``bidirectional`` the reverse pair is registered as well, so
        targets can be mapped back to their sources.
        """
        self._add(source_type, target_type)
        if bidirectional:
            self._add(target_type, source_type)

    def _add(self, source_type: type, target_type: type) -> None:
        targets = self._mappings.setdefault(source_type, [])
        if target_type not in targets:
            targets.append(target_type)
            logger.debug(f"Registered mapping {type_label(source_type)} -> {type_label(target_type)}")

    def explicit_targets(self, source_type: type) -> tuple[type, ...]:
        return tuple(self._mappings.get(source_type, ()))

    def resolve_target_type(self, source: Any, requested: Any) -> Optional[type]:
        """
        Decide which concrete type to build for ``source``.

        An explicit mapping for the runtime type of ``source`` wins when its
        target fits ``requested``. Otherwise ``requested`` is used; for a
        union, the member that best fits ``source``. Returns None when
        ``requested`` is untyped and no explicit mapping applies.
        """
        for target_type in self._mappings.get(type(source), ()):
            if _accepts(target_type, requested):
                return target_type

        if is_untyped(requested):
            return None
        if is_union(requested):
            return choose_union_member(source, requested)
        return requested

    def add_hook(self, source_type: type, target_type: type, callback: HookCallback) -> None:
        key = (source_type, target_type)
        if key in self._hooks:
            logger.warning(
                f"Replacing hook for {type_label(source_type)} -> {type_label(target_type)}"
            )
        self._hooks[key] = callback

    def find_hook(self, source_type: type, target_type: type) -> Optional[HookCallback]:
        """
        Find the most specific hook for a resolved type pair.

        The source ancestry is walked from the concrete class upwards; for
        each ancestor the target ancestry is walked the same way. The first
        registered pair wins, so a hook for a base class covers every
        subclass that has no hook of its own.
        """
        if not self._hooks:
            return None
        for source_ancestor in source_type.__mro__:
            for target_ancestor in target_type.__mro__:
                callback = self._hooks.get((source_ancestor, target_ancestor))
                if callback is not None:
                    return callback
        return None
