"""
Post-copy hooks.

A hook customizes a target after its properties have been copied. Hooks
are keyed by a (source type, target type) pair, which is discovered from
the callback itself:

- a ``Hook[Source, Target]`` subclass instance::

    class TitleHook(Hook[Book, BookDTO]):
        def extra_mapping(self, source: Book, target: BookDTO) -> None:
            target.name = source.name.title()

- a function whose first two parameters are annotated::

    def title_hook(source: Book, target: BookDTO) -> None: ...

- any callable, with the types given explicitly when registering.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar, get_args, get_origin, get_type_hints

from .exceptions import HookDefinitionError
from .registry import HookCallback, TypeRegistry
from .typespec import is_class, type_label, unwrap_optional

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")


class Hook(ABC, Generic[S, T]):
    """
    Base class for typed hooks.

    Subclasses bind the type parameters and implement ``extra_mapping``,
    which receives the source object and its already populated target.
    """

    @abstractmethod
    def extra_mapping(self, source: S, target: T) -> None:
        pass

    def __call__(self, source: S, target: T) -> None:
        self.extra_mapping(source, target)


def _generic_hook_types(hook: Hook) -> Optional[tuple[Any, Any]]:
    for klass in type(hook).__mro__:
        for base in klass.__dict__.get("__orig_bases__", ()):
            if get_origin(base) is Hook:
                return get_args(base)
    return None


def _annotated_hook_types(callback: HookCallback) -> Optional[tuple[Any, Any]]:
    try:
        params = list(inspect.signature(callback).parameters.values())
    except (TypeError, ValueError):
        return None
    if len(params) < 2:
        return None

    func = callback if inspect.isfunction(callback) or inspect.ismethod(callback) else type(callback).__call__
    try:
        hints = get_type_hints(func)
    except (NameError, TypeError):
        return None
    return hints.get(params[0].name), hints.get(params[1].name)


def hook_types(
    callback: HookCallback,
    source_type: Optional[type] = None,
    target_type: Optional[type] = None,
) -> tuple[type, type]:
    """
    Determine the (source type, target type) pair a hook applies to.

    Explicit types take precedence over what the callback declares.

    Raises:
        HookDefinitionError: If either type cannot be determined
    """
    if source_type is None or target_type is None:
        if isinstance(callback, Hook):
            declared = _generic_hook_types(callback)
        else:
            declared = _annotated_hook_types(callback)
        declared_source, declared_target = declared or (None, None)
        source_type = source_type or unwrap_optional(declared_source)
        target_type = target_type or unwrap_optional(declared_target)

    if not is_class(source_type) or not is_class(target_type):
        raise HookDefinitionError(
            f"Cannot determine source and target types of hook {callback!r}; "
            "subclass Hook[Source, Target], annotate its first two parameters, "
            "or pass source_type and target_type"
        )
    return source_type, target_type


def dispatch(registry: TypeRegistry, source: Any, target: Any) -> bool:
    """
    Run the most specific hook for ``source`` and ``target``, if any.

    Returns:
        True if a hook ran
    """
    callback = registry.find_hook(type(source), type(target))
    if callback is None:
        return False
    logger.debug(f"Running hook for {type_label(type(source))} -> {type_label(type(target))}")
    callback(source, target)
    return True
