"""
Strict-mode validation.

Outside strict mode the validator accepts everything and the graph mapper
silently skips what it cannot map.
"""

from typing import Any, Optional

from .accessors import BindingPlan
from .exceptions import IncompatibleTypeError, UnmappedPropertyError
from .typespec import type_label


class StrictValidator:
    """Fails fast on unmatched properties and impossible conversions."""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def check_plan(self, plan: BindingPlan) -> None:
        """
        Reject a binding plan that leaves a property unmatched.

        Both directions count: a source property with nowhere to go, and a
        writable target property nothing is copied into.

        Raises:
            UnmappedPropertyError: In strict mode, for the first unmatched property
        """
        if not self.strict or plan.is_complete:
            return

        source = type_label(plan.source_type)
        target = type_label(plan.target_type)
        if plan.unmatched_source:
            name = plan.unmatched_source[0]
            message = f"Property '{name}' of {source} has no counterpart in {target}"
        else:
            name = plan.unmatched_target[0]
            message = f"Property '{name}' of {target} has no counterpart in {source}"
        raise UnmappedPropertyError(
            message,
            source_type=plan.source_type,
            target_type=plan.target_type,
            property_name=name,
        )

    def incompatible(
        self,
        value: Any,
        target_type: Any,
        property_name: Optional[str] = None,
    ) -> None:
        """
        Report that ``value`` cannot be mapped to ``target_type``.

        Raises:
            IncompatibleTypeError: In strict mode
        """
        if not self.strict:
            return

        location = f" (property '{property_name}')" if property_name else ""
        raise IncompatibleTypeError(
            f"Cannot map {type_label(type(value))} value {value!r} "
            f"to {type_label(target_type)}{location}",
            source_type=type(value),
            target_type=target_type,
            property_name=property_name,
        )
