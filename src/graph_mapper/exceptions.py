"""
Exception hierarchy for graph-mapper.

All errors raised by the library inherit from MappingError. Only
StrictModeViolation (and its subclasses) can surface from a ``map`` call;
HookDefinitionError is raised while configuring a Mapper.
"""

from typing import Any, Optional


def _type_name(tp: Any) -> Optional[str]:
    if tp is None:
        return None
    return getattr(tp, "__qualname__", None) or repr(tp)


class MappingError(Exception):
    """Base class for every exception raised by graph-mapper."""


class HookDefinitionError(MappingError):
    """Raised when a hook's source and target types cannot be determined."""


class StrictModeViolation(MappingError):
    """
    Raised in strict mode when a source cannot be mapped faithfully.

    Signals a schema mismatch between source and target types, never a
    transient condition.

    Attributes:
        source_type: Runtime type of the value being mapped
        target_type: Type it was being mapped to
        property_name: Offending property, when the violation concerns one
    """

    def __init__(
        self,
        message: str,
        source_type: Any = None,
        target_type: Any = None,
        property_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.source_type = source_type
        self.target_type = target_type
        self.property_name = property_name

    def to_dict(self) -> dict[str, Any]:
        """Convert the violation to a plain dict for reporting."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "source_type": _type_name(self.source_type),
            "target_type": _type_name(self.target_type),
            "property": self.property_name,
        }


class UnmappedPropertyError(StrictModeViolation):
    """A property on one side has no counterpart on the other side."""


class IncompatibleTypeError(StrictModeViolation):
    """A value cannot be converted to the required target type."""
