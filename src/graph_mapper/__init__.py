"""
graph-mapper.

Map object graphs between structurally related types: entities to DTOs
and back, with nested objects, collections, shared references and cycles.

Usage::

    from graph_mapper import Mapper

    mapper = (
        Mapper()
        .bi_mapping(PhoneEntry, PhoneEntryDTO)
        .bi_mapping(AddressEntry, AddressEntryDTO)
        .strict_mode(True)
    )

    book_dto = mapper.map(book, BookDTO)
    book_again = mapper.map(book_dto, Book)

CLI usage::

    graph-mapper explain shop.models:Book shop.dto:BookDTO
"""

__version__ = "0.1.0"

from .accessors import BindingPlan, PropertyDescriptor
from .config import MapperConfig
from .engine import MappingResult
from .exceptions import (
    HookDefinitionError,
    IncompatibleTypeError,
    MappingError,
    StrictModeViolation,
    UnmappedPropertyError,
)
from .hooks import Hook
from .mapper import Mapper

__all__ = [
    "Mapper",
    "MapperConfig",
    "MappingResult",
    "Hook",
    "BindingPlan",
    "PropertyDescriptor",
    # Errors
    "MappingError",
    "StrictModeViolation",
    "UnmappedPropertyError",
    "IncompatibleTypeError",
    "HookDefinitionError",
    "__version__",
]
