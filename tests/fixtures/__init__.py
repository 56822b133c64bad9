"""Test fixtures for graph-mapper tests."""

from .models import (
    A,
    AddressEntry,
    AddressEntryDTO,
    B,
    Book,
    BookDTO,
    BookEntry,
    BookEntryDTO,
    Color,
    ColorDTO,
    EnumSource,
    EnumSourceDTO,
    FullPointDTO,
    Measurement,
    MeasurementDTO,
    ModelWithEnum,
    ModelWithEnumDTO,
    NameVariationTest,
    NameVariationTestDTO,
    Node,
    NodeDTO,
    Pair,
    PairDTO,
    PhoneEntry,
    PhoneEntryDTO,
    Point,
    PointDTO,
    create_chain,
    create_test_book,
)

__all__ = [
    "A",
    "AddressEntry",
    "AddressEntryDTO",
    "B",
    "Book",
    "BookDTO",
    "BookEntry",
    "BookEntryDTO",
    "Color",
    "ColorDTO",
    "EnumSource",
    "EnumSourceDTO",
    "FullPointDTO",
    "Measurement",
    "MeasurementDTO",
    "ModelWithEnum",
    "ModelWithEnumDTO",
    "NameVariationTest",
    "NameVariationTestDTO",
    "Node",
    "NodeDTO",
    "Pair",
    "PairDTO",
    "PhoneEntry",
    "PhoneEntryDTO",
    "Point",
    "PointDTO",
    "create_chain",
    "create_test_book",
]
