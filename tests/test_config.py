"""Tests for mapper settings and the error taxonomy."""

import pytest

from graph_mapper import (
    IncompatibleTypeError,
    Mapper,
    MapperConfig,
    MappingError,
    StrictModeViolation,
    UnmappedPropertyError,
)
from graph_mapper.constants import DEFAULT_NAME_SUFFIXES, ENV_NAME_SUFFIXES, ENV_STRICT_MODE

from .fixtures import A, B, NameVariationTest


class TestMapperConfig:
    """Tests for MapperConfig."""

    def test_defaults(self):
        config = MapperConfig()

        assert config.strict_mode is False
        assert config.name_suffixes == DEFAULT_NAME_SUFFIXES

    def test_from_empty_env(self):
        assert MapperConfig.from_env({}) == MapperConfig()

    @pytest.mark.parametrize("raw", ["1", "true", "TRUE", " yes ", "on"])
    def test_strict_mode_enabled(self, raw):
        assert MapperConfig.from_env({ENV_STRICT_MODE: raw}).strict_mode is True

    @pytest.mark.parametrize("raw", ["0", "false", "no", ""])
    def test_strict_mode_disabled(self, raw):
        assert MapperConfig.from_env({ENV_STRICT_MODE: raw}).strict_mode is False

    def test_name_suffixes(self):
        config = MapperConfig.from_env({ENV_NAME_SUFFIXES: "Out, _out,,"})

        assert config.name_suffixes == ("Out", "_out")

    def test_empty_suffixes_disable_variations(self):
        assert MapperConfig.from_env({ENV_NAME_SUFFIXES: ""}).name_suffixes == ()

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_STRICT_MODE, "true")

        assert Mapper.from_env().is_strict


class TestMapperConfiguration:
    """Tests for configuring a Mapper."""

    def test_from_config(self):
        mapper = Mapper.from_config(MapperConfig(strict_mode=True, name_suffixes=("Out",)))

        assert mapper.is_strict
        assert mapper.configuration.name_suffixes == ("Out",)

    def test_strict_mode_toggle(self):
        mapper = Mapper().strict_mode(True)
        assert mapper.is_strict

        mapper.strict_mode(False)
        assert not mapper.is_strict

    def test_fluent_methods_return_mapper(self):
        mapper = Mapper()

        assert mapper.mapping(A, B) is mapper
        assert mapper.bi_mapping(A, B) is mapper
        assert mapper.strict_mode() is mapper
        assert mapper.name_suffixes("X") is mapper
        assert mapper.schema(A, name=str) is mapper

    def test_reconfiguring_publishes_new_snapshot(self):
        """A snapshot already taken is never modified."""
        mapper = Mapper()
        before = mapper.configuration

        mapper.mapping(A, B).strict_mode(True)

        assert before.registry.explicit_targets(A) == ()
        assert before.strict_mode is False
        assert mapper.configuration.registry.explicit_targets(A) == (B,)

    def test_name_suffixes_change_binding_plan(self):
        mapper = Mapper().name_suffixes()

        plan = mapper.binding_plan(NameVariationTest, NameVariationTest)

        assert plan.is_complete

    def test_schema_makes_class_mappable(self):
        """A declared schema replaces introspection for that class."""
        mapper = Mapper().schema(A, name=str).strict_mode(True)
        source = A()
        source.name = "from schema"

        target = mapper.map(source, B)

        assert target.name == "from schema"


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(StrictModeViolation, MappingError)
        assert issubclass(UnmappedPropertyError, StrictModeViolation)
        assert issubclass(IncompatibleTypeError, StrictModeViolation)

    def test_to_dict(self):
        error = UnmappedPropertyError(
            "Property 'label' of Point has no counterpart in PointDTO",
            source_type=A,
            target_type=B,
            property_name="label",
        )

        assert error.to_dict() == {
            "error": "UnmappedPropertyError",
            "message": "Property 'label' of Point has no counterpart in PointDTO",
            "source_type": "A",
            "target_type": "B",
            "property": "label",
        }

    def test_to_dict_without_details(self):
        data = IncompatibleTypeError("boom").to_dict()

        assert data["source_type"] is None
        assert data["property"] is None

    def test_str_is_message(self):
        assert str(StrictModeViolation("bad mapping")) == "bad mapping"
