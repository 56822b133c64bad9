"""Tests for the graph-mapper CLI."""

import pytest
from click.testing import CliRunner

from graph_mapper import __version__
from graph_mapper.cli import load_class, main
from graph_mapper.constants import ENV_NAME_SUFFIXES

from .fixtures import Book, ModelWithEnum

MODELS = "tests.fixtures.models"


@pytest.fixture
def runner():
    return CliRunner()


class TestLoadClass:
    """Tests for resolving module:Class paths."""

    def test_top_level_class(self):
        assert load_class(f"{MODELS}:Book") is Book

    def test_nested_class(self):
        assert load_class(f"{MODELS}:ModelWithEnum.MyEnum") is ModelWithEnum.MyEnum


class TestExplainCommand:
    """Tests for the explain command."""

    def test_all_matched(self, runner):
        """Should list bindings and report a complete match."""
        result = runner.invoke(main, ["explain", f"{MODELS}:Book", f"{MODELS}:BookDTO"])

        assert result.exit_code == 0
        assert "Book -> BookDTO" in result.output
        assert "  entries_by_id -> entries_by_id" in result.output
        assert "All properties matched" in result.output

    def test_name_variations_shown(self, runner):
        result = runner.invoke(main, ["explain", f"{MODELS}:BookEntry", f"{MODELS}:BookEntryDTO"])

        assert result.exit_code == 0
        assert "  book -> book_dto" in result.output

    def test_unmatched_properties(self, runner):
        """Should list unmatched properties on both sides."""
        result = runner.invoke(main, ["explain", f"{MODELS}:Point", f"{MODELS}:B"])

        assert result.exit_code == 0
        assert "Unmatched source properties:" in result.output
        assert "  - label" in result.output
        assert "Unmatched target properties:" in result.output
        assert "  - name" in result.output
        assert "All properties matched" not in result.output

    def test_strict_fails_on_unmatched(self, runner):
        result = runner.invoke(
            main, ["explain", f"{MODELS}:Point", f"{MODELS}:PointDTO", "--strict"]
        )

        assert result.exit_code == 1

    def test_strict_passes_when_complete(self, runner):
        result = runner.invoke(
            main, ["explain", f"{MODELS}:Point", f"{MODELS}:FullPointDTO", "--strict"]
        )

        assert result.exit_code == 0

    def test_custom_suffix(self, runner):
        """--suffix replaces the default suffixes."""
        result = runner.invoke(
            main,
            [
                "explain",
                f"{MODELS}:NameVariationTest",
                f"{MODELS}:NameVariationTestDTO",
                "--suffix",
                "Other",
            ],
        )

        assert result.exit_code == 0
        assert "testDTO" not in result.output.split("Unmatched")[0]
        assert "  - testDTO" in result.output

    def test_suffixes_from_environment(self, runner):
        result = runner.invoke(
            main,
            ["explain", f"{MODELS}:BookEntry", f"{MODELS}:BookEntryDTO", "--strict"],
            env={ENV_NAME_SUFFIXES: "DTO"},
        )

        assert result.exit_code == 1
        assert "  - book_dto" in result.output

    @pytest.mark.parametrize(
        "path",
        [
            "no_colon",
            "does.not.exist:Thing",
            f"{MODELS}:Missing",
            f"{MODELS}:create_test_book",
        ],
    )
    def test_bad_class_path(self, runner, path):
        result = runner.invoke(main, ["explain", path, f"{MODELS}:BookDTO"])

        assert result.exit_code == 2

    def test_missing_arguments(self, runner):
        result = runner.invoke(main, ["explain"])

        assert result.exit_code != 0


class TestMain:
    """Tests for the command group."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "explain" in result.output

    def test_verbose(self, runner):
        result = runner.invoke(
            main, ["-v", "explain", f"{MODELS}:Book", f"{MODELS}:BookDTO"]
        )

        assert result.exit_code == 0
