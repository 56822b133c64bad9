"""
Command-line interface for graph-mapper.

Inspects how the properties of one class would be copied into another,
which helps when setting up strict-mode mappings.
"""

import importlib
import logging
import sys

import click

from . import __version__
from .mapper import Mapper


def load_class(path: str) -> type:
    """
    Import a class from a ``package.module:ClassName`` path.

    Nested classes are reached with dots after the colon
    (``module:Outer.Inner``).
    """
    module_name, sep, qualname = path.partition(":")
    if not sep or not module_name or not qualname:
        raise click.BadParameter(f"Expected 'module:Class', got '{path}'")

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module '{module_name}': {e}")

    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise click.BadParameter(f"'{qualname}' not found in module '{module_name}'")

    if not isinstance(obj, type):
        raise click.BadParameter(f"'{path}' is not a class")
    return obj


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log mapper activity to stderr")
def main(verbose: bool) -> None:
    """
    graph-mapper.

    Map object graphs between structurally related types.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("source")
@click.argument("target")
@click.option(
    "--suffix",
    "suffixes",
    multiple=True,
    help="Target name suffix to tolerate (repeatable, replaces the defaults)",
)
@click.option("--strict", is_flag=True, help="Exit with status 1 if any property is unmatched")
def explain(source: str, target: str, suffixes: tuple[str, ...], strict: bool) -> None:
    """Show how properties of SOURCE would be copied into TARGET.

    SOURCE and TARGET are classes given as module:ClassName.

    Example:

        graph-mapper explain shop.models:Book shop.dto:BookDTO
    """
    source_type = load_class(source)
    target_type = load_class(target)

    mapper = Mapper.from_env()
    if suffixes:
        mapper.name_suffixes(*suffixes)
    plan = mapper.binding_plan(source_type, target_type)

    click.echo(
        click.style(f"{source_type.__qualname__} -> {target_type.__qualname__}", fg="cyan", bold=True)
    )
    for binding in plan.bindings:
        click.echo(f"  {binding.source.name} -> {binding.target.name}")

    if plan.unmatched_source:
        click.echo(click.style("Unmatched source properties:", fg="yellow"))
        for name in plan.unmatched_source:
            click.echo(f"  - {name}")
    if plan.unmatched_target:
        click.echo(click.style("Unmatched target properties:", fg="yellow"))
        for name in plan.unmatched_target:
            click.echo(f"  - {name}")

    if plan.is_complete:
        click.echo(click.style("All properties matched", fg="green"))
    elif strict:
        click.echo(click.style("Strict mode: unmatched properties", fg="red"), err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
