"""Typer CLI entrypoints."""

from __future__ import annotations

from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from typealgebra.cli.scenarios import build_scenarios, sample_types
from typealgebra.config.settings import load_settings
from typealgebra.core.errors import TypeAlgebraError
from typealgebra.core.relation import SubtypingRelation
from typealgebra.core.subtyping import subtyping_relation
from typealgebra.core.types import Type
from typealgebra.logging_utils import configure_logging

app = typer.Typer(
    name="typealgebra",
    help="Union, intersection, nullable and flexible type algebra",
    add_completion=False,
)
console = Console()


@app.command()
def demo(
    one_hop: Annotated[bool, typer.Option("--one-hop", help="Only consult direct declared supertypes.")] = False,
) -> None:
    """Evaluate the reference scenarios and compare them with their expected results."""

    configure_logging(profile="cli")
    settings = load_settings(transitive_subtyping=False) if one_hop else load_settings()
    logger.info("demo.start transitive={}", settings.transitive_subtyping)
    try:
        scenarios = build_scenarios(settings)
    except TypeAlgebraError as e:
        logger.error("demo.failed error={}", e)
        raise typer.Exit(1) from e

    table = Table(title="Type algebra scenarios")
    table.add_column("Expression")
    table.add_column("Result")
    table.add_column("Expected")
    table.add_column("")
    for scenario in scenarios:
        mark = "[green]ok[/green]" if scenario.passed else "[red]FAIL[/red]"
        table.add_row(scenario.label, _render(scenario.actual), _render(scenario.expected), mark)
    console.print(table)

    failed = [s.label for s in scenarios if not s.passed]
    if failed:
        logger.error("demo.mismatch count={} labels={}", len(failed), ", ".join(failed))
        raise typer.Exit(1)


@app.command()
def relate(
    this: Annotated[str, typer.Argument(help="Rendering of a sample type, e.g. 'List<TT>'.")],
    that: Annotated[str, typer.Argument(help="Rendering of a sample type, e.g. 'MutableList<TT>'.")],
) -> None:
    """Print the subtyping relation between two sample types."""

    configure_logging(profile="cli")
    env, samples = sample_types(load_settings())
    for name in (this, that):
        if name not in samples:
            known = ", ".join(sorted(samples))
            raise typer.BadParameter(f"unknown sample type {name!r}; known: {known}")
    try:
        relation = subtyping_relation(env, samples[this], samples[that])
    except TypeAlgebraError as e:
        logger.error("relate.failed this={} that={} error={}", this, that, e)
        raise typer.Exit(1) from e
    console.print(f"{this} is {relation.value} to {that}", markup=False, highlight=False)


@app.command()
def samples() -> None:
    """List the sample types accepted by `relate`."""

    _, named = sample_types(load_settings())
    for name in sorted(named):
        console.print(name, markup=False, highlight=False)


def _render(value: Type | SubtypingRelation) -> str:
    if isinstance(value, SubtypingRelation):
        return value.value
    return str(value)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
