"""Command-line utilities for the evolution_engine package."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from . import get_version
from .api import load_archive, run_from_config
from .individuals import Individual
from .orchestrator import RunContext
from .problems import list_problems, problem_for_name
from .reporting import metrics_table, population_table

app = typer.Typer(help="Generational evolution and SPEA2 utilities")
console = Console()


@app.command()
def version() -> None:
    """Print the installed package version."""
    typer.echo(get_version())


@app.command()
def run(
    config: Annotated[Path, typer.Argument(..., exists=True, readable=True)],
    generations: Annotated[int | None, typer.Option(min=0)] = None,
    seed: Annotated[int | None, typer.Option()] = None,
    out: Annotated[Path, typer.Option()] = Path("runs/archive.json"),
) -> None:
    """Execute an evolution run described by a YAML/JSON config."""
    context = RunContext()
    try:
        final = run_from_config(
            config_path=config,
            generations=generations,
            seed=seed,
            out_path=out,
            context=context,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    console.print(metrics_table(context.metrics.snapshot()))
    console.print(
        f"[bold green]Finished:[/] generation {final.age}, "
        f"elite={len(final.elite)} rabble={len(final.rabble)}"
    )


@app.command()
def show(path: Annotated[Path, typer.Argument()] = Path("runs/archive.json")) -> None:
    """Print a saved archive."""
    if not path.exists():
        raise typer.BadParameter(f"{path} does not exist")
    data = load_archive(path)
    members = [
        Individual(genotype=row["genotype"], age=row.get("age", 0), scores=row.get("scores", {}))
        for row in data["members"]
    ]
    title = f"Archive ({path}, generation {data.get('age', '-')})"
    console.print(population_table(members, data.get("goals", []), title=title))


@app.command()
def problems() -> None:
    """List the bundled benchmark problems."""
    table = Table(title="Problems")
    table.add_column("Name")
    table.add_column("Goals")
    table.add_column("Operators")
    for name in list_problems():
        problem = problem_for_name(name)
        rng = random.Random(0)  # noqa: S311  # nosec B311 - operator listing only
        ops = [*problem.unary_operators(rng), *problem.binary_operators(rng)]
        table.add_row(name, ", ".join(problem.goals), ", ".join(ops))
    console.print(table)


def main() -> None:
    """Entry point for `python -m evolution_engine.cli`."""
    app()


if __name__ == "__main__":
    main()
