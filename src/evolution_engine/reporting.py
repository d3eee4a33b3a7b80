"""Console reporting for evolution runs."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .individuals import Individual, Zeitgeist
from .strategies import Callback

console = Console()


def console_reporter(
    keys: Sequence[str], every: int = 10, out: Console | None = None
) -> Callback:
    """Reporting callback that prints the best score per key every ``every`` generations."""
    target = out or console

    def _report(zeitgeist: Zeitgeist) -> None:
        if every <= 0 or zeitgeist.age % every != 0 or not zeitgeist.everyone:
            return
        best = "  ".join(f"{key}={zeitgeist.best(key).scores[key]:.4f}" for key in keys)
        target.print(
            f"[cyan]Generation {zeitgeist.age}[/] "
            f"elite={len(zeitgeist.elite)} rabble={len(zeitgeist.rabble)}  {best}"
        )

    return _report


def population_table(
    population: Sequence[Individual], keys: Sequence[str], title: str = "Archive"
) -> Table:
    table = Table(title=title)
    table.add_column("#")
    table.add_column("Age")
    for key in keys:
        table.add_column(key)
    table.add_column("Genotype")
    for pos, ind in enumerate(sorted(population, key=lambda i: i.coordinates(keys))):
        table.add_row(
            str(pos),
            str(ind.age),
            *(f"{ind.scores[key]:.4f}" for key in keys),
            escape(repr(ind.genotype)),
        )
    return table


def metrics_table(snapshot: Mapping[str, Any], title: str = "Last generation") -> Table:
    """Summarise the latest entry of every series in a metrics snapshot."""
    table = Table(title=title)
    table.add_column("Metric")
    table.add_column("mean")
    table.add_column("min")
    table.add_column("max")
    for name, entry in snapshot.get("scores", {}).items():
        if not entry["mean"]:
            continue
        table.add_row(
            name,
            f"{entry['mean'][-1]:.4f}",
            f"{entry['min'][-1]:.4f}",
            f"{entry['max'][-1]:.4f}",
        )
    for name, values in snapshot.get("timings", {}).items():
        if values:
            table.add_row(name, f"{values[-1]:.4f}", "-", "-")
    return table
