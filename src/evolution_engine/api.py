"""Public API for downstream modules."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any

import ujson as json

from .dsl import RunSpec, SingleObjectiveSettings, load_run_spec, save_run_spec
from .individuals import Zeitgeist, make_random_zeitgeist
from .orchestrator import RunContext, run_evolution, stop_after
from .problems import Problem, problem_for_name
from .reporting import console, console_reporter
from .reproduction import BinaryOp, UnaryOp
from .strategies import GenerationConfig, SingleObjectiveStrategy, SPEA2Strategy, Strategy

__all__ = [
    "RunSpec",
    "load_spec",
    "save_spec",
    "build_strategy",
    "build_generation_config",
    "run_spec",
    "run_from_config",
    "save_archive",
    "load_archive",
]


def load_spec(path: str | Path) -> RunSpec:
    """Read a run spec from disk."""
    return load_run_spec(path)


def save_spec(spec: RunSpec, path: str | Path) -> None:
    """Persist a run spec to disk."""
    save_run_spec(spec, path)


def _resolve_ops(spec: RunSpec, problem: Problem, rng: random.Random) -> tuple[
    list[UnaryOp], list[BinaryOp]
]:
    unary_fns = problem.unary_operators(rng)
    binary_fns = problem.binary_operators(rng)
    unary: list[UnaryOp] = []
    binary: list[BinaryOp] = []
    for sched in spec.unary_ops:
        if sched.name not in unary_fns:
            msg = f"Problem '{problem.name}' has no unary operator '{sched.name}'"
            raise ValueError(msg)
        unary.append(UnaryOp(op=unary_fns[sched.name], repeat=sched.repeat, name=sched.name))
    for sched in spec.binary_ops:
        if sched.name not in binary_fns:
            msg = f"Problem '{problem.name}' has no binary operator '{sched.name}'"
            raise ValueError(msg)
        binary.append(BinaryOp(op=binary_fns[sched.name], repeat=sched.repeat, name=sched.name))
    return unary, binary


def build_strategy(spec: RunSpec, problem: Problem, rng: random.Random) -> Strategy:
    unary, binary = _resolve_ops(spec, problem, rng)
    settings = spec.strategy
    if isinstance(settings, SingleObjectiveSettings):
        return SingleObjectiveStrategy.from_settings(settings, unary, binary, rng)
    return SPEA2Strategy.from_settings(settings, unary, binary, rng)


def build_generation_config(
    spec: RunSpec, problem: Problem, rng: random.Random
) -> GenerationConfig:
    reporter = (
        console_reporter(problem.goals, every=spec.report_every) if spec.report_every else None
    )
    return GenerationConfig(
        strategy=build_strategy(spec, problem, rng),
        score_functions=problem.score_functions(),
        reporting_callback=reporter,
        score_workers=spec.score_workers,
    )


def run_spec(
    spec: RunSpec,
    out_path: str | Path | None = None,
    context: RunContext | None = None,
) -> Zeitgeist:
    """Run ``spec`` on its bundled problem and optionally save the final elite."""
    problem = problem_for_name(spec.problem)
    rng = random.Random(spec.seed)  # noqa: S311  # nosec B311 - seeded per run
    config = build_generation_config(spec, problem, rng)
    initial = make_random_zeitgeist(lambda: problem.random_genotype(rng), spec.population)
    final = run_evolution(config, initial, stop_after(spec.generations), context=context)
    if out_path is not None:
        save_archive(final, problem.goals, Path(out_path), problem=problem.name)
    return final


def run_from_config(
    config_path: str | Path,
    generations: int | None = None,
    seed: int | None = None,
    out_path: str | Path | None = "runs/archive.json",
    context: RunContext | None = None,
) -> Zeitgeist:
    """Entry point used by the CLI to run a full search."""
    spec = load_spec(config_path)
    overrides: dict[str, Any] = {}
    if generations is not None:
        overrides["generations"] = generations
    if seed is not None:
        overrides["seed"] = seed
    if overrides:
        spec = spec.model_copy(update=overrides)
    console.print(f"[bold]Run:[/] {spec.summary()}")
    return run_spec(spec, out_path=out_path, context=context)


def _archive_members(zeitgeist: Zeitgeist) -> list[Any]:
    # single-objective runs keep no elite, so fall back to the rabble
    return list(zeitgeist.elite or zeitgeist.rabble)


def save_archive(
    zeitgeist: Zeitgeist,
    goals: tuple[str, ...] | list[str],
    path: Path,
    problem: str | None = None,
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "problem": problem,
        "age": zeitgeist.age,
        "goals": list(goals),
        "members": [ind.serialize() for ind in _archive_members(zeitgeist)],
    }
    path.write_text(json.dumps(payload, indent=2))
    console.print(f"Archive saved to {path}")


def load_archive(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    if not path.exists():
        msg = f"Archive file not found: {path}"
        raise FileNotFoundError(msg)
    data = json.loads(path.read_text())
    if not isinstance(data, dict) or "members" not in data:
        msg = f"{path} is not an archive file"
        raise ValueError(msg)
    return data
