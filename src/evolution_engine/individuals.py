"""Individual and zeitgeist data shapes plus scoring."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

AuxValue = float | tuple[float, ...]
ScoreFn = Callable[["Individual"], float]


@dataclass
class Individual:
    """A genotype with its lineage age and per-generation measurements."""

    genotype: Any
    age: int = 0
    scores: dict[str, float] = field(default_factory=dict)
    auxiliary: dict[str, AuxValue] = field(default_factory=dict)

    def objective(self, key: str) -> float:
        """Return the score stored under ``key``; raises ``KeyError`` when absent."""
        return self.scores[key]

    def value(self, key: str) -> float:
        """Look up ``key`` in the scores first, then in the auxiliary metrics."""
        if key in self.scores:
            return self.scores[key]
        value = self.auxiliary[key]
        if isinstance(value, tuple):
            msg = f"Auxiliary metric '{key}' is not a scalar."
            raise TypeError(msg)
        return value

    def coordinates(self, goals: Sequence[str]) -> tuple[float, ...]:
        """Position of the individual in objective space."""
        return tuple(self.scores[goal] for goal in goals)

    def serialize(self) -> dict[str, Any]:
        return {
            "genotype": self.genotype,
            "age": self.age,
            "scores": dict(self.scores),
        }


@dataclass(frozen=True)
class Zeitgeist:
    """Full state of the run at one generation."""

    age: int = 0
    elite: tuple[Individual, ...] = ()
    rabble: tuple[Individual, ...] = ()

    @property
    def everyone(self) -> tuple[Individual, ...]:
        return self.elite + self.rabble

    def best(self, key: str) -> Individual:
        """Lowest-scoring member of elite and rabble on ``key``."""
        return min(self.everyone, key=lambda ind: ind.value(key))


def make_zeitgeist(genotypes: Iterable[Any]) -> Zeitgeist:
    """Seed a generation-zero zeitgeist from a list of genotypes."""
    return Zeitgeist(age=0, elite=(), rabble=tuple(Individual(genotype=g) for g in genotypes))


def make_random_zeitgeist(generator: Callable[[], Any], size: int) -> Zeitgeist:
    if size <= 0:
        msg = "Initial population size must be positive."
        raise ValueError(msg)
    return make_zeitgeist(generator() for _ in range(size))


def _score_one(individual: Individual, score_functions: Mapping[str, ScoreFn]) -> Individual:
    scores = {name: float(fn(individual)) for name, fn in score_functions.items()}
    return Individual(
        genotype=individual.genotype,
        age=individual.age,
        scores=scores,
        auxiliary=dict(individual.auxiliary),
    )


def update_scores(
    population: Iterable[Individual],
    score_functions: Mapping[str, ScoreFn],
    workers: int = 0,
) -> list[Individual]:
    """Score every individual against every score function.

    Returns fresh individuals in the input order; the inputs are left untouched.
    With ``workers > 1`` the score functions run on a thread pool.
    """
    members = list(population)
    if workers > 1 and len(members) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda ind: _score_one(ind, score_functions), members))
    return [_score_one(ind, score_functions) for ind in members]
