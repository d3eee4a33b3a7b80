from __future__ import annotations

import random

import pytest

from evolution_engine.individuals import Individual


class ScriptedRng:
    """Stand-in for ``random.Random`` that replays a fixed list of indices."""

    def __init__(self, picks: list[int]) -> None:
        self.picks = list(picks)

    def randrange(self, n: int) -> int:
        pick = self.picks.pop(0)
        assert 0 <= pick < n
        return pick


def scored(genotype, **scores: float) -> Individual:
    return Individual(genotype=genotype, scores=dict(scores))


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)  # noqa: S311 - deterministic unit tests


@pytest.fixture()
def colinear_points() -> list[Individual]:
    # mutually non-dominated points on the line b = -a, spaced 1, 2, 3, 4, 5 apart
    return [scored(f"p{x}", a=float(x), b=float(-x)) for x in (0, 1, 3, 6, 10, 15)]


@pytest.fixture()
def random_pool(rng: random.Random) -> list[Individual]:
    return [
        scored(idx, a=rng.random(), b=rng.random(), c=rng.random()) for idx in range(40)
    ]


@pytest.fixture()
def spea2_spec():
    from evolution_engine.dsl import RunSpec

    return RunSpec(
        problem="unit_square",
        strategy={"kind": "spea2", "goals": ["origin", "corner"], "archive_size": 10},
        population=30,
        generations=3,
        seed=5,
        unary_ops=[{"name": "mutate", "repeat": 40}],
        binary_ops=[{"name": "crossover", "repeat": 10}],
        report_every=1,
    )


@pytest.fixture()
def integer_spec():
    from evolution_engine.dsl import RunSpec

    return RunSpec(
        problem="integer_walk",
        population=20,
        generations=2,
        unary_ops=[{"name": "mutate", "repeat": 4}, {"name": "copy", "repeat": 12}],
        binary_ops=[{"name": "crossover", "repeat": 2}],
        report_every=0,
    )
