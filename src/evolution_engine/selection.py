"""Selection procedures that pick parents from a scored population."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence

from .individuals import Individual

Selector = Callable[[Sequence[Individual]], Individual]
ScoreKey = str | Callable[[Individual], float]


def _lookup(score_key: ScoreKey) -> Callable[[Individual], float]:
    if callable(score_key):
        return score_key
    return lambda ind: ind.value(score_key)


def tournament(
    size: int,
    score_key: ScoreKey,
    population: Sequence[Individual],
    rng: random.Random | None = None,
) -> Individual:
    """Draw ``size`` competitors with replacement and return the lowest scoring one.

    Ties go to the competitor drawn first. ``score_key`` may name a score or an
    auxiliary metric, or be a function reading the value off an individual.
    """
    if size <= 0:
        msg = "Tournament size must be positive."
        raise ValueError(msg)
    if not population:
        msg = "Tournament selection needs a non-empty population."
        raise IndexError(msg)
    rng = rng or random.Random()  # noqa: S311  # nosec B311 - selection noise only
    score_of = _lookup(score_key)
    winner = population[rng.randrange(len(population))]
    best = score_of(winner)
    for _ in range(size - 1):
        competitor = population[rng.randrange(len(population))]
        score = score_of(competitor)
        if score < best:
            winner, best = competitor, score
    return winner


def tournament_selector(
    size: int, score_key: ScoreKey, rng: random.Random | None = None
) -> Selector:
    """Bind a tournament to a size and score key, returning a ``pool -> Individual`` selector."""
    if size <= 0:
        msg = "Tournament size must be positive."
        raise ValueError(msg)
    source = rng or random.Random()  # noqa: S311  # nosec B311 - selection noise only

    def _select(population: Sequence[Individual]) -> Individual:
        return tournament(size, score_key, population, source)

    return _select
