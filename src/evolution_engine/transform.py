"""Representation-independent population transformations.

Transformations run on the freshly bred rabble before it is scored. They can
be anything that maps a population to a population: local search, repair,
simplification of the genotype and so on.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import Any

from .individuals import Individual

GenotypeFn = Callable[[Any], Any]


def apply_to_genotype(func: GenotypeFn, individual: Individual) -> Individual:
    """Return a copy of ``individual`` with ``func`` applied to its genotype."""
    return Individual(
        genotype=func(individual.genotype),
        age=individual.age,
        scores=dict(individual.scores),
        auxiliary=dict(individual.auxiliary),
    )


def apply_to_all_genotypes(func: GenotypeFn, population: Sequence[Individual]) -> list[Individual]:
    return [apply_to_genotype(func, ind) for ind in population]


def apply_to_fraction_of_genotypes(
    func: GenotypeFn,
    fraction: float,
    population: Sequence[Individual],
    rng: random.Random | None = None,
) -> list[Individual]:
    """Apply ``func`` to a random ``fraction`` of the population; the rest pass through."""
    rng = rng or random.Random()  # noqa: S311  # nosec B311 - stochastic transform
    return [
        apply_to_genotype(func, ind) if rng.random() < fraction else ind for ind in population
    ]


def all_genotypes(func: GenotypeFn) -> Callable[[list[Individual]], list[Individual]]:
    """Wrap a genotype function as a transformation for ``GenerationConfig``."""

    def _transform(population: list[Individual]) -> list[Individual]:
        return apply_to_all_genotypes(func, population)

    return _transform


def fraction_of_genotypes(
    func: GenotypeFn, fraction: float, rng: random.Random | None = None
) -> Callable[[list[Individual]], list[Individual]]:
    if not 0.0 <= fraction <= 1.0:
        msg = "fraction must lie in [0, 1]"
        raise ValueError(msg)

    def _transform(population: list[Individual]) -> list[Individual]:
        return apply_to_fraction_of_genotypes(func, fraction, population, rng)

    return _transform


def hill_descent(
    tweak: GenotypeFn, score: Callable[[Any], float], genotype: Any
) -> Any:
    """One step of hill descent: keep the tweaked genotype only if it scores lower."""
    tweaked = tweak(genotype)
    if score(tweaked) < score(genotype):
        return tweaked
    return genotype
