"""Breeding a new rabble from a mating pool.

Operators act on genotypes only; this module unwraps the selected parents,
applies the operator and wraps the offspring back into individuals, tracking
the age of each lineage along the way. Scores and auxiliary metrics are never
inherited. It is up to the caller to choose repeat counts that add up to the
population size they want.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .individuals import Individual
from .selection import Selector

UnaryFn = Callable[[Any], Any]
BinaryFn = Callable[[Any, Any], tuple[Any, Any]]


@dataclass(frozen=True)
class UnaryOp:
    """Apply ``op`` to ``repeat`` selected parents, one child each."""

    op: UnaryFn
    repeat: int
    name: str = "unary"

    def __post_init__(self) -> None:
        if self.repeat < 0:
            msg = f"Operator '{self.name}' has a negative repeat count."
            raise ValueError(msg)


@dataclass(frozen=True)
class BinaryOp:
    """Apply ``op`` to ``repeat`` selected parent pairs, two children each."""

    op: BinaryFn
    repeat: int
    name: str = "binary"

    def __post_init__(self) -> None:
        if self.repeat < 0:
            msg = f"Operator '{self.name}' has a negative repeat count."
            raise ValueError(msg)


@dataclass(frozen=True)
class ReproductionConfig:
    selector: Selector
    unary_ops: tuple[UnaryOp, ...] = field(default_factory=tuple)
    binary_ops: tuple[BinaryOp, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "unary_ops", tuple(self.unary_ops))
        object.__setattr__(self, "binary_ops", tuple(self.binary_ops))


def population_size(config: ReproductionConfig) -> int:
    """Number of individuals ``reproduce`` will emit for ``config``."""
    return sum(op.repeat for op in config.unary_ops) + 2 * sum(
        op.repeat for op in config.binary_ops
    )


def _unary_child(op: UnaryFn, parent: Individual) -> Individual:
    return Individual(genotype=op(parent.genotype), age=parent.age + 1)


def _binary_children(op: BinaryFn, first: Individual, second: Individual) -> list[Individual]:
    child_a, child_b = op(first.genotype, second.genotype)
    age = max(first.age, second.age) + 1
    return [Individual(genotype=child_a, age=age), Individual(genotype=child_b, age=age)]


def reproduce(config: ReproductionConfig, pool: Sequence[Individual]) -> list[Individual]:
    """Breed offspring from ``pool``: all unary results first, then all binary results."""
    offspring: list[Individual] = []
    for unary in config.unary_ops:
        for _ in range(unary.repeat):
            offspring.append(_unary_child(unary.op, config.selector(pool)))
    for binary in config.binary_ops:
        for _ in range(binary.repeat):
            first = config.selector(pool)
            second = config.selector(pool)
            offspring.extend(_binary_children(binary.op, first, second))
    return offspring
