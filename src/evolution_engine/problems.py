"""Synthetic problems used to exercise the selection stack quickly."""

from __future__ import annotations

import math
import random
from typing import Any, Protocol

from .individuals import ScoreFn
from .reproduction import BinaryFn, UnaryFn


class Problem(Protocol):
    name: str
    goals: tuple[str, ...]

    def random_genotype(self, rng: random.Random) -> Any: ...

    def unary_operators(self, rng: random.Random) -> dict[str, UnaryFn]: ...

    def binary_operators(self, rng: random.Random) -> dict[str, BinaryFn]: ...

    def score_functions(self) -> dict[str, ScoreFn]: ...


def _identity(genotype: Any) -> Any:
    return genotype


class IntegerWalk:
    """Minimise an integer in [0, high]; the score is the integer itself."""

    name = "integer_walk"
    goals = ("score",)

    def __init__(self, high: int = 100) -> None:
        self.high = high

    def random_genotype(self, rng: random.Random) -> int:
        return rng.randint(0, self.high)

    def unary_operators(self, rng: random.Random) -> dict[str, UnaryFn]:
        def mutate(value: int) -> int:
            return min(self.high, max(0, value + rng.choice((-1, 1))))

        return {"mutate": mutate, "copy": _identity}

    def binary_operators(self, rng: random.Random) -> dict[str, BinaryFn]:
        def average(a: int, b: int) -> tuple[int, int]:
            mid = round((a + b) / 2)
            return mid, mid

        return {"crossover": average}

    def score_functions(self) -> dict[str, ScoreFn]:
        return {"score": lambda ind: float(ind.genotype)}


class UnitSquare:
    """Two conflicting goals on the unit square: near (0, 0) versus near (1, 1).

    The Pareto front is the diagonal between the two corners.
    """

    name = "unit_square"
    goals = ("origin", "corner")

    def __init__(self, step: float = 0.05) -> None:
        self.step = step

    def random_genotype(self, rng: random.Random) -> tuple[float, float]:
        return rng.random(), rng.random()

    def unary_operators(self, rng: random.Random) -> dict[str, UnaryFn]:
        def jitter(point: tuple[float, float]) -> tuple[float, float]:
            x, y = point
            return (
                min(1.0, max(0.0, x + rng.gauss(0.0, self.step))),
                min(1.0, max(0.0, y + rng.gauss(0.0, self.step))),
            )

        return {"mutate": jitter, "copy": _identity}

    def binary_operators(self, rng: random.Random) -> dict[str, BinaryFn]:
        def blend(
            a: tuple[float, float], b: tuple[float, float]
        ) -> tuple[tuple[float, float], tuple[float, float]]:
            alpha = rng.random()
            first = (alpha * a[0] + (1 - alpha) * b[0], alpha * a[1] + (1 - alpha) * b[1])
            second = ((1 - alpha) * a[0] + alpha * b[0], (1 - alpha) * a[1] + alpha * b[1])
            return first, second

        return {"crossover": blend}

    def score_functions(self) -> dict[str, ScoreFn]:
        return {
            "origin": lambda ind: math.dist(ind.genotype, (0.0, 0.0)),
            "corner": lambda ind: math.dist(ind.genotype, (1.0, 1.0)),
        }


REGISTRY: dict[str, type] = {
    IntegerWalk.name: IntegerWalk,
    UnitSquare.name: UnitSquare,
}


def problem_for_name(name: str) -> Problem:
    problem_cls = REGISTRY.get(name)
    if problem_cls is None:
        raise ValueError(f"Unsupported problem '{name}'")
    return problem_cls()


def list_problems() -> list[str]:
    return sorted(REGISTRY)
