"""Generation strategies: the policies that parameterise the evolution loop.

A strategy decides who survives into the elite, who may breed, and how
parents are drawn. The loop only talks to the ``Strategy`` protocol, so new
policies plug in without touching it.
"""

from __future__ import annotations

import dataclasses
import random
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .dsl import SingleObjectiveSettings, SPEA2Settings
from .individuals import Individual, ScoreFn, Zeitgeist
from .reproduction import BinaryOp, ReproductionConfig, UnaryOp
from .selection import tournament_selector
from .spea2 import DEFAULT_COMPARISON_DEPTH, make_new_archive, spea2_fitness

SPEA2_TOURNAMENT_SIZE = 2

Transformation = Callable[[list[Individual]], list[Individual]]
Callback = Callable[[Zeitgeist], None]


class Strategy(Protocol):
    @property
    def reproduction_config(self) -> ReproductionConfig: ...

    def select_elite(
        self, rabble: Sequence[Individual], elite: Sequence[Individual]
    ) -> list[Individual]: ...

    def select_mating_pool(
        self, rabble: Sequence[Individual], elite: Sequence[Individual]
    ) -> list[Individual]: ...


@dataclass(frozen=True)
class SingleObjectiveStrategy:
    """Simple GA: no elite, the whole rabble breeds via tournament on ``goal``."""

    goal: str
    tournament_size: int
    unary_ops: tuple[UnaryOp, ...] = ()
    binary_ops: tuple[BinaryOp, ...] = ()
    rng: random.Random | None = field(default=None, compare=False, repr=False)
    _reproduction: ReproductionConfig = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        SingleObjectiveSettings(goal=self.goal, tournament_size=self.tournament_size)
        config = ReproductionConfig(
            selector=tournament_selector(self.tournament_size, self.goal, self.rng),
            unary_ops=tuple(self.unary_ops),
            binary_ops=tuple(self.binary_ops),
        )
        object.__setattr__(self, "unary_ops", config.unary_ops)
        object.__setattr__(self, "binary_ops", config.binary_ops)
        object.__setattr__(self, "_reproduction", config)

    @classmethod
    def from_settings(
        cls,
        settings: SingleObjectiveSettings,
        unary_ops: Sequence[UnaryOp] = (),
        binary_ops: Sequence[BinaryOp] = (),
        rng: random.Random | None = None,
    ) -> SingleObjectiveStrategy:
        return cls(
            goal=settings.goal,
            tournament_size=settings.tournament_size,
            unary_ops=tuple(unary_ops),
            binary_ops=tuple(binary_ops),
            rng=rng,
        )

    @property
    def reproduction_config(self) -> ReproductionConfig:
        return self._reproduction

    def select_elite(
        self, rabble: Sequence[Individual], elite: Sequence[Individual]
    ) -> list[Individual]:
        return []

    def select_mating_pool(
        self, rabble: Sequence[Individual], elite: Sequence[Individual]
    ) -> list[Individual]:
        return list(rabble)


@dataclass(frozen=True)
class SPEA2Strategy:
    """SPEA2: the archive is the elite and the only source of parents.

    Parents are drawn by binary tournament on the SPEA2 fitness.
    """

    goals: tuple[str, ...]
    archive_size: int
    unary_ops: tuple[UnaryOp, ...] = ()
    binary_ops: tuple[BinaryOp, ...] = ()
    comparison_depth: int = DEFAULT_COMPARISON_DEPTH
    deduplicate: bool = False
    rng: random.Random | None = field(default=None, compare=False, repr=False)
    _reproduction: ReproductionConfig = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        SPEA2Settings(
            goals=list(self.goals),
            archive_size=self.archive_size,
            comparison_depth=self.comparison_depth,
            deduplicate=self.deduplicate,
        )
        config = ReproductionConfig(
            selector=tournament_selector(SPEA2_TOURNAMENT_SIZE, spea2_fitness, self.rng),
            unary_ops=tuple(self.unary_ops),
            binary_ops=tuple(self.binary_ops),
        )
        object.__setattr__(self, "goals", tuple(self.goals))
        object.__setattr__(self, "unary_ops", config.unary_ops)
        object.__setattr__(self, "binary_ops", config.binary_ops)
        object.__setattr__(self, "_reproduction", config)

    @classmethod
    def from_settings(
        cls,
        settings: SPEA2Settings,
        unary_ops: Sequence[UnaryOp] = (),
        binary_ops: Sequence[BinaryOp] = (),
        rng: random.Random | None = None,
    ) -> SPEA2Strategy:
        return cls(
            goals=tuple(settings.goals),
            archive_size=settings.archive_size,
            unary_ops=tuple(unary_ops),
            binary_ops=tuple(binary_ops),
            comparison_depth=settings.comparison_depth,
            deduplicate=settings.deduplicate,
            rng=rng,
        )

    @property
    def reproduction_config(self) -> ReproductionConfig:
        return self._reproduction

    def select_elite(
        self, rabble: Sequence[Individual], elite: Sequence[Individual]
    ) -> list[Individual]:
        return make_new_archive(
            self.goals,
            self.deduplicate,
            self.comparison_depth,
            self.archive_size,
            rabble,
            elite,
        )

    def select_mating_pool(
        self, rabble: Sequence[Individual], elite: Sequence[Individual]
    ) -> list[Individual]:
        return list(elite)


@dataclass(frozen=True)
class GenerationConfig:
    """How to get from one generation to the next.

    Adapt functions return a modified copy via ``replace``; the loop never
    mutates a config.
    """

    strategy: Strategy
    score_functions: Mapping[str, ScoreFn]
    transformations: tuple[Transformation, ...] = ()
    reporting_callback: Callback | None = None
    checkpoint_callback: Callback | None = None
    score_workers: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "transformations", tuple(self.transformations))
        object.__setattr__(self, "score_functions", dict(self.score_functions))

    def replace(self, **changes) -> GenerationConfig:
        return dataclasses.replace(self, **changes)
