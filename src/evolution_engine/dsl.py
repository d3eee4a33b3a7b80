"""Typed configuration for evolution runs."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal

import ujson as json
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator


class OperatorSchedule(BaseModel):
    """A named genetic operator and how many times to apply it per generation."""

    name: str
    repeat: int = Field(ge=0)


class SingleObjectiveSettings(BaseModel):
    """Plain generational GA minimising a single score."""

    kind: Literal["single_objective"] = "single_objective"
    goal: str = "score"
    tournament_size: int = Field(default=4, gt=0)


class SPEA2Settings(BaseModel):
    """SPEA2 archive parameters."""

    kind: Literal["spea2"] = "spea2"
    goals: list[str]
    archive_size: int = Field(gt=0)
    comparison_depth: int = Field(default=5, gt=0)
    deduplicate: bool = False

    @field_validator("goals")
    @classmethod
    def non_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("SPEA2 needs at least one goal.")
        if len(set(value)) != len(value):
            raise ValueError("SPEA2 goals must be distinct.")
        return value


StrategySettings = Annotated[
    SingleObjectiveSettings | SPEA2Settings, Field(discriminator="kind")
]


class RunSpec(BaseModel):
    """Everything needed to launch a run on one of the bundled problems."""

    problem: str
    strategy: StrategySettings = Field(default_factory=SingleObjectiveSettings)
    population: int = Field(default=100, gt=0)
    generations: int = Field(default=50, ge=0)
    seed: int = 0
    unary_ops: list[OperatorSchedule] = Field(default_factory=list)
    binary_ops: list[OperatorSchedule] = Field(default_factory=list)
    report_every: int = Field(default=10, ge=0)
    score_workers: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_operators(self) -> RunSpec:
        if not any(op.repeat for op in [*self.unary_ops, *self.binary_ops]):
            raise ValueError("At least one operator must have a positive repeat count.")
        return self

    @property
    def offspring_per_generation(self) -> int:
        return sum(op.repeat for op in self.unary_ops) + 2 * sum(
            op.repeat for op in self.binary_ops
        )

    def summary(self) -> dict[str, Any]:
        """Return a JSON-friendly summary for console output."""
        return {
            "problem": self.problem,
            "strategy": self.strategy.kind,
            "population": self.population,
            "offspring": self.offspring_per_generation,
            "generations": self.generations,
            "seed": self.seed,
        }


def load_run_spec(path: str | Path) -> RunSpec:
    """Load a run spec from YAML or JSON."""
    path = Path(path)
    data: Any
    text = path.read_text()
    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    try:
        return RunSpec(**data)
    except ValidationError as exc:
        raise ValueError(f"Invalid config {path}") from exc


def save_run_spec(spec: RunSpec, path: str | Path) -> None:
    """Persist a run spec as YAML or JSON based on file suffix."""
    path = Path(path)
    if path.suffix in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(spec.model_dump(mode="python"), sort_keys=False))
    else:
        path.write_text(json.dumps(spec.model_dump(mode="python"), indent=2))
