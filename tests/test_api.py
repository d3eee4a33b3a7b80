from pathlib import Path

import pytest

from evolution_engine import api
from evolution_engine.orchestrator import RunContext
from evolution_engine.strategies import SingleObjectiveStrategy, SPEA2Strategy


def test_run_spec_single_objective(tmp_path: Path, integer_spec):
    context = RunContext()
    out = tmp_path / "archive.json"
    final = api.run_spec(integer_spec, out_path=out, context=context)
    assert final.age == 2
    assert len(final.rabble) == 4 + 12 + 2 * 2
    assert context.metrics.generations == 2
    data = api.load_archive(out)
    assert data["problem"] == "integer_walk"
    assert len(data["members"]) == len(final.rabble)


def test_run_spec_is_reproducible(spea2_spec):
    first = api.run_spec(spea2_spec)
    second = api.run_spec(spea2_spec)
    assert [i.genotype for i in first.elite] == [i.genotype for i in second.elite]


def test_build_strategy_variants(spea2_spec, integer_spec, rng):
    from evolution_engine.problems import problem_for_name

    assert isinstance(
        api.build_strategy(spea2_spec, problem_for_name("unit_square"), rng), SPEA2Strategy
    )
    assert isinstance(
        api.build_strategy(integer_spec, problem_for_name("integer_walk"), rng),
        SingleObjectiveStrategy,
    )


def test_unknown_problem(integer_spec):
    with pytest.raises(ValueError, match="Unsupported problem"):
        api.run_spec(integer_spec.model_copy(update={"problem": "nope"}))


def test_load_archive_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        api.load_archive(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]")
    with pytest.raises(ValueError):
        api.load_archive(bad)
