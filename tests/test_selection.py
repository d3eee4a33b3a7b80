import random

import pytest

from evolution_engine.individuals import Individual
from evolution_engine.selection import tournament, tournament_selector

from .conftest import ScriptedRng, scored


def test_tournament_returns_minimum_of_draws():
    pop = [scored(i, score=float(s)) for i, s in enumerate([5, 3, 9, 1])]
    winner = tournament(3, "score", pop, ScriptedRng([0, 2, 1]))
    assert winner.genotype == 1


def test_tournament_ties_go_to_first_draw():
    pop = [scored("x", score=2.0), scored("y", score=2.0), scored("z", score=7.0)]
    assert tournament(3, "score", pop, ScriptedRng([2, 1, 0])).genotype == "y"
    assert tournament(2, "score", pop, ScriptedRng([0, 1])).genotype == "x"


def test_tournament_samples_with_replacement():
    pop = [scored("only", score=1.0)]
    rng = random.Random(0)  # noqa: S311 - deterministic unit tests
    assert tournament(4, "score", pop, rng).genotype == "only"


def test_tournament_reads_auxiliary_metrics():
    a = Individual(genotype="a", auxiliary={"fitness": 0.4})
    b = Individual(genotype="b", auxiliary={"fitness": 0.2})
    assert tournament(2, "fitness", [a, b], ScriptedRng([0, 1])).genotype == "b"


def test_large_tournament_finds_best(rng):
    pop = [scored(i, score=float(i)) for i in range(5)]
    select = tournament_selector(200, "score", rng)
    assert select(pop).genotype == 0


def test_tournament_on_empty_population_raises():
    with pytest.raises(IndexError):
        tournament(2, "score", [])


def test_selector_rejects_non_positive_size():
    with pytest.raises(ValueError):
        tournament_selector(0, "score")


def test_missing_score_key_raises():
    pop = [scored("a", other=1.0)]
    with pytest.raises(KeyError):
        tournament(1, "score", pop, ScriptedRng([0]))


@pytest.mark.parametrize("size", [0, -1])
def test_tournament_rejects_non_positive_size(size):
    pop = [scored("a", score=1.0)]
    with pytest.raises(ValueError):
        tournament(size, "score", pop, ScriptedRng([0]))


def test_tournament_accepts_key_function():
    # the key function wins over a score of the same name
    a = Individual(genotype="a", scores={"fitness": 1.0}, auxiliary={"fitness": 0.4})
    b = Individual(genotype="b", scores={"fitness": 5.0}, auxiliary={"fitness": 0.2})
    aux = lambda ind: ind.auxiliary["fitness"]  # noqa: E731
    assert tournament(2, aux, [a, b], ScriptedRng([0, 1])).genotype == "b"
    assert tournament(2, "fitness", [a, b], ScriptedRng([0, 1])).genotype == "a"
