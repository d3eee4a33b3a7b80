import itertools

import pytest

from evolution_engine.pareto import (
    dominated_count,
    dominated_set,
    dominates,
    dominator_set,
    is_dominated,
    non_dominated_individuals,
)

from .conftest import scored


def test_dominates_needs_one_strict_improvement():
    a = scored("a", x=1.0, y=2.0)
    b = scored("b", x=1.0, y=3.0)
    c = scored("c", x=0.5, y=4.0)
    assert dominates(["x", "y"], a, b)
    assert not dominates(["x", "y"], b, a)
    assert not dominates(["x", "y"], a, c)
    assert not dominates(["x", "y"], c, a)
    assert dominates(["y"], a, c)


def test_dominance_irreflexive_and_asymmetric(random_pool):
    for keys in (["a"], ["a", "b"], ["a", "b", "c"]):
        for ind in random_pool:
            assert not dominates(keys, ind, ind)
        for first, second in itertools.permutations(random_pool[:15], 2):
            if dominates(keys, first, second):
                assert not dominates(keys, second, first)


def test_dominated_set_agrees_with_predicate(random_pool):
    keys = ["a", "b"]
    for ind in random_pool:
        dominated = dominated_set(keys, random_pool, ind)
        for other in random_pool:
            assert (other in dominated) == dominates(keys, ind, other)
        assert dominated_count(keys, random_pool, ind) == len(dominated)
        for dominator in dominator_set(keys, random_pool, ind):
            assert dominates(keys, dominator, ind)


def test_non_dominated_individuals_is_the_front():
    pop = [
        scored("a", x=1.0, y=5.0),
        scored("b", x=2.0, y=2.0),
        scored("c", x=3.0, y=3.0),
        scored("d", x=5.0, y=1.0),
        scored("e", x=2.0, y=2.0),
    ]
    front = non_dominated_individuals(["x", "y"], pop)
    assert [ind.genotype for ind in front] == ["a", "b", "d", "e"]
    assert is_dominated(["x", "y"], pop, pop[2])


def test_missing_objective_fails_fast():
    a = scored("a", x=1.0)
    b = scored("b", x=2.0, y=1.0)
    with pytest.raises(KeyError):
        dominates(["x", "y"], a, b)


def test_empty_keys_rejected():
    a = scored("a", x=1.0)
    with pytest.raises(ValueError):
        dominates([], a, a)
