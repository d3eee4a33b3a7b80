import itertools

import pytest

from evolution_engine.individuals import Individual
from evolution_engine.reproduction import (
    BinaryOp,
    ReproductionConfig,
    UnaryOp,
    population_size,
    reproduce,
)


def _cycling_selector(pool_order):
    draws = itertools.cycle(pool_order)

    def _select(pool):
        return pool[next(draws)]

    return _select


def _pool():
    return [
        Individual(genotype=1, age=0, scores={"score": 1.0}, auxiliary={"fitness": 0.1}),
        Individual(genotype=10, age=4),
        Individual(genotype=100, age=2),
    ]


def test_reproduce_counts_and_ages():
    config = ReproductionConfig(
        selector=_cycling_selector([0, 1, 2]),
        unary_ops=[UnaryOp(op=lambda g: g + 1, repeat=2), UnaryOp(op=lambda g: -g, repeat=1)],
        binary_ops=[BinaryOp(op=lambda a, b: (a + b, a - b), repeat=2)],
    )
    children = reproduce(config, _pool())
    assert len(children) == population_size(config) == 2 + 1 + 2 * 2
    # unary: parents 0, 1 then 2
    assert [c.genotype for c in children[:3]] == [2, 11, -100]
    assert [c.age for c in children[:3]] == [1, 5, 3]
    # binary pairs drawn (0, 1) then (2, 0)
    assert [c.genotype for c in children[3:]] == [11, -9, 101, 99]
    assert [c.age for c in children[3:]] == [5, 5, 3, 3]


def test_offspring_start_unscored():
    config = ReproductionConfig(
        selector=_cycling_selector([0]),
        unary_ops=[UnaryOp(op=lambda g: g, repeat=1)],
    )
    (child,) = reproduce(config, _pool())
    assert child.scores == {}
    assert child.auxiliary == {}


def test_binary_draws_may_repeat_parent():
    config = ReproductionConfig(
        selector=_cycling_selector([2]),
        binary_ops=[BinaryOp(op=lambda a, b: (a, b), repeat=1)],
    )
    children = reproduce(config, _pool())
    assert [c.genotype for c in children] == [100, 100]
    assert all(c.age == 3 for c in children)


def test_unary_results_precede_binary_results():
    config = ReproductionConfig(
        selector=_cycling_selector([0]),
        unary_ops=[UnaryOp(op=lambda g: "u", repeat=1)],
        binary_ops=[
            BinaryOp(op=lambda a, b: ("b1", "b1"), repeat=1),
            BinaryOp(op=lambda a, b: ("b2", "b2"), repeat=1),
        ],
    )
    assert [c.genotype for c in reproduce(config, _pool())] == ["u", "b1", "b1", "b2", "b2"]


def test_empty_config_yields_nothing():
    config = ReproductionConfig(selector=_cycling_selector([0]))
    assert reproduce(config, _pool()) == []


def test_negative_repeat_rejected():
    with pytest.raises(ValueError):
        UnaryOp(op=lambda g: g, repeat=-1)
    with pytest.raises(ValueError):
        BinaryOp(op=lambda a, b: (a, b), repeat=-2)
