"""Pareto dominance over an arbitrary set of minimised objectives."""

from __future__ import annotations

from collections.abc import Sequence

from .individuals import Individual


def _check_keys(keys: Sequence[str]) -> None:
    if not keys:
        msg = "Dominance requires at least one objective key."
        raise ValueError(msg)


def dominates(keys: Sequence[str], a: Individual, b: Individual) -> bool:
    """True when ``a`` is no worse than ``b`` on every key and better on at least one."""
    _check_keys(keys)
    strictly_better = False
    for key in keys:
        a_val = a.objective(key)
        b_val = b.objective(key)
        if a_val > b_val:
            return False
        if a_val < b_val:
            strictly_better = True
    return strictly_better


def dominated_set(
    keys: Sequence[str], population: Sequence[Individual], individual: Individual
) -> list[Individual]:
    """Members of ``population`` that ``individual`` dominates."""
    return [other for other in population if dominates(keys, individual, other)]


def dominator_set(
    keys: Sequence[str], population: Sequence[Individual], individual: Individual
) -> list[Individual]:
    """Members of ``population`` that dominate ``individual``."""
    return [other for other in population if dominates(keys, other, individual)]


def dominated_count(
    keys: Sequence[str], population: Sequence[Individual], individual: Individual
) -> int:
    return len(dominated_set(keys, population, individual))


def is_dominated(
    keys: Sequence[str], population: Sequence[Individual], individual: Individual
) -> bool:
    return any(dominates(keys, other, individual) for other in population)


def non_dominated_individuals(
    keys: Sequence[str], population: Sequence[Individual]
) -> list[Individual]:
    """The Pareto front of ``population``, in population order."""
    return [ind for ind in population if not is_dominated(keys, population, ind)]
