"""Run metrics accumulated by the evolution loop."""

from __future__ import annotations

import copy
import threading
from collections.abc import Iterable, Mapping
from typing import Any

STAT_NAMES = ("mean", "min", "max")


def calculate_stats(values: Iterable[float]) -> tuple[float, float, float]:
    """Mean, min and max of ``values``."""
    data = [float(v) for v in values]
    if not data:
        msg = "Cannot compute statistics of an empty population."
        raise ValueError(msg)
    return sum(data) / len(data), min(data), max(data)


class MetricsCollector:
    """Append-only store of per-generation timings and score statistics.

    Timings and score statistics are kept apart, so a score may share its
    name with a timing. Plain series live under ``timings``
    (``snapshot()["timings"]["time"] == [...]``); score statistics live under
    ``scores``, one series per statistic
    (``snapshot()["scores"]["score"]["min"] == [...]``). All writes take a
    lock, and ``snapshot`` hands out a deep copy so monitors on other threads
    never see a half-appended generation.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timings: dict[str, list[float]] = {}
        self._scores: dict[str, dict[str, list[float]]] = {}
        self._generations = 0

    def clear(self) -> None:
        with self._lock:
            self._timings = {}
            self._scores = {}
            self._generations = 0

    def add(self, key: str, value: float) -> None:
        with self._lock:
            self._add(key, value)

    def add_stats(self, key: str, values: Iterable[float]) -> None:
        stats = calculate_stats(values)
        with self._lock:
            self._add_stats(key, stats)

    def record_generation(
        self,
        timings: Mapping[str, float],
        score_values: Mapping[str, Iterable[float]],
    ) -> None:
        """Append one generation's timings and score statistics in a single step."""
        stats = {name: calculate_stats(values) for name, values in score_values.items()}
        with self._lock:
            for key, value in timings.items():
                self._add(key, value)
            for name, triple in stats.items():
                self._add_stats(name, triple)
            self._generations += 1

    @property
    def generations(self) -> int:
        with self._lock:
            return self._generations

    def series(self, key: str, stat: str | None = None) -> list[float]:
        """Copy of one recorded series.

        Without ``stat`` this is the timing series ``key``; with it, the
        mean/min/max series of the score ``key``.
        """
        with self._lock:
            if stat is None:
                return list(self._timings[key])
            return list(self._scores[key][stat])

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "timings": copy.deepcopy(self._timings),
                "scores": copy.deepcopy(self._scores),
            }

    def _add(self, key: str, value: float) -> None:
        self._timings.setdefault(key, []).append(float(value))

    def _add_stats(self, key: str, stats: tuple[float, float, float]) -> None:
        entry = self._scores.setdefault(key, {name: [] for name in STAT_NAMES})
        for name, value in zip(STAT_NAMES, stats):
            entry[name].append(value)
