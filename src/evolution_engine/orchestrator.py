"""Generational evolution loop.

One generation runs as follows:

- the strategy builds the new elite from the current rabble and elite;
- the strategy picks the mating pool from the rabble and the new elite;
- a new rabble is bred from the mating pool;
- the configured transformations run over the new rabble, in order;
- the new rabble and new elite are scored;
- timings and score statistics go to the run's metrics;
- the reporting callback, then the checkpoint callback, see the result.

Between generations an optional adapt function may swap in a new
``GenerationConfig``, so run parameters can follow the state of the
population. The stopping predicate is checked before every generation.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from .individuals import Zeitgeist, update_scores
from .metrics import MetricsCollector
from .reproduction import reproduce
from .strategies import GenerationConfig

StopFn = Callable[[Zeitgeist, GenerationConfig], bool]
AdaptFn = Callable[[Zeitgeist, GenerationConfig], GenerationConfig]


def no_adaptation(zeitgeist: Zeitgeist, config: GenerationConfig) -> GenerationConfig:
    return config


def stop_after(generations: int) -> StopFn:
    """Stopping predicate that halts once ``generations`` generations have run."""

    def _stop(zeitgeist: Zeitgeist, config: GenerationConfig) -> bool:
        return zeitgeist.age >= generations

    return _stop


class RunContext:
    """Per-run shared state: the metrics and the most recent zeitgeist.

    Both may be read from other threads while the run progresses.
    """

    def __init__(self, metrics: MetricsCollector | None = None) -> None:
        self.metrics = metrics or MetricsCollector()
        self._lock = threading.Lock()
        self._latest: Zeitgeist | None = None

    @property
    def latest(self) -> Zeitgeist | None:
        with self._lock:
            return self._latest

    def publish(self, zeitgeist: Zeitgeist) -> None:
        with self._lock:
            self._latest = zeitgeist

    def reset(self) -> None:
        self.metrics.clear()
        with self._lock:
            self._latest = None


class EvolutionRunner:
    """Drives generation transitions for any ``Strategy``."""

    def __init__(self, context: RunContext | None = None) -> None:
        self.context = context or RunContext()

    def step(self, zeitgeist: Zeitgeist, config: GenerationConfig) -> Zeitgeist:
        """Run a single generation and return the new zeitgeist."""
        strategy = config.strategy
        start = time.perf_counter()
        new_elite = strategy.select_elite(zeitgeist.rabble, zeitgeist.elite)
        elite_selected = time.perf_counter()
        mating_pool = strategy.select_mating_pool(zeitgeist.rabble, new_elite)
        new_rabble = reproduce(strategy.reproduction_config, mating_pool)
        for transform in config.transformations:
            new_rabble = transform(new_rabble)
        rabble_ready = time.perf_counter()
        scored_rabble = update_scores(new_rabble, config.score_functions, config.score_workers)
        scored_elite = update_scores(new_elite, config.score_functions, config.score_workers)
        end = time.perf_counter()

        evolved = Zeitgeist(
            age=zeitgeist.age + 1,
            elite=tuple(scored_elite),
            rabble=tuple(scored_rabble),
        )
        everyone = evolved.everyone
        score_values = (
            {name: [ind.scores[name] for ind in everyone] for name in config.score_functions}
            if everyone
            else {}
        )
        self.context.metrics.record_generation(
            timings={
                "time": end - start,
                "selection_time": elite_selected - start,
                "reproduction_time": rabble_ready - elite_selected,
                "scoring_time": end - rabble_ready,
            },
            score_values=score_values,
        )
        if config.reporting_callback is not None:
            config.reporting_callback(evolved)
        if config.checkpoint_callback is not None:
            config.checkpoint_callback(evolved)
        self.context.publish(evolved)
        return evolved

    def run(
        self,
        config: GenerationConfig,
        zeitgeist: Zeitgeist,
        stop: StopFn,
        adapt: AdaptFn | None = None,
    ) -> Zeitgeist:
        """Evolve until ``stop`` holds and return the final zeitgeist."""
        adapt = adapt or no_adaptation
        self.context.reset()
        current = Zeitgeist(
            age=zeitgeist.age,
            elite=zeitgeist.elite,
            rabble=tuple(
                update_scores(zeitgeist.rabble, config.score_functions, config.score_workers)
            ),
        )
        self.context.publish(current)
        while not stop(current, config):
            current = self.step(current, config)
            config = adapt(current, config)
        return current


def evolve(
    zeitgeist: Zeitgeist, config: GenerationConfig, context: RunContext | None = None
) -> Zeitgeist:
    """Run one generation with a throwaway runner."""
    return EvolutionRunner(context).step(zeitgeist, config)


def run_evolution(
    config: GenerationConfig,
    zeitgeist: Zeitgeist,
    stop: StopFn,
    adapt: AdaptFn | None = None,
    context: RunContext | None = None,
) -> Zeitgeist:
    """Run a whole evolution; pass a ``RunContext`` to watch metrics from another thread."""
    return EvolutionRunner(context).run(config, zeitgeist, stop, adapt)
