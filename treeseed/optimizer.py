"""Population search for job -> resource assignments (TreeSeed algorithm).

Each round evaluates the whole population, records any strict improvement of
the best-so-far assignment, then breeds a new population: ``P`` parents drawn
uniformly with replacement, each copied and passed through the oracle-gated
mutation policy. The loop always runs the full number of rounds unless a stop
event is set between rounds.
"""

from __future__ import annotations

import logging
import math
import os
import random
import threading
import time
from typing import Sequence

from treeseed.config import OptimizerParams
from treeseed.errors import NotYetOptimized
from treeseed.fitness import evaluate, fitness_breakdown
from treeseed.models import (
    Assignment,
    FitnessBreakdown,
    Job,
    ProblemInstance,
    Resource,
    SearchResult,
)
from treeseed.mutation import mutate
from treeseed.operations import create_random_assignment
from treeseed.oracle import Oracle, constant_oracle

logger = logging.getLogger("treeseed.optimizer")


class TreeSeedOptimizer:
    """Owns the population, the best-so-far record and the search loop.

    Args:
        jobs: Job catalog (non-empty, unique ids, positive lengths).
        resources: Resource catalog (non-empty, ``index`` equal to position).
        oracle: Mutation gate; defaults to a constant 0.0 (always accept).
        rng: Random generator used for the whole life of the optimizer.
        params: Search hyper-parameters.

    Raises:
        InvalidConfiguration: On an empty catalog or invalid parameters.
    """

    def __init__(
        self,
        jobs: Sequence[Job],
        resources: Sequence[Resource],
        oracle: Oracle | None = None,
        rng: random.Random | None = None,
        params: OptimizerParams | None = None,
    ) -> None:
        self.instance = ProblemInstance.from_catalogs(jobs, resources)
        self.params = (params or OptimizerParams()).validate()
        self.oracle = oracle if oracle is not None else constant_oracle(0.0)
        self.rng = rng if rng is not None else random.Random()
        self._best_mapping: Assignment | None = None
        self._best_fitness = math.inf
        self._history: list[float] = []

    @property
    def best_fitness(self) -> float:
        return self._best_fitness

    @property
    def history(self) -> list[float]:
        """Best-so-far fitness after each completed round."""
        return list(self._history)

    def evaluate(self, assignment: Assignment) -> float:
        return evaluate(self.instance, assignment, self.params.weights)

    def breakdown(self, assignment: Assignment) -> FitnessBreakdown:
        return fitness_breakdown(self.instance, assignment, self.params.weights)

    def get_best_mapping(self) -> Assignment:
        """Return a copy of the best assignment found by the last ``optimize()``.

        Raises:
            NotYetOptimized: If no evaluation pass has completed yet.
        """
        if self._best_mapping is None:
            raise NotYetOptimized("optimize() has not completed an evaluation pass")
        return dict(self._best_mapping)

    def optimize(
        self,
        stop_event: threading.Event | None = None,
        trace_file: str | None = None,
    ) -> SearchResult:
        """Run the search from scratch.

        Args:
            stop_event: Optional cancellation signal checked before each round.
            trace_file: Optional CSV path; one line per round is appended.

        Returns:
            SearchResult with a copy of the best mapping (``None`` if cancelled
            before the first round), its fitness and the per-round history.
        """
        params = self.params
        pop_size = params.population_size
        iterations = params.iterations

        self._best_mapping = None
        self._best_fitness = math.inf
        self._history = []

        t0 = time.perf_counter()
        population = [
            create_random_assignment(self.instance, self.rng) for _ in range(pop_size)
        ]
        if trace_file is not None:
            _init_trace(trace_file)

        cancelled = False
        rounds = 0
        for it in range(1, iterations + 1):
            if stop_event is not None and stop_event.is_set():
                logger.info("[tsa] stop requested before round %d/%d", it, iterations)
                cancelled = True
                break

            scores = [self.evaluate(individual) for individual in population]
            for individual, fitness in zip(population, scores):
                if self._best_mapping is None or fitness < self._best_fitness:
                    self._best_fitness = fitness
                    self._best_mapping = dict(individual)

            new_population: list[Assignment] = []
            for _ in range(pop_size):
                parent = population[self.rng.randrange(pop_size)]
                new_population.append(
                    mutate(parent, self.instance, self.oracle, self.rng, params)
                )
            population = new_population

            self._history.append(self._best_fitness)
            rounds = it
            if trace_file is not None:
                _append_trace(trace_file, it, self._best_fitness, scores)
            if it % params.report_every == 0 or it == iterations:
                logger.info(
                    "[tsa] round %d/%d best fitness=%.4f", it, iterations, self._best_fitness
                )

        logger.info(
            "[tsa] finished rounds=%d best=%.4f elapsed=%.3fs",
            rounds,
            self._best_fitness,
            time.perf_counter() - t0,
        )
        return SearchResult(
            mapping=dict(self._best_mapping) if self._best_mapping is not None else None,
            fitness=self._best_fitness,
            history=list(self._history),
            rounds=rounds,
            cancelled=cancelled,
        )


def _init_trace(path: str) -> None:
    try:
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write("round,best_fitness,round_best,round_mean\n")
    except OSError as e:
        logger.warning("[tsa] failed to open trace file %s: %s", path, e)


def _append_trace(path: str, it: int, best: float, scores: list[float]) -> None:
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"{it},{best:.6f},{min(scores):.6f},{sum(scores) / len(scores):.6f}\n")
    except OSError as e:
        logger.warning("[tsa] failed to write trace file %s: %s", path, e)
