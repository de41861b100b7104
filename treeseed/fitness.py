"""Fitness evaluation for job -> resource assignments.

Fitness combines three terms computed from per-resource loads
(``load[i] = sum(length / speed[i])`` over jobs mapped to ``i``):

    makespan  -- maximum load,
    imbalance -- mean absolute deviation of loads from their mean,
    energy    -- ``sum(power_watts * load[i] * duty_cycle)``.

``fitness = w_makespan * makespan + w_imbalance * imbalance + w_energy * energy``;
lower is better.
"""

from __future__ import annotations

from dataclasses import dataclass

from treeseed.models import Assignment, FitnessBreakdown, ProblemInstance


@dataclass(frozen=True)
class FitnessWeights:
    makespan: float = 0.5
    imbalance: float = 0.35
    energy: float = 0.15
    power_watts: float = 200.0
    duty_cycle: float = 0.1


DEFAULT_WEIGHTS = FitnessWeights()


def resource_loads(instance: ProblemInstance, assignment: Assignment) -> list[float]:
    """Return per-resource load (duration) for ``assignment``.

    Jobs are accumulated in catalog order so repeated calls on the same input
    give bit-identical sums.
    """
    speeds = instance.speeds
    loads = [0.0] * len(speeds)
    for job, length in zip(instance.jobs, instance.lengths):
        r = assignment[job.id]
        loads[r] += length / speeds[r]
    return loads


def fitness_breakdown(
    instance: ProblemInstance,
    assignment: Assignment,
    weights: FitnessWeights = DEFAULT_WEIGHTS,
) -> FitnessBreakdown:
    loads = resource_loads(instance, assignment)
    n = len(loads)
    makespan = max(loads)
    avg_load = sum(loads) / n
    imbalance = sum(abs(load - avg_load) for load in loads) / n
    energy = sum(weights.power_watts * load * weights.duty_cycle for load in loads)
    fitness = (
        weights.makespan * makespan
        + weights.imbalance * imbalance
        + weights.energy * energy
    )
    return FitnessBreakdown(
        loads=tuple(loads),
        makespan=makespan,
        avg_load=avg_load,
        imbalance=imbalance,
        energy=energy,
        fitness=fitness,
    )


def evaluate(
    instance: ProblemInstance,
    assignment: Assignment,
    weights: FitnessWeights = DEFAULT_WEIGHTS,
) -> float:
    """Scalar fitness of ``assignment`` (lower is better)."""
    return fitness_breakdown(instance, assignment, weights).fitness


def least_loaded_resource(instance: ProblemInstance, assignment: Assignment) -> int:
    """Index of the resource with the smallest load.

    Loads are recomputed from the full assignment on every call. Ties go to
    the lowest index.
    """
    loads = resource_loads(instance, assignment)
    min_index = 0
    min_load = loads[0]
    for i in range(1, len(loads)):
        if loads[i] < min_load:
            min_load = loads[i]
            min_index = i
    return min_index
