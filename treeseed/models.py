"""Core data structures for job -> resource assignment instances.

This module defines:
    Job             -- unit of work with a fixed processing length.
    Resource        -- execution unit with a fixed processing speed.
    Assignment      -- alias for a total mapping job id -> resource index.
    ProblemInstance -- immutable container with both catalogs and lookup tables.
    FitnessBreakdown, SearchResult -- results of evaluation and search.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from treeseed.errors import InvalidConfiguration

Assignment = dict[int, int]  # job_id -> resource index


@dataclass(frozen=True)
class Job:
    """Single job (id, length in work units)."""

    id: int
    length: float


@dataclass(frozen=True)
class Resource:
    """Single resource (0-based index, speed in work units per time unit)."""

    index: int
    speed: float


@dataclass(frozen=True)
class ProblemInstance:
    """Immutable representation of one assignment problem.

    Attributes:
        jobs: Job catalog in its original order.
        resources: Resource catalog; ``resources[i].index == i``.
        lengths: ``lengths[k]`` is the length of ``jobs[k]``.
        speeds: ``speeds[i]`` is the speed of ``resources[i]``.
        positions: Job id -> position in ``jobs``.
    """

    jobs: tuple[Job, ...]
    resources: tuple[Resource, ...]
    lengths: tuple[float, ...]
    speeds: tuple[float, ...]
    positions: dict[int, int] = field(repr=False)

    @property
    def jobs_number(self) -> int:
        return len(self.jobs)

    @property
    def resources_number(self) -> int:
        return len(self.resources)

    @classmethod
    def from_catalogs(
        cls, jobs: Sequence[Job], resources: Sequence[Resource]
    ) -> "ProblemInstance":
        """Validate both catalogs and precompute lookup tables.

        Raises:
            InvalidConfiguration: If a catalog is empty, job ids repeat, a
                length or speed is not positive, or a resource index does not
                match its position.
        """
        jobs = tuple(jobs)
        resources = tuple(resources)
        if not jobs:
            raise InvalidConfiguration("Job catalog is empty")
        if not resources:
            raise InvalidConfiguration("Resource catalog is empty")

        positions: dict[int, int] = {}
        for pos, job in enumerate(jobs):
            if job.id in positions:
                raise InvalidConfiguration(f"Duplicate job id: {job.id}")
            if not (job.length > 0 and math.isfinite(job.length)):
                raise InvalidConfiguration(
                    f"Job {job.id} length must be positive and finite, got: {job.length}"
                )
            positions[job.id] = pos
        for pos, res in enumerate(resources):
            if res.index != pos:
                raise InvalidConfiguration(
                    f"Resource index {res.index} does not match position {pos}"
                )
            if not (res.speed > 0 and math.isfinite(res.speed)):
                raise InvalidConfiguration(
                    f"Resource {res.index} speed must be positive and finite, got: {res.speed}"
                )

        return cls(
            jobs=jobs,
            resources=resources,
            lengths=tuple(float(j.length) for j in jobs),
            speeds=tuple(float(r.speed) for r in resources),
            positions=positions,
        )


@dataclass(frozen=True)
class FitnessBreakdown:
    """All components of the composite fitness for one assignment.

    Fields:
        loads: Per-resource load (duration), indexed by resource.
        makespan: Maximum load.
        avg_load: Mean load.
        imbalance: Mean absolute deviation of loads from ``avg_load``.
        energy: Energy proxy summed over resources.
        fitness: Weighted sum; lower is better.
    """

    loads: tuple[float, ...]
    makespan: float
    avg_load: float
    imbalance: float
    energy: float
    fitness: float


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one ``optimize()`` call."""

    mapping: Assignment | None
    fitness: float
    history: list[float]
    rounds: int
    cancelled: bool = False
