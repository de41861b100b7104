"""Assignment utilities: creation and validation of assignments.

Concepts
--------
Assignment
    A ``dict`` mapping every job id of the instance to exactly one resource
    index in ``[0, resources_number)``. Each assignment owns its dict; copies
    are made with ``dict(assignment)`` and never share storage.
"""

from __future__ import annotations

import random

from treeseed.models import Assignment, ProblemInstance


def create_random_assignment(instance: ProblemInstance, rng: random.Random) -> Assignment:
    """Assign every job (in catalog order) a uniformly random resource."""
    m = instance.resources_number
    return {job.id: rng.randrange(m) for job in instance.jobs}


def create_round_robin_assignment(instance: ProblemInstance) -> Assignment:
    """Create the baseline assignment without any optimization.

    Args:
        instance: Problem instance.

    Returns:
        Mapping where the job at catalog position ``k`` runs on resource
        ``k % resources_number``. Deterministic; useful as a reference point
        for optimized assignments.
    """
    m = instance.resources_number
    return {job.id: pos % m for pos, job in enumerate(instance.jobs)}


def validate_assignment(instance: ProblemInstance, assignment: Assignment) -> bool:
    """Validate an assignment's coverage and index range.

    Args:
        instance: Problem instance supplying the job ids and resource count.
        assignment: Candidate mapping to check.

    Returns:
        True if the assignment is valid (so the call can sit inside asserts).

    Raises:
        ValueError: If a job is missing, an unknown job id is mapped, or a
            resource index lies outside ``[0, resources_number)``.
    """
    expected = set(instance.positions)
    mapped = set(assignment)
    missing = expected - mapped
    if missing:
        raise ValueError(f"Incomplete assignment (missing jobs): {sorted(missing)[:10]}")
    unknown = mapped - expected
    if unknown:
        raise ValueError(f"Unknown job ids in assignment: {sorted(unknown)[:10]}")
    m = instance.resources_number
    for job_id, r in assignment.items():
        if not (0 <= r < m):
            raise ValueError(f"Resource index out of range for job {job_id}: {r}")
    return True
