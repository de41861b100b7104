"""Tests for assignment construction and validation."""

from __future__ import annotations

import math
import random

import pytest

from treeseed.errors import InvalidConfiguration
from treeseed.models import Job, ProblemInstance, Resource
from treeseed.operations import (
    create_random_assignment,
    create_round_robin_assignment,
    validate_assignment,
)


def _instance(n_jobs: int = 5, n_res: int = 2) -> ProblemInstance:
    return ProblemInstance.from_catalogs(
        [Job(id=10 + i, length=100.0 * (i + 1)) for i in range(n_jobs)],
        [Resource(index=i, speed=1000.0) for i in range(n_res)],
    )


def test_random_assignment_covers_all_jobs_in_range() -> None:
    inst = _instance(50, 4)
    mapping = create_random_assignment(inst, random.Random(0))
    assert set(mapping) == {job.id for job in inst.jobs}
    assert all(0 <= r < 4 for r in mapping.values())
    assert validate_assignment(inst, mapping)


def test_random_assignment_seeded_is_reproducible() -> None:
    inst = _instance(20, 3)
    a = create_random_assignment(inst, random.Random(7))
    b = create_random_assignment(inst, random.Random(7))
    assert a == b


def test_round_robin_cycles_resources() -> None:
    inst = _instance(5, 2)
    assert create_round_robin_assignment(inst) == {10: 0, 11: 1, 12: 0, 13: 1, 14: 0}


@pytest.mark.parametrize(
    "mapping",
    [
        {10: 0, 11: 1, 12: 0, 13: 1},  # missing job 14
        {10: 0, 11: 1, 12: 0, 13: 1, 14: 0, 99: 1},  # unknown job id
        {10: 0, 11: 1, 12: 2, 13: 1, 14: 0},  # index out of range
        {10: -1, 11: 1, 12: 0, 13: 1, 14: 0},  # negative index
    ],
)
def test_validate_assignment_errors(mapping: dict) -> None:
    with pytest.raises(ValueError):
        validate_assignment(_instance(5, 2), mapping)


@pytest.mark.parametrize(
    "jobs, resources",
    [
        ([], [Resource(index=0, speed=1.0)]),
        ([Job(id=0, length=1.0)], []),
        ([Job(id=0, length=1.0), Job(id=0, length=2.0)], [Resource(index=0, speed=1.0)]),
        ([Job(id=0, length=0.0)], [Resource(index=0, speed=1.0)]),
        ([Job(id=0, length=1.0)], [Resource(index=0, speed=-5.0)]),
        ([Job(id=0, length=1.0)], [Resource(index=1, speed=1.0)]),
        ([Job(id=0, length=math.inf)], [Resource(index=0, speed=1.0)]),
        ([Job(id=0, length=math.nan)], [Resource(index=0, speed=1.0)]),
        ([Job(id=0, length=1.0)], [Resource(index=0, speed=math.inf)]),
    ],
)
def test_instance_rejects_invalid_catalogs(jobs, resources) -> None:
    with pytest.raises(InvalidConfiguration):
        ProblemInstance.from_catalogs(jobs, resources)


def test_instance_lookup_tables() -> None:
    inst = _instance(3, 2)
    assert inst.jobs_number == 3
    assert inst.resources_number == 2
    assert inst.lengths == (100.0, 200.0, 300.0)
    assert inst.positions[12] == 2
    assert inst.speeds == (1000.0, 1000.0)
