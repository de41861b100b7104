"""Oracle-gated mutation policy.

A seed is a copy of a parent assignment. Jobs are scanned in catalog order;
each becomes a mutation candidate with probability ``mutation_rate``. For a
candidate the least-loaded resource of the seed *as mutated so far* is
computed from scratch, the oracle is asked about the job and its current
resource, and the job moves there only if the score is below the acceptance
threshold.
"""

from __future__ import annotations

import logging
import random

from treeseed.config import OptimizerParams
from treeseed.errors import OracleUnavailable
from treeseed.fitness import least_loaded_resource
from treeseed.models import Assignment, ProblemInstance
from treeseed.oracle import Oracle, query_oracle

logger = logging.getLogger("treeseed.mutation")


def mutate(
    parent: Assignment,
    instance: ProblemInstance,
    oracle: Oracle,
    rng: random.Random,
    params: OptimizerParams,
) -> Assignment:
    """Return a mutated copy of ``parent``; ``parent`` itself is not touched."""
    seed = dict(parent)
    scale = params.feature_scale
    for job, length in zip(instance.jobs, instance.lengths):
        if rng.random() >= params.mutation_rate:
            continue
        current = seed[job.id]
        target = least_loaded_resource(instance, seed)
        features = (length / scale, instance.speeds[current] / scale)
        try:
            score = query_oracle(oracle, features)
        except OracleUnavailable as e:
            logger.warning("[tsa] oracle unavailable, mutation rejected: %s", e)
            continue
        if score < params.acceptance_threshold:
            seed[job.id] = target
    return seed
