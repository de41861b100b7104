"""Seeded synthetic job and resource catalogs for demo and experiment runs."""

import random
from typing import List, Optional, Sequence

from treeseed.errors import InvalidConfiguration
from treeseed.models import Job, Resource


def generate_jobs(
    count: int, min_length: int = 1000, max_length: int = 20000, seed: Optional[int] = 0
) -> List[Job]:
    """Jobs ``0..count-1`` with integer lengths uniform in ``[min_length, max_length]``."""
    if count <= 0:
        raise InvalidConfiguration(f"Job count must be positive, got: {count}")
    if not 0 < min_length <= max_length:
        raise InvalidConfiguration(f"Invalid length range: [{min_length}, {max_length}]")
    rng = random.Random(seed)
    return [Job(id=i, length=float(rng.randint(min_length, max_length))) for i in range(count)]


def generate_resources(
    count: int = 10, speed: float = 1000.0, speeds: Optional[Sequence[float]] = None
) -> List[Resource]:
    """Homogeneous resources, or one resource per entry of ``speeds`` when given."""
    if speeds:
        return [Resource(index=i, speed=float(s)) for i, s in enumerate(speeds)]
    if count <= 0:
        raise InvalidConfiguration(f"Resource count must be positive, got: {count}")
    return [Resource(index=i, speed=float(speed)) for i in range(count)]


def workload_from_config(cfg: dict) -> tuple[List[Job], List[Resource]]:
    """Build both catalogs from the ``workload`` config section."""
    wl = cfg.get("workload", {}) if isinstance(cfg.get("workload"), dict) else {}
    jobs_cfg = wl.get("jobs", {}) if isinstance(wl.get("jobs"), dict) else {}
    res_cfg = wl.get("resources", {}) if isinstance(wl.get("resources"), dict) else {}
    lengths = jobs_cfg.get("lengths")
    try:
        if lengths:
            jobs = [Job(id=i, length=float(v)) for i, v in enumerate(lengths)]
        else:
            jobs = generate_jobs(
                int(jobs_cfg.get("count", 100)),
                int(jobs_cfg.get("min_length", 1000)),
                int(jobs_cfg.get("max_length", 20000)),
                seed=jobs_cfg.get("seed", cfg.get("seed")),
            )
        resources = generate_resources(
            int(res_cfg.get("count", 10)),
            float(res_cfg.get("speed", 1000.0)),
            res_cfg.get("speeds"),
        )
    except InvalidConfiguration:
        raise
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(f"Invalid workload config: {e}") from e
    return jobs, resources
