"""Comparison mode execution logic.

Runs the TreeSeed optimizer ``runs`` times on one instance (each run restarts
from a fresh random population, all runs share the optimizer's random
generator) and sets the best result against the round-robin baseline. Per-run
fitness, the best breakdown and the baseline breakdown are persisted as JSON;
convergence and load charts are rendered next to it.

The fitness values here are predictions from declared lengths and speeds, not
measurements of an executed schedule.
"""
from __future__ import annotations

import json
import logging
import os
import threading
import time
from datetime import datetime
from typing import Dict, List, Optional

from treeseed.models import Assignment
from treeseed.operations import create_round_robin_assignment, validate_assignment
from treeseed.optimizer import TreeSeedOptimizer
from treeseed.visualization import next_unique_path, save_convergence_plot, save_load_chart

logger = logging.getLogger("treeseed.compare")


def run_compare(
    optimizer: TreeSeedOptimizer,
    runs: int,
    charts_dir: str,
    stop_event: Optional[threading.Event] = None,
) -> tuple[Optional[Assignment], Optional[float]]:
    """Run independent optimizer restarts and compare with round-robin.

    Args:
        optimizer: Configured optimizer (instance, oracle, rng, params).
        runs: Number of ``optimize()`` calls.
        charts_dir: Directory for output artefacts (created if missing).
        stop_event: Optional cancellation signal forwarded to each run.

    Returns:
        Tuple ``(best_mapping, best_fitness)`` across runs, or
        ``(None, None)`` when no run completed a round.
    """
    instance = optimizer.instance

    baseline = create_round_robin_assignment(instance)
    baseline_bd = optimizer.breakdown(baseline)
    logger.info(
        "Instance: jobs=%d resources=%d round-robin fitness=%.4f",
        instance.jobs_number,
        instance.resources_number,
        baseline_bd.fitness,
    )

    per_run: List[Dict] = []
    histories: Dict[str, List[float]] = {}
    best_mapping: Optional[Assignment] = None
    best_fitness: Optional[float] = None
    for i in range(1, runs + 1):
        t0 = time.perf_counter()
        result = optimizer.optimize(stop_event=stop_event)
        elapsed = time.perf_counter() - t0
        if result.mapping is None:
            logger.warning("Run %d/%d produced no assignment (cancelled)", i, runs)
            break
        validate_assignment(instance, result.mapping)
        per_run.append(
            {
                "run": i,
                "fitness": result.fitness,
                "rounds": result.rounds,
                "cancelled": result.cancelled,
                "time": elapsed,
            }
        )
        histories[f"run {i}"] = result.history
        if best_fitness is None or result.fitness < best_fitness:
            best_fitness = result.fitness
            best_mapping = result.mapping
        logger.info("Run %d/%d: fitness=%.4f (%.4fs)", i, runs, result.fitness, elapsed)
        if result.cancelled:
            break

    if best_mapping is None or best_fitness is None:
        return None, None

    best_bd = optimizer.breakdown(best_mapping)
    improvement = (
        100.0 * (baseline_bd.fitness - best_bd.fitness) / baseline_bd.fitness
        if baseline_bd.fitness
        else 0.0
    )
    fitness_values = [r["fitness"] for r in per_run]
    logger.info(
        "Compare summary: best=%.4f avg=%.4f round-robin=%.4f improvement=%.2f%%",
        best_fitness,
        sum(fitness_values) / len(fitness_values),
        baseline_bd.fitness,
        improvement,
    )

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    try:
        os.makedirs(charts_dir, exist_ok=True)
        results_path = next_unique_path(os.path.join(charts_dir, f"compare_results_{stamp}.json"))
        json_payload = {
            "instance": {
                "jobs": instance.jobs_number,
                "resources": instance.resources_number,
                "speeds": list(instance.speeds),
            },
            "params": optimizer.params.to_dict(),
            "runs": runs,
            "timestamp": stamp,
            "per_run": per_run,
            "best": {
                "fitness": best_fitness,
                "breakdown": _breakdown_dict(best_bd),
                "mapping": {str(k): v for k, v in best_mapping.items()},
            },
            "baseline": {
                "name": "round_robin",
                "fitness": baseline_bd.fitness,
                "breakdown": _breakdown_dict(baseline_bd),
            },
            "improvement_pct": improvement,
        }
        with open(results_path, "w", encoding="utf-8") as f:
            json.dump(json_payload, f, ensure_ascii=False, indent=2)
        logger.info("Saved compare results JSON to %s", results_path)
    except (OSError, TypeError, ValueError) as e:
        logger.warning("Failed to write results JSON: %s", e)
    try:
        save_convergence_plot(
            histories,
            next_unique_path(os.path.join(charts_dir, f"convergence_{stamp}.png")),
            baseline=baseline_bd.fitness,
        )
        save_load_chart(
            {"treeseed": best_bd.loads, "round-robin": baseline_bd.loads},
            next_unique_path(os.path.join(charts_dir, f"loads_{stamp}.png")),
        )
    except Exception as e:
        logger.warning("Failed to create charts: %s", e)
    return best_mapping, best_fitness


def _breakdown_dict(bd) -> Dict:
    return {
        "loads": list(bd.loads),
        "makespan": bd.makespan,
        "avg_load": bd.avg_load,
        "imbalance": bd.imbalance,
        "energy": bd.energy,
        "fitness": bd.fitness,
    }
