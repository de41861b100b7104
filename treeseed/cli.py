import argparse
import logging
import random
import sys
from typing import Optional, Sequence

from treeseed.config import load_config, params_from_config
from treeseed.modes.compare import run_compare
from treeseed.optimizer import TreeSeedOptimizer
from treeseed.oracle import build_oracle
from treeseed.workload import workload_from_config


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="TreeSeed job -> resource assignment optimizer")
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to the YAML/JSON configuration file",
    )
    args = parser.parse_args(argv)

    cfg = load_config(args.config)

    log_level = cfg.get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("treeseed")

    params = params_from_config(cfg)
    jobs, resources = workload_from_config(cfg)
    oracle_cfg = cfg.get("oracle") if isinstance(cfg.get("oracle"), dict) else {}
    oracle = build_oracle(oracle_cfg)
    seed = cfg.get("seed")
    rng = random.Random(seed) if seed is not None else random.Random()
    charts_cfg = cfg.get("charts", {}) if isinstance(cfg.get("charts"), dict) else {}

    optimizer = TreeSeedOptimizer(jobs, resources, oracle=oracle, rng=rng, params=params)
    logger.info(
        "Optimizing %d jobs on %d resources (P=%d, I=%d, oracle=%s)",
        len(jobs),
        len(resources),
        params.population_size,
        params.iterations,
        oracle_cfg.get("kind", "constant"),
    )
    _, best_fitness = run_compare(
        optimizer,
        runs=int(cfg.get("runs", 1)),
        charts_dir=charts_cfg.get("dir", "charts"),
    )
    if best_fitness is None:
        logger.error("No assignment produced")
        return 1
    print(f"Best fitness: {best_fitness:.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
