"""Configuration loading and optimizer hyper-parameters.

``OptimizerParams`` bundles every knob of the search so it can be passed
around (CLI, comparison mode, tests) and stored in reports. Values come from a
YAML (or JSON) file with sections ``optimizer``, ``fitness``, ``oracle``,
``workload`` and ``charts``.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict

import yaml

from treeseed.errors import InvalidConfiguration
from treeseed.fitness import FitnessWeights


@dataclass(slots=True)
class OptimizerParams:
    """Hyper-parameters of the population search.

    Attributes:
        population_size: Individuals per round (``P``).
        iterations: Number of rounds (``I``); no early exit.
        mutation_rate: Probability that a job becomes a mutation candidate.
        acceptance_threshold: Oracle scores strictly below it accept a move.
        feature_scale: Divisor applied to job length and resource speed
            before querying the oracle.
        report_every: Progress is logged every ``report_every`` rounds and on
            the last one.
        weights: Fitness weights and energy constants.
    """

    population_size: int = 10
    iterations: int = 20
    mutation_rate: float = 0.25
    acceptance_threshold: float = 0.5
    feature_scale: float = 1000.0
    report_every: int = 5
    weights: FitnessWeights = field(default_factory=FitnessWeights)

    def validate(self) -> "OptimizerParams":
        if self.population_size <= 0:
            raise InvalidConfiguration(
                f"population_size must be positive, got: {self.population_size}"
            )
        if self.iterations <= 0:
            raise InvalidConfiguration(f"iterations must be positive, got: {self.iterations}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise InvalidConfiguration(
                f"mutation_rate must be within [0, 1], got: {self.mutation_rate}"
            )
        if self.feature_scale <= 0:
            raise InvalidConfiguration(
                f"feature_scale must be positive, got: {self.feature_scale}"
            )
        if self.report_every <= 0:
            raise InvalidConfiguration(
                f"report_every must be positive, got: {self.report_every}"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_file: str = "config.yaml") -> dict:
    """Load configuration from a YAML (``.yml``/``.yaml``) or JSON file."""
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith((".yml", ".yaml")):
        cfg = yaml.safe_load(text) or {}
    else:
        cfg = json.loads(text)
    if not isinstance(cfg, dict):
        raise InvalidConfiguration(f"Config root must be a mapping: {config_file}")
    return cfg


def _section(cfg: dict, name: str) -> dict:
    value = cfg.get(name, {})
    return value if isinstance(value, dict) else {}


def params_from_config(cfg: dict) -> OptimizerParams:
    """Build validated ``OptimizerParams`` from the ``optimizer`` and ``fitness`` sections."""
    opt_cfg = _section(cfg, "optimizer")
    fit_cfg = _section(cfg, "fitness")
    defaults = FitnessWeights()
    try:
        weights = FitnessWeights(
            makespan=float(fit_cfg.get("makespan_weight", defaults.makespan)),
            imbalance=float(fit_cfg.get("imbalance_weight", defaults.imbalance)),
            energy=float(fit_cfg.get("energy_weight", defaults.energy)),
            power_watts=float(fit_cfg.get("power_watts", defaults.power_watts)),
            duty_cycle=float(fit_cfg.get("duty_cycle", defaults.duty_cycle)),
        )
        params = OptimizerParams(
            population_size=int(opt_cfg.get("population_size", 10)),
            iterations=int(opt_cfg.get("iterations", 20)),
            mutation_rate=float(opt_cfg.get("mutation_rate", 0.25)),
            acceptance_threshold=float(opt_cfg.get("acceptance_threshold", 0.5)),
            feature_scale=float(opt_cfg.get("feature_scale", 1000.0)),
            report_every=int(opt_cfg.get("report_every", 5)),
            weights=weights,
        )
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(f"Invalid optimizer/fitness config: {e}") from e
    return params.validate()
