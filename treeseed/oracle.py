"""Mutation oracles.

An oracle is any callable taking a pair of scaled features
``(job_length / 1000, resource_speed / 1000)`` and returning a score. The
mutation policy accepts a proposed reassignment when the score is below the
acceptance threshold (0.5 by default). Implementations here are:

- ``constant_oracle``   -- fixed score, handy for tests and ablations.
- ``threshold_oracle``  -- keeps long jobs that already sit on fast resources.
- ``LogisticOracle``    -- fixed linear model with a sigmoid, a drop-in for a
  trained binary classifier.
"""

from __future__ import annotations

import math
from typing import Any, Callable

from treeseed.errors import InvalidConfiguration, OracleUnavailable

Features = tuple[float, float]
Oracle = Callable[[Features], float]


def constant_oracle(value: float) -> Oracle:
    def score(features: Features) -> float:
        return value

    return score


def threshold_oracle(length_cutoff: float, speed_cutoff: float) -> Oracle:
    """Return 1.0 (reject) for long jobs already on fast resources, else 0.0."""

    def score(features: Features) -> float:
        length, speed = features
        return 1.0 if length >= length_cutoff and speed >= speed_cutoff else 0.0

    return score


class LogisticOracle:
    """``sigmoid(w0 * length + w1 * speed + bias)``; output in (0, 1)."""

    def __init__(self, weights: tuple[float, float] = (1.0, -1.0), bias: float = 0.0):
        if len(weights) != 2:
            raise InvalidConfiguration(f"LogisticOracle needs 2 weights, got: {len(weights)}")
        self.weights = (float(weights[0]), float(weights[1]))
        self.bias = float(bias)

    def __call__(self, features: Features) -> float:
        z = self.weights[0] * features[0] + self.weights[1] * features[1] + self.bias
        # split keeps exp() from overflowing for large |z|
        if z >= 0:
            return 1.0 / (1.0 + math.exp(-z))
        ez = math.exp(z)
        return ez / (1.0 + ez)

    def __repr__(self) -> str:
        return f"LogisticOracle(weights={self.weights}, bias={self.bias})"


def query_oracle(oracle: Oracle, features: Features) -> float:
    """Call ``oracle`` and normalise failures to ``OracleUnavailable``."""
    try:
        value = float(oracle(features))
    except Exception as e:
        raise OracleUnavailable(f"Oracle failed for features {features}: {e}") from e
    if not math.isfinite(value):
        raise OracleUnavailable(f"Oracle returned non-finite score {value} for {features}")
    return value


def build_oracle(cfg: dict[str, Any] | None) -> Oracle:
    """Build an oracle from the ``oracle`` config section.

    Recognised kinds: ``constant`` (``value``), ``threshold``
    (``length_cutoff``, ``speed_cutoff``) and ``logistic`` (``weights``,
    ``bias``). A missing section gives ``constant_oracle(0.0)``.
    """
    cfg = cfg or {}
    kind = str(cfg.get("kind", "constant")).lower()
    try:
        if kind == "constant":
            return constant_oracle(float(cfg.get("value", 0.0)))
        if kind == "threshold":
            return threshold_oracle(
                float(cfg.get("length_cutoff", 20.0)),
                float(cfg.get("speed_cutoff", 1.0)),
            )
        if kind == "logistic":
            weights = cfg.get("weights", [1.0, -1.0])
            return LogisticOracle(
                weights=(float(weights[0]), float(weights[1])),
                bias=float(cfg.get("bias", 0.0)),
            )
    except (TypeError, ValueError, IndexError) as e:
        raise InvalidConfiguration(f"Invalid oracle config {cfg}: {e}") from e
    raise InvalidConfiguration(f"Unknown oracle kind: {kind}")
