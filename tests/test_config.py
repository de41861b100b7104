"""Tests for YAML config loading, parameter validation and workload building."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from treeseed.config import OptimizerParams, load_config, params_from_config
from treeseed.errors import InvalidConfiguration
from treeseed.workload import generate_jobs, generate_resources, workload_from_config


def test_load_yaml_config(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "seed: 5\n"
        "optimizer:\n"
        "  population_size: 4\n"
        "  iterations: 7\n"
        "fitness:\n"
        "  energy_weight: 0.2\n"
    )
    cfg = load_config(str(path))
    params = params_from_config(cfg)
    assert cfg["seed"] == 5
    assert params.population_size == 4
    assert params.iterations == 7
    assert params.mutation_rate == 0.25
    assert params.weights.energy == 0.2
    assert params.weights.makespan == 0.5


def test_load_json_config(tmp_path: Path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"optimizer": {"iterations": 3}}))
    assert params_from_config(load_config(str(path))).iterations == 3


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_empty_config_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    params = params_from_config(load_config(str(path)))
    assert params == OptimizerParams()


@pytest.mark.parametrize(
    "section",
    [
        {"population_size": 0},
        {"iterations": -1},
        {"mutation_rate": 1.2},
        {"feature_scale": 0},
        {"report_every": 0},
        {"iterations": "many"},
    ],
)
def test_invalid_optimizer_section(section: dict) -> None:
    with pytest.raises(InvalidConfiguration):
        params_from_config({"optimizer": section})


def test_generate_jobs_seeded() -> None:
    a = generate_jobs(30, 1000, 5000, seed=3)
    b = generate_jobs(30, 1000, 5000, seed=3)
    assert a == b
    assert [j.id for j in a] == list(range(30))
    assert all(1000 <= j.length <= 5000 for j in a)


def test_generate_resources() -> None:
    homogeneous = generate_resources(3)
    assert [(r.index, r.speed) for r in homogeneous] == [(0, 1000.0), (1, 1000.0), (2, 1000.0)]
    explicit = generate_resources(speeds=[500, 250])
    assert [(r.index, r.speed) for r in explicit] == [(0, 500.0), (1, 250.0)]
    with pytest.raises(InvalidConfiguration):
        generate_resources(0)
    with pytest.raises(InvalidConfiguration):
        generate_jobs(5, 10, 1)


def test_workload_from_config_explicit_lengths() -> None:
    cfg = {
        "workload": {
            "jobs": {"lengths": [10, 20, 30]},
            "resources": {"speeds": [1, 2]},
        }
    }
    jobs, resources = workload_from_config(cfg)
    assert [(j.id, j.length) for j in jobs] == [(0, 10.0), (1, 20.0), (2, 30.0)]
    assert [r.speed for r in resources] == [1.0, 2.0]


def test_workload_from_config_generated() -> None:
    cfg = {"seed": 1, "workload": {"jobs": {"count": 12}, "resources": {"count": 3}}}
    jobs, resources = workload_from_config(cfg)
    assert len(jobs) == 12
    assert len(resources) == 3
    assert workload_from_config(cfg)[0] == jobs


@pytest.mark.parametrize(
    "workload",
    [
        {"jobs": {"count": "many"}},
        {"jobs": {"lengths": [10, "long"]}},
        {"resources": {"speed": None}},
        {"resources": {"speeds": ["fast"]}},
    ],
)
def test_invalid_workload_section(workload: dict) -> None:
    with pytest.raises(InvalidConfiguration):
        workload_from_config({"workload": workload})
