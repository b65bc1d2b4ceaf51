"""Tests for the MO-CMA-ES configuration builder and file loader."""

from __future__ import annotations

import json

import pytest

from mocma.engine.algorithm.config import MOCMAConfig, MOCMAConfigData, coerce_config, load_config
from mocma.foundation.exceptions import (
    ConfigurationError,
    InvalidEvalBackendError,
    InvalidIndicatorError,
    InvalidNotionOfSuccessError,
    MissingConfigError,
)


def test_defaults():
    cfg = MOCMAConfig.default()
    assert cfg.mu == 100
    assert cfg.penalty_factor == 1e-6
    assert cfg.success_threshold == 0.44
    assert cfg.notion_of_success == "individual"
    assert cfg.initial_sigma == 1.0
    assert cfg.indicator == "hypervolume"
    assert cfg.eval_backend == "serial"
    assert not cfg.population_based


def test_builder_is_fluent():
    cfg = MOCMAConfig().mu(20).indicator("approximated", n_samples=500).notion_of_success("population").fixed()
    assert cfg.mu == 20
    assert cfg.indicator == "approximated"
    assert cfg.indicator_params == {"n_samples": 500}
    assert cfg.population_based


@pytest.mark.parametrize(
    "alias, canonical",
    [
        ("HV", "hypervolume"),
        ("additive_epsilon", "epsilon"),
        ("AdditiveEpsilon", "epsilon"),
        ("least_contributor_approximator", "approximated"),
        ("approximated_hypervolume", "approximated"),
    ],
)
def test_indicator_aliases_are_canonicalised(alias, canonical):
    cfg = MOCMAConfig().mu(3).indicator(alias).fixed()
    assert cfg.indicator == canonical


def test_from_mapping_accepts_original_keys():
    cfg = MOCMAConfig.from_mapping(
        {
            "Mu": 50,
            "PenaltyFactor": 1e-4,
            "SuccessThreshold": 0.5,
            "NotionOfSuccess": "PopulationBased",
            "InitialSigma": 0.2,
        }
    )
    assert cfg.mu == 50
    assert cfg.penalty_factor == 1e-4
    assert cfg.success_threshold == 0.5
    assert cfg.notion_of_success == "population"
    assert cfg.initial_sigma == 0.2


def test_from_mapping_defaults_and_unknown_keys():
    assert MOCMAConfig.from_mapping({}) == MOCMAConfig.default()
    with pytest.raises(ConfigurationError, match="Unknown MO-CMA-ES configuration key"):
        MOCMAConfig.from_mapping({"pop_size": 10})


def test_dict_roundtrip():
    cfg = MOCMAConfig().mu(7).indicator("epsilon").eval_backend("process", n_workers=2).fixed()
    data = cfg.to_dict()
    assert isinstance(data, dict)
    assert MOCMAConfig.from_mapping(data) == cfg
    assert json.loads(cfg.to_json())["mu"] == 7


@pytest.mark.parametrize(
    "mutate, error",
    [
        (lambda b: b.mu(0), ConfigurationError),
        (lambda b: b.mu(2.5), ConfigurationError),
        (lambda b: b.penalty_factor(-1.0), ConfigurationError),
        (lambda b: b.success_threshold(0.0), ConfigurationError),
        (lambda b: b.initial_sigma(0.0), ConfigurationError),
        (lambda b: b.indicator("r2"), InvalidIndicatorError),
        (lambda b: b.notion_of_success("generation"), InvalidNotionOfSuccessError),
        (lambda b: b.eval_backend("dask"), InvalidEvalBackendError),
    ],
)
def test_invalid_values(mutate, error):
    builder = MOCMAConfig().mu(10)
    with pytest.raises(error):
        mutate(builder).fixed()


def test_missing_mu():
    with pytest.raises(MissingConfigError):
        MOCMAConfig().indicator("epsilon").fixed()


def test_coerce_config():
    cfg = MOCMAConfig().mu(3).fixed()
    assert coerce_config(cfg) is cfg
    assert coerce_config({"mu": 3}) == cfg
    assert isinstance(coerce_config(None), MOCMAConfigData)
    with pytest.raises(ConfigurationError):
        coerce_config(["mu", 3])


def test_load_yaml_config(tmp_path):
    path = tmp_path / "mocma.yaml"
    path.write_text("mocma:\n  Mu: 12\n  indicator: epsilon\n  NotionOfSuccess: IndividualBased\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.mu == 12
    assert cfg.indicator == "epsilon"
    assert cfg.notion_of_success == "individual"


def test_load_json_config(tmp_path):
    path = tmp_path / "mocma.json"
    path.write_text(json.dumps({"mu": 8, "indicator": "approximated", "indicator_params": {"n_samples": 64}}))
    cfg = load_config(path)
    assert cfg.mu == 8
    assert cfg.indicator_params == {"n_samples": 64}


def test_load_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")
