import dataclasses
import json

import pytest

from hydromoo.config import DEConfig, GAConfig, NSGAIIConfig, SMPSOConfig, SPEA2Config
from hydromoo.exceptions import ConfigurationError, MissingConfigError


def test_fixed_requires_mandatory_fields():
    with pytest.raises(MissingConfigError, match="max_evaluations"):
        NSGAIIConfig().population_size(10).fixed()


def test_config_data_is_frozen():
    cfg = DEConfig.default()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.population_size = 5


def test_serialization():
    cfg = NSGAIIConfig().population_size(20).max_evaluations(200).crossover("sbx", probability=0.8).fixed()
    data = cfg.to_dict()
    assert data["population_size"] == 20
    assert data["crossover"] == ("sbx", {"probability": 0.8})
    assert json.loads(cfg.to_json())["crossover"] == ["sbx", {"probability": 0.8}]


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigurationError, match="Valid keys"):
        SPEA2Config.from_dict({"population_size": 10, "max_iterations": 5, "archive": 3})


def test_from_dict_coerces_operators_and_ranges():
    cfg = SPEA2Config.from_dict(
        {
            "population_size": 10,
            "max_iterations": 5,
            "crossover": {"method": "sbx", "probability": 0.8},
            "mutation": "polynomial",
        }
    )
    assert cfg.crossover == ("sbx", {"probability": 0.8})
    assert cfg.mutation == ("polynomial", {})

    smpso = SMPSOConfig.from_dict({"swarm_size": 10, "max_iterations": 5, "c1": [1.0, 2.0]})
    assert smpso.c1 == (1.0, 2.0)


def test_operator_mapping_needs_a_method():
    with pytest.raises(ConfigurationError, match="method"):
        NSGAIIConfig.from_dict({"population_size": 10, "max_evaluations": 50, "mutation": {"probability": 0.1}})


def test_ga_termination_setters_replace_each_other():
    cfg = GAConfig().population_size(10).max_evaluations(100).max_iterations_without_improvement(5).fixed()
    assert cfg.max_evaluations is None
    assert cfg.max_iterations_without_improvement == 5

    cfg = GAConfig().population_size(10).max_iterations_without_improvement(5).max_evaluations(100).fixed()
    assert cfg.max_iterations_without_improvement is None


def test_ga_needs_one_termination_criterion():
    with pytest.raises(ConfigurationError):
        GAConfig().population_size(10).fixed()
    with pytest.raises(ConfigurationError):
        GAConfig().max_evaluations(-1)


def test_smpso_ranges_and_archive():
    with pytest.raises(ConfigurationError, match="empty"):
        SMPSOConfig().r1(1.0, 0.5)
    cfg = SMPSOConfig().swarm_size(10).max_iterations(5).archive(20, "hypervolume").weight(0.1, 0.5).fixed()
    assert cfg.archive_size == 20
    assert cfg.archive_type == "hypervolume"
    assert cfg.weight == (0.1, 0.5)


def test_counts_must_be_positive():
    with pytest.raises(ConfigurationError):
        NSGAIIConfig().population_size(0)
    with pytest.raises(ConfigurationError):
        SPEA2Config().max_iterations(-2)


def test_defaults():
    assert SMPSOConfig.default().archive_type == "crowding"
    assert GAConfig.default().selection == ("uniform", {"constant": 1.5})
    assert DEConfig.default().variant == "rand/1/bin"
