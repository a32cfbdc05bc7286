import json

import pytest

from hydromoo.config import load_experiment_spec, parse_experiment_spec
from hydromoo.exceptions import ConfigurationError

YAML_SPEC = """
problem:
  name: zdt1
  n_var: 6
seed: 7
independent_runs: 2
output_dir: out
algorithms:
  - name: nsgaii
    config:
      population_size: 10
      max_evaluations: 50
  - name: spea2
    tag: spea2-k2
    config: {population_size: 10, max_iterations: 3, k: 2}
"""


def test_load_yaml(tmp_path):
    path = tmp_path / "experiment.yaml"
    path.write_text(YAML_SPEC, encoding="utf-8")
    spec = parse_experiment_spec(load_experiment_spec(path))
    assert spec.problem == "zdt1"
    assert spec.problem_params == {"n_var": 6}
    assert spec.seed == 7
    assert spec.independent_runs == 2
    assert spec.output_dir == "out"
    assert [a.label for a in spec.algorithms] == ["nsgaii", "spea2-k2"]
    assert spec.algorithms[1].config["k"] == 2


def test_load_json(tmp_path):
    path = tmp_path / "experiment.json"
    path.write_text(json.dumps({"problem": "sphere", "algorithms": ["de"]}), encoding="utf-8")
    spec = parse_experiment_spec(load_experiment_spec(path))
    assert spec.problem == "sphere"
    assert spec.algorithms[0].config == {}
    assert spec.seed is None
    assert spec.output_dir == "results"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_experiment_spec(tmp_path / "absent.yaml")


def test_top_level_must_be_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- nsgaii\n- spea2\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="mapping"):
        load_experiment_spec(path)


def test_unknown_top_level_key():
    with pytest.raises(ConfigurationError, match="runs"):
        parse_experiment_spec({"problem": "zdt1", "algorithms": ["nsgaii"], "runs": 3})


def test_problem_and_algorithms_are_required():
    with pytest.raises(ConfigurationError, match="problem"):
        parse_experiment_spec({"algorithms": ["nsgaii"]})
    with pytest.raises(ConfigurationError, match="algorithms"):
        parse_experiment_spec({"problem": "zdt1", "algorithms": []})


def test_duplicate_labels_are_rejected():
    with pytest.raises(ConfigurationError, match="unique"):
        parse_experiment_spec({"problem": "zdt1", "algorithms": ["nsgaii", {"name": "nsgaii"}]})
    spec = parse_experiment_spec({"problem": "zdt1", "algorithms": ["nsgaii", {"name": "nsgaii", "tag": "b"}]})
    assert [a.label for a in spec.algorithms] == ["nsgaii", "b"]


def test_runs_must_be_positive():
    with pytest.raises(ConfigurationError):
        parse_experiment_spec({"problem": "zdt1", "algorithms": ["nsgaii"], "independent_runs": 0})
