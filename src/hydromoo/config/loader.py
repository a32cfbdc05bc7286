"""
Experiment file loading shared by the CLI and programmatic entrypoints.

An experiment file looks like::

    problem:
      name: zdt1
      n_var: 30
    seed: 7
    independent_runs: 2
    output_dir: results
    algorithms:
      - name: nsgaii
        config:
          population_size: 100
          max_evaluations: 25000
      - name: spea2
        tag: spea2-k2
        config: {population_size: 100, max_iterations: 250, k: 2}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from hydromoo.exceptions import ConfigurationError


def load_experiment_spec(path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML or JSON experiment specification.
    """
    spec_path = Path(path).expanduser().resolve()
    if not spec_path.exists():
        raise FileNotFoundError(f"Config file '{spec_path}' does not exist.")
    suffix = spec_path.suffix.lower()
    with spec_path.open("r", encoding="utf-8") as fh:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(fh) or {}
        else:
            data = json.load(fh)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Experiment file '{spec_path}' must contain a mapping at the top level.")
    return data


@dataclass(frozen=True)
class AlgorithmEntry:
    name: str
    config: Dict[str, Any]
    tag: Optional[str] = None

    @property
    def label(self) -> str:
        return self.tag or self.name


@dataclass(frozen=True)
class ExperimentSpec:
    problem: str
    problem_params: Dict[str, Any]
    algorithms: List[AlgorithmEntry]
    seed: Optional[int] = None
    independent_runs: int = 1
    output_dir: str = "results"


_TOP_LEVEL = {"problem", "algorithms", "seed", "independent_runs", "output_dir"}


def parse_experiment_spec(data: Dict[str, Any]) -> ExperimentSpec:
    """Validate the mapping returned by :func:`load_experiment_spec`."""
    unknown = sorted(set(data) - _TOP_LEVEL)
    if unknown:
        raise ConfigurationError(
            f"Unknown experiment keys: {', '.join(unknown)}.",
            suggestion=f"Valid keys: {', '.join(sorted(_TOP_LEVEL))}",
        )
    problem = data.get("problem")
    if isinstance(problem, str):
        problem = {"name": problem}
    if not isinstance(problem, dict) or "name" not in problem:
        raise ConfigurationError(
            "Experiment needs a 'problem' entry with a 'name'.",
            suggestion="e.g. problem: {name: zdt1, n_var: 30}",
        )
    problem_params = {k: v for k, v in problem.items() if k != "name"}

    raw_algorithms = data.get("algorithms")
    if not isinstance(raw_algorithms, list) or not raw_algorithms:
        raise ConfigurationError("Experiment needs a non-empty 'algorithms' list.")
    algorithms = []
    for entry in raw_algorithms:
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or "name" not in entry:
            raise ConfigurationError(f"Algorithm entries need a 'name', got {entry!r}.")
        algorithms.append(
            AlgorithmEntry(name=str(entry["name"]), config=dict(entry.get("config") or {}), tag=entry.get("tag"))
        )
    labels = [a.label for a in algorithms]
    if len(set(labels)) != len(labels):
        raise ConfigurationError(
            f"Algorithm labels must be unique, got {labels}.",
            suggestion="Give repeated algorithms a distinct 'tag'",
        )

    runs = int(data.get("independent_runs", 1))
    if runs <= 0:
        raise ConfigurationError(f"independent_runs must be positive, got {runs}.")
    seed = data.get("seed")
    return ExperimentSpec(
        problem=str(problem["name"]),
        problem_params=problem_params,
        algorithms=algorithms,
        seed=None if seed is None else int(seed),
        independent_runs=runs,
        output_dir=str(data.get("output_dir", "results")),
    )


__all__ = ["load_experiment_spec", "parse_experiment_spec", "ExperimentSpec", "AlgorithmEntry"]
