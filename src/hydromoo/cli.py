"""
Command line entry point: ``hydromoo run`` and ``hydromoo list``.
"""

from __future__ import annotations

import argparse
import logging

from hydromoo.algorithms.registry import available_algorithms, build_algorithm
from hydromoo.config.loader import ExperimentSpec, load_experiment_spec, parse_experiment_spec
from hydromoo.exceptions import HydroMOOError
from hydromoo.experiment import ExperimentAlgorithm, ExperimentReport, ExperimentRunner
from hydromoo.logging import configure_hydromoo_logging
from hydromoo.operators.registry import CROSSOVERS, MUTATIONS, SELECTIONS
from hydromoo.problems import available_problems, make_problem


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def catalogue() -> dict[str, list[str]]:
    return {
        "algorithms": available_algorithms(),
        "crossover": CROSSOVERS.list(),
        "mutation": MUTATIONS.list(),
        "selection": SELECTIONS.list(),
        "problems": available_problems(),
    }


def build_experiments(spec: ExperimentSpec) -> list[ExperimentAlgorithm]:
    """One cell per (run, algorithm); each cell owns a fresh problem instance."""
    cells = []
    for run_id in range(spec.independent_runs):
        seed = None if spec.seed is None else spec.seed + run_id
        for entry in spec.algorithms:
            problem = make_problem(spec.problem, **spec.problem_params)
            algorithm = build_algorithm(entry.name, problem, seed=seed, config=entry.config or None)
            cells.append(ExperimentAlgorithm(algorithm, spec.problem, run_id, algorithm_tag=entry.label))
    return cells


def run_experiment(spec: ExperimentSpec) -> ExperimentReport:
    return ExperimentRunner(build_experiments(spec), base_dir=spec.output_dir).run()


def _list_cmd(args: argparse.Namespace) -> int:
    for section, names in catalogue().items():
        _logger().info("%-10s | %s", section, ", ".join(names))
    return 0


def _run_cmd(args: argparse.Namespace) -> int:
    data = load_experiment_spec(args.experiment)
    if args.seed is not None:
        data["seed"] = args.seed
    if args.output is not None:
        data["output_dir"] = args.output
    spec = parse_experiment_spec(data)
    report = run_experiment(spec)
    for (label, run_id), front in sorted(report.results.items()):
        _logger().info("%s run %d: %d solutions", label, run_id, len(front))
    _logger().info("Results written under %s", spec.output_dir)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hydromoo", description="Run metaheuristic optimisation experiments.")
    sub = p.add_subparsers(dest="cmd")

    sub.add_parser("list", help="List algorithms, operators and problems")

    run_p = sub.add_parser("run", help="Run an experiment file (YAML or JSON)")
    run_p.add_argument("experiment")
    run_p.add_argument("--seed", type=int, default=None)
    run_p.add_argument("--output", default=None, help="Overrides output_dir from the experiment file")
    run_p.add_argument("-v", "--verbose", action="store_true", help="Log every generation")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_hydromoo_logging(level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO)
    if args.cmd is None:
        args.cmd = "list"
    try:
        if args.cmd == "list":
            return _list_cmd(args)
        return _run_cmd(args)
    except (HydroMOOError, FileNotFoundError) as exc:
        _logger().error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
