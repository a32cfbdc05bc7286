"""
One (algorithm, problem, run) cell of an experiment.
"""

from __future__ import annotations

import logging
from pathlib import Path

from hydromoo.algorithms.lifecycle import EvolutionaryAlgorithm
from hydromoo.core.solution import Solution
from hydromoo.exceptions import AlgorithmStateError, ConfigurationError

from .channel import ObservableLog
from .output import SolutionListOutput


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class ExperimentAlgorithm:
    """
    Wrap a stepwise algorithm with experiment bookkeeping.

    Parameters
    ----------
    algorithm : EvolutionaryAlgorithm
        Ready to step algorithm owned by this cell.
    problem_tag : str
        Directory name used for the problem.
    run_id : int
        Index of the independent run; suffix of the FUN/VAR file names.
    algorithm_tag : str, optional
        Directory name used for the algorithm; defaults to its name.
    log : ObservableLog, optional
        Log mirrored with every INFO line this cell emits.
    """

    def __init__(
        self,
        algorithm: EvolutionaryAlgorithm,
        problem_tag: str,
        run_id: int,
        algorithm_tag: str | None = None,
        log: ObservableLog | None = None,
    ) -> None:
        if run_id < 0:
            raise ConfigurationError(f"run_id must be non-negative, got {run_id}.")
        self.algorithm = algorithm
        self.problem_tag = problem_tag
        self.run_id = int(run_id)
        self.algorithm_tag = algorithm_tag or algorithm.name
        self.log = log if log is not None else ObservableLog()
        self.fun_file: Path | None = None
        self.var_file: Path | None = None
        self.generations = 0

    def _emit(self, message: str, *args) -> None:
        _logger().info(message, *args)
        self.log.append(message % args if args else message)

    def prepare_to_run(self, base_dir: str | Path | None) -> None:
        """Create ``<base>/data/<algorithm>/<problem>/`` and fix the output file names.

        ``None`` runs the cell without writing any files.
        """
        if base_dir is None:
            self._emit("- Running algorithm: %s, problem: %s, run: %d", self.algorithm_tag, self.problem_tag, self.run_id)
            return
        if not str(base_dir):
            raise ConfigurationError("Experiment base directory is an empty string.")
        out_dir = Path(base_dir) / "data" / self.algorithm_tag / self.problem_tag
        if not out_dir.exists():
            out_dir.mkdir(parents=True)
            self._emit("Creating %s", out_dir)
        self.fun_file = out_dir / f"FUN{self.run_id}.tsv"
        self.var_file = out_dir / f"VAR{self.run_id}.tsv"
        self._emit(
            "- Running algorithm: %s, problem: %s, run: %d, funFile: %s",
            self.algorithm_tag,
            self.problem_tag,
            self.run_id,
            self.fun_file,
        )

    def run_single_step(self) -> None:
        self.algorithm.step()
        self.generations += 1

    def has_next_step(self) -> bool:
        return not self.algorithm.is_stopping_condition_reached()

    def result(self) -> list[Solution]:
        return self.algorithm.result()

    def status_of_execution(self) -> str:
        return self.algorithm.status_of_execution()

    def progress(self) -> float:
        return self.algorithm.progress()

    def save_solution_list(self) -> tuple[Path, Path]:
        """Write the final result to the FUN/VAR files chosen by :meth:`prepare_to_run`."""
        if self.has_next_step():
            raise AlgorithmStateError(self.algorithm_tag, "save the solution list", "not finished")
        if self.fun_file is None or self.var_file is None:
            raise AlgorithmStateError(self.algorithm_tag, "save the solution list", "not prepared")
        solutions = self.result()
        paths = SolutionListOutput(solutions).write(self.fun_file, self.var_file)
        self._emit("Saved %d solutions to %s", len(solutions), self.fun_file)
        return paths

    def close(self) -> None:
        self.algorithm.close()

    def __repr__(self) -> str:
        return f"ExperimentAlgorithm({self.algorithm_tag!r}, {self.problem_tag!r}, run={self.run_id})"


__all__ = ["ExperimentAlgorithm"]
