"""
Background execution of a list of experiment cells.

The runner drives each algorithm one generation at a time on a single
worker thread. Cancellation is observed between generations only; progress
goes through a :class:`LatestValue` slot and messages through an
:class:`ObservableLog`, so observers never block the worker.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from hydromoo.core.solution import Solution
from hydromoo.exceptions import AlgorithmStateError

from .algorithm import ExperimentAlgorithm
from .channel import LatestValue, ObservableLog


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class RunProgress:
    """Snapshot published after every generation."""

    algorithm: str
    run_id: int
    generation: int
    status: str
    fraction: float
    finished_algorithms: int
    total_algorithms: int


@dataclass
class ExperimentReport:
    results: dict[tuple[str, int], list[Solution]] = field(default_factory=dict)
    cancelled: bool = False

    @property
    def completed(self) -> int:
        return len(self.results)


class ExperimentRunner:
    """
    Run experiment cells in order on one worker thread.

    Every cell's algorithm is closed exactly once when the run ends, whether
    it finished, was cancelled or failed.

    Examples
    --------
    >>> runner = ExperimentRunner(cells, base_dir="results")
    >>> future = runner.start()
    >>> runner.progress.take()
    >>> report = future.result()
    """

    def __init__(
        self,
        experiments: list[ExperimentAlgorithm],
        base_dir: str | Path | None = None,
        *,
        log: ObservableLog | None = None,
        progress: LatestValue[RunProgress] | None = None,
    ) -> None:
        self.experiments = list(experiments)
        self.base_dir = base_dir
        self.log = log if log is not None else ObservableLog()
        self.progress: LatestValue[RunProgress] = progress if progress is not None else LatestValue()
        self._cancel = threading.Event()
        self._lock = threading.Lock()
        self._started = False
        self._executor: ThreadPoolExecutor | None = None
        for experiment in self.experiments:
            experiment.log = self.log

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def cancel(self) -> None:
        """Ask the worker to stop at the next generation boundary."""
        self._cancel.set()

    def _claim(self) -> None:
        with self._lock:
            if self._started:
                raise AlgorithmStateError("ExperimentRunner", "start", "already started")
            self._started = True

    def start(self) -> Future:
        """Run in a background thread; the future resolves to an :class:`ExperimentReport`."""
        self._claim()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hydromoo-experiment")
        future = self._executor.submit(self._execute)
        self._executor.shutdown(wait=False)
        return future

    def run(self) -> ExperimentReport:
        """Run on the calling thread."""
        self._claim()
        return self._execute()

    def _emit(self, message: str, *args) -> None:
        _logger().info(message, *args)
        self.log.append(message % args if args else message)

    def _execute(self) -> ExperimentReport:
        report = ExperimentReport()
        total = len(self.experiments)
        if self.base_dir is not None:
            self._emit("ExecuteAlgorithms: Preparing output directory %s", self.base_dir)
            Path(self.base_dir).mkdir(parents=True, exist_ok=True)
        else:
            self._emit("ExecuteAlgorithms: The result will not be saved")
        try:
            for experiment in self.experiments:
                if self.cancelled:
                    break
                experiment.prepare_to_run(self.base_dir)
                while experiment.has_next_step():
                    experiment.run_single_step()
                    self.progress.publish(
                        RunProgress(
                            algorithm=experiment.algorithm_tag,
                            run_id=experiment.run_id,
                            generation=experiment.generations,
                            status=experiment.status_of_execution(),
                            fraction=experiment.progress(),
                            finished_algorithms=report.completed,
                            total_algorithms=total,
                        )
                    )
                    if self.cancelled:
                        break
                if self.cancelled:
                    break
                report.results[(experiment.algorithm_tag, experiment.run_id)] = experiment.result()
                if self.base_dir is not None:
                    experiment.save_solution_list()
        finally:
            for experiment in self.experiments:
                experiment.close()
        report.cancelled = self.cancelled
        if report.cancelled:
            self._emit("Experiment cancelled after %d of %d algorithms", report.completed, total)
        else:
            self._emit("Experiment finished: %d algorithms", total)
        return report


__all__ = ["RunProgress", "ExperimentReport", "ExperimentRunner"]
