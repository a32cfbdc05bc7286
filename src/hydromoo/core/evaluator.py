"""
Evaluation of solution lists against a problem.
"""

from __future__ import annotations

import logging

from hydromoo.core.problem import Problem
from hydromoo.core.solution import Solution


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class SequentialEvaluator:
    """
    Evaluate solutions one after another in the calling thread.

    Errors raised by ``problem.evaluate`` (typically EvaluationError)
    propagate unchanged; solutions evaluated before the failure keep their
    objective values but the caller must discard the batch.
    """

    def __init__(self) -> None:
        self.evaluations = 0

    def evaluate(self, solutions: list[Solution], problem: Problem) -> list[Solution]:
        for solution in solutions:
            problem.evaluate(solution)
            self.evaluations += 1
        _logger().debug("Evaluated %d solutions on %s", len(solutions), problem.name)
        return solutions


__all__ = ["SequentialEvaluator"]
