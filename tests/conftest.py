import logging

import numpy as np
import pytest

from hydromoo.core.solution import Solution
from hydromoo.exceptions import EvaluationError
from hydromoo.problems import LinearTradeoff


class CountingTradeoff(LinearTradeoff):
    """LinearTradeoff that counts releases and can fail after a number of evaluations."""

    def __init__(self, fail_after=None):
        super().__init__(n_var=2)
        self.fail_after = fail_after
        self.evaluated = 0
        self.released = 0

    def evaluate(self, solution):
        if self.fail_after is not None and self.evaluated >= self.fail_after:
            raise EvaluationError("simulator fault")
        self.evaluated += 1
        super().evaluate(solution)

    def release_resources(self):
        self.released += 1


def _solution(objectives, variables=None, *, constraint_violation=None):
    X = np.zeros(2) if variables is None else np.asarray(variables, dtype=float)
    s = Solution(
        variables=X,
        objectives=np.asarray(objectives, dtype=float),
        xl=np.zeros(X.shape[0]),
        xu=np.ones(X.shape[0]),
    )
    s.constraint_violation = constraint_violation
    return s


@pytest.fixture
def make_solution():
    return _solution


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def counting_problem():
    return CountingTradeoff


@pytest.fixture(autouse=True)
def restore_hydromoo_logger():
    """Undo handler, level and propagate changes made by configure_hydromoo_logging."""
    logger = logging.getLogger("hydromoo")
    handlers = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
