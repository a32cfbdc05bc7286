"""
Small problems used by the examples, the CLI smoke runs and the tests.
"""

from __future__ import annotations

import numpy as np

from hydromoo.core.problem import Problem
from hydromoo.core.solution import Solution


class LinearTradeoff(Problem):
    """
    Minimise ``x0`` and ``1 - x0`` on the unit box.

    Every point of the search space is Pareto optimal in the first
    variable, which makes front shapes easy to assert on.
    """

    def __init__(self, n_var: int = 2) -> None:
        super().__init__(n_var=n_var, n_obj=2, xl=0.0, xu=1.0, name="LinearTradeoff")

    def evaluate(self, solution: Solution) -> None:
        x0 = float(solution.variables[0])
        solution.objectives[0] = x0
        solution.objectives[1] = 1.0 - x0


class Sphere(Problem):
    """Single-objective sum of squares, optimum 0 at the origin."""

    def __init__(self, n_var: int = 5, lower: float = -5.0, upper: float = 5.0) -> None:
        super().__init__(n_var=n_var, n_obj=1, xl=lower, xu=upper, name="Sphere")

    def evaluate(self, solution: Solution) -> None:
        solution.objectives[0] = float(np.sum(np.square(solution.variables)))


class IntegerSphere(Sphere):
    """Sphere over integer variables."""

    encoding = "integer"

    def __init__(self, n_var: int = 5, lower: int = -20, upper: int = 20) -> None:
        super().__init__(n_var=n_var, lower=lower, upper=upper)
        self.name = "IntegerSphere"

    def evaluate(self, solution: Solution) -> None:
        x = solution.variables.astype(np.int64)
        solution.objectives[0] = float(np.sum(x * x))


class ConstrainedTradeoff(Problem):
    """
    Srinivas' constrained bi-objective problem on ``[-20, 20]^2``.

    Constraints are expressed as ``g >= 0``:

    - ``g0 = 1 - (x0^2 + x1^2) / 225``
    - ``g1 = (3 x1 - x0) / 10 - 1``
    """

    def __init__(self) -> None:
        super().__init__(n_var=2, n_obj=2, xl=-20.0, xu=20.0, n_constraints=2, name="ConstrainedTradeoff")

    def evaluate(self, solution: Solution) -> None:
        x0, x1 = (float(v) for v in solution.variables)
        solution.objectives[0] = 2.0 + (x0 - 2.0) ** 2 + (x1 - 1.0) ** 2
        solution.objectives[1] = 9.0 * x0 - (x1 - 1.0) ** 2
        solution.constraints[0] = 1.0 - (x0 * x0 + x1 * x1) / 225.0
        solution.constraints[1] = (3.0 * x1 - x0) / 10.0 - 1.0
        self.set_constraint_violation(solution)


__all__ = ["LinearTradeoff", "Sphere", "IntegerSphere", "ConstrainedTradeoff"]
