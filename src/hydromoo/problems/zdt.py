# problems/zdt.py
from __future__ import annotations

import numpy as np

from hydromoo.core.problem import Problem
from hydromoo.core.solution import Solution


class ZDT1(Problem):
    """Two-objective ZDT1 with a convex Pareto front at g = 1."""

    def __init__(self, n_var: int = 30) -> None:
        super().__init__(n_var=n_var, n_obj=2, xl=0.0, xu=1.0, name="ZDT1")

    def evaluate(self, solution: Solution) -> None:
        x = solution.variables
        f1 = x[0]
        g = 1.0 + 9.0 * np.mean(x[1:]) if self.n_var > 1 else 1.0
        solution.objectives[0] = f1
        solution.objectives[1] = g * (1.0 - np.sqrt(f1 / g))


__all__ = ["ZDT1"]
