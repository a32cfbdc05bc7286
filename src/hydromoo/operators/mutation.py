"""Mutation operators for real and integer encodings."""

from __future__ import annotations

import numpy as np

from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError

from .base import MutationOperator, _check_non_negative, _check_probability


class PolynomialMutation(MutationOperator):
    """Polynomial mutation (Deb & Agrawal); integer encodings are truncated."""

    def __init__(self, probability: float = 0.01, distribution_index: float = 20.0) -> None:
        self.probability = _check_probability("Mutation probability", probability)
        self.distribution_index = _check_non_negative("Distribution index", distribution_index)

    @classmethod
    def for_problem(cls, n_var: int, distribution_index: float = 20.0) -> "PolynomialMutation":
        """Mutation with the customary ``1 / n_var`` probability."""
        return cls(1.0 / max(1, n_var), distribution_index)

    def execute(self, solution: Solution, rng: np.random.Generator) -> Solution:
        eta = self.distribution_index
        mut_pow = 1.0 / (eta + 1.0)
        for i in range(solution.n_var):
            if rng.random() > self.probability:
                continue
            y = float(solution.variables[i])
            yl = float(solution.xl[i])
            yu = float(solution.xu[i])
            if yl == yu:
                y = yl
            else:
                delta1 = (y - yl) / (yu - yl)
                delta2 = (yu - y) / (yu - yl)
                rnd = rng.random()
                if rnd <= 0.5:
                    xy = 1.0 - delta1
                    val = 2.0 * rnd + (1.0 - 2.0 * rnd) * xy ** (eta + 1.0)
                    deltaq = val**mut_pow - 1.0
                else:
                    xy = 1.0 - delta2
                    val = 2.0 * (1.0 - rnd) + 2.0 * (rnd - 0.5) * xy ** (eta + 1.0)
                    deltaq = 1.0 - val**mut_pow
                y = min(max(y + deltaq * (yu - yl), yl), yu)
            solution.set_variable(i, y)
        return solution


class SimpleRandomMutation(MutationOperator):
    """Replace a variable with a uniform draw from its bounds."""

    def __init__(self, probability: float = 0.01) -> None:
        self.probability = _check_probability("Mutation probability", probability)

    def execute(self, solution: Solution, rng: np.random.Generator) -> Solution:
        for i in range(solution.n_var):
            if rng.random() <= self.probability:
                if solution.is_integer:
                    solution.variables[i] = rng.integers(solution.xl[i], solution.xu[i], endpoint=True)
                else:
                    solution.variables[i] = rng.uniform(solution.xl[i], solution.xu[i])
        return solution


class RangeRandomMutation(MutationOperator):
    """
    Integer mutation moving a variable to a different value at most
    ``range`` steps away, within bounds.

    A range of 0 leaves the variable unchanged.
    """

    def __init__(self, probability: float = 0.01, range: int = 1) -> None:
        self.probability = _check_probability("Mutation probability", probability)
        if int(range) != range or range < 0:
            raise ConfigurationError(f"range must be a non-negative integer, got {range}.")
        self.range = int(range)

    def execute(self, solution: Solution, rng: np.random.Generator) -> Solution:
        if not solution.is_integer:
            raise ConfigurationError("RangeRandomMutation only applies to integer encodings.")
        for i in range(solution.n_var):
            if rng.random() > self.probability:
                continue
            value = int(solution.variables[i])
            low = max(value - self.range, int(solution.xl[i]))
            high = min(value + self.range, int(solution.xu[i]))
            candidates = [v for v in range(low, high + 1) if v != value]
            if self.range == 0 or not candidates:
                continue
            solution.variables[i] = candidates[int(rng.integers(0, len(candidates)))]
        return solution


__all__ = ["PolynomialMutation", "SimpleRandomMutation", "RangeRandomMutation"]
