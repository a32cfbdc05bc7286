"""
Comparators over solutions.

Every comparator is a callable ``comparator(a, b) -> int`` returning a
negative value when ``a`` is preferred, a positive value when ``b`` is
preferred and 0 otherwise. Use :func:`functools.cmp_to_key` to sort with them.
"""

from __future__ import annotations

import sys
from functools import cmp_to_key
from typing import Callable

import numpy as np

from hydromoo.core.solution import Solution, objectives_matrix
from hydromoo.exceptions import InvariantViolationError

Comparator = Callable[[Solution, Solution], int]


class ConstraintViolationComparator:
    """Prefer the solution with the smaller overall constraint violation.

    Violations are <= 0; a value closer to zero wins. When either solution
    has no violation recorded the comparator has no opinion.
    """

    def __call__(self, a: Solution, b: Solution) -> int:
        va, vb = a.constraint_violation, b.constraint_violation
        if va is None or vb is None:
            return 0
        if va < 0 and vb < 0:
            if va > vb:
                return -1
            if vb > va:
                return 1
            return 0
        if va == 0 and vb < 0:
            return -1
        if va < 0 and vb == 0:
            return 1
        return 0

    def matrix(self, solutions: list[Solution]) -> np.ndarray:
        n = len(solutions)
        cv = np.array(
            [np.nan if s.constraint_violation is None else s.constraint_violation for s in solutions],
            dtype=float,
        )
        a = cv[:, None]
        b = cv[None, :]
        known = ~np.isnan(a) & ~np.isnan(b)
        out = np.zeros((n, n), dtype=np.int8)
        with np.errstate(invalid="ignore"):
            both_neg = known & (a < 0) & (b < 0)
            out[both_neg & (a > b)] = -1
            out[both_neg & (a < b)] = 1
            out[known & (a == 0) & (b < 0)] = -1
            out[known & (a < 0) & (b == 0)] = 1
        return out


class DominanceComparator:
    """Constraint-aware Pareto dominance for minimisation.

    Parameters
    ----------
    constraint_comparator : callable, optional
        Consulted first; Pareto dominance is only checked on a tie.
        Defaults to :class:`ConstraintViolationComparator`.

    Raises
    ------
    InvariantViolationError
        If the two solutions carry a different number of objectives.
    """

    def __init__(self, constraint_comparator: ConstraintViolationComparator | None = None) -> None:
        self.constraint_comparator = constraint_comparator or ConstraintViolationComparator()

    def __call__(self, a: Solution, b: Solution) -> int:
        if a.n_obj != b.n_obj:
            raise InvariantViolationError(
                f"Cannot compare solutions with {a.n_obj} and {b.n_obj} objectives."
            )
        result = self.constraint_comparator(a, b)
        if result != 0:
            return result
        best_is_one = bool(np.any(a.objectives < b.objectives))
        best_is_two = bool(np.any(b.objectives < a.objectives))
        if best_is_one and not best_is_two:
            return -1
        if best_is_two and not best_is_one:
            return 1
        return 0

    def matrix(self, solutions: list[Solution]) -> np.ndarray:
        """Vectorised ``M[i, j] = self(solutions[i], solutions[j])``."""
        n = len(solutions)
        if n == 0:
            return np.zeros((0, 0), dtype=np.int8)
        counts = {s.n_obj for s in solutions}
        if len(counts) > 1:
            raise InvariantViolationError(f"Solutions carry differing objective counts: {sorted(counts)}.")
        F = objectives_matrix(solutions)
        better = np.any(F[:, None, :] < F[None, :, :], axis=2)
        worse = np.any(F[:, None, :] > F[None, :, :], axis=2)
        pareto = np.zeros((n, n), dtype=np.int8)
        pareto[better & ~worse] = -1
        pareto[worse & ~better] = 1
        if hasattr(self.constraint_comparator, "matrix"):
            constrained = self.constraint_comparator.matrix(solutions)
        else:
            constrained = comparison_matrix(solutions, self.constraint_comparator)
        return np.where(constrained != 0, constrained, pareto).astype(np.int8)


class ObjectiveComparator:
    """Order by a single objective (ascending by default)."""

    def __init__(self, index: int = 0, *, ascending: bool = True) -> None:
        if index < 0:
            raise ValueError("objective index must be non-negative.")
        self.index = index
        self.ascending = ascending

    def __call__(self, a: Solution, b: Solution) -> int:
        fa = a.objectives[self.index]
        fb = b.objectives[self.index]
        if fa < fb:
            result = -1
        elif fa > fb:
            result = 1
        else:
            result = 0
        return result if self.ascending else -result


class RankComparator:
    """Lower rank first; a missing rank sorts last."""

    def __call__(self, a: Solution, b: Solution) -> int:
        ra = sys.maxsize if a.rank is None else a.rank
        rb = sys.maxsize if b.rank is None else b.rank
        return (ra > rb) - (ra < rb)


class CrowdingDistanceComparator:
    """Larger crowding distance first; a missing distance counts as the smallest."""

    def __call__(self, a: Solution, b: Solution) -> int:
        da = sys.float_info.min if a.crowding_distance is None else a.crowding_distance
        db = sys.float_info.min if b.crowding_distance is None else b.crowding_distance
        if da > db:
            return -1
        if da < db:
            return 1
        return 0


class RankingAndCrowdingDistanceComparator:
    """Rank first, crowding distance as tie-breaker."""

    def __init__(self) -> None:
        self._rank = RankComparator()
        self._crowding = CrowdingDistanceComparator()

    def __call__(self, a: Solution, b: Solution) -> int:
        result = self._rank(a, b)
        if result == 0:
            result = self._crowding(a, b)
        return result


class StrengthFitnessComparator:
    """Lower SPEA2 fitness first; a missing fitness sorts last."""

    def __call__(self, a: Solution, b: Solution) -> int:
        fa = np.inf if a.strength_fitness is None else a.strength_fitness
        fb = np.inf if b.strength_fitness is None else b.strength_fitness
        return int(fa > fb) - int(fa < fb)


class HypervolumeContributionComparator:
    """Larger hypervolume contribution first; a missing value counts as the largest."""

    def __call__(self, a: Solution, b: Solution) -> int:
        ca = sys.float_info.max if a.hv_contribution is None else a.hv_contribution
        cb = sys.float_info.max if b.hv_contribution is None else b.hv_contribution
        return int(cb > ca) - int(cb < ca)


class EqualSolutionsComparator:
    """Return 0 when both objective vectors are identical.

    Otherwise -1 or 1 when one vector dominates the other, and 2 when they are
    mutually non-dominated.
    """

    def __call__(self, a: Solution, b: Solution) -> int:
        one = bool(np.any(a.objectives < b.objectives))
        two = bool(np.any(a.objectives > b.objectives))
        if not one and not two:
            return 0
        if one and not two:
            return -1
        if two and not one:
            return 1
        return 2


def comparison_matrix(solutions: list[Solution], comparator: Comparator) -> np.ndarray:
    """``M[i, j] = comparator(solutions[i], solutions[j])`` for any comparator."""
    if hasattr(comparator, "matrix"):
        return comparator.matrix(solutions)
    n = len(solutions)
    out = np.zeros((n, n), dtype=np.int8)
    for i in range(n):
        for j in range(i + 1, n):
            value = comparator(solutions[i], solutions[j])
            out[i, j] = value
            out[j, i] = -value
    return out


def sort_solutions(solutions: list[Solution], comparator: Comparator) -> list[Solution]:
    """Stable sort returning a new list."""
    return sorted(solutions, key=cmp_to_key(comparator))


def best_of(a: Solution, b: Solution, comparator: Comparator, rng: np.random.Generator) -> Solution:
    """Return the preferred solution, breaking ties with ``rng``."""
    flag = comparator(a, b)
    if flag < 0:
        return a
    if flag > 0:
        return b
    return a if rng.random() < 0.5 else b


__all__ = [
    "Comparator",
    "ConstraintViolationComparator",
    "DominanceComparator",
    "ObjectiveComparator",
    "RankComparator",
    "CrowdingDistanceComparator",
    "RankingAndCrowdingDistanceComparator",
    "StrengthFitnessComparator",
    "HypervolumeContributionComparator",
    "EqualSolutionsComparator",
    "comparison_matrix",
    "sort_solutions",
    "best_of",
]
