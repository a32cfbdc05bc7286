"""Selection operators."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any

import numpy as np

from hydromoo.core.comparators import (
    Comparator,
    CrowdingDistanceComparator,
    DominanceComparator,
    best_of,
)
from hydromoo.core.density import assign_crowding_distance
from hydromoo.core.ranking import DominanceRanking
from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError, InvariantViolationError

from .base import SelectionOperator


def _require_population(solutions: list[Solution]) -> None:
    if not solutions:
        raise InvariantViolationError("The solution list is empty.")


class TournamentSelection(SelectionOperator):
    """
    N-ary tournament returning a single winner.

    Candidates are drawn with replacement; ties between two candidates are
    broken with the rng.
    An arity of 1 is a uniform random pick.
    """

    def __init__(self, arity: int = 2, comparator: Comparator | None = None) -> None:
        if arity < 1:
            raise ConfigurationError(f"Tournament arity must be >= 1, got {arity}.")
        self.arity = int(arity)
        self.comparator = comparator or DominanceComparator()

    def execute(self, solutions: list[Solution], rng: np.random.Generator, **kwargs: Any) -> Solution:
        _require_population(solutions)
        if len(solutions) == 1:
            return solutions[0]
        result = solutions[int(rng.integers(0, len(solutions)))]
        for _ in range(self.arity - 1):
            candidate = solutions[int(rng.integers(0, len(solutions)))]
            result = best_of(result, candidate, self.comparator, rng)
        return result


class RandomSelection(SelectionOperator):
    """Uniformly random pick."""

    def execute(self, solutions: list[Solution], rng: np.random.Generator, **kwargs: Any) -> Solution:
        _require_population(solutions)
        return solutions[int(rng.integers(0, len(solutions)))]


class UniformSelection(SelectionOperator):
    """
    Linear-ranking selection returning a mating pool of the input size.

    Solutions are sorted with ``comparator``; the i-th (1-based) gets the
    expected count ``n * (pmin + (pmax - pmin) * (n - i) / (n - 1))`` with
    ``pmin = (2 - c) / n`` and ``pmax = c / n``. Expected counts >= 1.5 yield
    two copies, counts in [0.5, 1.5) one copy while room remains. The pool is
    topped up from the best solutions if rounding leaves it short.

    Parameters
    ----------
    constant : float
        Selection pressure ``c`` in [1.5, 2].
    """

    returns_pool = True

    def __init__(self, constant: float = 1.5, comparator: Comparator | None = None) -> None:
        if not 1.5 <= constant <= 2.0:
            raise ConfigurationError(f"constant must be within [1.5, 2], got {constant}.")
        self.constant = float(constant)
        self.comparator = comparator or DominanceComparator()

    def execute(self, solutions: list[Solution], rng: np.random.Generator, **kwargs: Any) -> list[Solution]:
        _require_population(solutions)
        n = len(solutions)
        ordered = sorted(solutions, key=cmp_to_key(self.comparator))
        if n == 1:
            return list(ordered)
        pmin = (2.0 - self.constant) / n
        pmax = self.constant / n
        selected: list[Solution] = []
        for i, solution in enumerate(ordered, start=1):
            expected = n * (pmin + (pmax - pmin) * (n - i) / (n - 1))
            if expected >= 1.5:
                selected.extend((solution, solution))
            elif expected >= 0.5 and len(selected) < n:
                selected.append(solution)
        del selected[n:]
        position = 0
        while len(selected) < n:
            selected.append(ordered[position % n])
            position += 1
        return selected


class RankingAndCrowdingSelection(SelectionOperator):
    """
    NSGA-II environmental selection of exactly ``solutions_to_select`` members.

    Whole fronts are taken while they fit; the first front that does not fit
    is sorted by descending crowding distance and truncated.
    """

    returns_pool = True

    def __init__(self, solutions_to_select: int, comparator: Comparator | None = None) -> None:
        if solutions_to_select <= 0:
            raise ConfigurationError(f"solutions_to_select must be positive, got {solutions_to_select}.")
        self.solutions_to_select = int(solutions_to_select)
        self.comparator = comparator or DominanceComparator()

    def execute(self, solutions: list[Solution], rng: np.random.Generator | None = None, **kwargs: Any) -> list[Solution]:
        _require_population(solutions)
        if len(solutions) < self.solutions_to_select:
            raise InvariantViolationError(
                f"The population size ({len(solutions)}) is smaller than "
                f"the solutions to select ({self.solutions_to_select})."
            )
        ranking = DominanceRanking(self.comparator).compute_ranking(solutions)
        selected: list[Solution] = []
        rank = 0
        while len(selected) < self.solutions_to_select:
            front = ranking.subfront(rank)
            assign_crowding_distance(front)
            remaining = self.solutions_to_select - len(selected)
            if len(front) < remaining:
                selected.extend(front)
                rank += 1
            else:
                ordered = sorted(front, key=cmp_to_key(CrowdingDistanceComparator()))
                selected.extend(ordered[:remaining])
        return selected


class DifferentialEvolutionSelection(SelectionOperator):
    """
    Draw distinct donor solutions for the target at ``index``.

    The target itself is never drawn as a donor; when
    ``select_current_solution`` is set it is appended as the last parent.
    """

    returns_pool = True

    def __init__(self, number_of_solutions_to_select: int = 3, select_current_solution: bool = False) -> None:
        if number_of_solutions_to_select <= 0:
            raise ConfigurationError(
                f"number_of_solutions_to_select must be positive, got {number_of_solutions_to_select}."
            )
        self.number_of_solutions_to_select = int(number_of_solutions_to_select)
        self.select_current_solution = bool(select_current_solution)

    def execute(
        self,
        solutions: list[Solution],
        rng: np.random.Generator,
        *,
        index: int | None = None,
        **kwargs: Any,
    ) -> list[Solution]:
        _require_population(solutions)
        n = len(solutions)
        if index is None or not 0 <= index < n:
            raise InvariantViolationError(f"Invalid target index {index} for a population of {n}.")
        donors = self.number_of_solutions_to_select - (1 if self.select_current_solution else 0)
        if n - 1 < donors:
            raise InvariantViolationError(
                f"The population size ({n}) is too small to draw {donors} donors distinct from the target."
            )
        pool = np.delete(np.arange(n), index)
        picks = rng.choice(pool, size=donors, replace=False)
        selected = [solutions[int(i)] for i in picks]
        if self.select_current_solution:
            selected.append(solutions[index])
        return selected


__all__ = [
    "TournamentSelection",
    "RandomSelection",
    "UniformSelection",
    "RankingAndCrowdingSelection",
    "DifferentialEvolutionSelection",
]
