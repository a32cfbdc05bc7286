"""
Fast non-dominated sorting.
"""

from __future__ import annotations

import numpy as np

from hydromoo.core.comparators import Comparator, DominanceComparator, comparison_matrix
from hydromoo.core.solution import Solution
from hydromoo.exceptions import InvariantViolationError


class DominanceRanking:
    """
    Partition a population into Pareto fronts (NSGA-II fast sort).

    Each solution's ``rank`` field is set to the index of its front.

    Parameters
    ----------
    comparator : callable, optional
        Constraint-aware dominance comparator, :class:`DominanceComparator`
        by default.
    """

    def __init__(self, comparator: Comparator | None = None) -> None:
        self.comparator = comparator or DominanceComparator()
        self._fronts: list[list[Solution]] = []

    def compute_ranking(self, solutions: list[Solution]) -> "DominanceRanking":
        n = len(solutions)
        self._fronts = []
        if n == 0:
            return self

        flags = comparison_matrix(solutions, self.comparator)
        dominates = flags < 0
        dominated_count = (flags > 0).sum(axis=1)
        dominated_by_me = [np.flatnonzero(dominates[i]) for i in range(n)]

        current = [i for i in range(n) if dominated_count[i] == 0]
        rank = 0
        while current:
            front = []
            following: list[int] = []
            for p in current:
                solutions[p].rank = rank
                front.append(solutions[p])
                for q in dominated_by_me[p]:
                    dominated_count[q] -= 1
                    if dominated_count[q] == 0:
                        following.append(int(q))
            self._fronts.append(front)
            current = sorted(following)
            rank += 1
        return self

    def subfront(self, rank: int) -> list[Solution]:
        """Return front ``rank``; raises if it was not computed."""
        if rank < 0 or rank >= len(self._fronts):
            raise InvariantViolationError(
                f"Invalid front index {rank}: only {len(self._fronts)} fronts were computed."
            )
        return self._fronts[rank]

    @property
    def number_of_subfronts(self) -> int:
        return len(self._fronts)

    @property
    def fronts(self) -> list[list[Solution]]:
        return list(self._fronts)


def non_dominated_solutions(solutions: list[Solution], comparator: Comparator | None = None) -> list[Solution]:
    """Return the first front of ``solutions`` with duplicated objective vectors removed."""
    from hydromoo.core.archive import NonDominatedArchive

    archive = NonDominatedArchive(comparator)
    for solution in solutions:
        archive.add(solution)
    return archive.solutions


__all__ = ["DominanceRanking", "non_dominated_solutions"]
