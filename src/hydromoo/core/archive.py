"""
External archives of non-dominated solutions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cmp_to_key
from typing import Iterator

import numpy as np

from hydromoo.core.comparators import (
    Comparator,
    CrowdingDistanceComparator,
    DominanceComparator,
    EqualSolutionsComparator,
    HypervolumeContributionComparator,
)
from hydromoo.core.density import assign_crowding_distance, hypervolume_contributions
from hydromoo.core.solution import Solution, objectives_matrix
from hydromoo.exceptions import ConfigurationError


class NonDominatedArchive:
    """
    Unbounded list of mutually non-dominated solutions.

    A candidate is rejected when a member dominates it or has the same
    objective vector; members dominated by an accepted candidate are dropped.
    The archive stores the objects it is given, callers pass copies when the
    originals keep changing.
    """

    def __init__(self, comparator: Comparator | None = None) -> None:
        self.comparator = comparator or DominanceComparator()
        self._equal = EqualSolutionsComparator()
        self._solutions: list[Solution] = []

    def add(self, solution: Solution) -> bool:
        kept: list[Solution] = []
        for member in self._solutions:
            flag = self.comparator(solution, member)
            if flag > 0 or (flag == 0 and self._equal(solution, member) == 0):
                return False
            if flag == 0:
                kept.append(member)
        kept.append(solution)
        self._solutions = kept
        return True

    def remove(self, solution: Solution) -> None:
        self._solutions = [s for s in self._solutions if s is not solution]

    @property
    def solutions(self) -> list[Solution]:
        return list(self._solutions)

    def __len__(self) -> int:
        return len(self._solutions)

    def __iter__(self) -> Iterator[Solution]:
        return iter(list(self._solutions))

    def __getitem__(self, index: int) -> Solution:
        return self._solutions[index]


class BoundedArchive(ABC):
    """
    Non-dominated archive holding at most ``max_size`` members.

    When an insertion pushes the archive over capacity the member ranked last
    by :attr:`density_comparator` (after :meth:`compute_density_estimator`)
    is evicted.
    """

    def __init__(self, max_size: int, comparator: Comparator | None = None) -> None:
        if max_size <= 0:
            raise ConfigurationError(f"Archive max_size must be positive, got {max_size}.")
        self.max_size = int(max_size)
        self._archive = NonDominatedArchive(comparator)

    @property
    @abstractmethod
    def density_comparator(self) -> Comparator:
        """Comparator ranking members from most to least valuable."""

    @abstractmethod
    def compute_density_estimator(self) -> None:
        """Refresh the density field of every member."""

    def add(self, solution: Solution) -> bool:
        accepted = self._archive.add(solution)
        if accepted:
            self.prune()
        return accepted

    def prune(self) -> None:
        if len(self._archive) > self.max_size:
            self.compute_density_estimator()
            worst = max(self._archive.solutions, key=cmp_to_key(self.density_comparator))
            self._archive.remove(worst)

    def sort_by_density_estimator(self) -> list[Solution]:
        self.compute_density_estimator()
        return sorted(self._archive.solutions, key=cmp_to_key(self.density_comparator))

    @property
    def solutions(self) -> list[Solution]:
        return self._archive.solutions

    def __len__(self) -> int:
        return len(self._archive)

    def __iter__(self) -> Iterator[Solution]:
        return iter(self._archive)

    def __getitem__(self, index: int) -> Solution:
        return self._archive[index]


class CrowdingDistanceArchive(BoundedArchive):
    """Bounded archive evicting the most crowded member."""

    def __init__(self, max_size: int, comparator: Comparator | None = None) -> None:
        super().__init__(max_size, comparator)
        self._density_comparator = CrowdingDistanceComparator()

    @property
    def density_comparator(self) -> Comparator:
        return self._density_comparator

    def compute_density_estimator(self) -> None:
        assign_crowding_distance(self._archive.solutions)


class HypervolumeArchive(BoundedArchive):
    """
    Bounded archive evicting the member with the smallest exclusive
    hypervolume contribution (two objectives only).

    The reference point is the per-objective maximum of the archive shifted
    by ``offset``.
    """

    def __init__(self, max_size: int, comparator: Comparator | None = None, *, offset: float = 1.0) -> None:
        super().__init__(max_size, comparator)
        if offset <= 0.0:
            raise ConfigurationError(f"offset must be positive, got {offset}.")
        self.offset = float(offset)
        self._density_comparator = HypervolumeContributionComparator()

    @property
    def density_comparator(self) -> Comparator:
        return self._density_comparator

    def compute_density_estimator(self) -> None:
        members = self._archive.solutions
        if not members:
            return
        F = objectives_matrix(members)
        reference = F.max(axis=0) + self.offset
        for solution, value in zip(members, hypervolume_contributions(F, reference)):
            solution.hv_contribution = float(value)


def make_archive(kind: str, max_size: int, comparator: Comparator | None = None) -> BoundedArchive:
    kind = kind.lower()
    if kind in {"crowding", "crowding_distance"}:
        return CrowdingDistanceArchive(max_size, comparator)
    if kind in {"hypervolume", "hv"}:
        return HypervolumeArchive(max_size, comparator)
    raise ConfigurationError(
        f"Unknown archive type '{kind}'.",
        suggestion="Use 'crowding' or 'hypervolume'",
    )


__all__ = [
    "NonDominatedArchive",
    "BoundedArchive",
    "CrowdingDistanceArchive",
    "HypervolumeArchive",
    "make_archive",
]
