"""
Density estimators written into solution fields.
"""

from __future__ import annotations

import numpy as np

from hydromoo.core.comparators import Comparator, DominanceComparator, comparison_matrix
from hydromoo.core.solution import Solution, objectives_matrix
from hydromoo.exceptions import ConfigurationError


def crowding_distances(F: np.ndarray) -> np.ndarray:
    """
    Crowding distance of every row of ``F`` (one front).

    Extremes along each objective receive ``inf``; interior points accumulate
    the normalised gap between their neighbours. Objectives with zero span
    contribute nothing beyond their extremes.
    """
    n = F.shape[0]
    if n == 0:
        return np.empty(0, dtype=float)
    if n <= 2:
        return np.full(n, np.inf, dtype=float)
    distance = np.zeros(n, dtype=float)
    for j in range(F.shape[1]):
        order = np.argsort(F[:, j], kind="mergesort")
        column = F[order, j]
        distance[order[0]] = np.inf
        distance[order[-1]] = np.inf
        span = column[-1] - column[0]
        if span <= 0.0:
            continue
        gaps = (column[2:] - column[:-2]) / span
        distance[order[1:-1]] += gaps
    return distance


def assign_crowding_distance(front: list[Solution]) -> None:
    """Write ``crowding_distance`` on every member of ``front``."""
    if not front:
        return
    values = crowding_distances(objectives_matrix(front))
    for solution, value in zip(front, values):
        solution.crowding_distance = float(value)


def distance_matrix(solutions: list[Solution]) -> np.ndarray:
    """Pairwise Euclidean distances between objective vectors."""
    F = objectives_matrix(solutions)
    diff = F[:, None, :] - F[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=2))


def assign_strength_fitness(
    solutions: list[Solution],
    *,
    k: int = 1,
    comparator: Comparator | None = None,
) -> None:
    """
    SPEA2 fitness: raw fitness plus ``1 / (sigma_k + 2)``.

    Parameters
    ----------
    solutions : list of Solution
        Archive and population merged.
    k : int
        Neighbour index for the density term; clamped to ``len(solutions) - 1``.
    comparator : callable, optional
        Dominance comparator, constraint-aware by default.
    """
    if k < 0:
        raise ConfigurationError(f"k must be non-negative, got {k}.")
    n = len(solutions)
    if n == 0:
        return
    flags = comparison_matrix(solutions, comparator or DominanceComparator())
    strength = (flags < 0).sum(axis=1)
    # raw[i] sums the strength of every j that dominates i
    raw = ((flags > 0) * strength[None, :]).sum(axis=1).astype(float)

    dist = np.sort(distance_matrix(solutions), axis=1)
    kth = dist[:, min(k, n - 1)]
    density = 1.0 / (kth + 2.0)
    for solution, value in zip(solutions, raw + density):
        solution.strength_fitness = float(value)


def hypervolume_contributions(F: np.ndarray, reference: np.ndarray) -> np.ndarray:
    """
    Exclusive hypervolume contribution of each point of a 2-objective
    non-dominated set.
    """
    F = np.asarray(F, dtype=float)
    if F.ndim != 2 or F.shape[1] != 2:
        raise ConfigurationError(
            "Exact hypervolume contributions are only available for two objectives.",
            suggestion="Use a CrowdingDistanceArchive for problems with more objectives",
        )
    n = F.shape[0]
    if n == 0:
        return np.empty(0, dtype=float)
    order = np.lexsort((F[:, 1], F[:, 0]))
    sorted_F = F[order]
    contrib = np.empty(n, dtype=float)
    for pos in range(n):
        right = sorted_F[pos + 1, 0] if pos + 1 < n else reference[0]
        upper = sorted_F[pos - 1, 1] if pos > 0 else reference[1]
        width = max(right - sorted_F[pos, 0], 0.0)
        height = max(upper - sorted_F[pos, 1], 0.0)
        contrib[order[pos]] = width * height
    return contrib


def hypervolume_2d(F: np.ndarray, reference: np.ndarray) -> float:
    """Hypervolume dominated by a 2-objective point set, bounded by ``reference``."""
    F = np.asarray(F, dtype=float)
    if F.size == 0:
        return 0.0
    F = F[np.all(F < reference, axis=1)]
    if F.size == 0:
        return 0.0
    F = F[np.lexsort((F[:, 1], F[:, 0]))]
    volume = 0.0
    best_f2 = reference[1]
    for f1, f2 in F:
        if f2 < best_f2:
            volume += (reference[0] - f1) * (best_f2 - f2)
            best_f2 = f2
    return float(volume)


__all__ = [
    "crowding_distances",
    "assign_crowding_distance",
    "distance_matrix",
    "assign_strength_fitness",
    "hypervolume_contributions",
    "hypervolume_2d",
]
