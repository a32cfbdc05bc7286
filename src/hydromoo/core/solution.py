"""
Candidate solution container shared by every algorithm family.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(eq=False)
class Solution:
    """
    A candidate solution: decision variables plus the values the problem and
    the algorithms attach to it.

    Bookkeeping written by the engine lives in dedicated optional fields
    instead of a free-form attribute map:

    * ``rank``: front index assigned by dominance ranking.
    * ``crowding_distance``: density estimate, larger is better.
    * ``constraint_violation``: overall violation, 0 feasible and negative
      infeasible. ``None`` for unconstrained problems.
    * ``strength_fitness``: SPEA2 raw fitness plus density, lower is better.
    * ``hv_contribution``: exclusive hypervolume contribution, larger is better.

    ``xl``/``xu`` reference the owning problem's bounds and are shared between
    copies; treat them as read-only.
    """

    variables: np.ndarray
    objectives: np.ndarray
    xl: np.ndarray
    xu: np.ndarray
    constraints: np.ndarray = field(default_factory=lambda: np.zeros(0))
    rank: int | None = None
    crowding_distance: float | None = None
    constraint_violation: float | None = None
    strength_fitness: float | None = None
    hv_contribution: float | None = None

    @classmethod
    def empty(
        cls,
        n_var: int,
        n_obj: int,
        xl: np.ndarray,
        xu: np.ndarray,
        *,
        n_constraints: int = 0,
        dtype: type | np.dtype = float,
    ) -> "Solution":
        return cls(
            variables=np.zeros(n_var, dtype=dtype),
            objectives=np.zeros(n_obj, dtype=float),
            xl=xl,
            xu=xu,
            constraints=np.zeros(n_constraints, dtype=float),
        )

    @property
    def n_var(self) -> int:
        return int(self.variables.shape[0])

    @property
    def n_obj(self) -> int:
        return int(self.objectives.shape[0])

    @property
    def is_integer(self) -> bool:
        return self.variables.dtype.kind in "iu"

    def copy(self) -> "Solution":
        """Deep copy of variables, objectives, constraints and attributes."""
        return Solution(
            variables=self.variables.copy(),
            objectives=self.objectives.copy(),
            xl=self.xl,
            xu=self.xu,
            constraints=self.constraints.copy(),
            rank=self.rank,
            crowding_distance=self.crowding_distance,
            constraint_violation=self.constraint_violation,
            strength_fitness=self.strength_fitness,
            hv_contribution=self.hv_contribution,
        )

    def set_variable(self, index: int, value: float) -> None:
        """Store ``value`` at ``index``, truncating toward zero for integer encodings."""
        if self.is_integer:
            self.variables[index] = int(value)
        else:
            self.variables[index] = value

    def __repr__(self) -> str:
        return f"Solution(variables={self.variables.tolist()}, objectives={self.objectives.tolist()})"


def objectives_matrix(solutions: list[Solution]) -> np.ndarray:
    """Stack objective vectors into an ``(n, n_obj)`` array."""
    if not solutions:
        return np.zeros((0, 0))
    return np.vstack([s.objectives for s in solutions])


def variables_matrix(solutions: list[Solution]) -> np.ndarray:
    if not solutions:
        return np.zeros((0, 0))
    return np.vstack([s.variables for s in solutions])


__all__ = ["Solution", "objectives_matrix", "variables_matrix"]
