"""
Base class for optimisation problems consumed by the engine.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np

from hydromoo.core.solution import Solution
from hydromoo.exceptions import ProblemDimensionError, ProblemError


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


_ENCODINGS = ("real", "integer")


class Problem(ABC):
    """Base class for problems evaluated one solution at a time.

    Subclasses call ``super().__init__`` with their dimensions and bounds and
    implement :meth:`evaluate`. Problems that hold external resources (an open
    simulator handle, a temporary network file) release them in
    :meth:`release_resources`; :meth:`close` guarantees that happens once.

    Example::

        class Tradeoff(Problem):
            def __init__(self):
                super().__init__(n_var=1, n_obj=2, xl=0.0, xu=1.0)

            def evaluate(self, solution):
                x = solution.variables[0]
                solution.objectives[:] = (x, 1.0 - x)

    Constraint convention: ``solution.constraints[i] >= 0`` is satisfied.
    Constrained problems call :meth:`set_constraint_violation` at the end of
    :meth:`evaluate` so dominance comparisons can see the overall violation.
    """

    encoding: str = "real"
    """Variable encoding, ``"real"`` or ``"integer"``."""

    def __init__(
        self,
        n_var: int,
        n_obj: int,
        xl: float | np.ndarray,
        xu: float | np.ndarray,
        *,
        n_constraints: int = 0,
        name: str | None = None,
    ) -> None:
        if n_var <= 0:
            raise ProblemDimensionError(f"n_var must be positive, got {n_var}.")
        if n_obj <= 0:
            raise ProblemDimensionError(f"n_obj must be positive, got {n_obj}.")
        if n_constraints < 0:
            raise ProblemDimensionError(f"n_constraints must be non-negative, got {n_constraints}.")
        if self.encoding not in _ENCODINGS:
            raise ProblemError(
                f"Unsupported encoding '{self.encoding}'.",
                suggestion=f"Use one of: {', '.join(_ENCODINGS)}",
            )
        self.n_var = int(n_var)
        self.n_obj = int(n_obj)
        self.n_constraints = int(n_constraints)
        self.xl = self._as_bounds(xl, "xl")
        self.xu = self._as_bounds(xu, "xu")
        if np.any(self.xl > self.xu):
            bad = int(np.argmax(self.xl > self.xu))
            raise ProblemDimensionError(
                f"Lower bound exceeds upper bound for variable {bad}: {self.xl[bad]} > {self.xu[bad]}."
            )
        self.xl.flags.writeable = False
        self.xu.flags.writeable = False
        self.name = name or type(self).__name__
        self._closed = False

    def _as_bounds(self, value: float | np.ndarray, label: str) -> np.ndarray:
        dtype = np.int64 if self.encoding == "integer" else float
        arr = np.asarray(value, dtype=dtype)
        if arr.ndim == 0:
            return np.full(self.n_var, arr, dtype=dtype)
        arr = arr.reshape(-1).copy()
        if arr.shape[0] != self.n_var:
            raise ProblemDimensionError(
                f"{label} has {arr.shape[0]} entries but the problem declares {self.n_var} variables.",
                expected=self.n_var,
                actual=int(arr.shape[0]),
            )
        return arr

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def lower_bound(self, index: int) -> float:
        return self.xl[index].item()

    def upper_bound(self, index: int) -> float:
        return self.xu[index].item()

    # ------------------------------------------------------------------
    # Solutions
    # ------------------------------------------------------------------

    def create_solution(self, rng: np.random.Generator) -> Solution:
        """Return a solution sampled uniformly inside the bounds."""
        if self.encoding == "integer":
            variables = rng.integers(self.xl, self.xu, endpoint=True, dtype=np.int64)
        else:
            variables = rng.uniform(self.xl, self.xu)
        return Solution(
            variables=variables,
            objectives=np.zeros(self.n_obj, dtype=float),
            xl=self.xl,
            xu=self.xu,
            constraints=np.zeros(self.n_constraints, dtype=float),
        )

    @abstractmethod
    def evaluate(self, solution: Solution) -> None:
        """Fill ``solution.objectives`` (and constraints) in place.

        Raises
        ------
        EvaluationError
            If the objective values cannot be computed.
        """

    def set_constraint_violation(self, solution: Solution) -> None:
        g = solution.constraints
        solution.constraint_violation = float(np.minimum(g, 0.0).sum()) if g.size else 0.0

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def release_resources(self) -> None:
        """Hook for subclasses holding external handles."""

    def close(self) -> None:
        """Release resources once; later calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        _logger().debug("Closing problem %s", self.name)
        self.release_resources()

    def __enter__(self) -> "Problem":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.name}(n_var={self.n_var}, n_obj={self.n_obj}, n_constraints={self.n_constraints})"


__all__ = ["Problem"]
