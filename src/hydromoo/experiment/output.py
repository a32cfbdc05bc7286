"""
Tab-separated FUN/VAR writers for solution lists.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from hydromoo.core.solution import Solution, objectives_matrix, variables_matrix


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class SolutionListOutput:
    """
    Write objectives (FUN) and variables (VAR) one solution per line.

    Examples
    --------
    >>> SolutionListOutput(front).write("out/FUN0.tsv", "out/VAR0.tsv")
    """

    def __init__(self, solutions: list[Solution], separator: str = "\t") -> None:
        self.solutions = list(solutions)
        self.separator = separator

    def write_objectives(self, path: str | Path) -> Path:
        return self._write(path, objectives_matrix(self.solutions), "%.18g")

    def write_variables(self, path: str | Path) -> Path:
        X = variables_matrix(self.solutions)
        return self._write(path, X, "%d" if X.dtype.kind in "iu" else "%.18g")

    def write(self, fun_path: str | Path, var_path: str | Path) -> tuple[Path, Path]:
        return self.write_objectives(fun_path), self.write_variables(var_path)

    def _write(self, path: str | Path, data: np.ndarray, fmt: str) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        if data.size == 0:
            out.write_text("", encoding="utf-8")
        else:
            np.savetxt(out, data, delimiter=self.separator, fmt=fmt)
        _logger().debug("Wrote %d rows to %s", data.shape[0], out)
        return out


def read_solution_file(path: str | Path, separator: str = "\t") -> np.ndarray:
    """Read a FUN/VAR file back as a 2-D array (empty files give shape (0, 0))."""
    if not Path(path).read_text(encoding="utf-8").strip():
        return np.empty((0, 0))
    return np.loadtxt(path, delimiter=separator, ndmin=2)


__all__ = ["SolutionListOutput", "read_solution_file"]
