"""
Problem lookup by name for experiment files and the CLI.
"""

from __future__ import annotations

from typing import Any, Callable

from hydromoo.core.problem import Problem
from hydromoo.exceptions import InvalidProblemError, ProblemError
from hydromoo.registry import Registry

from .simple import ConstrainedTradeoff, IntegerSphere, LinearTradeoff, Sphere
from .zdt import ZDT1

PROBLEMS: Registry[Callable[..., Problem]] = Registry("Problems")
PROBLEMS.register("linear_tradeoff", LinearTradeoff)
PROBLEMS.register("zdt1", ZDT1)
PROBLEMS.register("sphere", Sphere)
PROBLEMS.register("integer_sphere", IntegerSphere)
PROBLEMS.register("constrained_tradeoff", ConstrainedTradeoff)


def available_problems() -> list[str]:
    return PROBLEMS.list()


def make_problem(name: str, **params: Any) -> Problem:
    """Instantiate a registered problem, e.g. ``make_problem("zdt1", n_var=10)``."""
    if name not in PROBLEMS:
        suggestions = PROBLEMS.suggest(name)
        raise InvalidProblemError(name, suggestions or PROBLEMS.list())
    factory = PROBLEMS[name]
    try:
        return factory(**params)
    except TypeError as exc:
        raise ProblemError(f"Invalid parameters for problem '{name}': {exc}") from exc


__all__ = ["PROBLEMS", "available_problems", "make_problem"]
