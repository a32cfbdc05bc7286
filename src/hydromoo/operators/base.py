"""Operator interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError


def _check_probability(name: str, value: float) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be within [0, 1], got {value}.")
    return value


def _check_non_negative(name: str, value: float) -> float:
    value = float(value)
    if value < 0.0:
        raise ConfigurationError(f"{name} must be non-negative, got {value}.")
    return value


class SelectionOperator(ABC):
    """Pick one or several solutions from a population.

    ``returns_pool`` is True for operators whose ``execute`` returns a list
    (a mating pool) instead of a single winner.
    """

    returns_pool: bool = False

    @abstractmethod
    def execute(self, solutions: list[Solution], rng: np.random.Generator, **kwargs: Any) -> Any:
        raise NotImplementedError

    def __call__(self, solutions: list[Solution], rng: np.random.Generator, **kwargs: Any) -> Any:
        return self.execute(solutions, rng, **kwargs)


class CrossoverOperator(ABC):
    """Combine ``number_of_required_parents`` parents into fresh children.

    Children are always copies; parents are never modified.
    """

    @property
    @abstractmethod
    def number_of_required_parents(self) -> int: ...

    @property
    @abstractmethod
    def number_of_generated_children(self) -> int: ...

    @abstractmethod
    def execute(self, parents: list[Solution], rng: np.random.Generator, **kwargs: Any) -> list[Solution]:
        raise NotImplementedError

    def __call__(self, parents: list[Solution], rng: np.random.Generator, **kwargs: Any) -> list[Solution]:
        return self.execute(parents, rng, **kwargs)

    def _check_parents(self, parents: list[Solution]) -> None:
        if len(parents) != self.number_of_required_parents:
            raise ConfigurationError(
                f"{type(self).__name__} needs {self.number_of_required_parents} parents, got {len(parents)}."
            )


def check_selection_shape(selection: SelectionOperator, *, pool: bool, algorithm: str) -> None:
    """Raise ConfigurationError when ``selection`` does not return what ``algorithm`` consumes."""
    if selection.returns_pool != pool:
        wanted = "a whole mating pool" if pool else "a single winner per call"
        raise ConfigurationError(
            f"{algorithm} needs a selection operator returning {wanted}; "
            f"{type(selection).__name__} does not.",
            suggestion="Use uniform selection" if pool else "Use tournament or random selection",
        )


class MutationOperator(ABC):
    """Perturb a solution in place and return it."""

    @abstractmethod
    def execute(self, solution: Solution, rng: np.random.Generator) -> Solution:
        raise NotImplementedError

    def __call__(self, solution: Solution, rng: np.random.Generator) -> Solution:
        return self.execute(solution, rng)


__all__ = ["SelectionOperator", "CrossoverOperator", "MutationOperator", "check_selection_shape"]
