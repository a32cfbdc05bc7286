"""
Stepwise life cycle shared by every algorithm family.

An :class:`EvolutionaryAlgorithm` drives a family-specific
:class:`EvolutionStrategy` one generation at a time::

    CREATED -> INITIALIZED <-> STEPPING -> TERMINATED
                                  \\-> FAILED

A generation is ``selection -> reproduction -> evaluation -> replacement``
followed by a budget update. The new population is only committed once the
whole generation succeeded.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

import numpy as np

from hydromoo.core.evaluator import SequentialEvaluator
from hydromoo.core.problem import Problem
from hydromoo.core.solution import Solution
from hydromoo.exceptions import AlgorithmStateError, ConfigurationError


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class AlgorithmStatus(str, Enum):
    CREATED = "created"
    INITIALIZED = "initialized"
    STEPPING = "stepping"
    TERMINATED = "terminated"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


@dataclass
class Budget:
    """
    Termination counter.

    ``unit="evaluations"`` starts at the initial population size and grows by
    the number of evaluated offspring; ``unit="iterations"`` starts at 1 and
    grows by one per generation.
    """

    limit: int
    unit: str = "evaluations"
    count: int = 0

    def __post_init__(self) -> None:
        if self.unit not in ("evaluations", "iterations"):
            raise ConfigurationError(f"Unknown budget unit '{self.unit}'.")
        if self.limit <= 0:
            raise ConfigurationError(f"max {self.unit} must be positive, got {self.limit}.")

    def start(self, initial_evaluations: int) -> None:
        self.count = initial_evaluations if self.unit == "evaluations" else 1

    def advance(self, evaluations: int) -> None:
        self.count += evaluations if self.unit == "evaluations" else 1

    @property
    def reached(self) -> bool:
        return self.count >= self.limit

    @property
    def fraction(self) -> float:
        return min(1.0, self.count / self.limit)

    def describe(self) -> str:
        return f"Number of {self.unit}: {self.count} / {self.limit}"


class EvolutionStrategy(ABC):
    """
    Family-specific stages plugged into :class:`EvolutionaryAlgorithm`.

    Strategies own their auxiliary state (archives, velocities) and their
    :class:`Budget`. Stage methods must not modify the population they
    receive beyond what :meth:`replacement` returns, so a failed generation
    leaves the committed population intact.
    """

    name: str = "algorithm"
    budget: Budget

    def bind(self, problem: Problem) -> None:
        """Validate the strategy against ``problem``; raise ConfigurationError on mismatch."""

    @abstractmethod
    def create_initial_population(self, problem: Problem, rng: np.random.Generator) -> list[Solution]:
        raise NotImplementedError

    def initialize(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        """Seed auxiliary state from the evaluated initial population."""
        self.budget.start(len(population))
        return population

    @abstractmethod
    def selection(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        raise NotImplementedError

    @abstractmethod
    def reproduction(
        self, mating_pool: list[Solution], population: list[Solution], rng: np.random.Generator
    ) -> list[Solution]:
        raise NotImplementedError

    @abstractmethod
    def replacement(self, population: list[Solution], offspring: list[Solution]) -> list[Solution]:
        raise NotImplementedError

    def update_progress(self, population: list[Solution], offspring: list[Solution]) -> None:
        self.budget.advance(len(offspring))

    def is_stopping_condition_reached(self) -> bool:
        return self.budget.reached

    def progress(self) -> float:
        return self.budget.fraction

    def status_message(self) -> str:
        return self.budget.describe()

    @abstractmethod
    def result(self, population: list[Solution]) -> list[Solution]:
        raise NotImplementedError


@runtime_checkable
class Algorithm(Protocol):
    """Surface consumed by the experiment harness."""

    @property
    def name(self) -> str: ...

    def init_progress(self) -> None: ...

    def step(self) -> None: ...

    def run(self) -> list[Solution]: ...

    def is_stopping_condition_reached(self) -> bool: ...

    def result(self) -> list[Solution]: ...

    def status_of_execution(self) -> str: ...

    def progress(self) -> float: ...

    def close(self) -> None: ...


class EvolutionaryAlgorithm:
    """
    Generic stepper running an :class:`EvolutionStrategy` on a problem.

    Parameters
    ----------
    problem : Problem
        Problem to optimise; closed by :meth:`close`.
    strategy : EvolutionStrategy
        Family-specific stages (NSGA-II, SPEA2, SMPSO, DE, GA).
    evaluator : SequentialEvaluator, optional
        Evaluates solution lists; sequential by default.
    seed : int, optional
        Seed for a fresh ``np.random.default_rng``; ignored when ``rng`` is given.
    rng : np.random.Generator, optional
        Random stream shared by every operator call.

    Raises
    ------
    ConfigurationError
        If the strategy does not fit the problem.
    """

    def __init__(
        self,
        problem: Problem,
        strategy: EvolutionStrategy,
        *,
        evaluator: SequentialEvaluator | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        strategy.bind(problem)
        self.problem = problem
        self.strategy = strategy
        self.evaluator = evaluator or SequentialEvaluator()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.status = AlgorithmStatus.CREATED
        self.population: list[Solution] = []
        self.generation = 0
        self._closed = False

    @property
    def name(self) -> str:
        return self.strategy.name

    @property
    def evaluations(self) -> int:
        return self.evaluator.evaluations

    def _fail(self, action: str, exc: BaseException) -> None:
        self.status = AlgorithmStatus.FAILED
        _logger().error("%s failed during %s: %s", self.name, action, exc)

    def _settle(self) -> None:
        if self.strategy.is_stopping_condition_reached():
            self.status = AlgorithmStatus.TERMINATED
            _logger().info("%s finished after %d generations (%s)", self.name, self.generation, self.status_of_execution())
        else:
            self.status = AlgorithmStatus.INITIALIZED

    def init_progress(self) -> None:
        """Create, evaluate and register the initial population."""
        if self.status is not AlgorithmStatus.CREATED:
            raise AlgorithmStateError(self.name, "initialise", str(self.status))
        try:
            population = self.strategy.create_initial_population(self.problem, self.rng)
            population = self.evaluator.evaluate(population, self.problem)
            population = self.strategy.initialize(population, self.rng)
        except Exception as exc:
            self._fail("initialisation", exc)
            raise
        self.population = population
        _logger().info("%s initialised on %s with %d solutions", self.name, self.problem.name, len(population))
        self._settle()

    def step(self) -> None:
        """Run one generation (initialising first when needed)."""
        if self.status is AlgorithmStatus.CREATED:
            self.init_progress()
            if self.status is AlgorithmStatus.TERMINATED:
                return
        if self.status is not AlgorithmStatus.INITIALIZED:
            raise AlgorithmStateError(self.name, "step", str(self.status))

        self.status = AlgorithmStatus.STEPPING
        try:
            mating_pool = self.strategy.selection(self.population, self.rng)
            offspring = self.strategy.reproduction(mating_pool, self.population, self.rng)
            offspring = self.evaluator.evaluate(offspring, self.problem)
            population = self.strategy.replacement(self.population, offspring)
            self.strategy.update_progress(population, offspring)
        except Exception as exc:
            self._fail(f"generation {self.generation + 1}", exc)
            raise
        self.population = population
        self.generation += 1
        _logger().debug("%s generation %d: %s", self.name, self.generation, self.status_of_execution())
        self._settle()

    def run(self) -> list[Solution]:
        """Step until the stopping condition holds and return the result."""
        if self.status is AlgorithmStatus.CREATED:
            self.init_progress()
        while not self.is_stopping_condition_reached():
            self.step()
        return self.result()

    def is_stopping_condition_reached(self) -> bool:
        if self.status is AlgorithmStatus.CREATED:
            return False
        return self.status is not AlgorithmStatus.INITIALIZED or self.strategy.is_stopping_condition_reached()

    def result(self) -> list[Solution]:
        if self.status in (AlgorithmStatus.CREATED, AlgorithmStatus.FAILED, AlgorithmStatus.STEPPING):
            raise AlgorithmStateError(self.name, "read the result", str(self.status))
        return self.strategy.result(self.population)

    def status_of_execution(self) -> str:
        return self.strategy.status_message()

    def progress(self) -> float:
        if self.status is AlgorithmStatus.CREATED:
            return 0.0
        return self.strategy.progress()

    def close(self) -> None:
        """Release the problem's resources; safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self.problem.close()

    def __enter__(self) -> "EvolutionaryAlgorithm":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"EvolutionaryAlgorithm(name={self.name!r}, status={self.status}, generation={self.generation})"


__all__ = ["AlgorithmStatus", "Budget", "EvolutionStrategy", "Algorithm", "EvolutionaryAlgorithm"]
