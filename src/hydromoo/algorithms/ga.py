"""
Generational genetic algorithm with two-member elitism.
"""

from __future__ import annotations

from functools import cmp_to_key

import numpy as np

from hydromoo.algorithms.lifecycle import Budget, EvolutionStrategy
from hydromoo.algorithms.nsgaii import reproduce
from hydromoo.core.comparators import Comparator, DominanceComparator
from hydromoo.core.problem import Problem
from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError
from hydromoo.operators.base import CrossoverOperator, MutationOperator, SelectionOperator, check_selection_shape
from hydromoo.operators.crossover import SBXCrossover
from hydromoo.operators.mutation import PolynomialMutation
from hydromoo.operators.selection import UniformSelection


class GeneticAlgorithm(EvolutionStrategy):
    """
    Genetic algorithm for single-objective problems.

    The selection operator returns a whole mating pool (linear ranking by
    default) whose consecutive members are crossed. The two best parents
    survive into the next generation in place of the two worst offspring.

    Exactly one termination criterion is used: ``max_evaluations`` or
    ``max_iterations_without_improvement``.

    Raises
    ------
    ConfigurationError
        On negative or conflicting termination settings, or when the
        population size is not a multiple of the crossover's parents.
    """

    name = "GeneticAlgorithm"

    def __init__(
        self,
        population_size: int,
        *,
        max_evaluations: int | None = None,
        max_iterations_without_improvement: int | None = None,
        crossover: CrossoverOperator | None = None,
        mutation: MutationOperator | None = None,
        selection: SelectionOperator | None = None,
        comparator: Comparator | None = None,
    ) -> None:
        for label, value in (
            ("max_evaluations", max_evaluations),
            ("max_iterations_without_improvement", max_iterations_without_improvement),
        ):
            if value is not None and value < 0:
                raise ConfigurationError(f"{label} can't be less than 0, got {value}.")
        if bool(max_evaluations) == bool(max_iterations_without_improvement):
            raise ConfigurationError(
                "Set exactly one of max_evaluations and max_iterations_without_improvement.",
                suggestion="The two termination criteria are mutually exclusive",
            )
        if population_size < 2:
            raise ConfigurationError(f"population_size must be at least 2, got {population_size}.")
        self.population_size = int(population_size)
        self.crossover = crossover or SBXCrossover(0.9, 20.0)
        if self.population_size % self.crossover.number_of_required_parents != 0:
            raise ConfigurationError(
                f"population_size ({self.population_size}) is not divisible by "
                f"{self.crossover.number_of_required_parents}, the parents required by the crossover."
            )
        self.mutation = mutation
        self.comparator = comparator or DominanceComparator()
        self.selection_operator = selection or UniformSelection(1.5, self.comparator)
        check_selection_shape(self.selection_operator, pool=True, algorithm="GeneticAlgorithm")
        self.max_iterations_without_improvement = int(max_iterations_without_improvement or 0)
        self.budget = Budget(int(max_evaluations or 1), "evaluations")
        self.iterations_without_improvement = 0
        self.best: Solution | None = None

    @property
    def stagnation_mode(self) -> bool:
        return self.max_iterations_without_improvement > 0

    def bind(self, problem: Problem) -> None:
        if self.mutation is None:
            self.mutation = PolynomialMutation.for_problem(problem.n_var)

    def _sorted(self, solutions: list[Solution]) -> list[Solution]:
        return sorted(solutions, key=cmp_to_key(self.comparator))

    def create_initial_population(self, problem: Problem, rng: np.random.Generator) -> list[Solution]:
        return [problem.create_solution(rng) for _ in range(self.population_size)]

    def initialize(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        self.budget.start(len(population))
        self.iterations_without_improvement = 0
        self.best = self._sorted(population)[0].copy()
        return population

    def selection(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        return self.selection_operator.execute(population, rng)

    def reproduction(
        self, mating_pool: list[Solution], population: list[Solution], rng: np.random.Generator
    ) -> list[Solution]:
        groups = len(mating_pool) // self.crossover.number_of_required_parents
        limit = groups * self.crossover.number_of_generated_children
        return reproduce(mating_pool, self.crossover, self.mutation, limit, rng)

    def replacement(self, population: list[Solution], offspring: list[Solution]) -> list[Solution]:
        elite = self._sorted(population)[:2]
        merged = self._sorted(offspring + elite)
        return merged[: len(merged) - 2]

    def update_progress(self, population: list[Solution], offspring: list[Solution]) -> None:
        if not self.stagnation_mode:
            self.budget.advance(len(offspring))
            return
        current = self._sorted(population)[0]
        if self.comparator(current, self.best) < 0:
            self.best = current.copy()
            self.iterations_without_improvement = 0
        self.iterations_without_improvement += 1

    def is_stopping_condition_reached(self) -> bool:
        if self.stagnation_mode:
            return self.iterations_without_improvement >= self.max_iterations_without_improvement
        return self.budget.reached

    def progress(self) -> float:
        if self.stagnation_mode:
            return min(1.0, self.iterations_without_improvement / self.max_iterations_without_improvement)
        return self.budget.fraction

    def status_message(self) -> str:
        if self.stagnation_mode:
            return (
                "Number of iterations without improvement: "
                f"{self.iterations_without_improvement} / {self.max_iterations_without_improvement}"
            )
        return self.budget.describe()

    def result(self, population: list[Solution]) -> list[Solution]:
        return self._sorted(population)[:1]


__all__ = ["GeneticAlgorithm"]
