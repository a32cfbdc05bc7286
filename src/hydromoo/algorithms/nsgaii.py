"""
NSGA-II (Deb et al., 2002).

Binary tournament on rank and crowding distance builds the mating pool,
variation produces ``offspring_population_size`` children and ranking-and-
crowding selection keeps ``population_size`` members of parents and
offspring combined.
"""

from __future__ import annotations

import logging

import numpy as np

from hydromoo.algorithms.lifecycle import Budget, EvolutionStrategy
from hydromoo.core.comparators import Comparator, DominanceComparator, RankingAndCrowdingDistanceComparator
from hydromoo.core.problem import Problem
from hydromoo.core.ranking import non_dominated_solutions
from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError
from hydromoo.operators.base import CrossoverOperator, MutationOperator, SelectionOperator, check_selection_shape
from hydromoo.operators.crossover import SBXCrossover
from hydromoo.operators.mutation import PolynomialMutation
from hydromoo.operators.selection import RankingAndCrowdingSelection, TournamentSelection


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def reproduce(
    mating_pool: list[Solution],
    crossover: CrossoverOperator,
    mutation: MutationOperator,
    limit: int,
    rng: np.random.Generator,
) -> list[Solution]:
    """Cross consecutive parent groups and mutate every child, stopping at ``limit`` children."""
    group = crossover.number_of_required_parents
    if len(mating_pool) % group != 0:
        raise ConfigurationError(
            f"Mating pool size {len(mating_pool)} is not divisible by the {group} parents "
            f"{type(crossover).__name__} requires."
        )
    offspring: list[Solution] = []
    for start in range(0, len(mating_pool), group):
        for child in crossover.execute(mating_pool[start : start + group], rng):
            offspring.append(mutation.execute(child, rng))
            if len(offspring) >= limit:
                return offspring
    return offspring


class NSGAII(EvolutionStrategy):
    """
    NSGA-II stages.

    Parameters
    ----------
    population_size : int
        Number of survivors per generation.
    max_evaluations : int
        Evaluation budget, initial population included.
    crossover : CrossoverOperator, optional
        Defaults to ``SBXCrossover(0.9, 20)``.
    mutation : MutationOperator, optional
        Defaults to polynomial mutation with probability ``1 / n_var``.
    selection : SelectionOperator, optional
        Defaults to binary tournament on rank then crowding distance.
    mating_pool_size : int, optional
        Defaults to ``population_size``; must be a multiple of the
        crossover's required parents.
    offspring_population_size : int, optional
        Defaults to ``population_size``.
    comparator : callable, optional
        Dominance comparator used by ranking.
    """

    name = "NSGAII"

    def __init__(
        self,
        population_size: int,
        max_evaluations: int,
        *,
        crossover: CrossoverOperator | None = None,
        mutation: MutationOperator | None = None,
        selection: SelectionOperator | None = None,
        mating_pool_size: int | None = None,
        offspring_population_size: int | None = None,
        comparator: Comparator | None = None,
    ) -> None:
        if population_size <= 0:
            raise ConfigurationError(f"population_size must be positive, got {population_size}.")
        self.population_size = int(population_size)
        self.mating_pool_size = int(mating_pool_size or population_size)
        self.offspring_population_size = int(offspring_population_size or population_size)
        if self.mating_pool_size <= 0 or self.offspring_population_size <= 0:
            raise ConfigurationError("mating_pool_size and offspring_population_size must be positive.")
        self.budget = Budget(int(max_evaluations), "evaluations")
        self.crossover = crossover or SBXCrossover(0.9, 20.0)
        self.mutation = mutation
        self.selection_operator = selection or TournamentSelection(2, RankingAndCrowdingDistanceComparator())
        check_selection_shape(self.selection_operator, pool=False, algorithm="NSGAII")
        self.comparator = comparator or DominanceComparator()
        if self.mating_pool_size % self.crossover.number_of_required_parents != 0:
            raise ConfigurationError(
                f"mating_pool_size ({self.mating_pool_size}) must be a multiple of "
                f"{self.crossover.number_of_required_parents}, the parents required by the crossover.",
                suggestion="Use an even mating pool size with two-parent crossovers",
            )
        self._survival = RankingAndCrowdingSelection(self.population_size, self.comparator)

    def bind(self, problem: Problem) -> None:
        if self.mutation is None:
            self.mutation = PolynomialMutation.for_problem(problem.n_var)
            _logger().debug("NSGAII mutation defaults to polynomial with probability %.4f", self.mutation.probability)

    def create_initial_population(self, problem: Problem, rng: np.random.Generator) -> list[Solution]:
        return [problem.create_solution(rng) for _ in range(self.population_size)]

    def selection(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        return [self.selection_operator.execute(population, rng) for _ in range(self.mating_pool_size)]

    def reproduction(
        self, mating_pool: list[Solution], population: list[Solution], rng: np.random.Generator
    ) -> list[Solution]:
        return reproduce(mating_pool, self.crossover, self.mutation, self.offspring_population_size, rng)

    def replacement(self, population: list[Solution], offspring: list[Solution]) -> list[Solution]:
        return self._survival.execute(population + offspring)

    def result(self, population: list[Solution]) -> list[Solution]:
        return non_dominated_solutions(population, self.comparator)


__all__ = ["NSGAII", "reproduce"]
