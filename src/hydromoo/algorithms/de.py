"""
Single-objective differential evolution.
"""

from __future__ import annotations

from functools import cmp_to_key

import numpy as np

from hydromoo.algorithms.lifecycle import Budget, EvolutionStrategy
from hydromoo.core.comparators import Comparator, ObjectiveComparator
from hydromoo.core.problem import Problem
from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError
from hydromoo.operators.crossover import DifferentialEvolutionCrossover
from hydromoo.operators.selection import DifferentialEvolutionSelection


class DifferentialEvolution(EvolutionStrategy):
    """
    DE with one trial vector per target.

    For every target ``i`` the selection draws donors distinct from ``i``, the
    DE crossover builds a trial from them (and from the current best for the
    ``best`` strategies) and the trial replaces the target unless the target is
    strictly better. The population is kept sorted by the objective so the
    first member is the incumbent.

    Parameters
    ----------
    population_size : int
        Number of target vectors.
    max_evaluations : int
        Evaluation budget, initial population included.
    crossover : DifferentialEvolutionCrossover, optional
        Defaults to ``rand/1/bin`` with CR = F = 0.5.
    selection : DifferentialEvolutionSelection, optional
        Defaults to drawing as many donors as the crossover needs.
    comparator : callable, optional
        Defaults to ``ObjectiveComparator(0)``.
    """

    name = "DifferentialEvolution"

    def __init__(
        self,
        population_size: int,
        max_evaluations: int,
        *,
        crossover: DifferentialEvolutionCrossover | None = None,
        selection: DifferentialEvolutionSelection | None = None,
        comparator: Comparator | None = None,
    ) -> None:
        self.crossover = crossover or DifferentialEvolutionCrossover()
        self.selection_operator = selection or DifferentialEvolutionSelection(
            self.crossover.number_of_required_parents, False
        )
        if self.selection_operator.number_of_solutions_to_select != self.crossover.number_of_required_parents:
            raise ConfigurationError(
                f"DE selection draws {self.selection_operator.number_of_solutions_to_select} solutions but "
                f"variant '{self.crossover.variant.label}' needs {self.crossover.number_of_required_parents}."
            )
        donors = self.crossover.number_of_required_parents
        if population_size <= donors:
            raise ConfigurationError(
                f"population_size must exceed the {donors} donors of '{self.crossover.variant.label}', "
                f"got {population_size}."
            )
        self.population_size = int(population_size)
        self.budget = Budget(int(max_evaluations), "evaluations")
        self.comparator = comparator or ObjectiveComparator(0)

    def bind(self, problem: Problem) -> None:
        if problem.n_obj != 1 and isinstance(self.comparator, ObjectiveComparator):
            raise ConfigurationError(
                f"DifferentialEvolution optimises a single objective; {problem.name} has {problem.n_obj}.",
                suggestion="Use NSGAII, SPEA2 or SMPSO for multi-objective problems",
            )

    def _sorted(self, solutions: list[Solution]) -> list[Solution]:
        return sorted(solutions, key=cmp_to_key(self.comparator))

    def create_initial_population(self, problem: Problem, rng: np.random.Generator) -> list[Solution]:
        return [problem.create_solution(rng) for _ in range(self.population_size)]

    def initialize(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        self.budget.start(len(population))
        return self._sorted(population)

    def selection(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        return population

    def reproduction(
        self, mating_pool: list[Solution], population: list[Solution], rng: np.random.Generator
    ) -> list[Solution]:
        best = population[0]
        offspring = []
        for i, target in enumerate(population):
            parents = self.selection_operator.execute(population, rng, index=i)
            offspring.append(self.crossover.execute(parents, rng, current=target, best=best)[0])
        return offspring

    def replacement(self, population: list[Solution], offspring: list[Solution]) -> list[Solution]:
        survivors = [
            parent if self.comparator(parent, trial) < 0 else trial for parent, trial in zip(population, offspring)
        ]
        return self._sorted(survivors)

    def status_message(self) -> str:
        return f"Evaluations: {self.budget.count}/{self.budget.limit}"

    def result(self, population: list[Solution]) -> list[Solution]:
        return self._sorted(population)[:1]


__all__ = ["DifferentialEvolution"]
