"""
SPEA2 (Zitzler, Laumanns & Thiele, 2001).

Each generation merges the archive with the current population, assigns
strength/raw fitness plus a k-th nearest neighbour density term, and
rebuilds the archive by environmental selection. Offspring are bred from the
archive by binary tournaments and replace the population entirely.
"""

from __future__ import annotations

from functools import cmp_to_key

import numpy as np

from hydromoo.algorithms.lifecycle import Budget, EvolutionStrategy
from hydromoo.core.comparators import Comparator, DominanceComparator, StrengthFitnessComparator
from hydromoo.core.density import assign_strength_fitness, distance_matrix
from hydromoo.core.problem import Problem
from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError, InvariantViolationError
from hydromoo.operators.base import CrossoverOperator, MutationOperator, SelectionOperator, check_selection_shape
from hydromoo.operators.crossover import SBXCrossover
from hydromoo.operators.mutation import PolynomialMutation
from hydromoo.operators.selection import TournamentSelection


class EnvironmentalSelection:
    """
    SPEA2 archive truncation to ``solutions_to_select`` members.

    Solutions with fitness below 1 (non-dominated) are kept. A shortfall is
    filled with the best remaining solutions by fitness; an excess is removed
    one at a time, always dropping the candidate whose sorted neighbour
    distances are lexicographically smallest.

    Requires ``strength_fitness`` on every solution.
    """

    def __init__(self, solutions_to_select: int) -> None:
        if solutions_to_select <= 0:
            raise ConfigurationError(f"solutions_to_select must be positive, got {solutions_to_select}.")
        self.solutions_to_select = int(solutions_to_select)

    def execute(self, solutions: list[Solution]) -> list[Solution]:
        if any(s.strength_fitness is None for s in solutions):
            raise InvariantViolationError("Environmental selection requires strength fitness on every solution.")
        size = min(len(solutions), self.solutions_to_select)

        selected = [s for s in solutions if s.strength_fitness < 1.0]
        if len(selected) < size:
            rest = sorted(
                (s for s in solutions if s.strength_fitness >= 1.0),
                key=cmp_to_key(StrengthFitnessComparator()),
            )
            selected.extend(rest[: size - len(selected)])
            return selected
        if len(selected) == size:
            return selected
        return self._truncate(selected, size)

    @staticmethod
    def _truncate(candidates: list[Solution], size: int) -> list[Solution]:
        dist = distance_matrix(candidates)
        n = len(candidates)
        ids = list(range(n))
        # per candidate: (neighbour id, distance) sorted by distance, self excluded
        neighbours: list[list[tuple[int, float]]] = []
        for i in range(n):
            order = np.argsort(dist[i], kind="mergesort")
            neighbours.append([(int(j), float(dist[i, j])) for j in order if j != i])

        while len(ids) > size:
            to_remove = 0
            for i in range(1, len(neighbours)):
                mine = neighbours[i]
                worst = neighbours[to_remove]
                if mine[0][1] < worst[0][1]:
                    to_remove = i
                elif mine[0][1] == worst[0][1]:
                    k = 0
                    while k < len(mine) - 1 and mine[k][1] == worst[k][1]:
                        k += 1
                    if mine[k][1] < worst[k][1]:
                        to_remove = i
            removed = ids.pop(to_remove)
            neighbours.pop(to_remove)
            for entry in neighbours:
                entry[:] = [pair for pair in entry if pair[0] != removed]

        return [candidates[i] for i in ids]


class SPEA2(EvolutionStrategy):
    """
    SPEA2 stages.

    Parameters
    ----------
    population_size : int
        Population and archive size.
    max_iterations : int
        Iteration budget; counting starts at 1.
    k : int
        Neighbour index of the density term.
    crossover, mutation : optional
        Default to SBX and polynomial mutation (``1 / n_var``).
    selection : SelectionOperator, optional
        Defaults to binary tournament under dominance.
    """

    name = "SPEA2"

    def __init__(
        self,
        population_size: int,
        max_iterations: int,
        *,
        k: int = 1,
        crossover: CrossoverOperator | None = None,
        mutation: MutationOperator | None = None,
        selection: SelectionOperator | None = None,
        comparator: Comparator | None = None,
    ) -> None:
        if population_size <= 0:
            raise ConfigurationError(f"population_size must be positive, got {population_size}.")
        if k < 0:
            raise ConfigurationError(f"k must be non-negative, got {k}.")
        self.population_size = int(population_size)
        self.k = int(k)
        self.budget = Budget(int(max_iterations), "iterations")
        self.crossover = crossover or SBXCrossover(0.9, 20.0)
        if self.crossover.number_of_required_parents != 2:
            raise ConfigurationError("SPEA2 breeds offspring from pairs of parents; use a two-parent crossover.")
        self.mutation = mutation
        self.comparator = comparator or DominanceComparator()
        self.selection_operator = selection or TournamentSelection(2, self.comparator)
        check_selection_shape(self.selection_operator, pool=False, algorithm="SPEA2")
        self.environmental_selection = EnvironmentalSelection(self.population_size)
        self.archive: list[Solution] = []
        self._pending_archive: list[Solution] = []

    def bind(self, problem: Problem) -> None:
        if self.mutation is None:
            self.mutation = PolynomialMutation.for_problem(problem.n_var)

    def create_initial_population(self, problem: Problem, rng: np.random.Generator) -> list[Solution]:
        return [problem.create_solution(rng) for _ in range(self.population_size)]

    def selection(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        union = self.archive + population
        assign_strength_fitness(union, k=self.k, comparator=self.comparator)
        self._pending_archive = self.environmental_selection.execute(union)
        return self._pending_archive

    def reproduction(
        self, mating_pool: list[Solution], population: list[Solution], rng: np.random.Generator
    ) -> list[Solution]:
        offspring: list[Solution] = []
        while len(offspring) < self.population_size:
            parents = [
                self.selection_operator.execute(mating_pool, rng),
                self.selection_operator.execute(mating_pool, rng),
            ]
            child = self.crossover.execute(parents, rng)[0]
            offspring.append(self.mutation.execute(child, rng))
        return offspring

    def replacement(self, population: list[Solution], offspring: list[Solution]) -> list[Solution]:
        self.archive = self._pending_archive
        return offspring

    def result(self, population: list[Solution]) -> list[Solution]:
        return list(self.archive)


__all__ = ["SPEA2", "EnvironmentalSelection"]
