"""
SMPSO: speed-constrained multi-objective particle swarm (Nebro et al., 2009).

Velocities are scaled by a constriction coefficient and clamped to half the
variable range. A bounded archive of leaders provides the social component;
every sixth particle is perturbed by the mutation operator. Works for real
and integer encodings (integer positions move by the truncated velocity).
"""

from __future__ import annotations

import math

import numpy as np

from hydromoo.algorithms.lifecycle import Budget, EvolutionStrategy
from hydromoo.core.archive import BoundedArchive, CrowdingDistanceArchive, HypervolumeArchive
from hydromoo.core.comparators import Comparator, DominanceComparator
from hydromoo.core.problem import Problem
from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError
from hydromoo.operators.base import MutationOperator
from hydromoo.operators.mutation import PolynomialMutation

MUTATION_EVERY = 6


def constriction_coefficient(c1: float, c2: float) -> float:
    rho = c1 + c2
    if rho <= 4.0:
        return 1.0
    return 2.0 / (2.0 - rho - math.sqrt(rho * rho - 4.0 * rho))


def _check_range(name: str, low: float, high: float) -> tuple[float, float]:
    if low > high:
        raise ConfigurationError(f"{name} range is empty: min {low} > max {high}.")
    return float(low), float(high)


class SMPSO(EvolutionStrategy):
    """
    SMPSO stages.

    Parameters
    ----------
    swarm_size : int
        Number of particles.
    max_iterations : int
        Iteration budget; counting starts at 1.
    leaders : BoundedArchive, optional
        Leader archive, ``CrowdingDistanceArchive(archive_size)`` by default.
    archive_size : int
        Capacity of the default leader archive.
    mutation : MutationOperator, optional
        Perturbation for every sixth particle; polynomial with ``1 / n_var``
        by default.
    r1, r2, c1, c2 : tuple of float
        ``(min, max)`` ranges, drawn per particle and generation.
    weight : tuple of float
        ``(min, max)`` inertia weight; the maximum is always used.
    change_velocity1, change_velocity2 : float
        Factors applied to the velocity when a particle is clamped at the
        lower and upper bound respectively.
    """

    name = "SMPSO"

    def __init__(
        self,
        swarm_size: int,
        max_iterations: int,
        *,
        leaders: BoundedArchive | None = None,
        archive_size: int = 100,
        mutation: MutationOperator | None = None,
        r1: tuple[float, float] = (0.0, 1.0),
        r2: tuple[float, float] = (0.0, 1.0),
        c1: tuple[float, float] = (1.5, 2.5),
        c2: tuple[float, float] = (1.5, 2.5),
        weight: tuple[float, float] = (0.1, 0.1),
        change_velocity1: float = -1.0,
        change_velocity2: float = -1.0,
        comparator: Comparator | None = None,
    ) -> None:
        if swarm_size <= 0:
            raise ConfigurationError(f"swarm_size must be positive, got {swarm_size}.")
        self.swarm_size = int(swarm_size)
        self.budget = Budget(int(max_iterations), "iterations")
        self.comparator = comparator or DominanceComparator()
        self.leaders = leaders if leaders is not None else CrowdingDistanceArchive(archive_size, self.comparator)
        self.mutation = mutation
        self.r1 = _check_range("r1", *r1)
        self.r2 = _check_range("r2", *r2)
        self.c1 = _check_range("c1", *c1)
        self.c2 = _check_range("c2", *c2)
        self.weight = _check_range("weight", *weight)
        self.change_velocity1 = float(change_velocity1)
        self.change_velocity2 = float(change_velocity2)
        self.delta_max: np.ndarray | None = None
        self.velocity: np.ndarray | None = None
        self.local_best: list[Solution] = []
        self._pending_velocity: np.ndarray | None = None

    def bind(self, problem: Problem) -> None:
        if isinstance(self.leaders, HypervolumeArchive) and problem.n_obj != 2:
            raise ConfigurationError(
                f"Hypervolume leader archive supports 2 objectives only, problem has {problem.n_obj}.",
                suggestion="Use archive_type: crowding",
            )
        self.delta_max = (problem.xu.astype(float) - problem.xl.astype(float)) / 2.0
        if self.mutation is None:
            self.mutation = PolynomialMutation.for_problem(problem.n_var)

    def inertia_weight(self) -> float:
        return self.weight[1]

    def create_initial_population(self, problem: Problem, rng: np.random.Generator) -> list[Solution]:
        return [problem.create_solution(rng) for _ in range(self.swarm_size)]

    def initialize(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        n_var = population[0].n_var
        self.velocity = np.zeros((len(population), n_var), dtype=float)
        self.local_best = [p.copy() for p in population]
        for particle in population:
            self.leaders.add(particle.copy())
        self.leaders.compute_density_estimator()
        self.budget.start(len(population))
        return population

    def _global_best(self, rng: np.random.Generator) -> Solution:
        members = self.leaders.solutions
        if len(members) == 1:
            return members[0]
        one = members[int(rng.integers(0, len(members)))]
        two = members[int(rng.integers(0, len(members)))]
        if self.leaders.density_comparator(one, two) < 1:
            return one
        return two

    def selection(self, population: list[Solution], rng: np.random.Generator) -> list[Solution]:
        return [self._global_best(rng) for _ in population]

    def reproduction(
        self, mating_pool: list[Solution], population: list[Solution], rng: np.random.Generator
    ) -> list[Solution]:
        assert self.velocity is not None and self.delta_max is not None
        w = self.inertia_weight()
        velocity = self.velocity.copy()
        swarm: list[Solution] = []
        for i, particle in enumerate(population):
            r1 = rng.uniform(*self.r1)
            r2 = rng.uniform(*self.r2)
            c1 = rng.uniform(*self.c1)
            c2 = rng.uniform(*self.c2)
            chi = constriction_coefficient(c1, c2)
            x = particle.variables.astype(float)
            pbest = self.local_best[i].variables.astype(float)
            gbest = mating_pool[i].variables.astype(float)
            v = chi * (w * velocity[i] + c1 * r1 * (pbest - x) + c2 * r2 * (gbest - x))
            velocity[i] = np.clip(v, -self.delta_max, self.delta_max)

            moved = particle.copy()
            step = np.trunc(velocity[i]) if moved.is_integer else velocity[i]
            position = x + step
            below = position < moved.xl
            above = position > moved.xu
            position = np.clip(position, moved.xl, moved.xu)
            velocity[i, below] *= self.change_velocity1
            velocity[i, above] *= self.change_velocity2
            moved.variables[:] = position.astype(moved.variables.dtype)
            if i % MUTATION_EVERY == 0:
                self.mutation.execute(moved, rng)
            swarm.append(moved)
        self._pending_velocity = velocity
        return swarm

    def replacement(self, population: list[Solution], offspring: list[Solution]) -> list[Solution]:
        self.velocity = self._pending_velocity
        self._pending_velocity = None
        for particle in offspring:
            self.leaders.add(particle.copy())
        for i, particle in enumerate(offspring):
            if self.comparator(particle, self.local_best[i]) != 1:
                self.local_best[i] = particle.copy()
        return offspring

    def update_progress(self, population: list[Solution], offspring: list[Solution]) -> None:
        super().update_progress(population, offspring)
        self.leaders.compute_density_estimator()

    def result(self, population: list[Solution]) -> list[Solution]:
        return self.leaders.solutions


__all__ = ["SMPSO", "constriction_coefficient", "MUTATION_EVERY"]
