"""Crossover operators for real and integer encodings."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

import numpy as np

from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError, InvalidOperatorError

from .base import CrossoverOperator, _check_non_negative, _check_probability

_EPS = 1.0e-14


class SBXCrossover(CrossoverOperator):
    """
    Simulated Binary Crossover.

    Each variable is recombined with probability 0.5; otherwise the parents'
    values are exchanged. Integer encodings truncate the result toward zero.

    Parameters
    ----------
    probability : float
        Probability of recombining a pair of parents.
    distribution_index : float
        Spread parameter (eta); larger values keep children near the parents.
    """

    def __init__(self, probability: float = 0.9, distribution_index: float = 20.0) -> None:
        self.probability = _check_probability("Crossover probability", probability)
        self.distribution_index = _check_non_negative("Distribution index", distribution_index)

    @property
    def number_of_required_parents(self) -> int:
        return 2

    @property
    def number_of_generated_children(self) -> int:
        return 2

    def _betaq(self, rand: float, beta: float) -> float:
        eta = self.distribution_index
        alpha = 2.0 - beta ** -(eta + 1.0)
        if rand <= 1.0 / alpha:
            return (rand * alpha) ** (1.0 / (eta + 1.0))
        return (1.0 / (2.0 - rand * alpha)) ** (1.0 / (eta + 1.0))

    def execute(self, parents: list[Solution], rng: np.random.Generator, **kwargs: Any) -> list[Solution]:
        self._check_parents(parents)
        parent1, parent2 = parents
        child1, child2 = parent1.copy(), parent2.copy()
        if rng.random() > self.probability:
            return [child1, child2]

        for i in range(parent1.n_var):
            x1 = float(parent1.variables[i])
            x2 = float(parent2.variables[i])
            if rng.random() <= 0.5:
                if abs(x1 - x2) <= _EPS:
                    continue
                y1, y2 = min(x1, x2), max(x1, x2)
                lower = float(parent1.xl[i])
                upper = float(parent1.xu[i])
                rand = rng.random()
                betaq = self._betaq(rand, 1.0 + 2.0 * (y1 - lower) / (y2 - y1))
                c1 = 0.5 * ((y1 + y2) - betaq * (y2 - y1))
                betaq = self._betaq(rand, 1.0 + 2.0 * (upper - y2) / (y2 - y1))
                c2 = 0.5 * ((y1 + y2) + betaq * (y2 - y1))
                c1 = min(max(c1, lower), upper)
                c2 = min(max(c2, lower), upper)
                if rng.random() <= 0.5:
                    c1, c2 = c2, c1
                child1.set_variable(i, c1)
                child2.set_variable(i, c2)
            else:
                child1.variables[i] = parent2.variables[i]
                child2.variables[i] = parent1.variables[i]
        return [child1, child2]


class SinglePointCrossover(CrossoverOperator):
    """Swap the tails of two parents after a random cut point."""

    def __init__(self, probability: float = 0.9) -> None:
        self.probability = _check_probability("Crossover probability", probability)

    @property
    def number_of_required_parents(self) -> int:
        return 2

    @property
    def number_of_generated_children(self) -> int:
        return 2

    def execute(self, parents: list[Solution], rng: np.random.Generator, **kwargs: Any) -> list[Solution]:
        self._check_parents(parents)
        child1, child2 = parents[0].copy(), parents[1].copy()
        if rng.random() < self.probability:
            point = int(rng.integers(0, child1.n_var))
            tail1 = child1.variables[point:].copy()
            child1.variables[point:] = child2.variables[point:]
            child2.variables[point:] = tail1
        return [child1, child2]


class DEMutation(str, enum.Enum):
    RAND = "rand"
    BEST = "best"
    RAND_TO_BEST = "rand-to-best"
    CURRENT_TO_RAND = "current-to-rand"


class DECrossoverType(str, enum.Enum):
    BIN = "bin"
    EXP = "exp"


@dataclass(frozen=True)
class DEVariant:
    """Parsed DE strategy such as ``rand/1/bin``."""

    mutation: DEMutation
    difference_vectors: int
    crossover: DECrossoverType

    @property
    def label(self) -> str:
        return f"{self.mutation.value}/{self.difference_vectors}/{self.crossover.value}"

    @classmethod
    def parse(cls, text: str) -> "DEVariant":
        """Accept ``rand/1/bin`` as well as the ``RAND_1_BIN`` spelling."""
        normalized = text.strip().lower().replace("_to_", "-to-").replace("_", "/")
        if normalized not in DE_VARIANTS:
            raise InvalidOperatorError("differential evolution", text, sorted(DE_VARIANTS))
        return DE_VARIANTS[normalized]


DE_VARIANTS: dict[str, DEVariant] = {}
for _mutation, _vectors in (
    (DEMutation.RAND, 1),
    (DEMutation.RAND, 2),
    (DEMutation.BEST, 1),
    (DEMutation.BEST, 2),
    (DEMutation.RAND_TO_BEST, 1),
    (DEMutation.CURRENT_TO_RAND, 1),
):
    for _kind in DECrossoverType:
        _variant = DEVariant(_mutation, _vectors, _kind)
        DE_VARIANTS[_variant.label] = _variant


class DifferentialEvolutionCrossover(CrossoverOperator):
    """
    DE mutation plus binomial or exponential crossover producing one child.

    The child starts as a copy of the target (``current``) solution. ``best``
    is required by the ``best`` and ``rand-to-best`` strategies and
    ``current`` by every strategy.

    Parameters
    ----------
    cr : float
        Crossover rate in [0, 1].
    f : float
        Differential weight, non-negative.
    variant : str
        One of :data:`DE_VARIANTS`, e.g. ``"rand/1/bin"``.
    """

    def __init__(self, cr: float = 0.5, f: float = 0.5, variant: str = "rand/1/bin") -> None:
        self.cr = _check_probability("CR", cr)
        self.f = _check_non_negative("F", f)
        self.variant = DEVariant.parse(variant)

    @property
    def number_of_required_parents(self) -> int:
        return 1 + 2 * self.variant.difference_vectors

    @property
    def number_of_generated_children(self) -> int:
        return 1

    def _donor(self, parent: np.ndarray, j: int, current: Solution, best: Solution | None) -> float:
        f = self.f
        kind = self.variant.mutation
        diff = f * (parent[0, j] - parent[1, j])
        if self.variant.difference_vectors == 2:
            diff += f * (parent[2, j] - parent[3, j])
        if kind is DEMutation.RAND:
            base = parent[4, j] if self.variant.difference_vectors == 2 else parent[2, j]
            return base + diff
        if kind is DEMutation.BEST:
            return best.variables[j] + diff
        if kind is DEMutation.RAND_TO_BEST:
            x = current.variables[j]
            return x + f * (best.variables[j] - x) + diff
        x = current.variables[j]
        return x + f * (parent[2, j] - x) + diff

    def execute(
        self,
        parents: list[Solution],
        rng: np.random.Generator,
        *,
        current: Solution | None = None,
        best: Solution | None = None,
        **kwargs: Any,
    ) -> list[Solution]:
        self._check_parents(parents)
        if current is None:
            raise ConfigurationError("DifferentialEvolutionCrossover needs the current (target) solution.")
        if best is None and self.variant.mutation in (DEMutation.BEST, DEMutation.RAND_TO_BEST):
            raise ConfigurationError(f"DE variant '{self.variant.label}' needs the best solution.")

        child = current.copy()
        n = child.n_var
        parent = np.vstack([p.variables for p in parents]).astype(float)
        jrand = int(rng.integers(0, n))

        if self.variant.crossover is DECrossoverType.BIN:
            for j in range(n):
                if rng.random() < self.cr or j == jrand:
                    child.set_variable(j, self._donor(parent, j, current, best))
        else:
            j = int(rng.integers(0, n))
            changed = 0
            while True:
                child.set_variable(j, self._donor(parent, j, current, best))
                j = (j + 1) % n
                changed += 1
                if not (rng.random() < self.cr and changed < n):
                    break

        np.clip(child.variables, child.xl, child.xu, out=child.variables)
        return [child]


__all__ = [
    "SBXCrossover",
    "SinglePointCrossover",
    "DifferentialEvolutionCrossover",
    "DEVariant",
    "DEMutation",
    "DECrossoverType",
    "DE_VARIANTS",
]
