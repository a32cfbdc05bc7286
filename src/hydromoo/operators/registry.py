"""
Registry of operators addressable by name from configuration files.
"""

from __future__ import annotations

from typing import Any

from hydromoo.core.comparators import (
    DominanceComparator,
    ObjectiveComparator,
    RankingAndCrowdingDistanceComparator,
    StrengthFitnessComparator,
)
from hydromoo.exceptions import ConfigurationError, InvalidOperatorError
from hydromoo.registry import Registry

from .crossover import DifferentialEvolutionCrossover, SBXCrossover, SinglePointCrossover
from .mutation import PolynomialMutation, RangeRandomMutation, SimpleRandomMutation
from .selection import DifferentialEvolutionSelection, RandomSelection, TournamentSelection, UniformSelection

CROSSOVERS: Registry[type] = Registry("Crossover")
CROSSOVERS.register("sbx", SBXCrossover)
CROSSOVERS.register("single_point", SinglePointCrossover)
CROSSOVERS.register("de", DifferentialEvolutionCrossover)

MUTATIONS: Registry[type] = Registry("Mutation")
MUTATIONS.register("polynomial", PolynomialMutation)
MUTATIONS.register("pm", PolynomialMutation)
MUTATIONS.register("simple_random", SimpleRandomMutation)
MUTATIONS.register("range_random", RangeRandomMutation)

SELECTIONS: Registry[type] = Registry("Selection")
SELECTIONS.register("tournament", TournamentSelection)
SELECTIONS.register("random", RandomSelection)
SELECTIONS.register("uniform", UniformSelection)
SELECTIONS.register("de", DifferentialEvolutionSelection)

COMPARATORS: Registry[type] = Registry("Comparator")
COMPARATORS.register("dominance", DominanceComparator)
COMPARATORS.register("objective", ObjectiveComparator)
COMPARATORS.register("ranking_and_crowding", RankingAndCrowdingDistanceComparator)
COMPARATORS.register("strength_fitness", StrengthFitnessComparator)

_KINDS = {
    "crossover": CROSSOVERS,
    "mutation": MUTATIONS,
    "selection": SELECTIONS,
}


def resolve_comparator(name: str | None) -> Any:
    if name is None:
        return None
    if name not in COMPARATORS:
        raise InvalidOperatorError("comparator", name, COMPARATORS.list())
    return COMPARATORS[name]()


def make_operator(kind: str, name: str, params: dict[str, Any] | None = None) -> Any:
    """
    Instantiate an operator from its registered name.

    ``params`` are passed as keyword arguments; a ``comparator`` entry given as
    a string is resolved through :data:`COMPARATORS`.
    """
    registry = _KINDS.get(kind)
    if registry is None:
        raise ConfigurationError(f"Unknown operator kind '{kind}'.", suggestion=f"Use one of: {', '.join(_KINDS)}")
    if name not in registry:
        raise InvalidOperatorError(kind, name, registry.list())
    kwargs = dict(params or {})
    if isinstance(kwargs.get("comparator"), str):
        kwargs["comparator"] = resolve_comparator(kwargs["comparator"])
    try:
        return registry[name](**kwargs)
    except TypeError as exc:
        raise ConfigurationError(
            f"Invalid parameters for {kind} operator '{name}': {exc}",
            details={"params": dict(params or {})},
        ) from exc


__all__ = ["CROSSOVERS", "MUTATIONS", "SELECTIONS", "COMPARATORS", "make_operator", "resolve_comparator"]
