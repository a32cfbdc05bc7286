"""
Variation and selection operators.
"""

from .base import CrossoverOperator, MutationOperator, SelectionOperator
from .crossover import DE_VARIANTS, DEVariant, DifferentialEvolutionCrossover, SBXCrossover, SinglePointCrossover
from .mutation import PolynomialMutation, RangeRandomMutation, SimpleRandomMutation
from .registry import make_operator
from .selection import (
    DifferentialEvolutionSelection,
    RandomSelection,
    RankingAndCrowdingSelection,
    TournamentSelection,
    UniformSelection,
)

__all__ = [
    "SelectionOperator",
    "CrossoverOperator",
    "MutationOperator",
    "SBXCrossover",
    "SinglePointCrossover",
    "DifferentialEvolutionCrossover",
    "DEVariant",
    "DE_VARIANTS",
    "PolynomialMutation",
    "SimpleRandomMutation",
    "RangeRandomMutation",
    "TournamentSelection",
    "RandomSelection",
    "UniformSelection",
    "RankingAndCrowdingSelection",
    "DifferentialEvolutionSelection",
    "make_operator",
]
