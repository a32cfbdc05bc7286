"""
Algorithm families and the shared stepwise life cycle.
"""

from .de import DifferentialEvolution
from .ga import GeneticAlgorithm
from .lifecycle import Algorithm, AlgorithmStatus, Budget, EvolutionaryAlgorithm, EvolutionStrategy
from .nsgaii import NSGAII
from .registry import available_algorithms, build_algorithm, resolve_config
from .smpso import SMPSO, constriction_coefficient
from .spea2 import SPEA2, EnvironmentalSelection

__all__ = [
    "Algorithm",
    "AlgorithmStatus",
    "Budget",
    "EvolutionStrategy",
    "EvolutionaryAlgorithm",
    "NSGAII",
    "SPEA2",
    "EnvironmentalSelection",
    "SMPSO",
    "constriction_coefficient",
    "DifferentialEvolution",
    "GeneticAlgorithm",
    "build_algorithm",
    "resolve_config",
    "available_algorithms",
]
