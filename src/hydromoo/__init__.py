"""
hydromoo: stepwise multi-objective metaheuristics for simulation-backed problems.
"""

from .algorithms import (
    NSGAII,
    SMPSO,
    SPEA2,
    AlgorithmStatus,
    DifferentialEvolution,
    EvolutionaryAlgorithm,
    GeneticAlgorithm,
    build_algorithm,
)
from .config import (
    DEConfig,
    GAConfig,
    NSGAIIConfig,
    SMPSOConfig,
    SPEA2Config,
    load_experiment_spec,
)
from .core import DominanceComparator, DominanceRanking, Problem, Solution
from .exceptions import (
    AlgorithmStateError,
    ConfigurationError,
    EvaluationError,
    HydroMOOError,
    InvariantViolationError,
)
from .experiment import ExperimentAlgorithm, ExperimentRunner
from .logging import configure_hydromoo_logging
from .problems import make_problem

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Problem",
    "Solution",
    "DominanceComparator",
    "DominanceRanking",
    "AlgorithmStatus",
    "EvolutionaryAlgorithm",
    "NSGAII",
    "SPEA2",
    "SMPSO",
    "DifferentialEvolution",
    "GeneticAlgorithm",
    "build_algorithm",
    "NSGAIIConfig",
    "SPEA2Config",
    "SMPSOConfig",
    "DEConfig",
    "GAConfig",
    "load_experiment_spec",
    "make_problem",
    "ExperimentAlgorithm",
    "ExperimentRunner",
    "HydroMOOError",
    "ConfigurationError",
    "EvaluationError",
    "InvariantViolationError",
    "AlgorithmStateError",
    "configure_hydromoo_logging",
]
