"""
Algorithm configuration objects and experiment file loading.
"""

from .de import DEConfig, DEConfigData
from .ga import GAConfig, GAConfigData
from .loader import AlgorithmEntry, ExperimentSpec, load_experiment_spec, parse_experiment_spec
from .nsgaii import NSGAIIConfig, NSGAIIConfigData
from .smpso import SMPSOConfig, SMPSOConfigData
from .spea2 import SPEA2Config, SPEA2ConfigData

__all__ = [
    "NSGAIIConfig",
    "NSGAIIConfigData",
    "SPEA2Config",
    "SPEA2ConfigData",
    "SMPSOConfig",
    "SMPSOConfigData",
    "DEConfig",
    "DEConfigData",
    "GAConfig",
    "GAConfigData",
    "load_experiment_spec",
    "parse_experiment_spec",
    "ExperimentSpec",
    "AlgorithmEntry",
]
