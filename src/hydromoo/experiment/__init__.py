"""
Experiment harness: stepwise execution, file output and observable progress.
"""

from .algorithm import ExperimentAlgorithm
from .channel import LatestValue, ObservableLog
from .output import SolutionListOutput, read_solution_file
from .runner import ExperimentReport, ExperimentRunner, RunProgress

__all__ = [
    "ExperimentAlgorithm",
    "ExperimentRunner",
    "ExperimentReport",
    "RunProgress",
    "LatestValue",
    "ObservableLog",
    "SolutionListOutput",
    "read_solution_file",
]
