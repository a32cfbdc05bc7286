"""
Solutions, problems and the dominance/density machinery shared by all algorithms.
"""

from hydromoo.core.archive import BoundedArchive, CrowdingDistanceArchive, HypervolumeArchive, NonDominatedArchive
from hydromoo.core.comparators import (
    ConstraintViolationComparator,
    CrowdingDistanceComparator,
    DominanceComparator,
    EqualSolutionsComparator,
    HypervolumeContributionComparator,
    ObjectiveComparator,
    RankComparator,
    RankingAndCrowdingDistanceComparator,
    StrengthFitnessComparator,
)
from hydromoo.core.density import assign_crowding_distance, assign_strength_fitness, hypervolume_2d
from hydromoo.core.evaluator import SequentialEvaluator
from hydromoo.core.problem import Problem
from hydromoo.core.ranking import DominanceRanking, non_dominated_solutions
from hydromoo.core.solution import Solution

__all__ = [
    "Solution",
    "Problem",
    "SequentialEvaluator",
    "ConstraintViolationComparator",
    "DominanceComparator",
    "ObjectiveComparator",
    "RankComparator",
    "CrowdingDistanceComparator",
    "RankingAndCrowdingDistanceComparator",
    "StrengthFitnessComparator",
    "HypervolumeContributionComparator",
    "EqualSolutionsComparator",
    "DominanceRanking",
    "non_dominated_solutions",
    "assign_crowding_distance",
    "assign_strength_fitness",
    "hypervolume_2d",
    "NonDominatedArchive",
    "BoundedArchive",
    "CrowdingDistanceArchive",
    "HypervolumeArchive",
]
