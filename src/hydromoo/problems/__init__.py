"""
Built-in benchmark problems.
"""

from .registry import PROBLEMS, available_problems, make_problem
from .simple import ConstrainedTradeoff, IntegerSphere, LinearTradeoff, Sphere
from .zdt import ZDT1

__all__ = [
    "PROBLEMS",
    "available_problems",
    "make_problem",
    "LinearTradeoff",
    "ZDT1",
    "Sphere",
    "IntegerSphere",
    "ConstrainedTradeoff",
]
