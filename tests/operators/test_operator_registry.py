import pytest

from hydromoo.core.comparators import RankingAndCrowdingDistanceComparator
from hydromoo.exceptions import ConfigurationError, InvalidOperatorError
from hydromoo.operators import PolynomialMutation, TournamentSelection, make_operator


def test_make_operator_resolves_comparator_names():
    op = make_operator("selection", "tournament", {"arity": 3, "comparator": "ranking_and_crowding"})
    assert isinstance(op, TournamentSelection)
    assert op.arity == 3
    assert isinstance(op.comparator, RankingAndCrowdingDistanceComparator)


def test_make_operator_aliases():
    assert isinstance(make_operator("mutation", "PM", {"probability": 0.2}), PolynomialMutation)


def test_unknown_operator_names():
    with pytest.raises(InvalidOperatorError):
        make_operator("crossover", "blx")
    with pytest.raises(ConfigurationError):
        make_operator("repair", "clip")
    with pytest.raises(InvalidOperatorError):
        make_operator("selection", "tournament", {"comparator": "pareto"})


def test_bad_operator_parameters():
    with pytest.raises(ConfigurationError):
        make_operator("crossover", "sbx", {"eta": 10})
