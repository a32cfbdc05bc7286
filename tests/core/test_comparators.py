import numpy as np
import pytest

from hydromoo.core.comparators import (
    ConstraintViolationComparator,
    DominanceComparator,
    EqualSolutionsComparator,
    ObjectiveComparator,
    RankingAndCrowdingDistanceComparator,
    StrengthFitnessComparator,
    best_of,
    comparison_matrix,
)
from hydromoo.exceptions import InvariantViolationError


def test_dominance_is_antisymmetric_and_irreflexive(make_solution, rng):
    cmp = DominanceComparator()
    solutions = [make_solution(rng.integers(0, 4, size=3)) for _ in range(30)]
    for a in solutions:
        assert cmp(a, a) == 0
        for b in solutions:
            assert cmp(a, b) == -cmp(b, a)


def test_dominance_matrix_matches_pairwise_calls(make_solution, rng):
    cmp = DominanceComparator()
    solutions = [make_solution(rng.random(2), constraint_violation=float(-rng.integers(0, 2))) for _ in range(15)]
    M = cmp.matrix(solutions)
    for i, a in enumerate(solutions):
        for j, b in enumerate(solutions):
            assert M[i, j] == cmp(a, b)


def test_feasible_solution_wins_regardless_of_objectives(make_solution):
    cmp = DominanceComparator()
    feasible = make_solution([10.0, 10.0], constraint_violation=0.0)
    infeasible = make_solution([0.0, 0.0], constraint_violation=-0.5)
    assert cmp(feasible, infeasible) == -1
    assert cmp(infeasible, feasible) == 1


def test_smaller_violation_wins_between_infeasible(make_solution):
    cmp = ConstraintViolationComparator()
    a = make_solution([0.0], constraint_violation=-0.1)
    b = make_solution([0.0], constraint_violation=-2.0)
    assert cmp(a, b) == -1
    assert cmp(a, make_solution([0.0])) == 0


def test_dominance_rejects_different_objective_counts(make_solution):
    with pytest.raises(InvariantViolationError):
        DominanceComparator()(make_solution([0.0, 1.0]), make_solution([0.0, 1.0, 2.0]))


def test_objective_comparator_descending(make_solution):
    low, high = make_solution([1.0]), make_solution([2.0])
    assert ObjectiveComparator(0)(low, high) == -1
    assert ObjectiveComparator(0, ascending=False)(low, high) == 1


def test_ranking_and_crowding_uses_rank_then_distance(make_solution):
    cmp = RankingAndCrowdingDistanceComparator()
    a, b, c = make_solution([0, 0]), make_solution([0, 0]), make_solution([0, 0])
    a.rank, b.rank, c.rank = 0, 1, 0
    a.crowding_distance, b.crowding_distance, c.crowding_distance = 0.1, 5.0, 3.0
    assert cmp(a, b) == -1
    assert cmp(c, a) == -1
    assert cmp(a, c) == 1


def test_strength_fitness_missing_sorts_last(make_solution):
    cmp = StrengthFitnessComparator()
    a, b = make_solution([0, 0]), make_solution([0, 0])
    a.strength_fitness = 3.0
    assert cmp(a, b) == -1


def test_equal_solutions_comparator(make_solution):
    cmp = EqualSolutionsComparator()
    assert cmp(make_solution([1, 2]), make_solution([1, 2])) == 0
    assert cmp(make_solution([0, 2]), make_solution([1, 2])) == -1
    assert cmp(make_solution([0, 3]), make_solution([1, 2])) == 2


def test_comparison_matrix_falls_back_to_pairwise(make_solution):
    solutions = [make_solution([v]) for v in (3.0, 1.0, 2.0)]
    M = comparison_matrix(solutions, ObjectiveComparator(0))
    np.testing.assert_array_equal(M, [[0, 1, 1], [-1, 0, -1], [-1, 1, 0]])


def test_best_of_breaks_ties_with_rng(make_solution):
    a, b = make_solution([0.0, 1.0]), make_solution([1.0, 0.0])
    rng = np.random.default_rng(0)
    picks = {id(best_of(a, b, DominanceComparator(), rng)) for _ in range(50)}
    assert picks == {id(a), id(b)}
