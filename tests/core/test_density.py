import numpy as np
import pytest

from hydromoo.core.density import (
    assign_crowding_distance,
    assign_strength_fitness,
    crowding_distances,
    hypervolume_2d,
    hypervolume_contributions,
)
from hydromoo.exceptions import ConfigurationError


def test_small_fronts_are_infinitely_spread():
    assert crowding_distances(np.empty((0, 2))).shape == (0,)
    assert np.all(np.isinf(crowding_distances(np.array([[0.0, 1.0]]))))
    assert np.all(np.isinf(crowding_distances(np.array([[0.0, 1.0], [1.0, 0.0]]))))


def test_extremes_of_every_axis_get_infinity(rng):
    F = rng.random((25, 3))
    d = crowding_distances(F)
    for j in range(3):
        assert np.isinf(d[np.argmin(F[:, j])])
        assert np.isinf(d[np.argmax(F[:, j])])


def test_interior_distances():
    F = np.array([[0.0, 4.0], [1.0, 3.0], [2.0, 2.0], [4.0, 0.0]])
    d = crowding_distances(F)
    assert d[1] == pytest.approx(1.0)
    assert d[2] == pytest.approx(1.5)


def test_flat_objective_adds_nothing():
    F = np.array([[0.0, 1.0], [1.0, 1.0], [3.0, 1.0], [4.0, 1.0]])
    d = crowding_distances(F)
    assert d[1] == pytest.approx(0.75)
    assert d[2] == pytest.approx(0.75)


def test_assign_crowding_distance_writes_field(make_solution):
    front = [make_solution(p) for p in ([0, 1], [0.5, 0.5], [1, 0])]
    assign_crowding_distance(front)
    assert front[0].crowding_distance == np.inf
    assert front[1].crowding_distance == pytest.approx(2.0)


def test_strength_fitness_separates_dominated(make_solution):
    a, b, c = make_solution([0, 0]), make_solution([1, 1]), make_solution([2, 2])
    d = make_solution([-1, 5])
    assign_strength_fitness([a, b, c, d])
    assert a.strength_fitness < 1.0 and d.strength_fitness < 1.0
    # a dominates b and c; b dominates c
    assert np.floor(b.strength_fitness) == 2.0
    assert np.floor(c.strength_fitness) == 3.0


def test_strength_fitness_rejects_negative_k(make_solution):
    with pytest.raises(ConfigurationError):
        assign_strength_fitness([make_solution([0, 0])], k=-1)


def test_hypervolume_2d():
    F = np.array([[1.0, 2.0], [2.0, 1.0]])
    assert hypervolume_2d(F, np.array([3.0, 3.0])) == pytest.approx(3.0)
    assert hypervolume_2d(np.array([[4.0, 4.0]]), np.array([3.0, 3.0])) == 0.0


def test_hypervolume_contributions_are_exclusive():
    F = np.array([[2.0, 1.0], [1.0, 2.0]])
    ref = np.array([3.0, 3.0])
    contrib = hypervolume_contributions(F, ref)
    total = hypervolume_2d(F, ref)
    for i in range(2):
        assert contrib[i] == pytest.approx(total - hypervolume_2d(np.delete(F, i, axis=0), ref))


def test_hypervolume_contributions_need_two_objectives():
    with pytest.raises(ConfigurationError):
        hypervolume_contributions(np.zeros((3, 3)), np.ones(3))
