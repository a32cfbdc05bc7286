import numpy as np
import pytest

from hydromoo.core.solution import Solution
from hydromoo.exceptions import ConfigurationError
from hydromoo.operators import PolynomialMutation, RangeRandomMutation, SimpleRandomMutation


def _real(values, low=0.0, high=1.0):
    values = np.asarray(values, dtype=float)
    n = values.shape[0]
    return Solution(values, np.zeros(1), np.full(n, low), np.full(n, high))


def _integer(values, low=-20, high=20):
    values = np.asarray(values, dtype=np.int64)
    n = values.shape[0]
    return Solution(values, np.zeros(1), np.full(n, low, dtype=np.int64), np.full(n, high, dtype=np.int64))


def test_polynomial_mutation_stays_in_bounds(rng):
    s = _real(rng.random(10))
    op = PolynomialMutation(probability=1.0, distribution_index=5.0)
    for _ in range(100):
        op.execute(s, rng)
        assert np.all(s.variables >= 0.0) and np.all(s.variables <= 1.0)


def test_zero_probability_is_identity(rng):
    s = _real([0.2, 0.4, 0.6])
    PolynomialMutation(probability=0.0).execute(s, rng)
    SimpleRandomMutation(probability=0.0).execute(s, rng)
    np.testing.assert_array_equal(s.variables, [0.2, 0.4, 0.6])


def test_default_probability_for_problem():
    assert PolynomialMutation.for_problem(8).probability == pytest.approx(0.125)


def test_polynomial_mutation_on_integers(rng):
    s = _integer([0, 5, -5])
    PolynomialMutation(probability=1.0).execute(s, rng)
    assert s.variables.dtype == np.int64


def test_simple_random_mutation_draws_inside_bounds(rng):
    s = _integer([0, 0, 0], low=-3, high=3)
    SimpleRandomMutation(probability=1.0).execute(s, rng)
    assert np.all(np.abs(s.variables) <= 3)


def test_range_mutation_always_moves_within_range(rng):
    op = RangeRandomMutation(probability=1.0, range=2)
    for _ in range(50):
        s = _integer([-20, 0, 20])
        before = s.variables.copy()
        op.execute(s, rng)
        delta = np.abs(s.variables - before)
        assert np.all(delta >= 1) and np.all(delta <= 2)
        assert np.all(np.abs(s.variables) <= 20)


def test_range_mutation_requires_integer_encoding(rng):
    with pytest.raises(ConfigurationError):
        RangeRandomMutation(probability=1.0).execute(_real([0.5]), rng)
    with pytest.raises(ConfigurationError):
        RangeRandomMutation(range=-1)


def test_fixed_variable_has_nowhere_to_go(rng):
    s = _integer([4], low=4, high=4)
    RangeRandomMutation(probability=1.0, range=3).execute(s, rng)
    assert s.variables[0] == 4
