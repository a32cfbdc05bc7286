import math

import numpy as np
import pytest

from hydromoo.algorithms import SMPSO, EvolutionaryAlgorithm, build_algorithm, constriction_coefficient
from hydromoo.core.archive import CrowdingDistanceArchive, HypervolumeArchive
from hydromoo.core.comparators import DominanceComparator
from hydromoo.exceptions import ConfigurationError
from hydromoo.problems import ZDT1, IntegerSphere, LinearTradeoff


def test_constriction_coefficient():
    assert constriction_coefficient(1.5, 2.0) == 1.0
    assert constriction_coefficient(2.0, 2.0) == 1.0
    rho = 5.0
    expected = 2.0 / (2.0 - rho - math.sqrt(rho * rho - 4.0 * rho))
    assert constriction_coefficient(2.5, 2.5) == pytest.approx(expected)


def test_inertia_weight_is_the_range_maximum():
    assert SMPSO(10, 5, weight=(0.1, 0.4)).inertia_weight() == 0.4


def test_empty_ranges_are_rejected():
    with pytest.raises(ConfigurationError):
        SMPSO(10, 5, c1=(2.5, 1.5))
    with pytest.raises(ConfigurationError):
        SMPSO(0, 5)


@pytest.mark.smoke
def test_smpso_on_zdt1():
    algo = EvolutionaryAlgorithm(ZDT1(n_var=5), SMPSO(20, 10, archive_size=10), seed=3)
    leaders = algo.run()
    assert algo.status_of_execution() == "Number of iterations: 10 / 10"
    assert 0 < len(leaders) <= 10
    cmp = DominanceComparator()
    assert all(cmp(a, b) == 0 for a in leaders for b in leaders if a is not b)
    for s in leaders:
        assert np.all(s.variables >= 0.0) and np.all(s.variables <= 1.0)


def test_velocity_is_clamped_to_half_the_range():
    strategy = SMPSO(15, 8, archive_size=15)
    algo = EvolutionaryAlgorithm(ZDT1(n_var=4), strategy, seed=9)
    algo.run()
    assert strategy.velocity.shape == (15, 4)
    assert np.all(np.abs(strategy.velocity) <= strategy.delta_max + 1e-12)


def test_leaders_hold_copies_of_the_initial_swarm():
    strategy = SMPSO(10, 5, archive_size=50)
    algo = EvolutionaryAlgorithm(LinearTradeoff(), strategy, seed=0)
    algo.init_progress()
    assert isinstance(strategy.leaders, CrowdingDistanceArchive)
    assert len(strategy.leaders) > 0
    swarm_ids = {id(p) for p in algo.population}
    assert all(id(leader) not in swarm_ids for leader in strategy.leaders)


@pytest.mark.smoke
def test_integer_swarm_keeps_integer_positions():
    algo = EvolutionaryAlgorithm(IntegerSphere(n_var=3), SMPSO(12, 6, archive_size=12), seed=4)
    algo.run()
    for particle in algo.population:
        assert particle.variables.dtype.kind == "i"
        assert np.all(particle.variables >= -20) and np.all(particle.variables <= 20)


def test_hypervolume_leader_archive_from_configuration():
    algo = build_algorithm(
        "smpso",
        ZDT1(n_var=5),
        seed=3,
        config={"swarm_size": 20, "max_iterations": 10, "archive_size": 10, "archive_type": "hypervolume"},
    )
    assert isinstance(algo.strategy.leaders, HypervolumeArchive)
    assert len(algo.run()) <= 10


def test_hypervolume_leaders_need_two_objectives():
    with pytest.raises(ConfigurationError, match="2 objectives"):
        build_algorithm("smpso", IntegerSphere(), config={"swarm_size": 10, "max_iterations": 5, "archive_type": "hypervolume"})
    with pytest.raises(ConfigurationError, match="2 objectives"):
        EvolutionaryAlgorithm(IntegerSphere(), SMPSO(10, 5, leaders=HypervolumeArchive(10)))
