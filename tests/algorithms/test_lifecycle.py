import numpy as np
import pytest

from hydromoo.algorithms import (
    NSGAII,
    SMPSO,
    SPEA2,
    AlgorithmStatus,
    Budget,
    DifferentialEvolution,
    EvolutionaryAlgorithm,
    GeneticAlgorithm,
    build_algorithm,
)
from hydromoo.algorithms.lifecycle import Algorithm
from hydromoo.core.solution import objectives_matrix
from hydromoo.exceptions import AlgorithmStateError, ConfigurationError, EvaluationError
from hydromoo.problems import LinearTradeoff, Sphere


def _factories():
    return {
        "nsgaii": lambda: (LinearTradeoff(), NSGAII(20, 220)),
        "spea2": lambda: (LinearTradeoff(), SPEA2(20, 10)),
        "smpso": lambda: (LinearTradeoff(), SMPSO(20, 10, archive_size=20)),
        "de": lambda: (Sphere(), DifferentialEvolution(10, 200)),
        "ga": lambda: (Sphere(), GeneticAlgorithm(10, max_evaluations=200)),
    }


@pytest.mark.smoke
@pytest.mark.parametrize("family", sorted(_factories()))
def test_stepwise_equals_batch(family):
    problem, strategy = _factories()[family]()
    batch = EvolutionaryAlgorithm(problem, strategy, seed=7).run()

    problem, strategy = _factories()[family]()
    stepwise = EvolutionaryAlgorithm(problem, strategy, seed=7)
    while not stepwise.is_stopping_condition_reached():
        stepwise.step()

    assert stepwise.status is AlgorithmStatus.TERMINATED
    np.testing.assert_array_equal(objectives_matrix(batch), objectives_matrix(stepwise.result()))


def test_status_transitions():
    algo = build_algorithm("nsgaii", LinearTradeoff(), seed=1, config={"population_size": 10, "max_evaluations": 30})
    assert isinstance(algo, Algorithm)
    assert algo.status is AlgorithmStatus.CREATED
    assert algo.progress() == 0.0
    assert not algo.is_stopping_condition_reached()
    with pytest.raises(AlgorithmStateError):
        algo.result()

    algo.step()
    assert algo.status is AlgorithmStatus.INITIALIZED
    assert algo.generation == 1
    assert algo.status_of_execution() == "Number of evaluations: 20 / 30"

    algo.step()
    assert algo.status is AlgorithmStatus.TERMINATED
    assert algo.progress() == 1.0
    assert algo.evaluations == 30
    assert algo.result()
    with pytest.raises(AlgorithmStateError):
        algo.step()
    with pytest.raises(AlgorithmStateError):
        algo.init_progress()


def test_budget_reached_by_initial_population():
    algo = EvolutionaryAlgorithm(LinearTradeoff(), NSGAII(10, 10), seed=0)
    algo.step()
    assert algo.status is AlgorithmStatus.TERMINATED
    assert algo.generation == 0


def test_failed_generation_is_not_committed(counting_problem):
    problem = counting_problem(fail_after=15)
    algo = EvolutionaryAlgorithm(problem, NSGAII(10, 100), seed=3)
    algo.init_progress()
    committed = algo.population
    snapshot = objectives_matrix(committed).copy()

    with pytest.raises(EvaluationError):
        algo.step()

    assert algo.status is AlgorithmStatus.FAILED
    assert algo.population is committed
    np.testing.assert_array_equal(objectives_matrix(algo.population), snapshot)
    assert algo.generation == 0
    assert algo.is_stopping_condition_reached()
    with pytest.raises(AlgorithmStateError):
        algo.result()
    with pytest.raises(AlgorithmStateError):
        algo.step()

    algo.close()
    algo.close()
    assert problem.released == 1


def test_failure_during_initialisation(counting_problem):
    algo = EvolutionaryAlgorithm(counting_problem(fail_after=3), SPEA2(10, 5), seed=0)
    with pytest.raises(EvaluationError):
        algo.run()
    assert algo.status is AlgorithmStatus.FAILED


def test_context_manager_closes_problem(counting_problem):
    problem = counting_problem()
    with EvolutionaryAlgorithm(problem, NSGAII(10, 20), seed=0) as algo:
        algo.run()
    assert problem.closed and problem.released == 1


def test_budget():
    budget = Budget(100)
    budget.start(20)
    budget.advance(30)
    assert budget.describe() == "Number of evaluations: 50 / 100"
    assert budget.fraction == 0.5

    iterations = Budget(5, "iterations")
    iterations.start(100)
    iterations.advance(100)
    assert iterations.count == 2

    with pytest.raises(ConfigurationError):
        Budget(0)
    with pytest.raises(ConfigurationError):
        Budget(10, "seconds")


def test_same_seed_same_result_different_seed_differs():
    runs = [
        objectives_matrix(EvolutionaryAlgorithm(Sphere(), DifferentialEvolution(10, 200), seed=s).run())
        for s in (5, 5, 6)
    ]
    np.testing.assert_array_equal(runs[0], runs[1])
    assert not np.array_equal(runs[0], runs[2])
