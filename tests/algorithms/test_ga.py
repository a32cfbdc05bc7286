import pytest

from hydromoo.algorithms import EvolutionaryAlgorithm, GeneticAlgorithm
from hydromoo.exceptions import ConfigurationError
from hydromoo.operators import RandomSelection, TournamentSelection
from hydromoo.problems import IntegerSphere, Sphere


def test_termination_criteria_are_exclusive():
    with pytest.raises(ConfigurationError):
        GeneticAlgorithm(10)
    with pytest.raises(ConfigurationError):
        GeneticAlgorithm(10, max_evaluations=100, max_iterations_without_improvement=5)


def test_negative_termination_values_are_rejected():
    with pytest.raises(ConfigurationError, match="less than 0"):
        GeneticAlgorithm(10, max_evaluations=-1)
    with pytest.raises(ConfigurationError, match="less than 0"):
        GeneticAlgorithm(10, max_iterations_without_improvement=-3)


def test_population_must_pair_up():
    with pytest.raises(ConfigurationError):
        GeneticAlgorithm(5, max_evaluations=100)
    with pytest.raises(ConfigurationError):
        GeneticAlgorithm(1, max_evaluations=100)


@pytest.mark.smoke
def test_elitism_keeps_the_best_solution():
    algo = EvolutionaryAlgorithm(Sphere(), GeneticAlgorithm(20, max_evaluations=400), seed=21)
    algo.init_progress()
    best = min(float(s.objectives[0]) for s in algo.population)
    while not algo.is_stopping_condition_reached():
        algo.step()
        current = min(float(s.objectives[0]) for s in algo.population)
        assert current <= best
        assert len(algo.population) == 20
        best = current
    assert algo.generation == 19
    assert algo.status_of_execution() == "Number of evaluations: 400 / 400"
    assert float(algo.result()[0].objectives[0]) == best


@pytest.mark.smoke
def test_stops_after_iterations_without_improvement():
    strategy = GeneticAlgorithm(10, max_iterations_without_improvement=5)
    algo = EvolutionaryAlgorithm(IntegerSphere(n_var=2, lower=-2, upper=2), strategy, seed=3)
    algo.init_progress()
    for _ in range(500):
        if algo.is_stopping_condition_reached():
            break
        algo.step()
    assert algo.is_stopping_condition_reached()
    assert algo.status_of_execution() == "Number of iterations without improvement: 5 / 5"
    assert algo.progress() == 1.0
    assert strategy.best.objectives[0] == algo.result()[0].objectives[0]


def test_single_winner_selection_is_rejected_at_construction():
    with pytest.raises(ConfigurationError, match="mating pool"):
        GeneticAlgorithm(10, max_evaluations=100, selection=TournamentSelection())
    with pytest.raises(ConfigurationError, match="mating pool"):
        GeneticAlgorithm(10, max_evaluations=100, selection=RandomSelection())
