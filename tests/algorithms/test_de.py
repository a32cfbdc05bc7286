import numpy as np
import pytest

from hydromoo.algorithms import DifferentialEvolution, EvolutionaryAlgorithm
from hydromoo.exceptions import ConfigurationError
from hydromoo.operators import DE_VARIANTS, DifferentialEvolutionCrossover
from hydromoo.problems import IntegerSphere, LinearTradeoff, Sphere


@pytest.mark.smoke
def test_de_improves_on_sphere():
    algo = EvolutionaryAlgorithm(Sphere(), DifferentialEvolution(30, 30 + 50 * 30), seed=8)
    algo.init_progress()
    initial_best = float(algo.population[0].objectives[0])
    assert initial_best == min(float(s.objectives[0]) for s in algo.population)

    best = algo.run()
    assert len(best) == 1
    assert algo.generation == 50
    assert best[0].objectives[0] < initial_best
    assert algo.status_of_execution() == "Evaluations: 1530/1530"


@pytest.mark.parametrize("variant", sorted(DE_VARIANTS))
def test_every_variant_runs(variant):
    crossover = DifferentialEvolutionCrossover(cr=0.9, f=0.5, variant=variant)
    algo = EvolutionaryAlgorithm(Sphere(n_var=3), DifferentialEvolution(12, 72, crossover=crossover), seed=1)
    best = algo.run()
    assert len(best) == 1
    assert np.all(np.abs(best[0].variables) <= 5.0)


def test_population_never_gets_worse():
    algo = EvolutionaryAlgorithm(Sphere(n_var=4), DifferentialEvolution(10, 200), seed=2)
    algo.init_progress()
    previous = [float(s.objectives[0]) for s in algo.population]
    while not algo.is_stopping_condition_reached():
        algo.step()
        current = [float(s.objectives[0]) for s in algo.population]
        assert current[0] <= previous[0]
        assert current == sorted(current)
        previous = current


def test_status_after_one_generation():
    algo = EvolutionaryAlgorithm(Sphere(), DifferentialEvolution(10, 100), seed=0)
    algo.step()
    assert algo.status_of_execution() == "Evaluations: 20/100"


def test_multi_objective_problem_is_rejected():
    with pytest.raises(ConfigurationError):
        EvolutionaryAlgorithm(LinearTradeoff(), DifferentialEvolution(10, 100))


def test_population_must_exceed_donor_count():
    with pytest.raises(ConfigurationError):
        DifferentialEvolution(3, 100)
    with pytest.raises(ConfigurationError):
        DifferentialEvolution(5, 100, crossover=DifferentialEvolutionCrossover(variant="rand/2/bin"))
    DifferentialEvolution(6, 100, crossover=DifferentialEvolutionCrossover(variant="rand/2/bin"))


def test_integer_de_keeps_integer_values():
    algo = EvolutionaryAlgorithm(IntegerSphere(n_var=4), DifferentialEvolution(10, 150), seed=6)
    best = algo.run()[0]
    assert best.variables.dtype.kind == "i"
    assert best.objectives[0] == float(np.sum(best.variables.astype(np.int64) ** 2))
