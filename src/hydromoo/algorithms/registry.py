"""
Algorithm registry.

Maps algorithm names to builders turning frozen config data into a ready to
step :class:`EvolutionaryAlgorithm`, so orchestration code avoids hard-coded
conditionals.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import numpy as np

from hydromoo.algorithms.de import DifferentialEvolution
from hydromoo.algorithms.ga import GeneticAlgorithm
from hydromoo.algorithms.lifecycle import EvolutionaryAlgorithm, EvolutionStrategy
from hydromoo.algorithms.nsgaii import NSGAII
from hydromoo.algorithms.smpso import SMPSO
from hydromoo.algorithms.spea2 import SPEA2
from hydromoo.config import (
    DEConfig,
    DEConfigData,
    GAConfig,
    GAConfigData,
    NSGAIIConfig,
    NSGAIIConfigData,
    SMPSOConfig,
    SMPSOConfigData,
    SPEA2Config,
    SPEA2ConfigData,
)
from hydromoo.core.archive import make_archive
from hydromoo.core.evaluator import SequentialEvaluator
from hydromoo.core.problem import Problem
from hydromoo.exceptions import ConfigurationError, InvalidAlgorithmError
from hydromoo.operators.crossover import DifferentialEvolutionCrossover
from hydromoo.operators.registry import make_operator
from hydromoo.registry import Registry


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


StrategyBuilder = Callable[[Any, Problem], EvolutionStrategy]


def _resolve_params(params: Mapping[str, Any], problem: Problem) -> dict[str, Any]:
    """Expand ``"1/n"``-style values to ``1 / problem.n_var``."""
    resolved = {}
    for key, value in params.items():
        if isinstance(value, str) and value.strip().endswith("/n"):
            numerator = value.strip()[:-2].strip() or "1"
            try:
                value = float(numerator) / problem.n_var
            except ValueError as exc:
                raise ConfigurationError(f"{key} expression '{value}' must look like '1/n'.") from exc
        resolved[key] = value
    return resolved


def _operator(kind: str, spec: tuple[str, dict] | None, problem: Problem) -> Any:
    if spec is None:
        return None
    name, params = spec
    return make_operator(kind, name, _resolve_params(params, problem))


def _build_nsgaii(cfg: NSGAIIConfigData, problem: Problem) -> NSGAII:
    return NSGAII(
        cfg.population_size,
        cfg.max_evaluations,
        crossover=_operator("crossover", cfg.crossover, problem),
        mutation=_operator("mutation", cfg.mutation, problem),
        selection=_operator("selection", cfg.selection, problem),
        mating_pool_size=cfg.mating_pool_size,
        offspring_population_size=cfg.offspring_population_size,
    )


def _build_spea2(cfg: SPEA2ConfigData, problem: Problem) -> SPEA2:
    return SPEA2(
        cfg.population_size,
        cfg.max_iterations,
        k=cfg.k,
        crossover=_operator("crossover", cfg.crossover, problem),
        mutation=_operator("mutation", cfg.mutation, problem),
        selection=_operator("selection", cfg.selection, problem),
    )


def _build_smpso(cfg: SMPSOConfigData, problem: Problem) -> SMPSO:
    return SMPSO(
        cfg.swarm_size,
        cfg.max_iterations,
        leaders=make_archive(cfg.archive_type, cfg.archive_size),
        mutation=_operator("mutation", cfg.mutation, problem),
        r1=cfg.r1,
        r2=cfg.r2,
        c1=cfg.c1,
        c2=cfg.c2,
        weight=cfg.weight,
        change_velocity1=cfg.change_velocity1,
        change_velocity2=cfg.change_velocity2,
    )


def _build_de(cfg: DEConfigData, problem: Problem) -> DifferentialEvolution:
    return DifferentialEvolution(
        cfg.population_size,
        cfg.max_evaluations,
        crossover=DifferentialEvolutionCrossover(cr=cfg.cr, f=cfg.f, variant=cfg.variant),
    )


def _build_ga(cfg: GAConfigData, problem: Problem) -> GeneticAlgorithm:
    return GeneticAlgorithm(
        cfg.population_size,
        max_evaluations=cfg.max_evaluations,
        max_iterations_without_improvement=cfg.max_iterations_without_improvement,
        crossover=_operator("crossover", cfg.crossover, problem),
        mutation=_operator("mutation", cfg.mutation, problem),
        selection=_operator("selection", cfg.selection, problem),
    )


ALGORITHMS: Registry[tuple[type, StrategyBuilder]] = Registry("Algorithms")
ALGORITHMS.register("nsgaii", (NSGAIIConfig, _build_nsgaii))
ALGORITHMS.register("spea2", (SPEA2Config, _build_spea2))
ALGORITHMS.register("smpso", (SMPSOConfig, _build_smpso))
ALGORITHMS.register("de", (DEConfig, _build_de))
ALGORITHMS.register("ga", (GAConfig, _build_ga))


def available_algorithms() -> list[str]:
    return ALGORITHMS.list()


def resolve_config(name: str, config: Mapping[str, Any] | None = None) -> Any:
    """Turn ``(name, mapping)`` into frozen config data; no mapping means defaults."""
    if name not in ALGORITHMS:
        raise InvalidAlgorithmError(name, ALGORITHMS.list())
    builder_cls, _ = ALGORITHMS[name]
    if config is None:
        return builder_cls.default()
    return builder_cls.from_dict(dict(config))


def build_algorithm(
    name_or_config: Any,
    problem: Problem,
    *,
    seed: int | None = None,
    config: Mapping[str, Any] | None = None,
    rng: np.random.Generator | None = None,
    evaluator: SequentialEvaluator | None = None,
) -> EvolutionaryAlgorithm:
    """
    Build a ready to step algorithm.

    Parameters
    ----------
    name_or_config : str or *ConfigData
        Registered algorithm name, or frozen config data from a builder.
    problem : Problem
        Problem the algorithm optimises.
    seed : int, optional
        Seed for the run's random generator.
    config : mapping, optional
        Plain settings used with a name; the family defaults otherwise.
    rng : np.random.Generator, optional
        Explicit random stream; wins over ``seed``.

    Examples
    --------
    >>> algo = build_algorithm("nsgaii", problem, seed=1, config={"population_size": 20, "max_evaluations": 200})
    >>> front = algo.run()
    """
    if isinstance(name_or_config, str):
        data = resolve_config(name_or_config, config)
    else:
        data = name_or_config
    name = getattr(data, "algorithm", None)
    if not name or name not in ALGORITHMS:
        raise InvalidAlgorithmError(str(name), ALGORITHMS.list())
    _, strategy_builder = ALGORITHMS[name]
    strategy = strategy_builder(data, problem)
    _logger().debug("Built %s for %s from %s", strategy.name, problem.name, data.to_json())
    return EvolutionaryAlgorithm(problem, strategy, evaluator=evaluator, seed=seed, rng=rng)


__all__ = ["ALGORITHMS", "available_algorithms", "resolve_config", "build_algorithm"]
