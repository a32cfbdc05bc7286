"""NSGA-II configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import OperatorSpec, _ConfigBuilder, _operator_spec, _SerializableConfig


@dataclass(frozen=True)
class NSGAIIConfigData(_SerializableConfig):
    algorithm = "nsgaii"

    population_size: int
    max_evaluations: int
    crossover: OperatorSpec = ("sbx", {"probability": 0.9, "distribution_index": 20.0})
    mutation: Optional[OperatorSpec] = None
    selection: Optional[OperatorSpec] = None
    mating_pool_size: Optional[int] = None
    offspring_population_size: Optional[int] = None


class NSGAIIConfig(_ConfigBuilder):
    """
    Fluent builder yielding an immutable NSGAIIConfigData.

    Examples:
        cfg = (
            NSGAIIConfig()
            .population_size(100)
            .max_evaluations(25000)
            .crossover("sbx", probability=0.9, distribution_index=20.0)
            .mutation("polynomial", probability="1/n")
            .fixed()
        )
    """

    data_class = NSGAIIConfigData
    required = ("population_size", "max_evaluations")
    label = "NSGAII"

    @classmethod
    def default(cls, population_size: int = 100, max_evaluations: int = 25000) -> NSGAIIConfigData:
        return (
            cls()
            .population_size(population_size)
            .max_evaluations(max_evaluations)
            .crossover("sbx", probability=0.9, distribution_index=20.0)
            .mutation("polynomial", probability="1/n", distribution_index=20.0)
            .selection("tournament", arity=2, comparator="ranking_and_crowding")
            .fixed()
        )

    def population_size(self, value: int) -> "NSGAIIConfig":
        return self._positive("population_size", value)

    def max_evaluations(self, value: int) -> "NSGAIIConfig":
        return self._positive("max_evaluations", value)

    def crossover(self, method: str | tuple, params: dict | None = None, **kwargs) -> "NSGAIIConfig":
        return self._set("crossover", _operator_spec(method, params, kwargs))

    def mutation(self, method: str | tuple, params: dict | None = None, **kwargs) -> "NSGAIIConfig":
        return self._set("mutation", _operator_spec(method, params, kwargs))

    def selection(self, method: str | tuple, params: dict | None = None, **kwargs) -> "NSGAIIConfig":
        return self._set("selection", _operator_spec(method, params, kwargs))

    def mating_pool_size(self, value: int) -> "NSGAIIConfig":
        return self._positive("mating_pool_size", value)

    def offspring_population_size(self, value: int) -> "NSGAIIConfig":
        return self._positive("offspring_population_size", value)


__all__ = ["NSGAIIConfig", "NSGAIIConfigData"]
