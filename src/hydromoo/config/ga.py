"""Genetic algorithm configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hydromoo.exceptions import ConfigurationError

from .base import OperatorSpec, _ConfigBuilder, _operator_spec, _SerializableConfig


@dataclass(frozen=True)
class GAConfigData(_SerializableConfig):
    algorithm = "ga"

    population_size: int
    max_evaluations: Optional[int] = None
    max_iterations_without_improvement: Optional[int] = None
    crossover: OperatorSpec = ("sbx", {"probability": 0.9, "distribution_index": 20.0})
    mutation: Optional[OperatorSpec] = None
    selection: OperatorSpec = ("uniform", {"constant": 1.5})


class GAConfig(_ConfigBuilder):
    """
    Fluent builder yielding an immutable GAConfigData.

    ``max_evaluations`` and ``max_iterations_without_improvement`` replace
    each other: setting one clears the other.
    """

    data_class = GAConfigData
    required = ("population_size",)
    label = "GA"

    @classmethod
    def default(cls, population_size: int = 100, max_evaluations: int = 10000) -> GAConfigData:
        return (
            cls()
            .population_size(population_size)
            .max_evaluations(max_evaluations)
            .crossover("sbx", probability=0.9, distribution_index=20.0)
            .mutation("polynomial", probability="1/n", distribution_index=20.0)
            .selection("uniform", constant=1.5)
            .fixed()
        )

    def population_size(self, value: int) -> "GAConfig":
        return self._positive("population_size", value)

    def max_evaluations(self, value: int) -> "GAConfig":
        if value < 0:
            raise ConfigurationError("max_evaluations can't be less than 0.")
        self._cfg.pop("max_iterations_without_improvement", None)
        return self._set("max_evaluations", int(value))

    def max_iterations_without_improvement(self, value: int) -> "GAConfig":
        if value < 0:
            raise ConfigurationError("max_iterations_without_improvement can't be less than 0.")
        self._cfg.pop("max_evaluations", None)
        return self._set("max_iterations_without_improvement", int(value))

    def crossover(self, method: str | tuple, params: dict | None = None, **kwargs) -> "GAConfig":
        return self._set("crossover", _operator_spec(method, params, kwargs))

    def mutation(self, method: str | tuple, params: dict | None = None, **kwargs) -> "GAConfig":
        return self._set("mutation", _operator_spec(method, params, kwargs))

    def selection(self, method: str | tuple, params: dict | None = None, **kwargs) -> "GAConfig":
        return self._set("selection", _operator_spec(method, params, kwargs))

    def fixed(self) -> GAConfigData:
        data = super().fixed()
        if bool(data.max_evaluations) == bool(data.max_iterations_without_improvement):
            raise ConfigurationError(
                "Set exactly one of max_evaluations and max_iterations_without_improvement."
            )
        return data


__all__ = ["GAConfig", "GAConfigData"]
