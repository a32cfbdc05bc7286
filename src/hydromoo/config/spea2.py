"""SPEA2 configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import OperatorSpec, _ConfigBuilder, _operator_spec, _SerializableConfig


@dataclass(frozen=True)
class SPEA2ConfigData(_SerializableConfig):
    algorithm = "spea2"

    population_size: int
    max_iterations: int
    k: int = 1
    crossover: OperatorSpec = ("sbx", {"probability": 0.9, "distribution_index": 20.0})
    mutation: Optional[OperatorSpec] = None
    selection: Optional[OperatorSpec] = None


class SPEA2Config(_ConfigBuilder):
    """Fluent builder yielding an immutable SPEA2ConfigData."""

    data_class = SPEA2ConfigData
    required = ("population_size", "max_iterations")
    label = "SPEA2"

    @classmethod
    def default(cls, population_size: int = 100, max_iterations: int = 250) -> SPEA2ConfigData:
        return (
            cls()
            .population_size(population_size)
            .max_iterations(max_iterations)
            .k(1)
            .crossover("sbx", probability=0.9, distribution_index=20.0)
            .mutation("polynomial", probability="1/n", distribution_index=20.0)
            .selection("tournament", arity=2)
            .fixed()
        )

    def population_size(self, value: int) -> "SPEA2Config":
        return self._positive("population_size", value)

    def max_iterations(self, value: int) -> "SPEA2Config":
        return self._positive("max_iterations", value)

    def k(self, value: int) -> "SPEA2Config":
        return self._set("k", int(value))

    def crossover(self, method: str | tuple, params: dict | None = None, **kwargs) -> "SPEA2Config":
        return self._set("crossover", _operator_spec(method, params, kwargs))

    def mutation(self, method: str | tuple, params: dict | None = None, **kwargs) -> "SPEA2Config":
        return self._set("mutation", _operator_spec(method, params, kwargs))

    def selection(self, method: str | tuple, params: dict | None = None, **kwargs) -> "SPEA2Config":
        return self._set("selection", _operator_spec(method, params, kwargs))


__all__ = ["SPEA2Config", "SPEA2ConfigData"]
