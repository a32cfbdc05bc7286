"""Differential evolution configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .base import _ConfigBuilder, _SerializableConfig


@dataclass(frozen=True)
class DEConfigData(_SerializableConfig):
    algorithm = "de"

    population_size: int
    max_evaluations: int
    variant: str = "rand/1/bin"
    cr: float = 0.5
    f: float = 0.5


class DEConfig(_ConfigBuilder):
    """Fluent builder yielding an immutable DEConfigData."""

    data_class = DEConfigData
    required = ("population_size", "max_evaluations")
    label = "DE"
    operator_fields = ()

    @classmethod
    def default(cls, population_size: int = 50, max_evaluations: int = 25000) -> DEConfigData:
        return cls().population_size(population_size).max_evaluations(max_evaluations).fixed()

    def population_size(self, value: int) -> "DEConfig":
        return self._positive("population_size", value)

    def max_evaluations(self, value: int) -> "DEConfig":
        return self._positive("max_evaluations", value)

    def variant(self, value: str) -> "DEConfig":
        return self._set("variant", str(value))

    def cr(self, value: float) -> "DEConfig":
        return self._set("cr", float(value))

    def f(self, value: float) -> "DEConfig":
        return self._set("f", float(value))


__all__ = ["DEConfig", "DEConfigData"]
