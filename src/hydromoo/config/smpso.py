"""SMPSO configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from hydromoo.exceptions import ConfigurationError

from .base import OperatorSpec, _ConfigBuilder, _operator_spec, _SerializableConfig

Range = Tuple[float, float]


@dataclass(frozen=True)
class SMPSOConfigData(_SerializableConfig):
    algorithm = "smpso"

    swarm_size: int
    max_iterations: int
    archive_size: int = 100
    archive_type: str = "crowding"
    mutation: Optional[OperatorSpec] = None
    r1: Range = (0.0, 1.0)
    r2: Range = (0.0, 1.0)
    c1: Range = (1.5, 2.5)
    c2: Range = (1.5, 2.5)
    weight: Range = (0.1, 0.1)
    change_velocity1: float = -1.0
    change_velocity2: float = -1.0


class SMPSOConfig(_ConfigBuilder):
    """
    Fluent builder yielding an immutable SMPSOConfigData.

    Examples:
        cfg = SMPSOConfig().swarm_size(100).max_iterations(250).archive(100, "crowding").fixed()
    """

    data_class = SMPSOConfigData
    required = ("swarm_size", "max_iterations")
    label = "SMPSO"
    operator_fields = ("mutation",)

    @classmethod
    def default(cls, swarm_size: int = 100, max_iterations: int = 250) -> SMPSOConfigData:
        return (
            cls()
            .swarm_size(swarm_size)
            .max_iterations(max_iterations)
            .archive(100)
            .mutation("polynomial", probability="1/n", distribution_index=20.0)
            .fixed()
        )

    def swarm_size(self, value: int) -> "SMPSOConfig":
        return self._positive("swarm_size", value)

    def max_iterations(self, value: int) -> "SMPSOConfig":
        return self._positive("max_iterations", value)

    def archive(self, size: int, archive_type: str = "crowding") -> "SMPSOConfig":
        self._positive("archive_size", size)
        return self._set("archive_type", str(archive_type))

    def mutation(self, method: str | tuple, params: dict | None = None, **kwargs) -> "SMPSOConfig":
        return self._set("mutation", _operator_spec(method, params, kwargs))

    def _range(self, key: str, low: float, high: float) -> "SMPSOConfig":
        if low > high:
            raise ConfigurationError(f"{key} range is empty: min {low} > max {high}.")
        return self._set(key, (float(low), float(high)))

    def r1(self, low: float, high: float) -> "SMPSOConfig":
        return self._range("r1", low, high)

    def r2(self, low: float, high: float) -> "SMPSOConfig":
        return self._range("r2", low, high)

    def c1(self, low: float, high: float) -> "SMPSOConfig":
        return self._range("c1", low, high)

    def c2(self, low: float, high: float) -> "SMPSOConfig":
        return self._range("c2", low, high)

    def weight(self, low: float, high: float) -> "SMPSOConfig":
        return self._range("weight", low, high)

    def change_velocity(self, lower: float, upper: float) -> "SMPSOConfig":
        self._set("change_velocity1", float(lower))
        return self._set("change_velocity2", float(upper))


__all__ = ["SMPSOConfig", "SMPSOConfigData"]
