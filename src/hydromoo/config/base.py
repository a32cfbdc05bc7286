"""Base utilities for algorithm configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from typing import Any, ClassVar, Dict, Optional, Tuple

from hydromoo.exceptions import ConfigurationError, MissingConfigError

OperatorSpec = Tuple[str, Dict[str, Any]]


class _SerializableConfig:
    """Mixin to serialize dataclass configs."""

    algorithm: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


def _require_fields(cfg: Dict[str, Any], required: Tuple[str, ...], name: str) -> None:
    missing = [field for field in required if cfg.get(field) is None]
    if missing:
        raise MissingConfigError(", ".join(missing), f"{name}Config")


def _operator_spec(method: str | tuple, params: dict | None, kwargs: dict) -> OperatorSpec:
    if isinstance(method, (tuple, list)) and params is None and not kwargs:
        method, params = method
    return (str(method), dict(params or kwargs))


def _coerce_operator(value: Any, label: str) -> Optional[OperatorSpec]:
    """Accept ``"sbx"``, ``("sbx", {...})`` or ``{"method": "sbx", ...}``."""
    if value is None:
        return None
    if isinstance(value, str):
        return (value, {})
    if isinstance(value, (tuple, list)) and len(value) == 2 and isinstance(value[0], str):
        return (value[0], dict(value[1] or {}))
    if isinstance(value, dict):
        params = dict(value)
        method = params.pop("method", params.pop("type", params.pop("name", None)))
        if method is None:
            raise ConfigurationError(f"{label} entry needs a 'method' key, got {value!r}.")
        return (str(method), params)
    raise ConfigurationError(f"Cannot interpret {label} configuration {value!r}.")


class _ConfigBuilder:
    """
    Fluent builder shared by the per-algorithm configs.

    Subclasses set ``data_class``, ``required`` and ``label`` and add one
    setter per field.
    """

    data_class: ClassVar[type]
    required: ClassVar[Tuple[str, ...]] = ()
    label: ClassVar[str] = ""
    operator_fields: ClassVar[Tuple[str, ...]] = ("crossover", "mutation", "selection")

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    def _set(self, key: str, value: Any) -> "_ConfigBuilder":
        self._cfg[key] = value
        return self

    def _positive(self, key: str, value: int) -> "_ConfigBuilder":
        if int(value) <= 0:
            raise ConfigurationError(f"{key} must be positive, got {value}.")
        return self._set(key, int(value))

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> Any:
        """Build frozen config data from a plain mapping (e.g. a YAML section)."""
        known = {f.name for f in fields(cls.data_class)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown {cls.label} configuration keys: {', '.join(unknown)}.",
                suggestion=f"Valid keys: {', '.join(sorted(known))}",
            )
        builder = cls()
        for key, value in config.items():
            if key in cls.operator_fields:
                value = _coerce_operator(value, key)
            elif isinstance(value, list):
                value = tuple(value)
            builder._cfg[key] = value
        return builder.fixed()

    def fixed(self) -> Any:
        _require_fields(self._cfg, self.required, self.label)
        return self.data_class(**self._cfg)


__all__ = ["OperatorSpec", "_SerializableConfig", "_ConfigBuilder", "_require_fields", "_operator_spec"]
