"""
Thread-safe channels between an experiment worker and its observers.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

_EMPTY = object()


class LatestValue(Generic[T]):
    """
    Single-slot channel: publishing overwrites, taking empties the slot.

    The worker never blocks on a slow observer; updates published between
    two ``take()`` calls are coalesced into the last one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: object = _EMPTY

    def publish(self, value: T) -> None:
        with self._lock:
            self._value = value

    def take(self) -> T | None:
        """Return the pending value and clear the slot (None when empty)."""
        with self._lock:
            value, self._value = self._value, _EMPTY
        return None if value is _EMPTY else value  # type: ignore[return-value]

    def peek(self) -> T | None:
        with self._lock:
            value = self._value
        return None if value is _EMPTY else value  # type: ignore[return-value]

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._value is not _EMPTY


class ObservableLog:
    """Append-only text log whose observers are notified with each new line."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lines: list[str] = []
        self._observers: list[Callable[[str], None]] = []

    def append(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)
            observers = list(self._observers)
        for observer in observers:
            observer(line)

    def subscribe(self, observer: Callable[[str], None]) -> Callable[[], None]:
        """Register ``observer``; the returned callable unsubscribes it."""
        with self._lock:
            self._observers.append(observer)

        def _unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _unsubscribe

    @property
    def lines(self) -> list[str]:
        with self._lock:
            return list(self._lines)

    def text(self) -> str:
        with self._lock:
            return "".join(f"{line}\n" for line in self._lines)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)


__all__ = ["LatestValue", "ObservableLog"]
