"""Single-slot observable used by view models to publish UI state.

Views subscribe a callback and get the latest value immediately (when one has
been published), then every later publish. History is not kept.
"""

from __future__ import annotations

from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]


class ObservableValue(Generic[T]):
    """Latest-value broadcast slot with replay to late subscribers."""

    def __init__(self) -> None:
        self._value: Optional[T] = None
        self._has_value = False
        self._observers: List[Observer] = []

    @property
    def value(self) -> Optional[T]:
        """Most recently published value, ``None`` before the first publish."""
        return self._value

    @property
    def has_value(self) -> bool:
        return self._has_value

    def set_value(self, value: T) -> None:
        """Store ``value`` and notify every observer, even if unchanged."""
        self._value = value
        self._has_value = True
        for observer in list(self._observers):
            observer(value)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer`` and return a callable that unsubscribes it."""
        self._observers.append(observer)
        if self._has_value:
            observer(self._value)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe


__all__ = ["ObservableValue", "Observer"]
