"""Observable value containers for collections and derived views.

This module provides two small building blocks:

- ``WritableStore`` holds a value that is replaced wholesale on every write
  (copy-on-write). Collections are stored as tuples, so a reader holding a
  snapshot is never affected by a later write.
- ``DerivedStore`` computes its value from one or more upstream stores and
  recomputes whenever any of them changes.

Both support ``get()`` for pull-style reads and ``subscribe()`` for
push-style notifications. Everything runs synchronously on the caller's
thread.
"""

import logging
from typing import Any, Callable, Generic, List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class _Observable(Generic[T]):
    """Shared subscriber bookkeeping."""

    def __init__(self, name: str):
        self.name = name
        self._subscribers: List[Subscriber] = []

    def get(self) -> T:
        raise NotImplementedError

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        """Register a callback, call it immediately with the current value.

        Returns:
            A function that removes the callback again. Calling it twice is
            harmless.
        """
        self._subscribers.append(callback)
        self._on_first_subscriber()
        callback(self.get())

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _on_first_subscriber(self) -> None:
        pass

    def _notify(self, value: T) -> None:
        for callback in list(self._subscribers):
            callback(value)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


class WritableStore(_Observable[T]):
    """A value that is replaced, never mutated in place.

    Example:
        >>> store = WritableStore("numbers", (1, 2))
        >>> store.update(lambda items: items + (3,))
        >>> store.get()
        (1, 2, 3)
    """

    def __init__(self, name: str, initial: T):
        super().__init__(name)
        self._value = initial

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify subscribers."""
        self._value = value
        logger.debug(f"Store '{self.name}' updated")
        self._notify(value)

    def update(self, updater: Callable[[T], T]) -> None:
        """Replace the value with ``updater(current)``."""
        self.set(updater(self._value))


class DerivedStore(_Observable[T]):
    """A value computed from upstream stores.

    Reads always reflect the current upstream values. While the store has
    subscribers it also listens to its upstream stores and pushes every
    recomputed value to them.

    Example:
        >>> items = WritableStore("items", (3, 1, 2))
        >>> ordered = DerivedStore("ordered", [items], lambda xs: tuple(sorted(xs)))
        >>> ordered.get()
        (1, 2, 3)
    """

    def __init__(
        self,
        name: str,
        dependencies: Sequence[_Observable],
        compute: Callable[..., T],
    ):
        super().__init__(name)
        self.dependencies = list(dependencies)
        self._compute = compute
        self._upstream_unsubscribers: List[Unsubscribe] = []

    def get(self) -> T:
        return self._compute(*(dep.get() for dep in self.dependencies))

    def _on_first_subscriber(self) -> None:
        if self._upstream_unsubscribers:
            return
        for dep in self.dependencies:
            # subscribe() calls back immediately; skip that initial value
            primed = {"done": False}

            def on_change(_value, primed=primed):
                if primed["done"]:
                    self._recompute()

            self._upstream_unsubscribers.append(dep.subscribe(on_change))
            primed["done"] = True

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        unsubscribe_self = super().subscribe(callback)

        def unsubscribe() -> None:
            unsubscribe_self()
            if not self._subscribers:
                self._detach()

        return unsubscribe

    def _detach(self) -> None:
        for unsubscribe in self._upstream_unsubscribers:
            unsubscribe()
        self._upstream_unsubscribers = []

    def _recompute(self) -> None:
        value = self.get()
        logger.debug(f"Derived store '{self.name}' recomputed")
        self._notify(value)
