"""One-slot memoization for a pure compute step.

The slot is either empty (dirty) or holds the value the step would produce
right now. invalidate() only broadcasts on the clean→dirty transition, so
converging paths (diamonds) notify each downstream node once.
"""

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from compgraph._publisher import Invalidatable, InvalidationPublisher

T = TypeVar("T")


class CacheWrapper(Generic[T]):
    """Memoizes a zero-argument step until invalidated."""

    __slots__ = ("_step", "_cached", "_publisher", "__weakref__")

    def __init__(self, step: Callable[[], T]) -> None:
        self._step = step
        self._cached: Optional[T] = None
        self._publisher = InvalidationPublisher()

    @property
    def cached(self) -> Optional[T]:
        """The memoized value, or None when dirty."""
        return self._cached

    def compute(self) -> T:
        """Return the cached value, evaluating the step only if dirty."""
        if self._cached is None:
            self._cached = self._step()
        return self._cached

    def invalidate(self) -> None:
        """Clear the slot and notify subscribers. No-op if already dirty."""
        if self._cached is not None:
            self._cached = None
            self._publisher.publish()

    def subscribe_to_invalidate(self, subscriber: Invalidatable) -> None:
        self._publisher.subscribe(subscriber)

    def __repr__(self) -> str:
        state = "dirty" if self._cached is None else f"cached={self._cached!r}"
        return f"CacheWrapper({state})"
