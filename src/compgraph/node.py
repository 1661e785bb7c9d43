"""Graph nodes: constants, mutable inputs and cached derived values.

Every node answers two questions: what is your value (compute) and who
should hear when it changes (subscribe_to_invalidate). Handles are shared:
passing a node to several constructors aliases the same node, it never
copies it.

Ownership runs one way. A Computed holds strong references to its
dependencies; dependencies only hold weak references back, through their
publishers. Dropping the last handle to a derived node frees it at once.
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from typing import Callable, Optional

import numpy as np

from compgraph._publisher import Invalidatable, InvalidationPublisher
from compgraph.cache import CacheWrapper

Value = np.float32


def _to_value(value, expected: str = "a real number") -> Value:
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return Value(value)
    raise TypeError(f"expected {expected}, got {type(value).__name__}")


class Node(ABC):
    """A graph vertex producing a single-precision scalar."""

    __slots__ = ()

    @abstractmethod
    def compute(self) -> Value:
        """Current value of the node."""

    @abstractmethod
    def subscribe_to_invalidate(self, subscriber: Invalidatable) -> None:
        """Register subscriber (held weakly) for staleness notifications."""


class Constant(Node):
    """A literal. Never changes, so nobody ever needs to be told."""

    __slots__ = ("_value",)

    def __init__(self, value) -> None:
        self._value = _to_value(value)

    def compute(self) -> Value:
        return self._value

    def subscribe_to_invalidate(self, subscriber: Invalidatable) -> None:
        pass

    def __repr__(self) -> str:
        return f"Constant({float(self._value)!r})"


class Input(Node):
    """A mutable leaf. set() always notifies, even if the value is unchanged."""

    __slots__ = ("_value", "_publisher", "__weakref__")

    def __init__(self, value=0.0) -> None:
        self._value = _to_value(value)
        self._publisher = InvalidationPublisher()

    def compute(self) -> Value:
        return self._value

    def set(self, value) -> None:
        """Overwrite the value and invalidate every dependent."""
        self._value = _to_value(value)
        self._publisher.publish()

    def subscribe_to_invalidate(self, subscriber: Invalidatable) -> None:
        self._publisher.subscribe(subscriber)

    def __repr__(self) -> str:
        return f"Input({float(self._value)!r})"


class Computed(Node):
    """A derived value cached over a fixed set of dependencies.

    Usually built through a constructor returned from define(). Constructing
    one directly wires it the same way: the cache subscribes to every
    dependency, once per edge, before __init__ returns.
    """

    __slots__ = ("_name", "_dependencies", "_cache", "__weakref__")

    def __init__(
        self,
        name: str,
        dependencies: tuple[Node, ...],
        step: Callable[[], Value],
    ) -> None:
        self._name = name
        self._dependencies = tuple(dependencies)
        self._cache: CacheWrapper[Value] = CacheWrapper(step)
        for dep in self._dependencies:
            dep.subscribe_to_invalidate(self._cache)

    @property
    def name(self) -> str:
        return self._name

    @property
    def dependencies(self) -> tuple[Node, ...]:
        return self._dependencies

    @property
    def cached(self) -> Optional[Value]:
        """The memoized value, or None when dirty."""
        return self._cache.cached

    def compute(self) -> Value:
        return self._cache.compute()

    def subscribe_to_invalidate(self, subscriber: Invalidatable) -> None:
        self._cache.subscribe_to_invalidate(subscriber)

    def __repr__(self) -> str:
        cached = self._cache.cached
        state = "dirty" if cached is None else f"cached={float(cached)!r}"
        return f"Computed({self._name}, {state})"


def as_node(obj) -> Node:
    """Return obj as a Node, wrapping plain numbers in a Constant."""
    if isinstance(obj, Node):
        return obj
    return Constant(_to_value(obj, "a Node or a real number"))


def create_input(value=0.0) -> Input:
    """Create a mutable leaf node, starting at 0 unless told otherwise.

    Usage:
        x = create_input()
        y = sin(x)
        x.set(1.5)
        y.compute()
    """
    return Input(value)
