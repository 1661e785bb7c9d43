"""Invalidation routing: the plumbing between a node and its dependents.

A publisher holds weak references to whatever wants to hear that a value
went stale. Dependents own their dependencies, so the back-references must
not keep anything alive; a subscriber that has been collected is simply
dropped the next time the publisher fires.

Publishing is synchronous and may re-enter: a subscriber's invalidate()
typically publishes on its own publisher, which can reach this one again.
"""

from __future__ import annotations

import logging
import weakref
from typing import Protocol

logger = logging.getLogger("compgraph.publisher")


class Invalidatable(Protocol):
    """Anything that can be told its view of upstream state is stale."""

    def invalidate(self) -> None: ...


class InvalidationPublisher:
    """Broadcasts staleness to weakly-held subscribers."""

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        self._subscribers: list[weakref.ref[Invalidatable]] = []

    def subscribe(self, subscriber: Invalidatable) -> None:
        """Register subscriber. Repeated subscriptions each fire."""
        if not callable(getattr(subscriber, "invalidate", None)):
            raise TypeError(
                f"{type(subscriber).__name__} has no invalidate() method"
            )
        self._subscribers.append(weakref.ref(subscriber))

    def publish(self) -> None:
        """Invalidate every live subscriber once and prune the dead ones."""
        dead = 0
        # Snapshot; nested publishes may subscribe while we iterate.
        for ref in list(self._subscribers):
            subscriber = ref()
            if subscriber is None:
                dead += 1
                continue
            subscriber.invalidate()

        if dead:
            self._subscribers = [ref for ref in self._subscribers if ref() is not None]
            logger.debug("Pruned %d dead subscriber(s)", dead)

    def __len__(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"InvalidationPublisher({len(self._subscribers)} subscribers)"
