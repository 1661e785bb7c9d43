"""Textual integration for compgraph. Opt-in, requires textual.

bind() keeps a widget in step with a node: when the node goes stale, a
refresh is queued on the app, which recomputes the node and hands the value
to the effect. Refreshes run after the invalidation cascade has finished,
so the effect never sees a half-invalidated graph.

Textual coupling is isolated in this module; the core stays agnostic.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable

from textual.css.query import NoMatches

from compgraph.node import Node, Value

# Module-owned pause state, keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend binding effects during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


class Binding:
    """Subscription pushing a node's value into an app.

    The node only holds this weakly: keep the Binding referenced for as
    long as updates should flow.
    """

    __slots__ = ("_app", "_node", "_effect", "_thread", "_scheduled", "_disposed", "__weakref__")

    def __init__(self, app, node: Node, effect: Callable[[Value], None]) -> None:
        self._app = app
        self._node = node
        self._effect = effect
        self._thread = threading.get_ident()
        self._scheduled = False
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def invalidate(self) -> None:
        """Queue a refresh. Cross-thread calls go through call_from_thread."""
        if self._disposed or self._scheduled:
            return
        self._scheduled = True
        if threading.get_ident() != self._thread:
            self._app.call_from_thread(self._refresh)
        else:
            self._app.call_later(self._refresh)

    def _refresh(self) -> None:
        self._scheduled = False
        if self._disposed:
            return
        # Recompute even when paused so the node is clean and notifies again.
        value = self._node.compute()
        if not is_safe(self._app):
            return
        self._deliver(value)

    def _deliver(self, value: Value) -> None:
        try:
            self._effect(value)
        except NoMatches:
            pass

    def dispose(self) -> None:
        """Stop delivering values."""
        self._disposed = True

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"Binding({self._node!r}, {state})"


def bind(app, node: Node, effect: Callable[[Value], None], *, fire_immediately: bool = True) -> Binding:
    """Call effect with node's value now and whenever it changes.

    Usage:
        binding = bind(app, total, lambda v: app.query_one("#total").update(f"{v:.2f}"))
    """
    binding = Binding(app, node, effect)
    value = node.compute()
    node.subscribe_to_invalidate(binding)
    if fire_immediately and is_safe(app):
        binding._deliver(value)
    return binding
