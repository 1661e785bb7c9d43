"""Node definition: turning a pure combiner into a node constructor.

define() is the only place dependency edges come into existence. The
constructor it returns takes one node (or number) per declared parameter,
builds a Computed whose step reads the dependencies in declared order and
feeds their values to the combiner, and subscribes the new node's cache to
each dependency exactly once. The topology is frozen from then on.
"""

from __future__ import annotations

import inspect
import logging
from typing import Callable, Sequence

from compgraph.node import Computed, Node, Value, as_node

logger = logging.getLogger("compgraph.define")

Combiner = Callable[..., object]


def _make_step(dependencies: tuple[Node, ...], combiner: Combiner) -> Callable[[], Value]:
    # Must close over the dependencies and combiner only, never the node.
    def step() -> Value:
        return Value(combiner(*[dep.compute() for dep in dependencies]))

    return step


def _build(name: str, dependencies: tuple[Node, ...], combiner: Combiner) -> Computed:
    computed = Computed(name, dependencies, _make_step(dependencies, combiner))
    logger.debug("Defined %s over %d dependencies", name, len(dependencies))
    return computed


def define(name: str, params: Sequence[str], combiner: Combiner) -> Callable[..., Computed]:
    """Register a node constructor named `name` over ordered `params`.

    The combiner receives one float32 per parameter, positionally, and must
    be pure; its result is coerced to float32 and cached.

    Usage:
        hypot = define("hypot", ("a", "b"), lambda a, b: (a * a + b * b) ** 0.5)
        h = hypot(create_input(), 4.0)
    """
    if not isinstance(name, str) or not name.isidentifier():
        raise ValueError(f"node name must be an identifier, got {name!r}")
    params = tuple(params)
    if not params:
        raise ValueError(f"{name} needs at least one dependency parameter")
    for param in params:
        if not isinstance(param, str) or not param.isidentifier():
            raise ValueError(f"{name}: parameter must be an identifier, got {param!r}")
    if len(set(params)) != len(params):
        raise ValueError(f"{name}: duplicate parameter names in {params!r}")

    signature = inspect.Signature(
        [inspect.Parameter(p, inspect.Parameter.POSITIONAL_OR_KEYWORD) for p in params]
    )

    def constructor(*args, **kwargs) -> Computed:
        bound = signature.bind(*args, **kwargs)
        dependencies = tuple(as_node(bound.arguments[p]) for p in params)
        return _build(name, dependencies, combiner)

    constructor.__name__ = name
    constructor.__qualname__ = name
    constructor.__signature__ = signature
    constructor.__doc__ = getattr(combiner, "__doc__", None)
    return constructor


def node(combiner: Combiner) -> Callable[..., Computed]:
    """Decorator form of define(); parameters come from the function signature.

    Usage:
        @node
        def add(a, b):
            return a + b

        add(3.0, create_input()).compute()
    """
    params = []
    for param in inspect.signature(combiner).parameters.values():
        if param.kind not in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            raise ValueError(f"{combiner.__name__}: parameter {param.name!r} must be positional")
        if param.default is not param.empty:
            raise ValueError(f"{combiner.__name__}: parameter {param.name!r} cannot have a default")
        params.append(param.name)
    return define(combiner.__name__, params, combiner)
