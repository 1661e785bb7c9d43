"""compgraph: a lazy, memoizing dataflow graph over float32 scalars."""

from importlib.metadata import version as _version

__version__ = _version("compgraph")

from compgraph._publisher import Invalidatable, InvalidationPublisher
from compgraph.cache import CacheWrapper
from compgraph.node import Node, Constant, Input, Computed, Value, as_node, create_input
from compgraph.define import define, node
from compgraph.ops import add, sub, mul, div, neg, add3, sin, cos, exp, pow_f32
# textual is opt-in and not imported here

__all__ = [
    "Invalidatable",
    "InvalidationPublisher",
    "CacheWrapper",
    "Node",
    "Constant",
    "Input",
    "Computed",
    "Value",
    "as_node",
    "create_input",
    "define",
    "node",
    "add",
    "sub",
    "mul",
    "div",
    "neg",
    "add3",
    "sin",
    "cos",
    "exp",
    "pow_f32",
]
