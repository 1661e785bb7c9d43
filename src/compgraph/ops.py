"""Everyday arithmetic nodes in single precision."""

from __future__ import annotations

import numpy as np

from compgraph.define import define, node


@node
def add(a, b):
    return a + b


@node
def sub(a, b):
    return a - b


@node
def mul(a, b):
    return a * b


@node
def div(a, b):
    """a / b; division by zero yields inf or nan like any float32 division."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.divide(a, b, dtype=np.float32)


@node
def add3(a, b, c):
    return a + b + c


neg = define("neg", ("x",), np.negative)
sin = define("sin", ("x",), np.sin)
cos = define("cos", ("x",), np.cos)


@node
def exp(x):
    with np.errstate(over="ignore"):
        return np.exp(x)


@node
def pow_f32(x, e):
    """x raised to e."""
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        return np.power(x, e)
