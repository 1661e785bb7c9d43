"""Tests for Constant, Input and as_node."""

import numpy as np
import pytest

from compgraph import Computed, Constant, Input, Node, Value, as_node, create_input


class _Counter:
    def __init__(self):
        self.count = 0

    def invalidate(self):
        self.count += 1


class TestConstant:
    def test_compute(self):
        c = Constant(2.5)
        assert c.compute() == 2.5
        assert isinstance(c.compute(), np.float32)

    def test_rejects_non_numbers(self):
        with pytest.raises(TypeError, match="expected a real number"):
            Constant(None)

    def test_subscribe_is_noop(self):
        c = Constant(1.0)
        sub = _Counter()
        c.subscribe_to_invalidate(sub)
        assert sub.count == 0

    def test_repr(self):
        assert repr(Constant(3)) == "Constant(3.0)"


class TestInput:
    def test_defaults_to_zero(self):
        x = create_input()
        assert x.compute() == 0.0
        assert isinstance(x, Input)

    def test_set(self):
        x = create_input()
        x.set(7)
        assert x.compute() == 7.0
        assert x.compute().dtype == np.float32

    def test_single_precision(self):
        x = create_input()
        x.set(0.1)
        assert x.compute() == np.float32(0.1)
        assert float(x.compute()) != 0.1

    def test_set_notifies(self):
        x = create_input()
        sub = _Counter()
        x.subscribe_to_invalidate(sub)
        x.set(1.0)
        assert sub.count == 1

    def test_set_same_value_still_notifies(self):
        """No equality short-circuit: every set() broadcasts."""
        x = create_input(5.0)
        sub = _Counter()
        x.subscribe_to_invalidate(sub)
        x.set(5.0)
        x.set(5.0)
        assert sub.count == 2

    def test_nan_flows_through(self):
        x = create_input()
        x.set(float("nan"))
        assert np.isnan(x.compute())

    @pytest.mark.parametrize("bad", [None, "1.5", True, [1.0]])
    def test_set_rejects_non_numbers(self, bad):
        x = create_input(2.0)
        sub = _Counter()
        x.subscribe_to_invalidate(sub)
        with pytest.raises(TypeError, match="expected a real number"):
            x.set(bad)
        assert x.compute() == 2.0  # untouched
        assert sub.count == 0  # nobody told

    @pytest.mark.parametrize("bad", [None, "1.5"])
    def test_create_rejects_non_numbers(self, bad):
        with pytest.raises(TypeError, match="expected a real number"):
            create_input(bad)

    def test_repr(self):
        x = create_input()
        x.set(1.5)
        assert repr(x) == "Input(1.5)"


class TestAsNode:
    def test_passes_nodes_through(self):
        x = create_input()
        assert as_node(x) is x

    def test_wraps_numbers(self):
        for literal in (3, 2.5, np.float32(1.5), np.float64(4.0)):
            n = as_node(literal)
            assert isinstance(n, Constant)
            assert n.compute() == Value(literal)

    @pytest.mark.parametrize("bad", ["1.0", None, True, [1.0]])
    def test_rejects_non_numbers(self, bad):
        with pytest.raises(TypeError, match="expected a Node"):
            as_node(bad)

    def test_node_is_abstract(self):
        with pytest.raises(TypeError):
            Node()


class TestComputed:
    def test_direct_construction_is_wired(self):
        x = create_input(1.0)
        doubled = Computed("doubled", (x,), lambda: Value(x.compute() * 2))
        assert len(x._publisher) == 1
        assert doubled.compute() == 2.0
        x.set(4.0)
        assert doubled.cached is None
        assert doubled.compute() == 8.0
