import math

import numpy as np
import pytest

from scalargrad import (
    Graph, MalformedEdgeRecord, MissingNode,
    backward, create_leaf, grad, grads, grads_list,
    read_gradient, read_value, set_gradient, zero_gradients,
)
from scalargrad.core import reverse_topological_order


def _diamond(av=2.0, bv=3.0):
    g = Graph()
    a, b = g.create_leaf(av), g.create_leaf(bv)
    c = g.add(a, b)
    d = g.mul(a, b)
    e = g.add(c, d)
    return g, a, b, c, d, e


def test_diamond_accumulates_both_paths():
    g, a, b, c, d, e = _diamond()
    set_gradient(g, e, 1.0)
    backward(g)

    assert read_value(g, e) == 11.0
    assert read_gradient(g, a) == 1.0 + 3.0
    assert read_gradient(g, b) == 1.0 + 2.0
    assert read_gradient(g, c) == 1.0
    assert read_gradient(g, d) == 1.0


def test_relu_of_product_scenario():
    g = Graph()
    x = create_leaf(g, 3.0)
    w = create_leaf(g, 2.0)
    y = g.relu(g.mul(x, w))

    assert read_value(g, y) == 6.0
    set_gradient(g, y, 1.0)
    backward(g, y)
    assert read_gradient(g, x) == 2.0
    assert read_gradient(g, w) == 3.0


def test_backward_twice_doubles_gradients():
    g, a, b, c, d, e = _diamond()
    g.set_gradient(e, 1.0)
    g.backward()
    first = [n.gradient for n in g.nodes]
    g.backward()
    second = [n.gradient for n in g.nodes]

    assert second[e] == first[e] == 1.0
    for node_id in (a, b, c, d):
        assert second[node_id] == 2 * first[node_id]


def test_zero_gradients_resets_everything():
    g, a, b, c, d, e = _diamond()
    g.set_gradient(e, 1.0)
    g.backward()
    zero_gradients(g)
    assert all(n.gradient == 0.0 for n in g.nodes)


def test_seed_value_scales_gradients():
    g, a, b, c, d, e = _diamond()
    g.set_gradient(e, 0.5)
    g.backward(e)
    assert g.gradient(a) == pytest.approx(0.5 * 4.0)
    assert g.gradient(b) == pytest.approx(0.5 * 3.0)


def test_unseeded_backward_changes_nothing():
    g, *_ = _diamond()
    g.backward()
    assert all(n.gradient == 0.0 for n in g.nodes)


def test_nodes_outside_the_seed_ancestry_keep_zero_gradient():
    g = Graph()
    x, y = g.create_leaf(1.0), g.create_leaf(2.0)
    out = g.mul(x, x)
    other = g.add(y, y)
    g.set_gradient(out, 1.0)
    g.backward(out)

    assert g.gradient(x) == 2.0
    assert g.gradient(y) == 0.0
    assert g.gradient(other) == 0.0


def test_default_seed_is_last_node():
    g = Graph()
    x = g.create_leaf(4.0)
    y = g.mul(x, x)
    g.set_gradient(y, 1.0)
    g.backward()
    assert g.gradient(x) == 8.0


def test_reverse_topological_order_puts_consumers_first():
    g, a, b, c, d, e = _diamond()
    order = reverse_topological_order(g, e)
    assert order == [e, d, c, b, a]
    assert reverse_topological_order(g, c) == [c, b, a]


def test_long_chain_does_not_recurse():
    g = Graph()
    x = g.create_leaf(1.0)
    y = x
    for _ in range(5000):
        y = g.add(y, x)
    g.set_gradient(y, 1.0)
    g.backward(y)
    assert g.value(y) == 5001.0
    assert g.gradient(x) == 5001.0


def test_backward_on_unknown_seed_raises_missing_node():
    g, *_ = _diamond()
    with pytest.raises(MissingNode):
        g.backward(42)


def test_backward_on_empty_graph_raises_missing_node():
    with pytest.raises(MissingNode):
        Graph().backward()


def test_edge_to_missing_node_raises_missing_node():
    g, a, b, c, d, e = _diamond()
    g.edges[c] = (a, 99)
    g.set_gradient(e, 1.0)
    with pytest.raises(MissingNode):
        g.backward(e)


def test_edge_arity_mismatch_raises_malformed_record():
    g, a, b, c, d, e = _diamond()
    g.edges[d] = (a, None)
    g.set_gradient(e, 1.0)
    with pytest.raises(MalformedEdgeRecord):
        g.backward(e)


def test_validate_detects_broken_lock_step():
    g, a, b, c, d, e = _diamond()
    g.validate()

    g.edges[a] = (b, None)
    with pytest.raises(MalformedEdgeRecord):
        g.validate()
    del g.edges[a]

    del g.edges[c]
    with pytest.raises(MalformedEdgeRecord):
        g.validate()


def test_graphs_issue_independent_ids():
    g1, g2 = Graph(), Graph()
    assert g1.create_leaf(1.0) == 0
    assert g1.create_leaf(2.0) == 1
    assert g2.create_leaf(3.0) == 0
    assert [n.id for n in g1.nodes] == [0, 1]


def test_reset_discards_the_whole_graph():
    g, *_ = _diamond()
    g.reset()
    assert len(g) == 0
    assert g.edges == {}
    assert g.create_leaf(1.0) == 0


def test_grad_helpers_use_fresh_graphs():
    assert grad(lambda g, x: g.mul(x, x), 3.0) == 6.0
    assert grads_list(lambda g, xs: g.add(g.mul(xs[0], xs[0]), xs[1]), [2.0, 4.0]) == [4.0, 1.0]

    out = grads(lambda g, v: g.mul(v["x"], g.relu(v["y"])), {"x": 2.0, "y": -1.0})
    assert out == {"x": 0.0, "y": 0.0}


def test_infinite_gradient_propagates():
    g = Graph()
    x, minus_one = g.create_leaf(0.0), g.create_leaf(-1.0)
    y = g.pow(x, minus_one)
    g.set_gradient(y, 1.0)
    g.backward(y)
    assert math.isinf(g.gradient(x))


def test_zero_upstream_still_applies_chain_rule():
    g = Graph()
    x, w = g.create_leaf(math.inf), g.create_leaf(-1.0)
    m = g.mul(x, w)
    y = g.relu(m)
    g.set_gradient(y, 1.0)
    g.backward(y)

    assert g.value(y) == 0.0
    assert g.gradient(m) == 0.0
    # inf * 0.0 reaches w unguarded
    assert math.isnan(g.gradient(w))
    assert g.gradient(x) == 0.0


def test_numpy_integer_seed_is_accepted():
    g, a, b, c, d, e = _diamond()
    g.set_gradient(np.int64(e), 1.0)
    g.backward(np.int64(e))
    assert g.gradient(a) == 4.0
    assert g.gradient(e) == 1.0
