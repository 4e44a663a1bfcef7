# scalargrad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Optional

from ..config import GraphConfig
from .engine import backward
from .tape import Graph, NodeId


def create_leaf(graph: Graph, value: float) -> NodeId:
    """Introduce a new leaf (input or parameter) on `graph`."""
    return graph.create_leaf(value)


def set_gradient(graph: Graph, node_id: NodeId, value: float):
    graph.set_gradient(node_id, value)


def read_value(graph: Graph, node_id: NodeId) -> float:
    return graph.value(node_id)


def read_gradient(graph: Graph, node_id: NodeId) -> float:
    return graph.gradient(node_id)


def _run(graph: Graph, y: NodeId):
    graph.set_gradient(y, 1.0)
    backward(graph, y)


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Graph, NodeId], NodeId], x0: float,
         config: Optional[GraphConfig] = None) -> float:
    """
    Gradient of a scalar function y = f(graph, x) at x0.
    Builds a fresh graph, so nothing leaks between calls.

    Example
    -------
    grad(lambda g, x: g.mul(x, x), 3.0) -> 6.0
    """
    graph = Graph(config)
    x = graph.create_leaf(x0)
    _run(graph, f(graph, x))
    return graph.gradient(x)


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Graph, Dict[str, NodeId]], NodeId],
          inputs: Dict[str, float],
          config: Optional[GraphConfig] = None) -> Dict[str, float]:
    """
    Gradient of y = f(graph, {name: id}) with respect to every input, from ONE
    reverse pass. Keys come back in the order of `inputs`.
    """
    graph = Graph(config)
    ids = {k: graph.create_leaf(v) for k, v in inputs.items()}
    _run(graph, f(graph, ids))
    return {k: graph.gradient(ids[k]) for k in inputs.keys()}


def grads_list(f: Callable[[Graph, List[NodeId]], NodeId],
               x0_list: Iterable[float],
               config: Optional[GraphConfig] = None) -> List[float]:
    """
    Same as grads(), with inputs given as a list.

    Example
    -------
    f = lambda g, xs: g.add(g.mul(xs[0], xs[0]), xs[1])
    grads_list(f, [2.0, 4.0]) -> [4.0, 1.0]
    """
    graph = Graph(config)
    xs = [graph.create_leaf(v) for v in x0_list]
    _run(graph, f(graph, xs))
    return [graph.gradient(x) for x in xs]
