# scalargrad/core/__init__.py

"""
Core public API of the engine.

Exports:
    Graph          : Node arena plus edge map; issues ids and records operators.
    Node, Operator : One graph vertex and its operator tag.
    backward       : Run one reverse pass from a seeded node.
    zero_gradients : Reset every gradient on a graph to zero.
    grad, grads    : Convenience: gradients of a function built on a fresh graph.
"""

from .node import Node, Operator
from .tape import Graph, NodeId
from .engine import backward, zero_gradients, reverse_topological_order
from .errors import GraphError, OperandNotFound, MissingNode, MalformedEdgeRecord
from .seeds import (
    create_leaf, set_gradient, read_value, read_gradient,
    grad, grads, grads_list,
)

__all__ = [
    "Node", "Operator", "Graph", "NodeId",
    "backward", "zero_gradients", "reverse_topological_order",
    "GraphError", "OperandNotFound", "MissingNode", "MalformedEdgeRecord",
    "create_leaf", "set_gradient", "read_value", "read_gradient",
    "grad", "grads", "grads_list",
]
