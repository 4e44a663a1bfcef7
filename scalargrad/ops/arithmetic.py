# scalargrad/ops/arithmetic.py
import numpy as np
from ..core.errors import OperandNotFound
from ..core.node import Operator
from ..core.tape import as_node_id


def _operand(graph, node_id):
    """(id, value) of an existing operand; raises OperandNotFound otherwise."""
    if node_id not in graph:
        raise OperandNotFound(node_id)
    node = graph.nodes[as_node_id(node_id)]
    return node.id, node.value


def _binary(graph, a, b, f, op):
    """
    Generic binary primitive:
      - reads both operand values (both ids must exist)
      - computes out = f(a.value, b.value) eagerly
      - appends a node tagged `op` and records the (a, b) edge
    """
    a, av = _operand(graph, a)
    b, bv = _operand(graph, b)
    # Non-finite results are part of the contract; keep numpy quiet about them.
    with np.errstate(all="ignore"):
        value = f(np.float64(av), np.float64(bv))
    return graph.push_node(value=value, op=op, operands=(a, b))


def add(graph, a, b): return _binary(graph, a, b, lambda x, y: x + y, Operator.PLUS)
def mul(graph, a, b): return _binary(graph, a, b, lambda x, y: x * y, Operator.MUL)


def pow(graph, a, b):
    """
    Power: out = a ** b.

    A negative base with a fractional exponent gives nan, 0 ** negative gives inf;
    both are stored as-is.
    """
    return _binary(graph, a, b, np.power, Operator.POW)
