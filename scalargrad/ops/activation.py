# scalargrad/ops/activation.py
from ..core.node import Operator
from .arithmetic import _operand


def relu(graph, a):
    """Rectified linear unit: out = a if a > 0 else 0. Records a single operand."""
    a, av = _operand(graph, a)
    value = av if av > 0 else 0.0
    return graph.push_node(value=value, op=Operator.RELU, operands=(a, None))
