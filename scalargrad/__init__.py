# scalargrad/__init__.py
# Reverse-mode automatic differentiation over scalar computation graphs

from .config import GraphConfig
from .core.node import Node, Operator
from .core.tape import Graph, NodeId
from .core.engine import backward, zero_gradients
from .core.errors import GraphError, OperandNotFound, MissingNode, MalformedEdgeRecord
from .core.seeds import (
    create_leaf, set_gradient, read_value, read_gradient,
    grad, grads, grads_list,
)
from .ops import add, mul, pow, relu
from .nn import Neuron, Layer, MLP

__all__ = [
    # Config
    'GraphConfig',
    # Graph
    'Graph',
    'Node',
    'NodeId',
    'Operator',
    'create_leaf',
    # Operators
    'add',
    'mul',
    'pow',
    'relu',
    # Engine
    'set_gradient',
    'backward',
    'zero_gradients',
    'read_value',
    'read_gradient',
    'grad',
    'grads',
    'grads_list',
    # Errors
    'GraphError',
    'OperandNotFound',
    'MissingNode',
    'MalformedEdgeRecord',
    # Composition
    'Neuron',
    'Layer',
    'MLP',
]
