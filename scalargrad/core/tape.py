# scalargrad/core/tape.py
from __future__ import annotations
import operator
from typing import Dict, Iterator, List, Optional, Tuple

from ..config import GraphConfig
from .errors import MalformedEdgeRecord, MissingNode
from .node import Node, Operator

NodeId = int
EdgeRecord = Tuple[NodeId, Optional[NodeId]]


def as_node_id(node_id) -> Optional[NodeId]:
    """Plain int for any integer-like id (numpy ints included); None for bools and non-integers."""
    if isinstance(node_id, bool):
        return None
    try:
        return operator.index(node_id)
    except TypeError:
        return None


class Graph:
    """
    Arena of nodes plus the edge map that links each non-leaf to its operands.

    Ids are indices into `nodes` and are issued by this graph alone, so two
    graphs never share ids and id order is creation order. Nodes are only ever
    appended; `reset()` drops the whole graph at once.
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        self.config = config or GraphConfig()
        self.nodes: List[Node] = []
        self.edges: Dict[NodeId, EdgeRecord] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id) -> bool:
        index = as_node_id(node_id)
        return index is not None and 0 <= index < len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __repr__(self):
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)}, pow_rule={self.config.pow_rule!r})"

    def reset(self):
        self.nodes.clear()
        self.edges.clear()

    @property
    def last_id(self) -> NodeId:
        if not self.nodes:
            raise MissingNode(None)
        return self.nodes[-1].id

    def node(self, node_id: NodeId) -> Node:
        if node_id not in self:
            raise MissingNode(node_id)
        return self.nodes[operator.index(node_id)]

    def create_leaf(self, value: float) -> NodeId:
        """Append a leaf (input or parameter) and return its id."""
        return self.push_node(value=value)

    def push_node(self, *, value: float, op: Optional[Operator] = None,
                  operands: Optional[EdgeRecord] = None) -> NodeId:
        """
        Append Node(value, op) and, for non-leaves, its edge record.
        Operands must already have been validated by the caller.
        """
        node_id = len(self.nodes)
        self.nodes.append(Node(id=node_id, value=float(value), op=op))
        if op is not None:
            self.edges[node_id] = operands
        return node_id

    # -------- accessors -------- #
    def value(self, node_id: NodeId) -> float:
        return self.node(node_id).value

    def gradient(self, node_id: NodeId) -> float:
        return self.node(node_id).gradient

    def set_gradient(self, node_id: NodeId, value: float):
        """Seed a node's gradient, conventionally 1.0 on the output."""
        self.node(node_id).gradient = float(value)

    def operands(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        """
        Present operand ids of a node, checked against its operator's arity.
        Leaves return an empty tuple.
        """
        node = self.node(node_id)
        record = self.edges.get(node_id)
        if node.is_leaf:
            if record is not None:
                raise MalformedEdgeRecord(node_id, "leaf node carries an edge record")
            return ()
        if record is None:
            raise MalformedEdgeRecord(node_id, f"{node.op.name} node has no edge record")

        left, right = record
        present = tuple(i for i in (left, right) if i is not None)
        if left is None or len(present) != node.op.arity:
            raise MalformedEdgeRecord(
                node_id,
                f"{node.op.name} expects {node.op.arity} operand(s), got {record!r}",
            )
        for operand in present:
            if operand not in self:
                raise MissingNode(operand)
            if operand >= node_id:
                raise MalformedEdgeRecord(
                    node_id, f"operand {operand} was not created before the node"
                )
        return present

    def validate(self):
        """Check that the arena and edge map are in lock-step."""
        for node_id in self.edges:
            if node_id not in self:
                raise MissingNode(node_id)
        for node in self.nodes:
            self.operands(node.id)

    # -------- operator primitives and backward, bound to this graph -------- #
    def add(self, a: NodeId, b: NodeId) -> NodeId:
        from ..ops.arithmetic import add
        return add(self, a, b)

    def mul(self, a: NodeId, b: NodeId) -> NodeId:
        from ..ops.arithmetic import mul
        return mul(self, a, b)

    def pow(self, a: NodeId, b: NodeId) -> NodeId:
        from ..ops.arithmetic import pow
        return pow(self, a, b)

    def relu(self, a: NodeId) -> NodeId:
        from ..ops.activation import relu
        return relu(self, a)

    def backward(self, seed: Optional[NodeId] = None):
        from .engine import backward
        backward(self, seed)

    def zero_gradients(self):
        from .engine import zero_gradients
        zero_gradients(self)
