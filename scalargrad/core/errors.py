# scalargrad/core/errors.py
"""
Structural errors raised by the graph engine.

All of them point at a violated graph invariant (a programming error in the
caller), so they are raised immediately and never retried.
"""


class GraphError(Exception):
    """Base class for computation-graph defects."""


class OperandNotFound(GraphError, KeyError):
    """An operator primitive was given an id that is not in the arena."""

    def __init__(self, node_id):
        super().__init__(f"operand {node_id!r} is not a node of this graph")
        self.node_id = node_id


class MissingNode(GraphError, KeyError):
    """A traversal or accessor dereferenced an id that is not in the arena."""

    def __init__(self, node_id):
        super().__init__(f"node {node_id!r} is not a node of this graph")
        self.node_id = node_id


class MalformedEdgeRecord(GraphError, ValueError):
    """An edge record does not match the arity of its node's operator."""

    def __init__(self, node_id, reason: str):
        super().__init__(f"edge record of node {node_id!r}: {reason}")
        self.node_id = node_id
