# scalargrad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Operator(Enum):
    """Operator tag recorded on every non-leaf node."""
    PLUS = "plus"
    MUL = "mul"
    POW = "pow"
    RELU = "relu"

    @property
    def arity(self) -> int:
        return 1 if self is Operator.RELU else 2


@dataclass
class Node:
    """
    One vertex of the computation graph.

    Attributes
    ----------
    id       : int
        Position of the node in its graph's arena; also its creation order.
    value    : float
        Forward value, computed once when the node is created.
    gradient : float
        Reverse-mode accumulator, starts at 0.0.
    op       : Optional[Operator]
        Operator that produced the node; None for leaves (inputs, parameters).
    """
    id: int
    value: float
    gradient: float = 0.0
    op: Optional[Operator] = None

    @property
    def is_leaf(self) -> bool:
        return self.op is None
