# scalargrad/core/engine.py
from __future__ import annotations
import logging
from typing import List, Optional, Tuple

import numpy as np

from .node import Node, Operator
from .tape import Graph, NodeId

logger = logging.getLogger(__name__)


def zero_gradients(graph: Graph):
    """Set the gradient of every node on the graph back to zero."""
    for node in graph.nodes:
        node.gradient = 0.0


def reverse_topological_order(graph: Graph, seed: NodeId) -> List[NodeId]:
    """
    Ids reachable from `seed` through recorded edges, consumers before operands.

    Operands are always created before the nodes that use them, so sorting the
    reachable set by descending id places every node after all of its consumers.
    """
    graph.node(seed)
    reached = {seed}
    stack = [seed]
    while stack:
        node_id = stack.pop()
        for operand in graph.operands(node_id):
            if operand not in reached:
                reached.add(operand)
                stack.append(operand)
    return sorted(reached, reverse=True)


def backward(graph: Graph, seed: Optional[NodeId] = None):
    """
    Run a single reverse pass from `seed` (default: the last node created).

    Notes:
        - The seed's current gradient is what gets propagated; set it first
          with `set_gradient(seed, 1.0)`.
        - Each pass adds its contributions onto the stored gradients of every
          node except the seed. Running twice without `zero_gradients` therefore
          doubles all non-seed gradients.
        - For each node, in reverse-topological order: p.gradient += g * (∂node/∂p),
          where g is everything the node received during this pass.
    """
    seed = graph.last_id if seed is None else graph.node(seed).id
    order = reverse_topological_order(graph, seed)
    logger.debug("backward from node %d over %d of %d nodes", seed, len(order), len(graph))

    pending = {seed: graph.node(seed).gradient}

    # Backward sweep
    with np.errstate(all="ignore"):
        for node_id in order:
            node = graph.nodes[node_id]
            g = pending.pop(node_id, 0.0)
            if node_id != seed:
                node.gradient += g
            operands = graph.operands(node_id)
            if not operands:
                continue
            partials = _local_partials(graph, node, operands)
            for operand, partial in zip(operands, partials):
                if partial is None:
                    continue
                pending[operand] = pending.get(operand, 0.0) + float(partial * g)


# -------- local partials ∂node/∂operand for supported primitives -------- #
def _local_partials(graph: Graph, node: Node, operands: Tuple[NodeId, ...]):
    """
    Return one entry per operand: the local partial, or None when the
    operator sends no contribution to that operand.
    """
    tag = node.op

    if tag is Operator.PLUS:
        return 1.0, 1.0

    if tag is Operator.MUL:
        # y = a * b  ->  ∂y/∂a = b, ∂y/∂b = a
        av, bv = (graph.nodes[i].value for i in operands)
        return bv, av

    if tag is Operator.POW:
        av, bv = (np.float64(graph.nodes[i].value) for i in operands)
        if graph.config.pow_rule == "legacy":
            # Older engines used x^(1-p) and never touched the exponent.
            return bv * np.power(av, 1.0 - bv), None
        # y = a^b  ->  ∂y/∂a = b * a^(b-1), ∂y/∂b = a^b * ln(a)
        return bv * np.power(av, bv - 1.0), node.value * np.log(av)

    if tag is Operator.RELU:
        return (1.0 if node.value > 0 else None),

    raise ValueError(f"no chain rule for operator {tag!r} on node {node.id}")
