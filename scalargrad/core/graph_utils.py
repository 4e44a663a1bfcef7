"""
Graph inspection helpers.
Print and summarise the structure of a computation graph.
"""

from collections import Counter
from typing import Dict

import numpy as np

from .tape import Graph


def get_graph_stats(graph: Graph) -> Dict:
    """
    Collect graph statistics without printing.

    Returns:
        Dict with node/edge counts, fan-in/fan-out maxima and means,
        and an operator histogram (leaves counted under "leaf")
    """
    if not graph.nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(graph.nodes)

    # fan-in: operands per node
    fan_ins = [len(graph.operands(node.id)) for node in graph.nodes]

    # fan-out: consumers per node
    fan_outs = [0] * n_nodes
    for node in graph.nodes:
        for operand in graph.operands(node.id):
            fan_outs[operand] += 1

    op_counter = Counter(node.op.value if node.op else "leaf" for node in graph.nodes)

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'leaves': op_counter.get("leaf", 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(graph: Graph) -> Dict:
    """
    Print a summary of the graph.

    Returns:
        The statistics dict from get_graph_stats()
    """
    stats = get_graph_stats(graph)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")
    print("="*70 + "\n")

    return stats


def print_computation_graph(graph: Graph, max_nodes: int = 20) -> None:
    """
    Print one line per node: id, operator, value, gradient and operand ids.

    Args:
        graph: Graph to print
        max_nodes: Print at most this many nodes
    """
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    if not graph.nodes:
        print("Empty graph")
        return

    for node in graph.nodes[:max_nodes]:
        tag = node.op.value if node.op else "leaf"
        head = f"Node {node.id:4d}: {tag:6s} value={node.value:10.6f} grad={node.gradient:10.6f}"
        operands = graph.operands(node.id)
        if operands:
            print(f"{head} <- [{', '.join(f'Node{i}' for i in operands)}]")
        else:
            print(f"{head} [leaf/input]")

    if len(graph.nodes) > max_nodes:
        print(f"... ({len(graph.nodes) - max_nodes} more nodes)")

    print("="*70 + "\n")
