"""
Build a small fixed network, seed its output gradient, run backward and
print the resulting graph.
"""

import argparse
import logging

from .config import GraphConfig, POW_RULES
from .core.graph_utils import print_computation_graph, print_graph_summary
from .core.tape import Graph
from .nn import Layer

logger = logging.getLogger(__name__)


def positive_int(text):
    """argparse type: an integer >= 1."""
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected an integer >= 1, got {text!r}")
    return value


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='scalargrad',
        description='Run one forward/backward pass through a single ReLU layer',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--inputs', type=str, default='1.0,1.0',
                        help='Comma-separated input values (e.g., "1.0,-2.5")')
    parser.add_argument('--outputs', type=positive_int, default=1,
                        help='Number of neurons in the layer')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for parameter initialisation')
    parser.add_argument('--pow-rule', choices=POW_RULES, default='standard',
                        help='Chain rule applied to pow nodes')
    parser.add_argument('--max-nodes', type=int, default=100,
                        help='Print at most this many nodes')
    parser.add_argument('--verbose', action='store_true',
                        help='Log engine activity at DEBUG level')
    return parser.parse_args(argv)


def parse_inputs(input_str):
    """Parse '1.0,2.0' into [1.0, 2.0]."""
    return [float(v) for v in input_str.split(',') if v.strip()]


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    graph = Graph(GraphConfig(pow_rule=args.pow_rule, seed=args.seed))
    inputs = [graph.create_leaf(v) for v in parse_inputs(args.inputs)]
    layer = Layer.create(graph, len(inputs), args.outputs)
    outputs = layer(graph, inputs)
    logger.debug("built %r with %d nodes", layer, len(graph))

    graph.set_gradient(outputs[0], 1.0)
    graph.backward(outputs[0])

    print("Edges:")
    for node_id, (left, right) in sorted(graph.edges.items()):
        print(f"  {node_id} <- {left}" + (f", {right}" if right is not None else ""))
    print_computation_graph(graph, max_nodes=args.max_nodes)
    print_graph_summary(graph)

    for i, out in enumerate(outputs):
        print(f"Output {i}: value={graph.value(out):.6f} grad={graph.gradient(out):.6f}")
    print("Parameter gradients:")
    for p in layer.parameters():
        print(f"  Node{p}: value={graph.value(p):+.6f} grad={graph.gradient(p):+.6f}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
