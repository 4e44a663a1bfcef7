"""
Neuron / Layer / MLP composition on top of the graph engine.

These classes own nothing but node ids: parameters are leaves on the graph and
every forward call appends mul/add/relu nodes to it.
"""

from typing import List, Optional, Sequence

import numpy as np

from .core.tape import Graph, NodeId


class Neuron:
    """
    relu(sum_i w_i * x_i + b), or the plain affine sum when nonlin=False.

    Attributes:
        weights (List[NodeId]): Weight leaves, one per input
        bias (NodeId): Bias leaf
        nonlin (bool): Apply relu to the affine sum
    """

    def __init__(self, weights: Sequence[NodeId], bias: NodeId, nonlin: bool = True):
        self.weights = list(weights)
        self.bias = bias
        self.nonlin = nonlin

    @classmethod
    def create(cls, graph: Graph, n_in: int,
               rng: Optional[np.random.Generator] = None, nonlin: bool = True) -> "Neuron":
        """
        New neuron with parameters drawn uniformly from the graph's init range.
        Pass a seeded `rng` for reproducible parameters; otherwise one is made
        from `graph.config.seed`.
        """
        cfg = graph.config
        rng = rng if rng is not None else cfg.make_rng()
        weights = [graph.create_leaf(rng.uniform(cfg.init_low, cfg.init_high))
                   for _ in range(n_in)]
        bias = graph.create_leaf(rng.uniform(cfg.init_low, cfg.init_high))
        return cls(weights, bias, nonlin)

    @classmethod
    def from_values(cls, graph: Graph, weights: Sequence[float], bias: float,
                    nonlin: bool = True) -> "Neuron":
        return cls([graph.create_leaf(w) for w in weights], graph.create_leaf(bias), nonlin)

    def __call__(self, graph: Graph, xs: Sequence[NodeId]) -> NodeId:
        if len(xs) != len(self.weights):
            raise ValueError(
                f"Neuron expects {len(self.weights)} inputs, but got {len(xs)}"
            )
        act = None
        for w, x in zip(self.weights, xs):
            term = graph.mul(x, w)
            act = term if act is None else graph.add(act, term)
        act = self.bias if act is None else graph.add(act, self.bias)
        return graph.relu(act) if self.nonlin else act

    def parameters(self) -> List[NodeId]:
        return self.weights + [self.bias]

    def __repr__(self):
        return f"{'ReLU' if self.nonlin else 'Linear'}Neuron({len(self.weights)})"


class Layer:
    """An ordered list of neurons sharing the same inputs."""

    def __init__(self, neurons: Sequence[Neuron]):
        self.neurons = list(neurons)

    @classmethod
    def create(cls, graph: Graph, n_in: int, n_out: int,
               rng: Optional[np.random.Generator] = None, nonlin: bool = True) -> "Layer":
        rng = rng if rng is not None else graph.config.make_rng()
        return cls([Neuron.create(graph, n_in, rng, nonlin) for _ in range(n_out)])

    def __call__(self, graph: Graph, xs: Sequence[NodeId]) -> List[NodeId]:
        return [neuron(graph, xs) for neuron in self.neurons]

    def parameters(self) -> List[NodeId]:
        return [p for neuron in self.neurons for p in neuron.parameters()]

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP:
    """Stacked layers; every layer but the last applies relu."""

    def __init__(self, layers: Sequence[Layer]):
        self.layers = list(layers)

    @classmethod
    def create(cls, graph: Graph, n_in: int, n_outs: Sequence[int],
               rng: Optional[np.random.Generator] = None) -> "MLP":
        rng = rng if rng is not None else graph.config.make_rng()
        sizes = [n_in] + list(n_outs)
        return cls([
            Layer.create(graph, sizes[i], sizes[i + 1], rng, nonlin=i != len(n_outs) - 1)
            for i in range(len(n_outs))
        ])

    def __call__(self, graph: Graph, xs: Sequence[NodeId]) -> List[NodeId]:
        for layer in self.layers:
            xs = layer(graph, xs)
        return xs

    def parameters(self) -> List[NodeId]:
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
