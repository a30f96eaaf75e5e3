"""
Neuron / Layer / MLP built on GraphArena construction calls.

Neuron:  out = act(bias + sum_i w_i * x_i)
Layer:   concatenation of its neurons' outputs
MLP:     layers applied in sequence
"""

import logging
import numpy as np
from typing import List, Optional, Sequence

from ..config import InitConfig
from ..core.arena import GraphArena
from ..core.node import Op, UNARY_OPS
from .module import Module

logger = logging.getLogger(__name__)


class Neuron(Module):
    """
    Weighted sum plus bias, followed by an optional activation.

    Attributes:
        weights (List[float]): One weight per input
        bias (float): Bias term
        activation (Optional[Op]): Op.RELU, Op.TANH, or None for linear
    """

    def __init__(self, weights: Sequence[float], bias: float, activation: Optional[Op] = None):
        if activation is not None and activation not in UNARY_OPS:
            raise ValueError(f"activation must be Op.RELU, Op.TANH or None, got {activation}")
        self.weights = [float(w) for w in weights]
        self.bias = float(bias)
        self.activation = activation
        self._param_ids: List[int] = []

    def forward(self, arena: GraphArena, inputs: Sequence[int]) -> List[int]:
        if len(inputs) != len(self.weights):
            raise ValueError(
                f"Neuron expects {len(self.weights)} inputs, got {len(inputs)}"
            )
        bias_id = arena.input(self.bias)
        params = [bias_id]
        sum_id = bias_id
        for inp, w in zip(inputs, self.weights):
            w_id = arena.input(w)
            params.append(w_id)
            prod_id = arena.mul(inp, w_id)
            sum_id = arena.add(sum_id, prod_id)
        self._param_ids = params

        if self.activation is None:
            return [sum_id]
        return [arena.unary(self.activation, sum_id)]

    def parameters(self) -> List[int]:
        return list(self._param_ids)

    def step(self, arena: GraphArena, lr: float) -> None:
        if not self._param_ids:
            raise RuntimeError("Neuron.step called before forward")
        bias_id, *w_ids = self._param_ids
        self.bias -= lr * arena.grad(bias_id)
        self.weights = [w - lr * arena.grad(i) for w, i in zip(self.weights, w_ids)]

    def __repr__(self):
        act = self.activation.name if self.activation is not None else "linear"
        return f"Neuron(n_in={len(self.weights)}, {act})"


class Layer(Module):
    """A collection of neurons reading the same inputs."""

    def __init__(self, neurons: Sequence[Neuron]):
        self.neurons = list(neurons)

    @classmethod
    def build(cls, n_in: int, n_out: int, activation: Optional[Op] = None,
              rng: Optional[np.random.Generator] = None,
              init: Optional[InitConfig] = None) -> "Layer":
        """Randomly initialised layer, weights and biases ~ U(init.low, init.high)."""
        init = init or InitConfig()
        rng = rng if rng is not None else init.make_rng()
        neurons = [
            Neuron(rng.uniform(init.low, init.high, size=n_in).tolist(),
                   float(rng.uniform(init.low, init.high)),
                   activation)
            for _ in range(n_out)
        ]
        return cls(neurons)

    def forward(self, arena: GraphArena, inputs: Sequence[int]) -> List[int]:
        return [out for n in self.neurons for out in n.forward(arena, inputs)]

    def parameters(self) -> List[int]:
        return [p for n in self.neurons for p in n.parameters()]

    def step(self, arena: GraphArena, lr: float) -> None:
        for n in self.neurons:
            n.step(arena, lr)

    def __repr__(self):
        return f"Layer([{', '.join(repr(n) for n in self.neurons)}])"


class MLP(Module):
    """Multi-layer perceptron: a sequence of layers."""

    def __init__(self, layers: Sequence[Layer]):
        self.layers = list(layers)

    @classmethod
    def build(cls, sizes: Sequence[int], activation: Optional[Op] = Op.TANH,
              output_activation: Optional[Op] = None,
              init: Optional[InitConfig] = None,
              fan_in_scaled: bool = False) -> "MLP":
        """
        Build an MLP from layer sizes.

        Args:
            sizes: [n_in, hidden_1, ..., n_out]
            activation: activation of hidden layers
            output_activation: activation of the last layer (None = linear)
            init: weight initialisation settings
            fan_in_scaled: draw each layer from +-1/sqrt(n_in) instead of
                [init.low, init.high] (InitConfig.scaled)

        Example:
            MLP.build([3, 4, 4, 1]) -> 3 inputs, two tanh layers of 4, linear output
        """
        if len(sizes) < 2:
            raise ValueError(f"MLP.build needs at least input and output sizes, got {sizes}")
        init = init or InitConfig()
        rng = init.make_rng()
        layers = []
        for k, (n_in, n_out) in enumerate(zip(sizes[:-1], sizes[1:])):
            act = output_activation if k == len(sizes) - 2 else activation
            layer_init = InitConfig.scaled(n_in, init.seed) if fan_in_scaled else init
            layers.append(Layer.build(n_in, n_out, act, rng=rng, init=layer_init))
        logger.debug("MLP.build: sizes=%s", list(sizes))
        return cls(layers)

    def forward(self, arena: GraphArena, inputs: Sequence[int]) -> List[int]:
        start = len(arena)
        out = list(inputs)
        for layer in self.layers:
            out = layer.forward(arena, out)
        logger.debug("MLP.forward: appended %d nodes", len(arena) - start)
        return out

    def parameters(self) -> List[int]:
        return [p for layer in self.layers for p in layer.parameters()]

    def step(self, arena: GraphArena, lr: float) -> None:
        for layer in self.layers:
            layer.step(arena, lr)

    def __repr__(self):
        return f"MLP(layers={len(self.layers)})"
