# arena_grad/ops/__init__.py

# Convenience re-exports so users can do: from arena_grad.ops import mul, relu, ...
from .arithmetic import add, sub, mul, div, neg, pow
from .activations import relu, tanh

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow",
    "relu", "tanh",
]
