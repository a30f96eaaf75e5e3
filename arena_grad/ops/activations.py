# arena_grad/ops/activations.py
from ..core.node import Op
from ..core.var import NodeRef


def _unary(x, op: Op):
    if not isinstance(x, NodeRef):
        raise TypeError(f"{op.name.lower()} expects a NodeRef, got {type(x)}")
    return NodeRef(x.arena, x.arena.unary(op, x.index))


def relu(x):
    """max(0, x); derivative 1 for x > 0, else 0 (including x == 0)."""
    return _unary(x, Op.RELU)


def tanh(x):
    """tanh(x); derivative 1 - tanh(x)^2 taken from the node's own value."""
    return _unary(x, Op.TANH)
