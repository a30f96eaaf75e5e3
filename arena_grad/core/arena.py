# arena_grad/core/arena.py
from __future__ import annotations
from typing import Iterator, List, Tuple

import numpy as np

from .node import Node, Op, BINARY_OPS, UNARY_OPS
from .engine import forward_value, reverse, zero_grads, ZERO

_NUMERIC = (int, float, np.integer, np.floating)


class GraphArena:
    """
    Append-only store of Nodes addressed by index.

    Nodes are recorded in creation order, which is always a valid
    topological order: an operand has to exist before it can be referenced.
    Indices are never reused; nodes live as long as the arena.

    Example
    -------
        g = GraphArena()
        x = g.input(2.0)
        z = g.mul(x, x)
        w = g.add(z, x)
        g.backward(w)
        g.grad(x)   # 5.0
    """

    def __init__(self):
        self.nodes: List[Node] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __repr__(self):
        return f"GraphArena(nodes={len(self.nodes)})"

    # ------------------------------------------------------------------ #
    # construction
    # ------------------------------------------------------------------ #
    def input(self, value) -> int:
        """Append a leaf node holding `value`."""
        if isinstance(value, bool) or not isinstance(value, _NUMERIC):
            raise TypeError(
                f"GraphArena.input only accepts real numbers (int, float), but got {type(value)}"
            )
        return self._push(Op.INPUT, np.float64(value), ())

    def combine(self, op: Op, a: int, b: int) -> int:
        """Append op(a, b) for op in {ADD, SUB, MUL, DIV}; operand order is kept."""
        if op not in BINARY_OPS:
            raise ValueError(f"combine expects one of ADD/SUB/MUL/DIV, got {op}")
        self._check_index(a)
        self._check_index(b)
        val = forward_value(op, (self.nodes[a].value, self.nodes[b].value))
        return self._push(op, val, (a, b))

    def unary(self, op: Op, a: int) -> int:
        """Append op(a) for op in {RELU, TANH}."""
        if op not in UNARY_OPS:
            raise ValueError(f"unary expects RELU or TANH, got {op}")
        self._check_index(a)
        val = forward_value(op, (self.nodes[a].value,))
        return self._push(op, val, (a,))

    def power(self, a: int, exponent: float) -> int:
        """Append a ** exponent; the constant exponent is stored on the node."""
        if isinstance(exponent, bool) or not isinstance(exponent, _NUMERIC):
            raise TypeError(f"power exponent must be a real number, got {type(exponent)}")
        self._check_index(a)
        exponent = float(exponent)
        val = forward_value(Op.POW, (self.nodes[a].value,), exponent)
        return self._push(Op.POW, val, (a,), exponent)

    # shorthands
    def add(self, a: int, b: int) -> int:
        return self.combine(Op.ADD, a, b)

    def sub(self, a: int, b: int) -> int:
        return self.combine(Op.SUB, a, b)

    def mul(self, a: int, b: int) -> int:
        return self.combine(Op.MUL, a, b)

    def div(self, a: int, b: int) -> int:
        return self.combine(Op.DIV, a, b)

    def relu(self, a: int) -> int:
        return self.unary(Op.RELU, a)

    def tanh(self, a: int) -> int:
        return self.unary(Op.TANH, a)

    def _push(self, op: Op, value, operands: Tuple[int, ...], exponent=None) -> int:
        if len(operands) != op.arity:
            raise ValueError(f"{op.name} takes {op.arity} operands, got {len(operands)}")
        self.nodes.append(Node(value=value, grad=ZERO, op=op, operands=operands, exponent=exponent))
        return len(self.nodes) - 1

    def _check_index(self, idx: int):
        # negative indices would silently wrap on a list
        if isinstance(idx, bool) or not isinstance(idx, (int, np.integer)):
            raise TypeError(f"node index must be an int, got {type(idx)}")
        if not 0 <= idx < len(self.nodes):
            raise IndexError(f"node index {idx} out of range for arena of {len(self.nodes)} nodes")

    # ------------------------------------------------------------------ #
    # differentiation
    # ------------------------------------------------------------------ #
    def backward(self, root: int):
        """
        Fill every node's grad with d(root)/d(node).

        Gradients are recomputed from scratch on each call; nodes created
        after this call are not part of it.
        """
        self._check_index(root)
        reverse(self.nodes, root)

    def zero_grad(self):
        zero_grads(self.nodes)

    # ------------------------------------------------------------------ #
    # accessors
    # ------------------------------------------------------------------ #
    def node(self, idx: int) -> Node:
        self._check_index(idx)
        return self.nodes[idx]

    def value(self, idx: int) -> float:
        return float(self.node(idx).value)

    def grad(self, idx: int) -> float:
        return float(self.node(idx).grad)

    def read(self, idx: int) -> Tuple[float, float]:
        """Return (value, grad) of a node without mutating anything."""
        n = self.node(idx)
        return float(n.value), float(n.grad)

    def set_value(self, idx: int, value):
        """
        Overwrite the forward value of a node.

        Values of nodes already derived from it are NOT recomputed; rebuild
        the downstream graph if they are needed.
        """
        if isinstance(value, bool) or not isinstance(value, _NUMERIC):
            raise TypeError(f"set_value only accepts real numbers, got {type(value)}")
        self.node(idx).value = np.float64(value)
