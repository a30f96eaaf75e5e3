# arena_grad/core/engine.py
"""
Forward formulas and local derivative rules for every Op, plus the reverse
sweep that drives them.

Both directions dispatch on the same closed `Op` enum, so adding an
operation means touching `forward_value` and `_propagate` side by side.
"""
from __future__ import annotations
import logging
import numpy as np
from typing import List, Optional, Sequence

from .node import Node, Op

logger = logging.getLogger(__name__)

ZERO = np.float64(0.0)
ONE = np.float64(1.0)


def forward_value(op: Op, args: Sequence[np.float64], exponent: Optional[float] = None) -> np.float64:
    """
    Evaluate `op` on operand values.

    IEEE special values are produced silently (x/0 -> inf, 0/0 -> nan,
    negative base with fractional exponent -> nan).
    """
    with np.errstate(all="ignore"):
        if op is Op.ADD:
            return args[0] + args[1]
        if op is Op.SUB:
            return args[0] - args[1]
        if op is Op.MUL:
            return args[0] * args[1]
        if op is Op.DIV:
            return args[0] / args[1]
        if op is Op.RELU:
            # max(0, x); nan compares False and maps to 0
            return args[0] if args[0] > ZERO else ZERO
        if op is Op.TANH:
            return np.tanh(args[0])
        if op is Op.POW:
            return np.power(args[0], np.float64(exponent))
    raise ValueError(f"forward_value: no forward rule for {op}")


def zero_grads(nodes: List[Node]):
    """Set the gradient of every node to zero."""
    for node in nodes:
        node.grad = ZERO


def reverse(nodes: List[Node], root: int):
    """
    Run one full reverse pass seeded at `root`.

    Steps:
        1) zero every grad
        2) grad(root) = 1
        3) visit indices L-1 ... 0; each node adds its local contribution
           into its operands' grads.

    Every consumer of node n has a larger index than n, so grad(n) is
    complete by the time n is visited.

    Nodes whose grad is exactly 0 are skipped, so an infinite local
    derivative behind a zero grad yields 0, not 0 * inf = nan.
    """
    zero_grads(nodes)
    nodes[root].grad = ONE

    with np.errstate(all="ignore"):
        for idx in range(len(nodes) - 1, -1, -1):
            node = nodes[idx]
            if node.grad == ZERO:
                continue  # nothing to propagate
            _propagate(nodes, node)

    logger.debug("reverse: root=%d swept %d nodes", root, len(nodes))


def _propagate(nodes: List[Node], node: Node):
    """Accumulate (+=) the local derivative of `node` into its operands."""
    g = node.grad
    op = node.op

    if op is Op.INPUT:
        return

    if op is Op.ADD:
        a, b = node.operands
        nodes[a].grad = nodes[a].grad + g
        nodes[b].grad = nodes[b].grad + g
        return

    if op is Op.SUB:
        a, b = node.operands
        nodes[a].grad = nodes[a].grad + g
        nodes[b].grad = nodes[b].grad - g
        return

    if op is Op.MUL:
        # d(ab)/da = b, d(ab)/db = a
        a, b = node.operands
        da = nodes[b].value * g
        db = nodes[a].value * g
        nodes[a].grad = nodes[a].grad + da
        nodes[b].grad = nodes[b].grad + db
        return

    if op is Op.DIV:
        # d(a/b)/da = 1/b, d(a/b)/db = -a/b^2
        a, b = node.operands
        bv = nodes[b].value
        da = g / bv
        db = -nodes[a].value * g / (bv * bv)
        nodes[a].grad = nodes[a].grad + da
        nodes[b].grad = nodes[b].grad + db
        return

    if op is Op.RELU:
        # subgradient at exactly 0 is 0
        (a,) = node.operands
        if nodes[a].value > ZERO:
            nodes[a].grad = nodes[a].grad + g
        return

    if op is Op.TANH:
        # uses the node's own value: 1 - tanh(x)^2
        (a,) = node.operands
        y = node.value
        nodes[a].grad = nodes[a].grad + (ONE - y * y) * g
        return

    if op is Op.POW:
        (a,) = node.operands
        e = np.float64(node.exponent)
        derivative = e * np.power(nodes[a].value, e - ONE)
        nodes[a].grad = nodes[a].grad + derivative * g
        return

    raise ValueError(f"reverse: no derivative rule for {op}")
