# arena_grad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np


class Op(Enum):
    """
    Closed set of operation kinds a node can be produced by.

    Each member carries (arity, symbol):
      - arity  : number of operand indices the node stores
      - symbol : short label used by the graph printer
    """
    INPUT = (0, "input")
    ADD = (2, "+")
    SUB = (2, "-")
    MUL = (2, "*")
    DIV = (2, "/")
    RELU = (1, "relu")
    TANH = (1, "tanh")
    POW = (1, "pow")

    @property
    def arity(self) -> int:
        return self.value[0]

    @property
    def symbol(self) -> str:
        return self.value[1]


BINARY_OPS = frozenset({Op.ADD, Op.SUB, Op.MUL, Op.DIV})
UNARY_OPS = frozenset({Op.RELU, Op.TANH})


@dataclass
class Node:
    """
    One entry of the arena.

    Attributes
    ----------
    value    : np.float64
        Forward value, computed once when the node is appended.
    grad     : np.float64
        Gradient accumulator; only `backward` writes it.
    op       : Op
        Operation that produced the node.
    operands : Tuple[int, ...]
        Operand indices in order (left/minuend/dividend first).
        Every index is strictly less than the node's own index.
    exponent : Optional[float]
        Constant exponent, set only for Op.POW.
    """
    value: np.float64
    grad: np.float64
    op: Op
    operands: Tuple[int, ...] = ()
    exponent: Optional[float] = None
