# arena_grad/core/__init__.py

"""
Core public API for the arena_grad package.

Exports:
    Op, Node      : The closed operation set and the node record.
    GraphArena    : Append-only node store with construction ops and backward.
    NodeRef       : Operator-overloading handle to a node of an arena.
    reverse       : Run one reverse sweep over a node list.
    zero_grads    : Reset every gradient of a node list to zero.
    grad, grads, grads_list, value, evaluate : Functional convenience wrappers.
"""

from .node import Op, Node
from .arena import GraphArena
from .var import NodeRef
from .engine import reverse, zero_grads
from .seeds import grad, grads, grads_list, value, evaluate

__all__ = [
    "Op", "Node",
    "GraphArena",
    "NodeRef",
    "reverse", "zero_grads",
    "grad", "grads", "grads_list", "value", "evaluate",
]
