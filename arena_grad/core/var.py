# arena_grad/core/var.py
from __future__ import annotations
from typing import Optional

from .arena import GraphArena


class NodeRef:
    """
    Handle to one node of a GraphArena, so graphs can be written as ordinary
    arithmetic (`x * x + x`).

    The handle stores only (arena, index); value and grad are read from the
    arena on access. Plain numbers mixed into an expression become new
    input nodes of the same arena.

    Attributes
    ----------
    arena : GraphArena
        Arena that owns the node.
    index : int
        Node index inside `arena`.
    name  : Optional[str]
        Optional debug name.
    """

    __slots__ = ("arena", "index", "name")

    def __init__(self, arena: GraphArena, index: int, *, name: Optional[str] = None):
        arena.node(index)  # validates the index
        self.arena = arena
        self.index = index
        self.name = name

    @classmethod
    def leaf(cls, arena: GraphArena, value, *, name: Optional[str] = None) -> "NodeRef":
        """Create a new input node and return a handle to it."""
        return cls(arena, arena.input(value), name=name)

    @property
    def value(self) -> float:
        return self.arena.value(self.index)

    @property
    def grad(self) -> float:
        return self.arena.grad(self.index)

    def backward(self):
        self.arena.backward(self.index)

    def __repr__(self):
        return f"NodeRef(index={self.index}, value={self.value!r}, name={self.name!r})"

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, exponent):
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    def relu(self):
        from ..ops.activations import relu
        return relu(self)

    def tanh(self):
        from ..ops.activations import tanh
        return tanh(self)
