# arena_grad/ops/arithmetic.py
from ..core.node import Op
from ..core.var import NodeRef


def _arena_of(x, y):
    """Pick the arena shared by the NodeRef operand(s)."""
    refs = [v for v in (x, y) if isinstance(v, NodeRef)]
    if not refs:
        raise TypeError("at least one operand must be a NodeRef")
    arena = refs[0].arena
    for r in refs[1:]:
        if r.arena is not arena:
            raise ValueError("operands belong to different arenas")
    return arena


def _as_ref(x, arena):
    """Ensure x is a NodeRef; otherwise record it as a constant input node."""
    return x if isinstance(x, NodeRef) else NodeRef.leaf(arena, x)


def _binary(x, y, op: Op):
    """
    Generic binary primitive:
      - wraps plain numbers as input nodes of the shared arena
      - appends op(x, y), keeping operand order
    """
    arena = _arena_of(x, y)
    x = _as_ref(x, arena)
    y = _as_ref(y, arena)
    return NodeRef(arena, arena.combine(op, x.index, y.index))


def add(x, y): return _binary(x, y, Op.ADD)
def sub(x, y): return _binary(x, y, Op.SUB)
def mul(x, y): return _binary(x, y, Op.MUL)
def div(x, y): return _binary(x, y, Op.DIV)


def neg(x):
    """Negation recorded as 0 - x."""
    return sub(0.0, x)


def pow(x, exponent):
    """
    Power with a constant real exponent:
      out.val = x.val ** exponent
      local partial = exponent * x^(exponent-1)
    """
    if isinstance(exponent, NodeRef):
        raise TypeError("pow only supports a constant (int/float) exponent")
    if not isinstance(x, NodeRef):
        raise TypeError(f"pow base must be a NodeRef, got {type(x)}")
    return NodeRef(x.arena, x.arena.power(x.index, exponent))
