# arena_grad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through a fresh arena.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .arena import GraphArena
from .var import NodeRef


def value(x: Any) -> Any:
    """Return the numeric value of a NodeRef; pass through plain numbers unchanged."""
    return x.value if isinstance(x, NodeRef) else x


def _ensure_ref(y: Any, arena: GraphArena, fname: str) -> NodeRef:
    if isinstance(y, NodeRef):
        if y.arena is not arena:
            raise ValueError(f"{fname}: f returned a node from a different arena")
        return y
    # constant output: gradient is zero everywhere
    return NodeRef.leaf(arena, y, name="y")


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[NodeRef], NodeRef], x0: float) -> float:
    """
    Derivative of y = f(x) at x0.
    Builds the graph in a fresh, isolated arena and runs one backward pass.
    """
    arena = GraphArena()
    x = NodeRef.leaf(arena, x0, name="x")
    y = _ensure_ref(f(x), arena, "grad")
    y.backward()
    return x.grad


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, NodeRef]], NodeRef],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y = f(vars) w.r.t. ALL inputs (dict form), from ONE backward pass.

    Parameters
    ----------
    f       : function taking a dict {name: NodeRef} and returning a NodeRef
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float} in the same key order as `inputs`
    """
    arena = GraphArena()
    refs = {k: NodeRef.leaf(arena, v, name=k) for k, v in inputs.items()}
    y = _ensure_ref(f(refs), arena, "grads")
    y.backward()
    return {k: refs[k].grad for k in inputs.keys()}


def grads_list(f: Callable[[List[NodeRef]], NodeRef],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    arena = GraphArena()
    xs = [NodeRef.leaf(arena, v, name=f"x{i}") for i, v in enumerate(x0_list)]
    y = _ensure_ref(f(xs), arena, "grads_list")
    y.backward()
    return [x.grad for x in xs]


def evaluate(f: Callable[[List[NodeRef]], NodeRef], x0_list: Iterable[float]) -> float:
    """Forward value of f at x0_list, built in a throwaway arena."""
    arena = GraphArena()
    xs = [NodeRef.leaf(arena, v) for v in x0_list]
    return float(value(f(xs)))
