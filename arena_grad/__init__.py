# arena_grad/__init__.py
# Scalar reverse-mode automatic differentiation over an index-addressed arena

from .core.node import Op, Node
from .core.arena import GraphArena
from .core.var import NodeRef
from .core.seeds import grad, grads, grads_list, value

from .core.graph_utils import format_graph, print_graph, get_graph_stats, print_graph_summary
from .bumping import check_gradients, central_difference
from .config import GradCheckConfig, InitConfig

__all__ = [
    # Core
    'Op',
    'Node',
    'GraphArena',
    'NodeRef',
    # Wrappers
    'grad',
    'grads',
    'grads_list',
    'value',
    # Diagnostics
    'format_graph',
    'print_graph',
    'get_graph_stats',
    'print_graph_summary',
    # Checks
    'check_gradients',
    'central_difference',
    # Config
    'GradCheckConfig',
    'InitConfig',
]
