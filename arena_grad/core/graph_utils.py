"""
Graph diagnostics.

Printing and statistics over a GraphArena. None of this is needed for
differentiation; it only reads node fields.
"""

import numpy as np
from typing import Dict, List, Set, Tuple
from collections import Counter

from .node import Op


def format_graph(arena, root: int) -> str:
    """
    Render the subgraph reachable from `root` as an indented tree.

    Each line is "idx: value (symbol) [grad=g]". Operands are listed below
    their consumer; a node already shown is skipped the second time.

    Only the parent's flag draws a branch ("|-- " / "|__ "); the other
    ancestors draw "|   " or four spaces. Values use the general `g`
    format rather than fixed precision.

    The walk uses an explicit stack, so graph depth is not bounded by the
    interpreter's recursion limit.
    """
    arena.node(root)
    lines: List[str] = []
    visited: Set[int] = set()
    stack: List[Tuple[int, List[bool]]] = [(root, [])]
    while stack:
        idx, ancestors_last = stack.pop()
        if idx in visited:
            continue
        visited.add(idx)
        node = arena.nodes[idx]
        lines.append(_format_line(node, idx, ancestors_last))

        # reversed so operands pop in their stored order
        n = len(node.operands)
        for i in range(n - 1, -1, -1):
            stack.append((node.operands[i], ancestors_last + [i == n - 1]))
    return "\n".join(lines)


def _format_line(node, idx: int, ancestors_last: List[bool]) -> str:
    prefix = "".join("    " if is_last else "|   " for is_last in ancestors_last[:-1])
    if ancestors_last:
        prefix += "|__ " if ancestors_last[-1] else "|-- "
    return f"{prefix}{idx}: {float(node.value):g} ({node.op.symbol}) [grad={float(node.grad):g}]"


def print_graph(arena, root: int) -> None:
    """Print the tree produced by format_graph."""
    print(format_graph(arena, root))


def reachable_from(arena, root: int) -> Set[int]:
    """Indices of `root` and all of its ancestors."""
    arena.node(root)
    seen = {root}
    stack = [root]
    while stack:
        for p in arena.nodes[stack.pop()].operands:
            if p not in seen:
                seen.add(p)
                stack.append(p)
    return seen


def is_topologically_sorted(arena) -> bool:
    """True when every operand index is smaller than its consumer's index."""
    return all(p < i for i, node in enumerate(arena.nodes) for p in node.operands)


def get_graph_stats(arena) -> Dict:
    """
    Collect graph statistics (no printing).

    Returns:
        dict with node/edge/leaf counts, fan-in/fan-out figures and an
        operation breakdown keyed by Op name
    """
    nodes = arena.nodes
    if not nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(nodes)
    fan_ins = [len(node.operands) for node in nodes]
    fan_outs = [0] * n_nodes
    for node in nodes:
        for p in node.operands:
            fan_outs[p] += 1

    op_counter = Counter(node.op.name for node in nodes)

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'leaves': op_counter.get(Op.INPUT.name, 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(arena, detailed: bool = False) -> Dict:
    """
    Print a summary of the arena.

    Args:
        arena: GraphArena to describe
        detailed: also list every node (only for arenas up to 100 nodes)

    Returns:
        the statistics dictionary from get_graph_stats
    """
    stats = get_graph_stats(arena)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_name, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_name:8s}: {count:6,} ({pct:5.1f}%)")

    if detailed and stats['nodes'] <= 100:
        print()
        print("="*70)
        print("DETAILED NODE LIST")
        print("="*70)
        for i, node in enumerate(arena.nodes):
            if node.operands:
                operand_info = ", ".join(f"Node{p}" for p in node.operands)
                print(f"Node {i:3d}: {node.op.symbol:6s} ({float(node.value):10.6f}) <- [{operand_info}]")
            else:
                print(f"Node {i:3d}: {node.op.symbol:6s} ({float(node.value):10.6f}) [leaf/input]")

    print("="*70 + "\n")
    return stats
