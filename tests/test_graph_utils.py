import pytest

from arena_grad import GraphArena, format_graph, get_graph_stats, print_graph, print_graph_summary
from arena_grad.core.graph_utils import is_topologically_sorted, reachable_from


def _square_plus_x():
    g = GraphArena()
    x = g.input(2.0)
    z = g.mul(x, x)
    w = g.add(z, x)
    g.backward(w)
    return g, x, z, w


def test_format_graph_tree():
    g, x, z, w = _square_plus_x()
    assert format_graph(g, w) == "\n".join([
        "2: 6 (+) [grad=1]",
        "|-- 1: 4 (*) [grad=1]",
        "|   |-- 0: 2 (input) [grad=5]",
    ])


def test_format_graph_last_branch_marker():
    g = GraphArena()
    a = g.input(1.0)
    b = g.input(2.0)
    s = g.sub(a, b)
    r = g.relu(s)
    assert format_graph(g, r).splitlines() == [
        "3: 0 (relu) [grad=0]",
        "|__ 2: -1 (-) [grad=0]",
        "    |-- 0: 1 (input) [grad=0]",
        "    |__ 1: 2 (input) [grad=0]",
    ]


def test_print_graph(capsys):
    g, x, z, w = _square_plus_x()
    print_graph(g, w)
    assert "0: 2 (input) [grad=5]" in capsys.readouterr().out


def test_format_graph_invalid_root():
    with pytest.raises(IndexError):
        format_graph(GraphArena(), 0)


def test_reachable_from():
    g, x, z, w = _square_plus_x()
    other = g.input(9.0)
    assert reachable_from(g, w) == {x, z, w}
    assert reachable_from(g, other) == {other}


def test_is_topologically_sorted_detects_corruption():
    g, x, z, w = _square_plus_x()
    assert is_topologically_sorted(g)
    g.nodes[z].operands = (x, w)
    assert not is_topologically_sorted(g)


def test_graph_stats():
    g, x, z, w = _square_plus_x()
    stats = get_graph_stats(g)
    assert stats['nodes'] == 3
    assert stats['edges'] == 4
    assert stats['leaves'] == 1
    assert stats['max_fan_in'] == 2
    assert stats['max_fan_out'] == 3
    assert stats['operations'] == {'INPUT': 1, 'MUL': 1, 'ADD': 1}


def test_empty_graph_stats(capsys):
    stats = print_graph_summary(GraphArena())
    assert stats['nodes'] == 0
    assert "Empty computation graph" in capsys.readouterr().out


def test_print_graph_summary_detailed(capsys):
    g, x, z, w = _square_plus_x()
    stats = print_graph_summary(g, detailed=True)
    out = capsys.readouterr().out
    assert stats['edges'] == 4
    assert "COMPUTATION GRAPH SUMMARY" in out
    assert "[leaf/input]" in out
    assert "<- [Node1, Node0]" in out


def test_format_graph_long_chain():
    g = GraphArena()
    one = g.input(1.0)
    x = g.input(1.0)
    for _ in range(1500):
        x = g.add(x, one)
    g.backward(x)
    lines = format_graph(g, x).splitlines()
    assert lines[0] == f"{x}: 1501 (+) [grad=1]"
    assert len(lines) == 1502
    assert lines[-2].endswith("|-- 1: 1 (input) [grad=1]")
    assert lines[-1].endswith("|__ 0: 1 (input) [grad=1500]")
