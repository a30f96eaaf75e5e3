import numpy as np
import pytest

from arena_grad import GraphArena, Op
from arena_grad.core.graph_utils import is_topologically_sorted


@pytest.mark.parametrize("op, a, b, expected", [
    (Op.ADD, 2.5, -1.0, 1.5),
    (Op.SUB, 5.0, 3.0, 2.0),
    (Op.SUB, 3.0, 5.0, -2.0),
    (Op.MUL, -1.5, 4.0, -6.0),
    (Op.DIV, 6.0, 3.0, 2.0),
    (Op.DIV, 3.0, 6.0, 0.5),
])
def test_combine_forward(op, a, b, expected):
    g = GraphArena()
    ia = g.input(a)
    ib = g.input(b)
    out = g.combine(op, ia, ib)
    assert g.value(out) == pytest.approx(expected)
    assert g.node(out).operands == (ia, ib)


def test_unary_and_power_forward():
    g = GraphArena()
    pos = g.input(1.5)
    neg = g.input(-2.0)
    assert g.value(g.unary(Op.RELU, pos)) == 1.5
    assert g.value(g.unary(Op.RELU, neg)) == 0.0
    assert g.value(g.unary(Op.TANH, pos)) == pytest.approx(np.tanh(1.5))
    p = g.power(pos, 3.0)
    assert g.value(p) == pytest.approx(1.5 ** 3)
    assert g.node(p).exponent == 3.0
    assert g.node(p).op is Op.POW


def test_shorthands_match_combine():
    g = GraphArena()
    a = g.input(4.0)
    b = g.input(2.0)
    assert g.value(g.add(a, b)) == 6.0
    assert g.value(g.sub(a, b)) == 2.0
    assert g.value(g.mul(a, b)) == 8.0
    assert g.value(g.div(a, b)) == 2.0
    assert g.value(g.relu(a)) == 4.0
    assert g.value(g.tanh(b)) == pytest.approx(np.tanh(2.0))


def test_indices_are_sequential():
    g = GraphArena()
    ids = [g.input(float(i)) for i in range(3)]
    ids.append(g.add(ids[0], ids[1]))
    ids.append(g.power(ids[3], 2))
    assert ids == [0, 1, 2, 3, 4]
    assert len(g) == 5


def test_leaf_node_fields():
    g = GraphArena()
    x = g.input(7)
    node = g.node(x)
    assert node.op is Op.INPUT
    assert node.operands == ()
    assert node.grad == 0.0
    assert isinstance(node.value, np.float64)


def test_random_graph_is_topologically_sorted():
    rng = np.random.default_rng(3)
    g = GraphArena()
    for _ in range(4):
        g.input(float(rng.normal()))
    ops = [Op.ADD, Op.SUB, Op.MUL, Op.DIV]
    for _ in range(60):
        kind = rng.integers(0, 3)
        a = int(rng.integers(0, len(g)))
        if kind == 0:
            b = int(rng.integers(0, len(g)))
            g.combine(ops[int(rng.integers(0, 4))], a, b)
        elif kind == 1:
            g.unary(Op.TANH, a)
        else:
            g.power(a, 2.0)
    assert is_topologically_sorted(g)
    for i, node in enumerate(g):
        assert all(p < i for p in node.operands)


def test_construction_does_not_mutate_existing_nodes():
    g = GraphArena()
    x = g.input(2.0)
    y = g.input(3.0)
    before = [(n.value, n.operands) for n in g]
    g.mul(x, y)
    g.tanh(x)
    assert [(n.value, n.operands) for n in g.nodes[:2]] == before


def test_read_is_pure():
    g = GraphArena()
    x = g.input(2.0)
    y = g.mul(x, x)
    g.backward(y)
    assert g.read(x) == (2.0, 4.0)
    assert g.read(x) == (2.0, 4.0)
    assert g.read(y) == (4.0, 1.0)


def test_set_value_does_not_recompute_downstream():
    g = GraphArena()
    x = g.input(2.0)
    y = g.mul(x, x)
    g.set_value(x, 10.0)
    assert g.value(x) == 10.0
    assert g.value(y) == 4.0


# ----------------------------- preconditions ----------------------------- #
def test_out_of_range_operand_raises():
    g = GraphArena()
    x = g.input(1.0)
    with pytest.raises(IndexError):
        g.add(x, 5)
    with pytest.raises(IndexError):
        g.relu(1)
    with pytest.raises(IndexError):
        g.power(3, 2.0)


def test_negative_index_raises():
    g = GraphArena()
    g.input(1.0)
    with pytest.raises(IndexError):
        g.mul(-1, 0)
    with pytest.raises(IndexError):
        g.backward(-1)


def test_backward_root_out_of_range():
    g = GraphArena()
    g.input(1.0)
    with pytest.raises(IndexError):
        g.backward(1)


def test_wrong_op_family_raises():
    g = GraphArena()
    x = g.input(1.0)
    with pytest.raises(ValueError):
        g.combine(Op.RELU, x, x)
    with pytest.raises(ValueError):
        g.unary(Op.ADD, x)
    with pytest.raises(ValueError):
        g.unary(Op.POW, x)


def test_non_numeric_input_raises():
    g = GraphArena()
    with pytest.raises(TypeError):
        g.input("2.0")
    with pytest.raises(TypeError):
        g.input(None)
    x = g.input(1.0)
    with pytest.raises(TypeError):
        g.power(x, "2")
    with pytest.raises(TypeError):
        g.add(x, 0.0)


def test_operand_count_matches_op_arity():
    g = GraphArena()
    x = g.input(2.0)
    g.add(x, x)
    g.tanh(x)
    g.power(x, 2.0)
    for node in g:
        assert len(node.operands) == node.op.arity
    with pytest.raises(ValueError):
        g._push(Op.ADD, np.float64(1.0), (x,))
    with pytest.raises(ValueError):
        g._push(Op.INPUT, np.float64(1.0), (x,))
