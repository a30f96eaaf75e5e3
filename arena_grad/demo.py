"""
Demonstration: build a small graph, run backward, print the tree.

    python -m arena_grad.demo                 # w = x*x + x at x=2
    python -m arena_grad.demo --x 3.5
    python -m arena_grad.demo --mlp --seed 0  # tiny MLP with squared-error loss
"""

import argparse
import logging
import sys

from .config import InitConfig
from .core.arena import GraphArena
from .core.graph_utils import format_graph, print_graph_summary
from .nn.mlp import MLP


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='GraphArena reverse-mode AD demo',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--x', type=float, default=2.0,
                        help='Input value for w = x*x + x')
    parser.add_argument('--mlp', action='store_true',
                        help='Run the MLP example instead')
    parser.add_argument('--sizes', type=str, default='2,3,1',
                        help='Comma-separated MLP layer sizes')
    parser.add_argument('--seed', type=int, default=0,
                        help='Weight initialisation seed')
    parser.add_argument('--summary', action='store_true',
                        help='Print graph statistics')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')
    return parser.parse_args(argv)


def run_square_plus_x(x0: float):
    """w = x*x + x; dw/dx = 2x + 1."""
    g = GraphArena()
    x = g.input(x0)
    z = g.mul(x, x)
    w = g.add(z, x)
    g.backward(w)
    return g, w, x


def run_mlp(sizes, seed: int):
    """Squared error of an MLP output against target 1.0."""
    g = GraphArena()
    net = MLP.build(sizes, init=InitConfig(seed=seed))
    inputs = [g.input(0.5 * (i + 1)) for i in range(sizes[0])]
    out = net(g, inputs)[0]
    target = g.input(1.0)
    diff = g.sub(out, target)
    loss = g.power(diff, 2.0)
    g.backward(loss)
    return g, loss, net


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.mlp:
        sizes = [int(s) for s in args.sizes.split(',') if s.strip()]
        g, root, net = run_mlp(sizes, args.seed)
        print(f"loss = {g.value(root):.6f}")
        for i in net.parameters():
            print(f"  param node {i:3d}: value={g.value(i): .6f} grad={g.grad(i): .6f}")
    else:
        g, root, x = run_square_plus_x(args.x)
        print(f"w = {g.value(root):g}, dw/dx = {g.grad(x):g}")
        print(format_graph(g, root))

    if args.summary:
        print_graph_summary(g)
    return 0


if __name__ == "__main__":
    sys.exit(main())
