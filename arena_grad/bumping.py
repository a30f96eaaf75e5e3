"""
Finite-difference (bumping) gradient estimates.

Formulas:
    df/dx_i = [f(x + eps*e_i) - f(x - eps*e_i)] / (2*eps)

Each bump rebuilds the whole graph in a fresh arena, so the estimate is
independent of the reverse pass it is compared with.
"""

import time
import numpy as np
from typing import Callable, Dict, List, Optional, Sequence

from .config import GradCheckConfig
from .core.seeds import evaluate, grads_list
from .core.var import NodeRef

BuildFn = Callable[[List[NodeRef]], NodeRef]


def central_difference(f: Callable[[List[float]], float], x0: Sequence[float],
                       eps: float = 1e-6) -> np.ndarray:
    """
    Central-difference gradient of a plain float function.

    Args:
        f: maps a list of floats to a float
        x0: point of evaluation
        eps: bump size

    Returns:
        np.ndarray of partials, one per coordinate of x0
    """
    x = [float(v) for v in x0]
    out = np.zeros(len(x), dtype=np.float64)
    for i in range(len(x)):
        x_up = list(x)
        x_dn = list(x)
        x_up[i] += eps
        x_dn[i] -= eps
        out[i] = (f(x_up) - f(x_dn)) / (2 * eps)
    return out


def numeric_grads(build: BuildFn, x0: Sequence[float], eps: float = 1e-6) -> np.ndarray:
    """Central-difference gradient of a graph-building function."""
    return central_difference(lambda xs: evaluate(build, xs), x0, eps)


def check_gradients(build: BuildFn, x0: Sequence[float],
                    config: Optional[GradCheckConfig] = None) -> Dict:
    """
    Compare the reverse-pass gradient of `build` with central differences.

    Args:
        build: takes a list of input NodeRefs and returns the output NodeRef
        x0: input values
        config: tolerances and bump size

    Returns:
        {
            'analytic': np.ndarray,    # gradient from one backward pass
            'numeric': np.ndarray,     # central-difference estimate
            'max_abs_err': float,
            'ok': bool,                # numpy.allclose(analytic, numeric, rtol, atol)
            'time_ms': float,
        }
    """
    config = config or GradCheckConfig()
    start_time = time.time()

    analytic = np.asarray(grads_list(build, x0), dtype=np.float64)
    numeric = numeric_grads(build, x0, config.eps)

    max_abs_err = float(np.max(np.abs(analytic - numeric))) if len(analytic) else 0.0
    ok = bool(np.allclose(analytic, numeric, rtol=config.rtol, atol=config.atol))

    return {
        'analytic': analytic,
        'numeric': numeric,
        'max_abs_err': max_abs_err,
        'ok': ok,
        'time_ms': (time.time() - start_time) * 1000,
    }
