"""
Configuration defaults for gradient checks and network initialisation.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class GradCheckConfig:
    """Settings for comparing analytic gradients with central differences.

    Attributes:
        eps: Bump size used on each input coordinate
        rtol: Relative tolerance passed to numpy.allclose
        atol: Absolute tolerance passed to numpy.allclose
    """
    eps: float = 1e-6
    rtol: float = 1e-5
    atol: float = 1e-7


@dataclass
class InitConfig:
    """Uniform weight initialisation for network builders.

    Attributes:
        low: Lower bound of the uniform distribution
        high: Upper bound of the uniform distribution
        seed: Seed for numpy.random.default_rng (None for fresh entropy)
    """
    low: float = -1.0
    high: float = 1.0
    seed: Optional[int] = None

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

    @staticmethod
    def scaled(n_in: int, seed: Optional[int] = None) -> "InitConfig":
        """
        Bounds shrinking with fan-in: +-1/sqrt(n_in)

        Example:
            n_in=4: low=-0.5, high=0.5
        """
        bound = 1.0 / np.sqrt(max(n_in, 1))
        return InitConfig(low=-float(bound), high=float(bound), seed=seed)
