"""
Base class for network modules.

A module turns input node indices into output node indices by appending
nodes to a GraphArena. It never touches arena internals; only the public
construction calls are used.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..core.arena import GraphArena


class Module(ABC):
    """
    Anything that can forward through a GraphArena.

    Parameters are plain floats owned by the module. Each forward pass
    records them as fresh input nodes; `parameters()` returns the indices
    created by the most recent pass so their gradients can be read back.
    """

    @abstractmethod
    def forward(self, arena: GraphArena, inputs: Sequence[int]) -> List[int]:
        """
        Append this module's computation to `arena`.

        Args:
            arena: arena receiving the new nodes
            inputs: indices of existing nodes fed into the module

        Returns:
            indices of the output nodes
        """
        pass

    @abstractmethod
    def parameters(self) -> List[int]:
        """Indices of the parameter leaves created by the last forward pass."""
        pass

    @abstractmethod
    def step(self, arena: GraphArena, lr: float) -> None:
        """Gradient-descent update of the owned floats from the arena's grads."""
        pass

    def __call__(self, arena: GraphArena, inputs: Sequence[int]) -> List[int]:
        return self.forward(arena, inputs)
