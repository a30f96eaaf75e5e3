"""
Network builders on top of GraphArena.

- Module: abstract forward/parameters/step interface
- Neuron: weighted sum + bias + optional activation
- Layer: neurons sharing the same inputs
- MLP: layers in sequence
"""

from .module import Module
from .mlp import Neuron, Layer, MLP

__all__ = [
    'Module',
    'Neuron',
    'Layer',
    'MLP'
]
