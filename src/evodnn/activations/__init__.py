"""
Activations Package

This package provides the activation function used by evodnn neural networks.
The function is vectorized: it accepts Python floats as well as NumPy arrays,
so the object-oriented Network and the batched NetworkFast share it.

Exported:
    relu_activation: Rectified linear unit, max(0, z)
"""

from evodnn.activations.basic_activations import relu_activation

__all__ = ['relu_activation']
