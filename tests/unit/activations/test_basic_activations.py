"""
Unit tests for the relu activation function.
"""

import math

import numpy as np
import pytest

from evodnn.activations import relu_activation


class TestReluActivation:
    """Test relu_activation function."""

    def test_scalar_negative(self):
        """Test that negative inputs give exactly zero."""
        assert relu_activation(-3.5) == 0.0

    def test_scalar_zero(self):
        """Test that zero passes through."""
        assert relu_activation(0.0) == 0.0

    def test_scalar_positive(self):
        """Test that positive inputs pass through unchanged."""
        assert relu_activation(6.5) == 6.5

    def test_tiny_negative(self):
        """Test the boundary just below zero."""
        assert relu_activation(-1e-300) == 0.0

    def test_array(self):
        """Test element-wise application on a 2D array."""
        result = relu_activation(np.array([[-1.0, 0.0], [2.0, -3.0]]))
        np.testing.assert_array_equal(result, [[0.0, 0.0], [2.0, 0.0]])

    def test_nan_propagates(self):
        """Test that NaN is not hidden by the activation."""
        assert math.isnan(relu_activation(float('nan')))

    @pytest.mark.parametrize("value", [float('inf'), 1e308])
    def test_large_values(self, value):
        """Test that large positive values pass through."""
        assert relu_activation(value) == value

    def test_negative_infinity(self):
        """Test that -inf is clamped to zero."""
        assert relu_activation(float('-inf')) == 0.0
