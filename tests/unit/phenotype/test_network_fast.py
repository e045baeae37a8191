"""
Unit tests for NetworkFast class.

Tests cover matrix construction, forward_pass with batch processing,
the batched error, and equivalence with Network.feed_forward.
"""

import math

import numpy as np
import pytest

from evodnn.phenotype.network import Network
from evodnn.phenotype.network_fast import NetworkFast


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def deep_network(rng):
    """Network with two hidden layers and several outputs."""
    return Network([3, 5, 4, 2], rng)


@pytest.fixture
def batch(rng):
    """A batch of 16 random input rows for 'deep_network'."""
    return rng.uniform(-2.0, 2.0, size=(16, 3))


# ============================================================================
# Test NetworkFast Initialization
# ============================================================================

class TestNetworkFastInit:
    """Test weight matrix construction."""

    def test_matrix_shapes(self):
        """Test one (previous layer incl. bias, layer size) matrix per transition."""
        fast = NetworkFast(Network([2, 3, 1]))
        assert [m.shape for m in fast.weights] == [(3, 3), (4, 1)]

    def test_matrix_layout(self, rng):
        """Test that row = source neuron, column = destination neuron, bias last."""
        network = Network([2, 2, 1], rng)
        network.put_flat_weights([float(i) for i in range(network.weight_count)])
        fast = NetworkFast(network)

        np.testing.assert_array_equal(fast.weights[0], [[0.0, 3.0], [1.0, 4.0], [2.0, 5.0]])
        np.testing.assert_array_equal(fast.weights[1], [[6.0], [7.0], [8.0]])

    def test_layer_sizes(self, deep_network):
        """Test that layer sizes are copied from the network."""
        assert NetworkFast(deep_network).layer_sizes == (3, 5, 4, 2)

    def test_snapshot(self, tiny_network):
        """Test that later changes to the network are not seen."""
        fast = NetworkFast(tiny_network)
        tiny_network.put_flat_weights([-1.0, -1.0])
        np.testing.assert_array_equal(fast.forward_pass([3.0]), [[6.5]])

    def test_repr(self):
        """Test the string representation."""
        assert repr(NetworkFast(Network([2, 1]))) == "NetworkFast(layer_sizes=[2, 1])"


# ============================================================================
# Test NetworkFast Forward Pass
# ============================================================================

class TestNetworkFastForwardPass:
    """Test forward_pass method."""

    def test_single_row(self, tiny_network):
        """Test that a 1D input is treated as a batch of one."""
        outputs = NetworkFast(tiny_network).forward_pass([3.0])
        assert outputs.shape == (1, 1)
        assert outputs[0, 0] == 6.5

    def test_relu_clamps(self, tiny_network):
        """Test that negative sums give 0.0."""
        outputs = NetworkFast(tiny_network).forward_pass([[-10.0], [-0.25], [3.0]])
        np.testing.assert_array_equal(outputs, [[0.0], [0.0], [6.5]])

    def test_batch_shape(self, deep_network, batch):
        """Test output shape (batch_size, num_outputs)."""
        assert NetworkFast(deep_network).forward_pass(batch).shape == (16, 2)

    def test_matches_feed_forward(self, deep_network, batch):
        """Test that every row matches the object-oriented forward pass."""
        outputs = NetworkFast(deep_network).forward_pass(batch)
        for row, output in zip(batch, outputs):
            np.testing.assert_allclose(output, deep_network.feed_forward(row), rtol=1e-12, atol=1e-12)

    def test_accepts_lists(self, deep_network):
        """Test that nested lists are accepted."""
        outputs = NetworkFast(deep_network).forward_pass([[0.1, 0.2, 0.3], [1.0, -1.0, 0.0]])
        assert outputs.shape == (2, 2)

    def test_wrong_width(self, deep_network):
        """Test that rows with the wrong number of inputs are rejected."""
        with pytest.raises(ValueError, match="Expected 3 inputs, got 2"):
            NetworkFast(deep_network).forward_pass([[1.0, 2.0]])

    def test_wrong_ndim(self, deep_network):
        """Test that 3D inputs are rejected."""
        with pytest.raises(ValueError, match="1D or 2D"):
            NetworkFast(deep_network).forward_pass(np.zeros((2, 2, 3)))

    def test_empty_batch(self, deep_network):
        """Test that an empty input is a batch of zero rows."""
        fast = NetworkFast(deep_network)
        assert fast.forward_pass([]).shape == (0, 2)
        assert fast.forward_pass(np.zeros((0, 3))).shape == (0, 2)

    def test_nan_propagates(self, tiny_network):
        """Test that NaN weights give NaN outputs."""
        tiny_network.put_flat_weights([float('nan'), 0.5])
        assert math.isnan(NetworkFast(tiny_network).forward_pass([1.0])[0, 0])


# ============================================================================
# Test NetworkFast Error
# ============================================================================

class TestNetworkFastNetError:
    """Test net_error method."""

    def test_single_row(self, tiny_network):
        """Test (7.0 - 6.5)^2 = 0.25."""
        assert NetworkFast(tiny_network).net_error([[3.0]], [[7.0]]) == pytest.approx(0.25)

    def test_sum_over_rows(self, tiny_network):
        """Test that row errors add up: 0.25 + 1.0."""
        error = NetworkFast(tiny_network).net_error([[3.0], [-10.0]], [[7.0], [1.0]])
        assert error == pytest.approx(1.25)

    def test_returns_float(self, tiny_network):
        """Test that a plain float is returned."""
        assert type(NetworkFast(tiny_network).net_error([[3.0]], [[7.0]])) is float

    def test_matches_standard(self, rng, xor_inputs, xor_outputs):
        """Test agreement with the row by row error."""
        from evodnn.run.trainer import net_error

        network = Network([2, 4, 1], rng)
        assert NetworkFast(network).net_error(xor_inputs, xor_outputs) == \
               pytest.approx(net_error(network, xor_inputs, xor_outputs))

    def test_row_count_mismatch(self, tiny_network):
        """Test that the number of ideal rows must match the number of input rows."""
        with pytest.raises(ValueError, match="input rows"):
            NetworkFast(tiny_network).net_error([[1.0], [2.0]], [[1.0]])

    def test_empty_data(self, deep_network):
        """Test that an empty data set has zero error, as with the row by row error."""
        assert NetworkFast(deep_network).net_error([], []) == 0.0

    def test_single_ideal_row(self, tiny_network):
        """Test that a 1D ideal is a single row."""
        assert NetworkFast(tiny_network).net_error([3.0], [7.0]) == pytest.approx(0.25)

    def test_ideal_width_mismatch(self, rng):
        """Test that ideal rows must have one value per output."""
        fast = NetworkFast(Network([1, 2], rng))
        with pytest.raises(ValueError, match="Expected 2 ideal values per row, got 3"):
            fast.net_error([[1.0], [2.0]], [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])

    def test_ideals_not_rechunked(self, rng):
        """Test that ideal values are never redistributed over rows to match the batch."""
        fast = NetworkFast(Network([1, 2], rng))
        with pytest.raises(ValueError, match="2 input rows but 1 ideal rows"):
            fast.net_error([[1.0], [2.0]], [[1.0, 2.0, 3.0, 4.0]])
