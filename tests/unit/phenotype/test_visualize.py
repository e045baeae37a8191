"""
Unit tests for network visualization.

Only the graphviz source is inspected; nothing is rendered.
"""

from unittest.mock import patch

import graphviz
import pytest

from evodnn.phenotype import Network, visualize
from evodnn.phenotype.visualize import weight_color


# ============================================================================
# Test weight_color
# ============================================================================

class TestWeightColor:
    """Test the green => yellow => red colour scale."""

    def test_min_is_green(self):
        assert weight_color(-2.0, -2.0, 2.0) == '#00ff00'

    def test_mid_is_yellow(self):
        assert weight_color(0.0, -2.0, 2.0) == '#ffff00'

    def test_max_is_red(self):
        assert weight_color(2.0, -2.0, 2.0) == '#ff0000'

    def test_quarter(self):
        """Test that the lower half blends green into yellow."""
        assert weight_color(-1.0, -2.0, 2.0) == '#7fff00'

    def test_equal_weights(self):
        """Test that all-equal weights are drawn yellow."""
        assert weight_color(1.0, 1.0, 1.0) == '#ffff00'

    @pytest.mark.parametrize("weight", [float('nan'), float('inf'), float('-inf')])
    def test_non_finite(self, weight):
        """Test that non-finite weights are drawn grey."""
        assert weight_color(weight, -1.0, 1.0) == '#808080'


# ============================================================================
# Test visualize
# ============================================================================

class TestVisualize:
    """Test visualize function."""

    def test_returns_digraph(self, rng):
        """Test that a graphviz Digraph is returned."""
        assert isinstance(visualize(Network([2, 3, 1], rng), view=False), graphviz.Digraph)

    def test_one_edge_per_connection(self, rng):
        """Test that every connection is drawn exactly once."""
        network = Network([2, 3, 1], rng)
        dot = visualize(network, view=False)
        assert dot.source.count('->') == network.weight_count

    def test_one_node_per_neuron(self, rng):
        """Test that every neuron, bias included, is drawn."""
        network = Network([2, 3, 1], rng)
        source = visualize(network, view=False).source
        for layer in network.layers:
            for neuron in layer.neurons:
                assert f"L{neuron.position[0]}N{neuron.position[1]} [" in source

    def test_one_cluster_per_layer(self, rng):
        """Test that each layer gets its own cluster."""
        source = visualize(Network([2, 3, 2, 1], rng), view=False).source
        for index in range(4):
            assert f"cluster_{index}" in source

    def test_network_unchanged(self, rng):
        """Test that rendering does not modify the network."""
        network = Network([2, 3, 1], rng)
        before = network.flat_weights()
        visualize(network, view=False)
        assert network.flat_weights() == before

    def test_non_finite_weight(self, tiny_network):
        """Test that non-finite weights do not break rendering."""
        tiny_network.put_flat_weights([float('nan'), 0.5])
        assert '#808080' in visualize(tiny_network, view=False).source

    def test_view(self, tiny_network):
        """Test that view=True opens the rendered graph."""
        with patch.object(graphviz.Digraph, 'view') as mock_view:
            tiny_network.visualize(view=True)
        mock_view.assert_called_once_with(cleanup=True)
