"""
evodnn Fast Network Module

This module implements a batched, NumPy based evaluator for a Network. The
object-oriented Network processes one input vector at a time; NetworkFast packs
the weights of each layer transition into a matrix and propagates a whole batch
of inputs with one matrix product per layer.

NetworkFast is a snapshot: it copies the weights when created, and does not see
later changes to the Network it was built from.

Classes:
    NetworkFast: High-performance batch evaluator of a Network
"""

import numpy as np
from typing import TYPE_CHECKING

from evodnn.activations import relu_activation

if TYPE_CHECKING:
    from evodnn.phenotype.network import Network

class NetworkFast:
    """
    Batch-processing evaluator of a Network.

    For each layer transition i-1 => i a matrix of shape (len(layer i-1), size i)
    is built, where row r holds the weights of the connections leaving neuron r of
    layer i-1. The bias neuron, when present, is the last row; during the forward
    pass a column of ones is appended to the activations to feed it.

    Public Attributes:
        layer_sizes: Number of non-bias neurons in each layer
        weights:     One weight matrix per layer transition

    Public Methods:
        forward_pass(inputs):      Process a batch through the network
                                   Input:  (batch_size, num_inputs) or (num_inputs,)
                                   Output: (batch_size, num_outputs)
        net_error(inputs, ideals): Sum of squared errors over a batch
    """

    def __init__(self, network: 'Network'):
        """
        Parameters:
            network: the Network to evaluate
        """
        self.layer_sizes: tuple[int, ...]  = network.layer_sizes
        self.weights    : list[np.ndarray] = []

        for previous, layer, size in zip(network.layers, network.layers[1:], network.layer_sizes[1:]):
            matrix = np.zeros((len(previous), size), dtype=np.float64)
            for neuron in layer.neurons:
                if neuron.is_bias:
                    continue
                column = neuron.position[1]
                for conn in neuron.incoming:
                    matrix[conn.source[1], column] = conn.weight
            self.weights.append(matrix)

    @staticmethod
    def _as_batch(rows, width: int) -> np.ndarray:
        """
        Convert 'rows' to a 2D float array. A 1D sequence is a batch of one row,
        an empty sequence is a batch of zero rows of the given width.
        """
        batch = np.asarray(rows, dtype=np.float64)
        if batch.size == 0 and batch.ndim == 1:
            return batch.reshape(0, width)
        if batch.ndim == 1:
            return batch.reshape(1, -1)
        if batch.ndim != 2:
            raise ValueError(f"Input must be 1D or 2D array, got {batch.ndim}D")
        return batch

    def forward_pass(self, inputs) -> np.ndarray:
        """
        Perform forward pass through the network using batch operations.

        Parameters:
            inputs: Input values as numpy array or list
                    Shape: (batch_size, num_inputs) or (num_inputs,)

        Returns:
            Output values as numpy array
            Shape: (batch_size, num_outputs)
        """
        values = self._as_batch(inputs, self.layer_sizes[0])
        if values.shape[1] != self.layer_sizes[0]:
            raise ValueError(f"Expected {self.layer_sizes[0]} inputs, got {values.shape[1]}")

        ones = np.ones((values.shape[0], 1), dtype=np.float64)
        for matrix in self.weights:
            # every layer feeding another one carries a bias neuron
            values = relu_activation(np.hstack((values, ones)) @ matrix)

        return values

    def net_error(self, inputs, ideals) -> float:
        """
        Sum, over the batch and over the output dimensions, of the squared
        difference between ideal and predicted outputs.

        The data is checked the same way as 'evodnn.run.trainer.net_error':
        one ideal row per input row, one ideal value per output.
        """
        outputs = self.forward_pass(inputs)
        ideals  = self._as_batch(ideals, self.layer_sizes[-1])
        if outputs.shape[0] != ideals.shape[0]:
            raise ValueError(f"Got {outputs.shape[0]} input rows but {ideals.shape[0]} ideal rows")
        if outputs.shape[1] != ideals.shape[1]:
            raise ValueError(f"Expected {outputs.shape[1]} ideal values per row, got {ideals.shape[1]}")
        return float(np.sum((ideals - outputs) ** 2))

    def __repr__(self):
        return f"NetworkFast(layer_sizes={list(self.layer_sizes)})"
