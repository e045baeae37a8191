"""
evodnn Phenotype Package

This package implements the neural network evolved by evodnn: a layered, fully
connected feedforward network with ReLU activations and one bias neuron in every
layer but the last.

Modules:
    network:      Object-oriented network implementation
    network_fast: Batched NumPy evaluator of a network
    persistence:  Saving and loading networks
    visualize:    Graphviz rendering of networks

Exported Classes:
    Connection:  A weighted connection between two neurons
    Neuron:      A ReLU unit (or a constant bias unit)
    Layer:       An ordered group of neurons
    Network:     Feedforward neural network (single-sample processing)
    NetworkFast: Feedforward neural network evaluator (batch processing)

Exported Functions:
    save, load:  Persist networks to / from files
    visualize:   Render a network as a graphviz.Digraph
"""

from evodnn.phenotype.network      import Connection, Neuron, Layer, Network
from evodnn.phenotype.network_fast import NetworkFast
from evodnn.phenotype.persistence  import save, load
from evodnn.phenotype.visualize    import visualize

__all__ = ['Connection',
           'Neuron',
           'Layer',
           'Network',
           'NetworkFast',
           'save',
           'load',
           'visualize']
