"""
evodnn Network Module

This module implements a layered, fully connected feedforward neural network
with ReLU activations. It uses an Object Oriented approach to representing
Connections, Neurons, Layers and the Network, which makes the network easy to
inspect (for visualization, persistence, debugging).

Neurons are stored per layer in index-addressable lists. A Connection does not
hold references to the neurons it joins; it stores their (layer index, neuron
index) positions instead, so the object graph has no cycles and pickles cleanly.

The weights of all connections, read in a fixed order, form the network's
genome: layer ascending, neuron ascending within the layer, incoming connection
ascending within the neuron. 'flat_weights' and 'put_flat_weights' both walk the
connections in this order.

Classes:
    Connection: A weighted directed edge between two neurons
    Neuron:     A ReLU unit aggregating its incoming connections
    Layer:      An ordered group of neurons, optionally ending with a bias neuron
    Network:    A stack of fully connected layers
"""

import logging
import math
from typing import Iterator, Optional, Sequence

import numpy as np

from evodnn.activations import relu_activation

logger = logging.getLogger(__name__)

class Connection:
    """
    A weighted connection between two neurons in adjacent layers.

    Public Attributes:
        source:      (layer index, neuron index) of the neuron the signal comes from
        destination: (layer index, neuron index) of the neuron the signal goes to
        weight:      Weight multiplier applied to the transmitted signal.
                     Not validated: any float, including NaN and inf, is accepted.
    """

    def __init__(self, source: tuple[int, int], destination: tuple[int, int], weight: float):
        self.source     : tuple[int, int] = source
        self.destination: tuple[int, int] = destination
        self.weight     : float           = weight

    def __repr__(self):
        return (f"Connection(source={self.source}, destination={self.destination}, "
                f"weight={self.weight:+.6f})")

class Neuron:
    """
    A computational node (neuron) in a layer of the network.

    A regular neuron computes its value as ReLU(sum of weight * source value) over
    its incoming connections. A bias neuron has a constant value of 1.0 and no
    incoming connections; it gives each neuron of the next layer an adjustable offset.

    The incoming connections of a regular neuron are created here, one per neuron
    of the previous layer (bias neuron included), with He initialized weights:
    gaussian with standard deviation sqrt(2 / fan_in), fan_in being the size of the
    previous layer. Neurons in the input layer have no incoming connections.

    Public Attributes:
        position: (layer index, neuron index) of this neuron
        is_bias:  Whether this is a bias neuron
        value:    The current output; transient, recomputed on every forward pass
        incoming: The incoming connections, in the order of the previous layer's neurons

    Public Methods:
        update(previous_layer): Recompute the value from the previous layer's values
    """

    def __init__(self,
                 position      : tuple[int, int],
                 is_bias       : bool = False,
                 previous_layer: Optional['Layer'] = None,
                 rng           : Optional[np.random.Generator] = None):
        """
        Parameters:
            position:       (layer index, neuron index) of this neuron
            is_bias:        Whether to create a bias neuron
            previous_layer: The layer feeding this neuron, None for the input layer
            rng:            Random number generator used to draw the initial weights
        """
        self.position: tuple[int, int]  = position
        self.is_bias : bool             = is_bias
        self.value   : float            = 1.0 if is_bias else 0.0
        self.incoming: list[Connection] = []

        if is_bias or previous_layer is None:
            return

        rng = rng if rng is not None else np.random.default_rng()
        fan_in  = len(previous_layer)
        weights = rng.normal(0.0, math.sqrt(2.0 / fan_in), size=fan_in)
        for source, weight in zip(previous_layer.neurons, weights):
            self.incoming.append(Connection(source.position, position, float(weight)))

    def update(self, previous_layer: 'Layer') -> None:
        """
        Recompute the value of this neuron.

        All neurons of 'previous_layer' must already hold their values for the
        current forward pass. Bias neurons keep their constant value.

        Parameters:
            previous_layer: the layer the incoming connections come from
        """
        if self.is_bias:
            return

        sources = previous_layer.neurons
        raw = sum(conn.weight * sources[conn.source[1]].value for conn in self.incoming)
        self.value = float(relu_activation(raw))

    def __str__(self):
        kind = "bias" if self.is_bias else f"{len(self.incoming)} inputs"
        return f"Neuron({self.position[0]:02d}:{self.position[1]:02d}, {kind}, value={self.value:+.4f})"

    def __repr__(self):
        return f"Neuron(position={self.position}, is_bias={self.is_bias})"

class Layer:
    """
    An ordered group of neurons.

    When the layer has a bias neuron, it is always the last one. The order of the
    neurons is fixed at construction and never changes.

    Public Attributes:
        index:    Position of the layer in the network (0 = input layer)
        neurons:  The neurons of this layer, bias neuron included
        has_bias: Whether the layer ends with a bias neuron

    Public Methods:
        update(previous_layer): Recompute the values of all neurons
        values():               The values of the non-bias neurons
    """

    def __init__(self,
                 index         : int,
                 size          : int,
                 add_bias      : bool,
                 previous_layer: Optional['Layer'] = None,
                 rng           : Optional[np.random.Generator] = None):
        """
        Parameters:
            index:          Position of the layer in the network
            size:           Number of non-bias neurons
            add_bias:       Whether to append a bias neuron
            previous_layer: The layer feeding this one, None for the input layer
            rng:            Random number generator used to draw the initial weights
        """
        rng = rng if rng is not None else np.random.default_rng()

        self.index   : int          = index
        self.has_bias: bool         = add_bias
        self.neurons : list[Neuron] = [Neuron((index, i), False, previous_layer, rng) for i in range(size)]
        if add_bias:
            self.neurons.append(Neuron((index, size), is_bias=True))

    def update(self, previous_layer: 'Layer') -> None:
        """Update every neuron, in index order, from the values of 'previous_layer'."""
        for neuron in self.neurons:
            neuron.update(previous_layer)

    def values(self) -> list[float]:
        """The values of the non-bias neurons, in index order."""
        return [neuron.value for neuron in self.neurons if not neuron.is_bias]

    def __len__(self):
        return len(self.neurons)

    def __getitem__(self, position: int) -> Neuron:
        return self.neurons[position]

    def __repr__(self):
        return f"Layer(index={self.index}, size={len(self.neurons)}, has_bias={self.has_bias})"

class Network:
    """
    A fully connected feedforward neural network.

    The first layer receives the inputs, the last one delivers the outputs. Every
    layer except the last ends with a bias neuron. Each non-bias neuron outside the
    input layer is connected to every neuron of the previous layer.

    The topology never changes after construction. The connection weights are the
    only persistent state, and are replaced as a whole by 'put_flat_weights'.
    'mutate' leaves the network untouched and returns a new one.

    Two networks compare equal when they have the same number of layers and
    identical genomes. The per-layer sizes are not compared: two networks with
    different shapes but equal weight sequences compare equal.

    Public Attributes:
        layers:      The layers of the network
        layer_sizes: Number of non-bias neurons in each layer

    Public Properties:
        weight_count: Number of connections (length of the genome)

    Public Methods:
        feed_forward(inputs):       Propagate inputs through the network
        flat_weights():             The genome, as a list of weights
        put_flat_weights(weights):  Replace all weights from a genome
        mutate(chance):             Create a mutated copy of this network
        save(path), load(path):     Persist the network to / from a file
        visualize(view):            Render the network with graphviz
    """

    def __init__(self, layer_sizes: Sequence[int], rng: Optional[np.random.Generator] = None):
        """
        Parameters:
            layer_sizes: Number of non-bias neurons in each layer; the first entry
                         is the number of inputs, the last the number of outputs
            rng:         Random number generator used to draw the initial weights
        """
        if len(layer_sizes) < 2:
            raise ValueError(f"A network must have at least two layers, got {len(layer_sizes)}")
        for size in layer_sizes:
            if int(size) != size or size < 1:
                raise ValueError(f"Layer sizes must be positive integers, got {list(layer_sizes)}")

        rng = rng if rng is not None else np.random.default_rng()

        self.layer_sizes: tuple[int, ...] = tuple(int(size) for size in layer_sizes)
        self.layers     : list[Layer]     = []

        last     = len(self.layer_sizes) - 1
        previous = None
        for index, size in enumerate(self.layer_sizes):
            layer = Layer(index, size, add_bias=index != last, previous_layer=previous, rng=rng)
            self.layers.append(layer)
            previous = layer

        self._weight_count: int = sum(1 for _ in self._connections())

    @property
    def weight_count(self) -> int:
        """Total number of connections in the network."""
        return self._weight_count

    def _connections(self) -> Iterator[Connection]:
        """Iterate over all connections, in genome order."""
        for layer in self.layers:
            for neuron in layer.neurons:
                yield from neuron.incoming

    def feed_forward(self, inputs: Sequence[float]) -> list[float]:
        """
        Perform a complete forward pass through the network.

        Parameters:
            inputs: the network inputs (as many as non-bias input neurons)

        Returns:
            the values of the output neurons
        """
        if len(inputs) != self.layer_sizes[0]:
            raise ValueError(f"Expected {self.layer_sizes[0]} inputs, got {len(inputs)}")

        # zip() stops before the bias neuron, which keeps its constant value
        for neuron, value in zip(self.layers[0].neurons, inputs):
            neuron.value = float(value)

        for previous, layer in zip(self.layers, self.layers[1:]):
            layer.update(previous)

        return self.layers[-1].values()

    def flat_weights(self) -> list[float]:
        """Return a snapshot of the genome."""
        return [conn.weight for conn in self._connections()]

    def put_flat_weights(self, weights: Sequence[float]) -> None:
        """
        Overwrite every connection weight, in genome order.

        The network is left unchanged if the number of weights is wrong.

        Parameters:
            weights: the new weights, exactly one per connection
        """
        weights = list(weights)
        if len(weights) != self._weight_count:
            raise ValueError(f"Expected {self._weight_count} weights, got {len(weights)}")

        for conn, weight in zip(self._connections(), weights):
            conn.weight = float(weight)

    def mutate(self,
               weight_mutation_chance: float,
               rng                   : Optional[np.random.Generator] = None,
               max_attempts          : int = 1000) -> 'Network':
        """
        Create a new network with the same topology and a mutated genome.

        Each weight is mutated independently with probability 'weight_mutation_chance'.
        A mutated weight undergoes one of four equally likely changes:
         + replace it with a uniform value in [-1, 1]
         + negate it
         + multiply it by a uniform factor in [-1, 1]
         + add a uniform jitter in [-0.5, 0.5]

        If the resulting network equals this one, the mutation is started over.

        Parameters:
            weight_mutation_chance: probability of mutating each weight; must be
                                    positive (values above 1 mutate every weight)
            rng:                    random number generator
            max_attempts:           how many times to start over before giving up

        Returns:
            the mutated network; this network is not modified
        """
        if not weight_mutation_chance > 0.0:
            raise ValueError(f"weight_mutation_chance must be positive, got {weight_mutation_chance}")

        rng = rng if rng is not None else np.random.default_rng()
        original = self.flat_weights()

        for attempt in range(max_attempts):
            clone = Network(self.layer_sizes, rng)
            clone.put_flat_weights(self._mutated_weights(original, weight_mutation_chance, rng))
            if clone != self:
                return clone
            logger.debug("mutation of %r left the genome unchanged (attempt %d)", self, attempt + 1)

        raise RuntimeError(f"No mutation changed the genome after {max_attempts} attempts "
                           f"(weight_mutation_chance={weight_mutation_chance})")

    @staticmethod
    def _mutated_weights(weights: list[float], chance: float, rng: np.random.Generator) -> list[float]:
        mutated = list(weights)
        for i, weight in enumerate(mutated):
            if rng.random() >= chance:
                continue

            if rng.random() < 0.5:
                if rng.random() < 0.5:
                    mutated[i] = rng.uniform(-1.0, 1.0)
                else:
                    mutated[i] = -weight
            else:
                if rng.random() < 0.5:
                    mutated[i] = weight * rng.uniform(-1.0, 1.0)
                else:
                    mutated[i] = weight + rng.uniform(-0.5, 0.5)
        return mutated

    def save(self, path) -> None:
        """Save this network to 'path'. See 'evodnn.phenotype.persistence'."""
        # Import here to avoid circular import
        from evodnn.phenotype.persistence import save
        save(self, path)

    @staticmethod
    def load(path) -> 'Network':
        """Load a network saved with 'save'."""
        # Import here to avoid circular import
        from evodnn.phenotype.persistence import load
        return load(path)

    def visualize(self, view: bool = True):
        """Render the network. See 'evodnn.phenotype.visualize'."""
        # Import here to avoid circular import
        from evodnn.phenotype.visualize import visualize
        return visualize(self, view)

    def __eq__(self, other):
        if not isinstance(other, Network):
            return NotImplemented
        return len(self.layers) == len(other.layers) and self.flat_weights() == other.flat_weights()

    # equality depends on mutable weights
    __hash__ = None

    def __str__(self):
        lines = []
        for layer in self.layers:
            lines.append(f"Layer {layer.index:02d}:")
            lines.extend(f"  {neuron}" for neuron in layer.neurons)
        return "\n".join(lines)

    def __repr__(self):
        return f"Network(layer_sizes={list(self.layer_sizes)}, weights={self._weight_count})"
