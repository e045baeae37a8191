"""
evodnn - Evolutionary training of deep feedforward neural networks.

This package provides a fully connected feedforward network with ReLU
activations and bias neurons, together with a population-based evolutionary
algorithm that searches for the network weights minimizing the sum of squared
errors over a training set.

Main components:
- activations: The ReLU activation function
- phenotype:   Network model, batched evaluator, persistence and visualization
- run:         Trainer, configuration, trial and experiment framework

Example:
    >>> from evodnn import Network, train
    >>> inputs = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    >>> ideals = [[0.0], [1.0], [1.0], [0.0]]
    >>> best = train(Network([2, 3, 1]), inputs, ideals, population_size=50,
    ...              kill_rate=0.5, target_error=0.01, max_epochs=1000)
    >>> best.feed_forward([1.0, 0.0])
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from evodnn.phenotype      import Network, NetworkFast, save, load, visualize
from evodnn.run.config     import Config
from evodnn.run.progress   import ProgressEvent
from evodnn.run.trainer    import net_error, train
from evodnn.run.trial      import Trial
from evodnn.run.experiment import Experiment

__all__ = [
    "Network",
    "NetworkFast",
    "save",
    "load",
    "visualize",
    "Config",
    "ProgressEvent",
    "net_error",
    "train",
    "Trial",
    "Experiment",
]
