"""
evodnn Run Package

This package implements the training algorithm and its execution.

A trial represents a complete training run, evolving a population of networks
until one reaches the target error or the maximum number of epochs is reached.

An experiment represents a collection of multiple trials for gathering statistical data.

Modules:
    config:     Configuration management
    progress:   Events reported when a new best network is found
    trainer:    The evolutionary algorithm, as free functions
    trial:      A single training run
    experiment: Multi-trial runs

Exported Classes:
    Config:        Configuration parameters
    ProgressEvent: A new best network, its error and epoch
    Trial:         A single training run with joblib parallelization
    Experiment:    Multi-trial runs

Exported Functions:
    train:     Run the evolutionary algorithm
    net_error: Sum of squared errors of a network over a data set
"""

from evodnn.run.config     import Config
from evodnn.run.progress   import ProgressEvent, ProgressListener
from evodnn.run.trainer    import net_error, train
from evodnn.run.trial      import Trial
from evodnn.run.experiment import Experiment

__all__ = ['Config', 'ProgressEvent', 'ProgressListener', 'net_error', 'train', 'Trial', 'Experiment']
