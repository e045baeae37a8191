"""
evodnn Trial Module

This module defines the Trial class, with built-in support for CPU-based
parallelization of the fitness evaluation using joblib.

A trial represents one independent training run: a fresh network of the
configured topology seeds a population, which evolves until a network reaches
the target error or the maximum number of epochs is reached.
"""

from typing import Optional, Sequence

import numpy as np

from evodnn.phenotype    import Network
from evodnn.run.config   import Config
from evodnn.run.progress import ProgressEvent
from evodnn.run.trainer  import net_error, train

class Trial:
    """
    One training run on a fixed data set.

    Subclasses can override:
    - _report_progress(event): Display progress when a new best network is found
    - _final_report():         Display final results

    Public Attributes (available after 'run'):
        best:       The best network found
        best_error: Its error over the training data
        epochs:     The epoch in which the best network was found
        history:    The ProgressEvent(s) reported during training
        failed:     True if the target error was not reached

    Public Methods:
        run(): Execute a complete training run

    Parallelization of fitness evaluation for the population:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self,
                 config         : Config,
                 inputs         : Sequence[Sequence[float]],
                 ideals         : Sequence[Sequence[float]],
                 suppress_output: bool = False,
                 rng            : Optional[np.random.Generator] = None):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            inputs:          Input rows of the training data
            ideals:          Expected output rows of the training data
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials in experiments)
            rng:             Random number generator (a new one if None)
        """
        if len(inputs) != len(ideals):
            raise ValueError(f"Got {len(inputs)} input rows but {len(ideals)} ideal rows")

        self._config         : Config              = config
        self._inputs                               = inputs
        self._ideals                               = ideals
        self._suppress_output: bool                = suppress_output
        self._rng            : np.random.Generator = rng if rng is not None else np.random.default_rng()

        self._reset()

    def run(self, num_jobs: Optional[int] = None) -> Network:
        """
        Run the trial.

        Resets the trial state and trains a new network.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation
                      (defaults to 'config.num_jobs')

        Returns:
            the best network found
        """
        self._reset()
        config = self._config

        seed = Network(config.layer_sizes, self._rng)
        self.best = train(seed, self._inputs, self._ideals,
                          population_size   = config.population_size,
                          kill_rate         = config.kill_rate,
                          target_error      = config.target_error,
                          max_epochs        = config.max_epochs,
                          progress_listener = self._on_progress,
                          rng               = self._rng,
                          num_jobs          = num_jobs if num_jobs is not None else config.num_jobs,
                          network_type      = config.network_type)

        self.best_error = net_error(self.best, self._inputs, self._ideals)
        self.failed     = self.best_error > config.target_error

        if not self._suppress_output:
            self._final_report()

        return self.best

    def _reset(self):
        """
        Reset the trial state before starting a new run.
        """
        self.best      : Optional[Network]   = None
        self.best_error: Optional[float]     = None
        self.epochs    : int                 = 0
        self.history   : list[ProgressEvent] = []
        self.failed    : bool                = True

    def _on_progress(self, event: ProgressEvent):
        self.history.append(event)
        self.epochs = event.epoch
        if not self._suppress_output:
            self._report_progress(event)

    def _report_progress(self, event: ProgressEvent):
        """
        Report a new best network.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        print(f"Epoch {event.epoch:05d}: new best network, error = {event.error:.6f}")

    def _final_report(self):
        """
        Produce final report at the end of the trial.
        """
        outcome = "FAILED" if self.failed else "SUCCESS"
        print(f"\n{outcome}: best error = {self.best_error:.6f} "
              f"(target {self._config.target_error}), found in epoch {self.epochs}")
        print(f"Network: {self.best!r}")
