"""
evodnn Experiment Module

This module defines the Experiment class, with built-in support for CPU-based
parallelization using joblib.

An experiment represents a collection of multiple independent trials (runs),
used to gather statistical data about the training algorithm's performance.
"""

from joblib     import Parallel, delayed
from statistics import mean, median
from sys        import stdout
from typing     import Type

from evodnn.run.config import Config
from evodnn.run.trial  import Trial

class Experiment:
    """
    A collection of independent trials on the same problem.

    Each trial represents one complete training run, and the experiment aggregates
    results across all trials: success rate, number of epochs needed to reach the
    target error, and final errors.

    Subclasses can override:
    - _prepare_trial(trial, trial_number): Configure each trial before execution
    - _extract_trial_results(trial, trial_number): Extract results after trial completes
                                                   (derived implementations MUST call super)
    - _analyze_trial_results(results): Process individual trial results
                                       (derived implementations MUST call super)
    - _final_report(): Produce aggregated statistical report for entire experiment

    Public Attributes (available after 'run'):
        results: The results extracted from each trial

    Public Properties:
        success_rate: Fraction of the trials that reached the target error

    Public Methods:
        run(num_jobs_trials=1, num_jobs_fitness=1): Execute the complete experiment

    Parallelization:
        Trial-level parallelization (num_jobs_trials):
            1:  Serial trial execution (no parallelization)
           >1:  Use specified number of parallel processes for trials
           -1:  Use all available CPU cores for trials

        Fitness-level parallelization within each trial (num_jobs_fitness):
            1:  Serial fitness evaluation (recommended when num_jobs_trials > 1)
           >1:  Use specified number of parallel processes per trial
           -1:  Use all available CPU cores per trial
    """

    def __init__(self, trial_class: Type[Trial], num_trials: int, config: Config,
                 *args, suppress_output: bool = False, **kwargs):
        """
        Parameters:
            trial_class:     the class describing the trials in this experiment
            num_trials:      number of trials in this experiment
            config:          configuration parameters
            *args:           positional arguments to pass to trial class constructor
            suppress_output: If True, suppress the progress line and final report
            **kwargs:        keyword arguments to pass to trial class constructor
                             (for the base Trial: inputs=..., ideals=..., rng=...)

        When 'rng' is passed, each trial receives its own child generator spawned
        from it, so trials (serial or parallel) draw independent random streams
        and the whole experiment is reproducible from one seed.
        """
        if num_trials < 1:
            raise ValueError(f"num_trials must be at least 1, got {num_trials}")

        self._num_trials     : int         = num_trials
        self._trial_class    : Type[Trial] = trial_class
        self._config         : Config      = config
        self._suppress_output: bool        = suppress_output
        self._trial_args                   = args
        self._trial_kwargs                 = kwargs

        self._reset()

    def _reset(self):
        """
        Reset experiment state before starting a new run.
        """
        self._trial_counter  : int         = 0   # how many trials we've run so far
        self._success_counter: int         = 0   # how many trials reached the target error
        self._number_epochs  : list[int]   = []  # epoch of the solution, successful trials only
        self._best_errors    : list[float] = []  # final best error, all trials
        self.results         : list[dict]  = []

    @property
    def success_rate(self) -> float:
        """Fraction of the trials run so far that reached the target error."""
        return self._success_counter / self._trial_counter if self._trial_counter else 0.0

    def run(self, num_jobs_trials: int = 1, num_jobs_fitness: int = 1):
        """
        Run the experiment.

        Resets the experiment state and runs the necessary number of trials.

        Parameters:
            num_jobs_trials:  Number of parallel processes for running trials
            num_jobs_fitness: Number of parallel processes for fitness evaluation within each trial
        """
        # Reset the state at the beginning of each new experiment
        self._reset()

        # Run all trials, gather results
        trial_rngs = self._trial_generators()
        if num_jobs_trials == 1:
            results = [self._run_trial(n, num_jobs_fitness, rng)
                       for n, rng in enumerate(trial_rngs, start=1)]
        else:
            results = Parallel(num_jobs_trials)(
                delayed(self._run_trial)(n, num_jobs_fitness, rng)
                for n, rng in enumerate(trial_rngs, start=1)
            )

        # Analyze the data of each trial, then assemble all the
        # data gathered in a final report
        for r in results:
            self._analyze_trial_results(r)

        if not self._suppress_output:
            self._final_report()

    def _trial_generators(self) -> list:
        """
        One random number generator per trial: children of the 'rng' passed to
        the constructor, or None (each trial creates its own) when there is none.
        """
        rng = self._trial_kwargs.get('rng')
        if rng is None:
            return [None] * self._num_trials
        return rng.spawn(self._num_trials)

    def _run_trial(self, trial_number: int, num_jobs: int = 1, rng=None) -> dict:
        """
        Prepare, run, analyze one trial.
        Returns the relevant data generated by the trial.

        Parameters:
            trial_number: The trial number (1-indexed)
            num_jobs:     Number of parallel processes for fitness evaluation within this trial
            rng:          The trial's random number generator (None: keep the constructor's kwargs)
        """
        kwargs = dict(self._trial_kwargs)
        if rng is not None:
            kwargs['rng'] = rng

        trial = self._trial_class(*self._trial_args, config=self._config, suppress_output=True, **kwargs)

        self._prepare_trial(trial, trial_number)
        trial.run(num_jobs)
        return self._extract_trial_results(trial, trial_number)

    def _prepare_trial(self, trial: Trial, trial_number: int):
        """
        Configure the trial about to run. The default implementation prints a progress line.
        """
        if not self._suppress_output:
            stdout.write(f"Starting trial {trial_number:03d} of {self._num_trials}...\r")
            stdout.flush()

    def _extract_trial_results(self, trial: Trial, trial_number: int) -> dict:
        """
        Extract relevant results at the end of a trial.
        """
        return {"trial_number" : trial_number,
                "number_epochs": trial.epochs,
                "best_error"   : trial.best_error,
                "success"      : not trial.failed}

    def _analyze_trial_results(self, results: dict):
        """
        Update the statistics with the results of one trial.
        """
        self._trial_counter += 1
        self.results.append(results)
        self._best_errors.append(results["best_error"])
        if results["success"]:
            self._success_counter += 1
            self._number_epochs.append(results["number_epochs"])

    def _final_report(self):
        """
        Produce the final report, aggregating the data obtained from each trial.
        """
        print(f"\nTrials:        {self._trial_counter}")
        print(f"Success rate:  {self.success_rate:.1%}")
        print(f"Best error:    mean {mean(self._best_errors):.6f}, min {min(self._best_errors):.6f}")
        if self._number_epochs:
            print(f"Epochs needed: mean {mean(self._number_epochs):.1f}, "
                  f"median {median(self._number_epochs)}, max {max(self._number_epochs)}")
