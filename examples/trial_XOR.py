"""
XOR Problem Implementation for evodnn

This module trains a feedforward network on the classic XOR (exclusive OR)
problem, a benchmark that cannot be solved without a hidden layer.

The XOR Problem:
    Input (0, 0) → Output 0
    Input (0, 1) → Output 1
    Input (1, 0) → Output 1
    Input (1, 1) → Output 0

Error Function:
    Error = Σ(target - output)²

    A perfect network has an error of 0.0; training stops when the error
    reaches the 'target_error' of the configuration file.

Classes:
    Trial_XOR:      Training run on XOR, printing the truth table of each new best network
    Experiment_XOR: Multi-trial experiment for XOR with statistical analysis

Usage:
    python examples/trial_XOR.py                      # single trial
    python examples/trial_XOR.py --experiment 30      # 30 trials
"""

import argparse
from pathlib import Path

from evodnn.phenotype import Network
from evodnn.run       import Config, Experiment, ProgressEvent, Trial

XOR_INPUTS  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
XOR_OUTPUTS = [[0.0],      [1.0],      [1.0],      [0.0]]

CONFIG_FILE = Path(__file__).parent / 'configs' / 'config_xor.ini'

class Trial_XOR(Trial):
    """
    Training run on the XOR problem.

    Implemented Methods:
        _report_progress(event): Display the error and XOR truth table of each new best network
        _final_report():         Display the result and visualize the trained network
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        super().__init__(config, XOR_INPUTS, XOR_OUTPUTS, suppress_output)

    @staticmethod
    def _truth_table(network: Network) -> str:
        s  = "input         output   target  error\n"
        s += "------------------------------------\n"
        for inputs, target in zip(XOR_INPUTS, XOR_OUTPUTS):
            output = network.feed_forward(inputs)[0]
            s += f"{inputs} -> {output:.4f}    {target[0]}   {abs(output - target[0]):.4f}\n"
        return s

    def _report_progress(self, event: ProgressEvent):
        s  = f"===============\n"
        s += f"EPOCH {event.epoch:05d}\n"
        s += f"error = {event.error:.6f}\n\n"
        s += self._truth_table(event.network)
        print(s)

    def _final_report(self):
        super()._final_report()

        self.best.save('xor_network.pkl')
        print("Network saved as 'xor_network.pkl' (see scripts/visualize_network.py)")

        # Visualize the network
        try:
            self.best.visualize()
            print("Network visualization saved as 'Digraph.gv.pdf'")
        except Exception as e:
            print(f"Could not visualize network: {e}")

class Experiment_XOR(Experiment):

    def __init__(self, num_trials: int, config: Config):
        super().__init__(Trial_XOR, num_trials, config)

    def _analyze_trial_results(self, results: dict):
        # Call parent class method to populate statistics lists
        super()._analyze_trial_results(results)

        s  = f"Trial {results['trial_number']:03d}: "
        s += f"error={results['best_error']:.6f}, "
        s += f"epochs={results['number_epochs']:5} "
        s += "[SUCCESS]" if results['success'] else "[FAILED]"
        print(s)

def main():
    parser = argparse.ArgumentParser(description='Train a network on XOR')
    parser.add_argument('--config', type=str, default=str(CONFIG_FILE),
                        help='Path to the INI configuration file')
    parser.add_argument('--experiment', type=int, metavar='NUM_TRIALS', default=0,
                        help='Run an experiment with this many trials instead of a single trial')
    parser.add_argument('--num-jobs', type=int, default=1,
                        help='Number of parallel jobs')
    args = parser.parse_args()

    config = Config(args.config)

    if args.experiment:
        Experiment_XOR(args.experiment, config).run(num_jobs_trials=args.num_jobs)
    else:
        Trial_XOR(config).run(num_jobs=args.num_jobs)

if __name__ == '__main__':
    main()
