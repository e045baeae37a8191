import configparser
import math
import os

NETWORK_TYPES = ('standard', 'fast')

class Config:

    @staticmethod
    def _parse_layer_sizes(raw_sizes):
        """
        Parse layer_sizes from string to list.

        Parameters:
            raw_sizes: Either a comma-separated list of integers, or already a list

        Returns:
            List of layer sizes
        """
        if isinstance(raw_sizes, str):
            try:
                sizes = [int(size.strip()) for size in raw_sizes.split(',')]
            except ValueError:
                raise ValueError(f"Invalid layer_sizes '{raw_sizes}': expected comma-separated integers") from None
        else:
            sizes = list(raw_sizes)

        if len(sizes) < 2:
            raise ValueError(f"layer_sizes needs at least two entries, got {sizes}")
        if any(int(size) != size or size < 1 for size in sizes):
            raise ValueError(f"layer_sizes entries must be positive integers, got {sizes}")
        return [int(size) for size in sizes]

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config with default values, for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.layer_sizes     = [2, 3, 1]
            self.population_size = 50
            self.kill_rate       = 0.5
            self.target_error    = 0.01
            self.max_epochs      = 1000
            self.network_type    = 'standard'
            self.num_jobs        = 1
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [NETWORK]

        # The number of neurons in each layer, excluding bias neurons.
        # The first entry is the number of inputs, the last the number of outputs.
        # Example: "2, 3, 1"
        self.layer_sizes = get_value('NETWORK', 'layer_sizes', str)

        # [TRAINING]

        # The number of networks in the population.
        self.population_size = get_value('TRAINING', 'population_size', int)

        # The fraction of the population replaced by offspring in each epoch.
        # Must be in [0, 1], and floor(kill_rate * population_size) must be less
        # than population_size.
        self.kill_rate = get_value('TRAINING', 'kill_rate', float)

        # Training stops as soon as the error of the best network
        # (sum of squared errors over the training data) is at or below this value.
        self.target_error = get_value('TRAINING', 'target_error', float)

        # The number of epochs after which to stop training.
        self.max_epochs = get_value('TRAINING', 'max_epochs', int)

        # [EXECUTION] (optional section)

        # How the networks are evaluated.
        # Allowed values:
        #   "standard" - one row at a time, with the object-oriented network
        #   "fast"     - the whole data set at once, with the batched NumPy evaluator
        self.network_type = get_value('EXECUTION', 'network_type', str, default='standard')

        # Number of parallel processes for evaluating the population
        # (1 = serial, -1 = all available CPU cores).
        self.num_jobs = get_value('EXECUTION', 'num_jobs', int, default=1)

        self._validate()

    def _validate(self):
        """Check that the parsed values are consistent."""
        if self.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {self.population_size}")
        if not 0.0 <= self.kill_rate <= 1.0:
            raise ValueError(f"kill_rate must be in [0, 1], got {self.kill_rate}")
        if math.floor(self.kill_rate * self.population_size) >= self.population_size:
            raise ValueError(f"kill_rate {self.kill_rate} would remove the whole population")
        if self.max_epochs < 0:
            raise ValueError(f"max_epochs must not be negative, got {self.max_epochs}")
        if self.network_type not in NETWORK_TYPES:
            raise ValueError(f"Unknown network_type '{self.network_type}'. Use 'standard' or 'fast'.")
        if self.num_jobs == 0:
            raise ValueError("num_jobs must not be 0")

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse layer_sizes when set.
        This allows users to write config.layer_sizes = "2, 3, 1" and have it
        automatically converted to the list [2, 3, 1].
        """
        if name == 'layer_sizes':
            value = self._parse_layer_sizes(value)
        super().__setattr__(name, value)
