"""
evodnn Trainer Module

This module implements the evolutionary algorithm that searches for network
weights minimizing the sum of squared errors over a training set.

The trainer is a set of free functions without hidden state: the population,
the training data, the configuration and the random number generator are all
passed in explicitly.

One epoch (generation) of training consists of:
 1. evaluating every network on the training data and sorting the population
    by error, best first
 2. reporting the best network if it is new, and stopping if it is good enough
 3. culling: removing individuals chosen by a walk biased towards the worst
 4. refilling: appending mutated copies of parents chosen by a walk biased
    towards the best

Functions:
    net_error(network, inputs, ideals):    Sum of squared errors of a network
    evaluate_population(population, ...):  Errors of all networks of a population
    sort_population(population, ...):      Sort a population by error, best first
    init_population(first, size, rng):     Create the initial population
    kill_bad(population, rng):             Remove a (probably) bad individual
    add_mutation(population, rng):         Append the offspring of a (probably) good individual
    train(first, inputs, ideals, ...):     Run the evolutionary algorithm
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np
from joblib import Parallel, delayed

from evodnn.phenotype    import Network, NetworkFast
from evodnn.run.config   import NETWORK_TYPES
from evodnn.run.progress import ProgressEvent, ProgressListener

logger = logging.getLogger(__name__)

# The expected number of weights changed in an offspring.
MUTATIONS_PER_OFFSPRING = 4.0

def net_error(network: Network, inputs: Sequence[Sequence[float]], ideals: Sequence[Sequence[float]]) -> float:
    """
    Calculate the total error of a network over a data set.

    The error is the sum, over all rows and all output dimensions,
    of (ideal - predicted)^2.

    Parameters:
        network: the network to test
        inputs:  the input rows to feed the network
        ideals:  the expected outputs, one row per input row

    Returns:
        the total error
    """
    if len(inputs) != len(ideals):
        raise ValueError(f"Got {len(inputs)} input rows but {len(ideals)} ideal rows")

    error = 0.0
    for row, ideal in zip(inputs, ideals):
        output = network.feed_forward(row)
        if len(ideal) != len(output):
            raise ValueError(f"Expected {len(output)} ideal values per row, got {len(ideal)}")
        for expected, predicted in zip(ideal, output):
            error += (expected - predicted) ** 2

    return error

def _evaluate(network: Network, inputs, ideals, network_type: str) -> float:
    if network_type == 'fast':
        return NetworkFast(network).net_error(inputs, ideals)
    return net_error(network, inputs, ideals)

def evaluate_population(population  : list[Network],
                        inputs      : Sequence[Sequence[float]],
                        ideals      : Sequence[Sequence[float]],
                        num_jobs    : int = 1,
                        network_type: str = 'standard') -> list[float]:
    """
    Calculate the error of every network in the population.

    Parameters:
        population:   the networks to evaluate
        inputs:       the input rows of the training data
        ideals:       the expected output rows of the training data
        num_jobs:     Number of parallel processes used for the evaluation
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        network_type: 'standard' evaluates row by row with Network.feed_forward,
                      'fast' evaluates the whole data set at once with NetworkFast

    Returns:
        the errors, in population order
    """
    if network_type not in NETWORK_TYPES:
        raise ValueError(f"Unknown network_type: {network_type}. Use 'standard' or 'fast'.")

    if num_jobs == 1:
        return [_evaluate(network, inputs, ideals, network_type) for network in population]

    return list(Parallel(num_jobs)(delayed(_evaluate)(network, inputs, ideals, network_type)
                                   for network in population))

def sort_population(population  : list[Network],
                    inputs      : Sequence[Sequence[float]],
                    ideals      : Sequence[Sequence[float]],
                    num_jobs    : int = 1,
                    network_type: str = 'standard') -> tuple[list[Network], list[float]]:
    """
    Sort the population by error, ascending.

    The sort is stable: networks with equal errors keep their relative order.
    Networks with a NaN error are placed last.

    Returns:
        the sorted population (a new list) and the matching errors
    """
    errors = evaluate_population(population, inputs, ideals, num_jobs, network_type)
    order  = sorted(range(len(population)), key=lambda i: (math.isnan(errors[i]), errors[i]))
    return [population[i] for i in order], [errors[i] for i in order]

def init_population(first: Network, population_size: int, rng: np.random.Generator) -> list[Network]:
    """
    Create a population made of 'first' and (population_size - 1) new
    networks of the same topology, with freshly initialized weights.
    """
    population = [first]
    while len(population) < population_size:
        population.append(Network(first.layer_sizes, rng))
    return population

def kill_bad(population: list[Network], rng: np.random.Generator) -> Network:
    """
    Remove a (probably) bad individual from a population sorted by error.

    Starting from the worst individual, keep moving one place towards the best
    with probability 0.5, and remove the individual where the walk stops. If the
    walk moves past the best individual, the worst one is removed instead.

    Returns:
        the removed individual
    """
    index = len(population) - 1
    while index >= 0 and rng.random() < 0.5:
        index -= 1

    if index < 0:
        index = len(population) - 1

    return population.pop(index)

def add_mutation(population: list[Network], rng: np.random.Generator) -> Network:
    """
    Append the offspring of a (probably) good individual to a population sorted by error.

    Starting from the best individual, keep moving one place towards the worst
    with probability 0.5; the individual where the walk stops is the parent. If
    the walk moves past the worst individual, the best one is the parent instead.
    The offspring mutates on average MUTATIONS_PER_OFFSPRING of the parent's weights.

    Returns:
        the new individual
    """
    index = 0
    while index < len(population) and rng.random() < 0.5:
        index += 1

    if index >= len(population):
        index = 0

    parent = population[index]
    child  = parent.mutate(MUTATIONS_PER_OFFSPRING / parent.weight_count, rng)
    population.append(child)
    return child

def train(first            : Network,
          inputs           : Sequence[Sequence[float]],
          ideals           : Sequence[Sequence[float]],
          population_size  : int,
          kill_rate        : float,
          target_error     : float,
          max_epochs       : int,
          progress_listener: Optional[ProgressListener] = None,
          rng              : Optional[np.random.Generator] = None,
          num_jobs         : int = 1,
          network_type     : str = 'standard') -> Network:
    """
    Search for a network minimizing the error over a data set, using an
    evolutionary algorithm.

    Parameters:
        first:             the first network of the population; the other ones are
                           new networks of the same topology
        inputs:            the input rows to feed the networks
        ideals:            the expected outputs, one row per input row
        population_size:   the number of individuals in the population
        kill_rate:         the fraction of the population replaced in each epoch
        target_error:      training stops as soon as the best error is at or below this value
        max_epochs:        the maximal number of epochs
        progress_listener: (optional) called with a ProgressEvent every time
                           a new best network is found
        rng:               random number generator
        num_jobs:          number of parallel processes for evaluating the population
        network_type:      'standard' or 'fast', see 'evaluate_population'

    Returns:
        the best network found
    """
    if population_size < 1:
        raise ValueError(f"population_size must be at least 1, got {population_size}")
    if not 0.0 <= kill_rate <= 1.0:
        raise ValueError(f"kill_rate must be in [0, 1], got {kill_rate}")
    if max_epochs < 0:
        raise ValueError(f"max_epochs must not be negative, got {max_epochs}")

    kill_count = math.floor(kill_rate * population_size)
    if kill_count >= population_size:
        raise ValueError(f"kill_rate {kill_rate} would remove the whole population")

    rng = rng if rng is not None else np.random.default_rng()
    population = init_population(first, population_size, rng)
    best       = None

    for epoch in range(max_epochs):
        population, errors = sort_population(population, inputs, ideals, num_jobs, network_type)

        # Check for a new best network
        if population[0] is not best:
            best, error = population[0], errors[0]
            logger.debug("epoch %d: new best network, error=%.6f", epoch, error)

            if progress_listener is not None:
                progress_listener(ProgressEvent(best, error, epoch))

            if error <= target_error:
                logger.debug("epoch %d: target error %.6f reached", epoch, target_error)
                return best

        # Kill bad
        for _ in range(kill_count):
            kill_bad(population, rng)

        # Mutate good
        while len(population) < population_size:
            add_mutation(population, rng)

    population, errors = sort_population(population, inputs, ideals, num_jobs, network_type)
    logger.debug("epoch budget of %d exhausted, best error=%.6f", max_epochs, errors[0])
    return population[0]
