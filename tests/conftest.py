"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from evodnn.phenotype import Network


class SequenceRng:
    """
    Stand-in for numpy.random.Generator with scripted draws.

    'random()' and 'uniform()' return the scripted values in order, then fall
    back to 'default_random' / the midpoint of the interval once exhausted.
    'uniform()' records the bounds it was called with. 'normal()' is delegated
    to a seeded generator, so networks can still be built with it.
    """

    def __init__(self, randoms=(), uniforms=(), default_random=0.99):
        self._randoms        = list(randoms)
        self._uniforms       = list(uniforms)
        self._default_random = default_random
        self._generator      = np.random.default_rng(0)
        self.uniform_bounds  = []

    def random(self):
        return self._randoms.pop(0) if self._randoms else self._default_random

    def uniform(self, low, high):
        self.uniform_bounds.append((low, high))
        return self._uniforms.pop(0) if self._uniforms else (low + high) / 2

    def normal(self, *args, **kwargs):
        return self._generator.normal(*args, **kwargs)


@pytest.fixture
def rng():
    """A seeded random number generator, for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_rng():
    """Factory for SequenceRng instances."""
    return SequenceRng


@pytest.fixture
def tiny_network(rng):
    """
    Network([1, 1]): one input neuron plus bias, one output neuron.
    Connection order: input => output (2.0), bias => output (0.5).
    """
    network = Network([1, 1], rng)
    network.put_flat_weights([2.0, 0.5])
    return network


@pytest.fixture
def xor_inputs():
    """XOR inputs."""
    return [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]


@pytest.fixture
def xor_outputs():
    """XOR expected outputs."""
    return [[0.0], [1.0], [1.0], [0.0]]
