"""
Shared fixtures for integration tests.
"""

import numpy as np
import pytest


@pytest.fixture
def seeded_rng():
    """Generator with a fixed seed, so that training runs are reproducible."""
    return np.random.default_rng(2024)


@pytest.fixture
def linear_data():
    """y = 0.5 * x + 1 on [0, 2], learnable exactly by Network([1, 1])."""
    xs = np.linspace(0.0, 2.0, 9)
    return [[x] for x in xs], [[0.5 * x + 1.0] for x in xs]


@pytest.fixture
def xor_inputs_batch():
    """XOR inputs for the batched evaluator (numpy array format)."""
    return np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])


@pytest.fixture
def xor_outputs_batch():
    """XOR expected outputs for the batched evaluator (numpy array format)."""
    return np.array([[0.0], [1.0], [1.0], [0.0]])
