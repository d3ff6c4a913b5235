"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest


@pytest.fixture
def regression_batch() -> tuple[np.ndarray, np.ndarray]:
    """One output per instance: diffs are 0, 1 and -0.5."""
    scores = np.array([[0.0], [1.0], [0.5]])
    labels = np.array([0.0, 0.0, 1.0])
    return scores, labels


@pytest.fixture
def classification_batch() -> tuple[np.ndarray, np.ndarray]:
    """Two classes, third row is a tie (predicts class 0)."""
    scores = np.array([
        [0.9, 0.1],
        [0.2, 0.8],
        [0.5, 0.5],
    ])
    labels = np.array([0.0, 1.0, 1.0])
    return scores, labels


@pytest.fixture
def probability_batch() -> tuple[np.ndarray, np.ndarray]:
    """Scores and labels in [0, 1] with a known correlation."""
    rng = np.random.default_rng(7)
    labels = rng.uniform(0.0, 1.0, size=50)
    scores = np.clip(labels + rng.normal(0.0, 0.2, size=50), 0.0, 1.0)
    return scores, labels
