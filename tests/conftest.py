"""Shared test fixtures for imudev tests."""
import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random generator for reproducible arrays."""
    return np.random.default_rng(42)


@pytest.fixture
def recording(rng):
    """SINGLE_TIMESERIES recording: 3D signal over 50 timepoints."""
    return rng.standard_normal((3, 50))


@pytest.fixture
def stacked(rng):
    """STACKED_ARRAY: state 3x2, 5 timepoints, 4 samples."""
    return rng.standard_normal((3, 2, 5, 4))


@pytest.fixture
def state_obs_arrays(rng):
    """State/observation arrays laid out as (state=3, batch=4, time=5)."""
    return rng.standard_normal((3, 4, 5)), rng.standard_normal((3, 4, 5))
