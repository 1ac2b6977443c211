# -*- coding: utf-8 -*-
"""
Shared test fixtures - Synthetic waveform arrays for tpcsig tests.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

import numpy as np
import pytest


@pytest.fixture
def flat_waveforms():
    """Constant 16 x 64 array at 5.0."""
    return np.full((16, 64), 5.0)


@pytest.fixture
def random_waveforms():
    """Gaussian noise (sigma 2) on a 100-count pedestal, 24 x 128."""
    rng = np.random.default_rng(42)
    return 100.0 + rng.normal(0.0, 2.0, size=(24, 128))


@pytest.fixture
def step_waveforms():
    """Noisy step edge along ticks: 0 for ticks < 32, 100 after."""
    rng = np.random.default_rng(7)
    x = np.zeros((16, 64))
    x[:, 32:] = 100.0
    return x + rng.normal(0.0, 1.0, size=x.shape)


@pytest.fixture
def spike_waveforms():
    """Zero array with a single 100-count spike at (10, 20)."""
    x = np.zeros((21, 41))
    x[10, 20] = 100.0
    return x


@pytest.fixture
def center_peak():
    """3 x 3 array with a bright center sample."""
    return np.array([[1.0, 1.0, 1.0],
                     [1.0, 10.0, 1.0],
                     [1.0, 1.0, 1.0]])
