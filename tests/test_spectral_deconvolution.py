# -*- coding: utf-8 -*-
"""
Spectral Deconvolution Tests - Per-channel kernel application.

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

from tpcsig.exceptions import InvalidInputError, SizeMismatchError
from tpcsig.processing.spectral import SpectralDeconvolution, SpectralTransform


@pytest.fixture
def channels():
    """Four channels of 16 ticks with distinct content."""
    rng = np.random.default_rng(3)
    return rng.normal(size=(4, 16))


def _unit_kernel(n):
    return np.ones(n // 2 + 1, dtype=complex)


class TestSpectralDeconvolution:
    """SpectralDeconvolution applied to (channels, ticks) arrays."""

    def test_unit_kernel_identity(self, channels):
        out = SpectralDeconvolution(_unit_kernel(16)).apply(channels)
        np.testing.assert_allclose(out, channels, atol=1e-12)
        assert out.dtype == np.float64

    def test_rows_match_engine(self, channels):
        engine = SpectralTransform(16)
        response = engine.response_kernel([1.0, 0.3, 0.1])
        kernel = engine.wiener_kernel(response, 0.05)
        out = SpectralDeconvolution(kernel, time_offset=-2).apply(channels)
        for row_in, row_out in zip(channels, out):
            np.testing.assert_allclose(
                row_out, engine.deconvolute(row_in, kernel, -2))

    def test_convolute_mode_shift_direction(self, channels):
        k = _unit_kernel(16)
        deconv = SpectralDeconvolution(k, time_offset=2).apply(channels)
        conv = SpectralDeconvolution(k, time_offset=2,
                                     mode='convolute').apply(channels)
        np.testing.assert_allclose(deconv, np.roll(channels, -2, axis=1),
                                   atol=1e-12)
        np.testing.assert_allclose(conv, np.roll(channels, 2, axis=1),
                                   atol=1e-12)

    def test_undoes_blur(self, channels):
        engine = SpectralTransform(16)
        response = engine.response_kernel([1.0, 0.5])
        blurred = SpectralDeconvolution(response, mode='convolute').apply(
            channels)
        restored = SpectralDeconvolution(
            engine.wiener_kernel(response, 0.0)).apply(blurred)
        np.testing.assert_allclose(restored, channels, atol=1e-10)

    def test_runtime_offset_override(self, channels):
        d = SpectralDeconvolution(_unit_kernel(16))
        out = d.apply(channels, time_offset=1)
        np.testing.assert_allclose(out, np.roll(channels, -1, axis=1),
                                   atol=1e-12)
        assert d.time_offset == 0

    def test_invalid_mode_override(self, channels):
        with pytest.raises(InvalidInputError, match="allowed choices"):
            SpectralDeconvolution(_unit_kernel(16)).apply(
                channels, mode='correlate')

    def test_plane_stack(self, channels):
        stack = np.stack([channels, 2.0 * channels])
        out = SpectralDeconvolution(_unit_kernel(16), time_offset=-1).apply(
            stack)
        assert out.shape == (2, 4, 16)
        np.testing.assert_allclose(out[1], 2.0 * np.roll(channels, 1, axis=1),
                                   atol=1e-12)

    def test_kernel_too_short_for_ticks(self, channels):
        with pytest.raises(SizeMismatchError):
            SpectralDeconvolution(_unit_kernel(8)).apply(channels)

    @pytest.mark.parametrize('kwargs', [
        {'kernel': np.ones((3, 3))},
        {'kernel': np.array([])},
        {'kernel': np.ones(9), 'time_offset': 1.5},
        {'kernel': np.ones(9), 'mode': 'correlate'},
    ])
    def test_invalid_construction(self, kwargs):
        with pytest.raises(InvalidInputError):
            SpectralDeconvolution(**kwargs)

    def test_invalid_waveform(self):
        with pytest.raises(InvalidInputError):
            SpectralDeconvolution(_unit_kernel(16)).apply(np.zeros(16))
