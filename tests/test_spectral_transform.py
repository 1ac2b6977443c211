# -*- coding: utf-8 -*-
"""
Spectral Transform Tests - FFT engine, kernels and circular shifts.

Tests forward/inverse consistency, conjugate symmetry of the full
spectrum, kernel multiplication against direct circular convolution,
the opposite rotation conventions of convolute and deconvolute, power
spectra, kernel builders and length checks.

Dependencies
------------
pytest

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
from tpcsig.processing.spectral import SpectralTransform


@pytest.fixture
def ramp():
    """0, 1, ..., 7."""
    return np.arange(8.0)


@pytest.fixture
def engine8():
    return SpectralTransform(num_samples=8)


def _unit_kernel(n):
    return np.ones(n // 2 + 1, dtype=complex)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    """Engine configuration."""

    def test_default_length(self):
        engine = SpectralTransform()
        assert engine.num_samples == 4096
        assert engine.num_bins == 2049

    @pytest.mark.parametrize('n, bins', [(1, 1), (2, 2), (7, 4), (8, 5)])
    def test_num_bins(self, n, bins):
        assert SpectralTransform(n).num_bins == bins

    @pytest.mark.parametrize('n', [0, -8, 8.0, True])
    def test_invalid_length(self, n):
        with pytest.raises(InvalidInputError):
            SpectralTransform(n)

    def test_repr(self, engine8):
        assert repr(engine8) == 'SpectralTransform(num_samples=8)'


# ---------------------------------------------------------------------------
# Forward / inverse
# ---------------------------------------------------------------------------

class TestForwardInverse:
    """Forward and inverse transforms."""

    @pytest.mark.parametrize('n', [1, 2, 7, 8, 64, 101])
    def test_round_trip(self, n):
        rng = np.random.default_rng(n)
        x = rng.normal(size=n)
        engine = SpectralTransform(n)
        np.testing.assert_allclose(engine.inverse_fft(engine.forward_fft(x)),
                                   x, atol=1e-12)

    @pytest.mark.parametrize('n', [7, 8])
    def test_full_spectrum_matches_complex_fft(self, n):
        rng = np.random.default_rng(0)
        x = rng.normal(size=n)
        np.testing.assert_allclose(SpectralTransform(n).forward_fft(x),
                                   np.fft.fft(x), atol=1e-12)

    @pytest.mark.parametrize('n', [9, 16])
    def test_conjugate_symmetry(self, n):
        x = np.random.default_rng(5).normal(size=n)
        spectrum = SpectralTransform(n).forward_fft(x)
        assert spectrum.shape == (n,)
        assert spectrum.dtype == np.complex128
        for k in range(1, n):
            assert spectrum[k] == pytest.approx(np.conj(spectrum[n - k]))

    def test_inverse_reads_half_spectrum_only(self, engine8, ramp):
        spectrum = engine8.forward_fft(ramp)
        spectrum[5:] = 1e6 + 1e6j
        np.testing.assert_allclose(engine8.inverse_fft(spectrum), ramp,
                                   atol=1e-9)

    def test_inverse_accepts_half_spectrum(self, engine8, ramp):
        half = engine8.forward_fft(ramp)[:5]
        np.testing.assert_allclose(engine8.inverse_fft(half), ramp,
                                   atol=1e-12)

    def test_inverse_normalized(self, engine8):
        # DC bin of N: unnormalized forward of ones
        out = engine8.inverse_fft(np.array([8.0, 0, 0, 0, 0]))
        np.testing.assert_allclose(out, np.ones(8))

    def test_integer_input(self, engine8):
        out = engine8.forward_fft(np.arange(8))
        assert out[0] == pytest.approx(28.0)

    def test_wrong_length(self, engine8):
        with pytest.raises(SizeMismatchError, match="7 samples"):
            engine8.forward_fft(np.zeros(7))

    def test_too_few_bins(self, engine8):
        with pytest.raises(SizeMismatchError, match="needs at least 5"):
            engine8.inverse_fft(np.zeros(4, dtype=complex))

    def test_complex_time_vector_rejected(self, engine8):
        with pytest.raises(InvalidInputError, match="real"):
            engine8.forward_fft(np.zeros(8, dtype=complex))

    def test_2d_time_vector_rejected(self, engine8):
        with pytest.raises(InvalidInputError, match="1D"):
            engine8.forward_fft(np.zeros((2, 4)))

    def test_workers_forwarded(self, ramp):
        threaded = SpectralTransform(8, workers=2)
        np.testing.assert_allclose(threaded.forward_fft(ramp),
                                   SpectralTransform(8).forward_fft(ramp))


# ---------------------------------------------------------------------------
# Convolution and shifts
# ---------------------------------------------------------------------------

class TestConvolute:
    """Kernel multiplication and the convolute shift convention."""

    def test_unit_kernel_is_identity(self, engine8, ramp):
        np.testing.assert_allclose(engine8.convolute(ramp, _unit_kernel(8)),
                                   ramp, atol=1e-12)

    def test_matches_circular_convolution(self):
        rng = np.random.default_rng(21)
        n = 32
        x = rng.normal(size=n)
        response = rng.normal(size=n)
        engine = SpectralTransform(n)
        expected = np.real(np.fft.ifft(np.fft.fft(x) * np.fft.fft(response)))
        out = engine.convolute(x, engine.response_kernel(response))
        np.testing.assert_allclose(out, expected, atol=1e-12)

    def test_negative_offset_rotates_left(self, engine8, ramp):
        out = engine8.convolute(ramp, _unit_kernel(8), time_offset=-2)
        np.testing.assert_allclose(out, [2, 3, 4, 5, 6, 7, 0, 1], atol=1e-12)

    def test_positive_offset_rotates_right(self, engine8, ramp):
        out = engine8.convolute(ramp, _unit_kernel(8), time_offset=3)
        np.testing.assert_allclose(out, [5, 6, 7, 0, 1, 2, 3, 4], atol=1e-12)

    def test_zero_offset_no_shift(self, engine8, ramp):
        out = engine8.convolute(ramp, _unit_kernel(8), time_offset=0)
        np.testing.assert_allclose(out, ramp, atol=1e-12)

    def test_offset_wraps(self, engine8, ramp):
        k = _unit_kernel(8)
        np.testing.assert_allclose(engine8.convolute(ramp, k, time_offset=9),
                                   engine8.convolute(ramp, k, time_offset=1))

    def test_longer_kernel_uses_half(self, engine8, ramp):
        full = np.ones(8, dtype=complex)
        full[5:] = 0.0
        np.testing.assert_allclose(engine8.convolute(ramp, full), ramp,
                                   atol=1e-12)

    def test_short_kernel(self, engine8, ramp):
        with pytest.raises(SizeMismatchError, match="Kernel"):
            engine8.convolute(ramp, np.ones(4, dtype=complex))

    def test_non_integer_offset(self, engine8, ramp):
        with pytest.raises(InvalidInputError, match="time_offset"):
            engine8.convolute(ramp, _unit_kernel(8), time_offset=1.5)

    def test_input_not_modified(self, engine8, ramp):
        kernel = _unit_kernel(8) * 2.0
        engine8.convolute(ramp, kernel, time_offset=2)
        np.testing.assert_array_equal(ramp, np.arange(8.0))
        np.testing.assert_array_equal(kernel, _unit_kernel(8) * 2.0)


class TestDeconvolute:
    """The deconvolute shift convention is the mirror of convolute."""

    def test_negative_offset_rotates_right(self, engine8, ramp):
        out = engine8.deconvolute(ramp, _unit_kernel(8), time_offset=-2)
        np.testing.assert_allclose(out, [6, 7, 0, 1, 2, 3, 4, 5], atol=1e-12)

    def test_positive_offset_rotates_left(self, engine8, ramp):
        out = engine8.deconvolute(ramp, _unit_kernel(8), time_offset=3)
        np.testing.assert_allclose(out, [3, 4, 5, 6, 7, 0, 1, 2], atol=1e-12)

    def test_default_offset_no_shift(self, engine8, ramp):
        np.testing.assert_allclose(engine8.deconvolute(ramp, _unit_kernel(8)),
                                   ramp, atol=1e-12)

    @pytest.mark.parametrize('offset', [-5, -1, 1, 4])
    def test_opposite_of_convolute(self, engine8, offset):
        x = np.random.default_rng(4).normal(size=8)
        k = _unit_kernel(8)
        np.testing.assert_allclose(engine8.deconvolute(x, k, offset),
                                   engine8.convolute(x, k, -offset))

    def test_wiener_kernel_undoes_response(self):
        n = 64
        x = np.random.default_rng(9).normal(size=n)
        engine = SpectralTransform(n)
        response = engine.response_kernel([1.0, 0.5])
        blurred = engine.convolute(x, response)
        restored = engine.deconvolute(blurred,
                                      engine.wiener_kernel(response, 0.0))
        np.testing.assert_allclose(restored, x, atol=1e-10)

    def test_shifted_response_recentered(self):
        n = 32
        x = np.zeros(n)
        x[10] = 1.0
        engine = SpectralTransform(n)
        # response delays the pulse by 3 ticks
        response = engine.response_kernel(np.eye(1, 4, 3).ravel())
        blurred = engine.convolute(x, response)
        assert np.argmax(blurred) == 13
        # unit kernel, pull the pulse back by rotating left
        restored = engine.deconvolute(blurred, _unit_kernel(n), time_offset=3)
        assert np.argmax(restored) == 10


# ---------------------------------------------------------------------------
# Power spectrum and kernels
# ---------------------------------------------------------------------------

class TestSpectralEstimates:
    """Power spectrum, frequency axis and kernel builders."""

    def test_sinusoid_power_peak(self):
        n = 64
        t = np.arange(n)
        x = np.cos(2.0 * np.pi * 5 * t / n)
        power = SpectralTransform(n).get_fft_power(x)
        assert power.shape == (33,)
        assert np.argmax(power) == 5
        assert power[5] == pytest.approx(32.0)
        assert power[6] == pytest.approx(0.0, abs=1e-9)

    def test_off_bin_sinusoid_peaks_at_nearest_bin(self):
        n = 64
        t = np.arange(n)
        x = np.cos(2.0 * np.pi * 5.4 * t / n)
        power = SpectralTransform(n).get_fft_power(x)
        peak = int(np.argmax(power))
        assert abs(peak - 5) <= 1
        # leakage falls off away from the tone
        assert power[peak] > 10.0 * power[20]
        assert power[peak] < 32.0

    def test_power_leaves_input(self, engine8, ramp):
        engine8.get_fft_power(ramp)
        np.testing.assert_array_equal(ramp, np.arange(8.0))

    def test_power_wrong_length(self, engine8):
        with pytest.raises(SizeMismatchError):
            engine8.get_fft_power(np.zeros(9))

    def test_frequencies(self, engine8):
        np.testing.assert_allclose(engine8.frequencies(),
                                   [0.0, 0.125, 0.25, 0.375, 0.5])
        np.testing.assert_allclose(engine8.frequencies(0.5)[-1], 1.0)

    def test_frequencies_bad_period(self, engine8):
        with pytest.raises(InvalidInputError):
            engine8.frequencies(0.0)

    def test_impulse_response_kernel(self, engine8):
        kernel = engine8.response_kernel([1.0])
        assert kernel.shape == (5,)
        np.testing.assert_allclose(kernel, np.ones(5))

    def test_response_too_long(self, engine8):
        with pytest.raises(SizeMismatchError):
            engine8.response_kernel(np.ones(9))

    def test_response_not_1d(self, engine8):
        with pytest.raises(InvalidInputError):
            engine8.response_kernel(np.ones((2, 2)))

    def test_wiener_kernel_regularizes(self, engine8):
        h = np.array([2.0, 1.0, 0.0, 1j, 0.5])
        w = engine8.wiener_kernel(h, 1.0)
        np.testing.assert_allclose(w, np.conj(h) / (np.abs(h) ** 2 + 1.0))

    def test_wiener_kernel_zero_bins(self, engine8):
        h = np.array([1.0, 0.0, 2.0, 0.0, 4.0])
        w = engine8.wiener_kernel(h, 0.0)
        np.testing.assert_allclose(w, [1.0, 0.0, 0.5, 0.0, 0.25])
        assert np.all(np.isfinite(w))

    def test_wiener_kernel_negative_noise(self, engine8):
        with pytest.raises(InvalidInputError, match="noise_power"):
            engine8.wiener_kernel(np.ones(5), -1.0)

    def test_wiener_kernel_short(self, engine8):
        with pytest.raises(SizeMismatchError):
            engine8.wiener_kernel(np.ones(3), 0.1)
