# -*- coding: utf-8 -*-
"""
Spectral Transform - Fixed-length real FFT engine with convolution support.

Provides ``SpectralTransform``, a real-to-complex / complex-to-real
transform engine of fixed length ``N`` with frequency-domain convolution
and deconvolution followed by an integer circular time shift, and
half-spectrum magnitude extraction.

Conventions
-----------
* The forward transform is unnormalized; the inverse divides by ``N``.
* ``forward_fft`` returns all ``N`` bins: bins ``0 .. N//2`` are computed
  and bins ``N//2+1 .. N-1`` are filled by conjugate reflection,
  ``X[k] = conj(X[N - k])``.
* Only the half-spectrum (``N//2 + 1`` bins) of frequency vectors and
  kernels is read; longer vectors are accepted.
* ``convolute`` and ``deconvolute`` rotate their result in opposite
  directions for the same ``time_offset``::

      convolute:   offset <= 0 -> left by |offset|,  offset > 0 -> right
      deconvolute: offset <= 0 -> right by |offset|, offset > 0 -> left

  Shifts wrap modulo ``N``.

The engine holds only immutable configuration; every call allocates its
own work arrays, so an instance can be shared between threads.

Dependencies
------------
scipy

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

# Standard library
import logging
from numbers import Integral
from typing import Any, Optional

# Third-party
import numpy as np
from scipy import fft

# tpcsig internal
from tpcsig.exceptions import InvalidInputError, SizeMismatchError

logger = logging.getLogger(__name__)


def _check_offset(time_offset: int) -> int:
    if isinstance(time_offset, bool) or not isinstance(time_offset, Integral):
        raise InvalidInputError(
            f"time_offset must be an integer, got {type(time_offset).__name__}"
        )
    return int(time_offset)


def _rotate_left(vec: np.ndarray, shift: int) -> np.ndarray:
    return np.roll(vec, -shift)


def _rotate_right(vec: np.ndarray, shift: int) -> np.ndarray:
    return np.roll(vec, shift)


class SpectralTransform:
    """Fixed-length real FFT engine.

    Parameters
    ----------
    num_samples : int
        Transform length ``N``. Every time-domain vector passed to the
        engine must have exactly this length. Default 4096.
    workers : int, optional
        Worker threads forwarded to ``scipy.fft``. ``None`` uses the
        ``scipy.fft`` default (single thread).

    Raises
    ------
    InvalidInputError
        If ``num_samples`` is not a positive integer.

    Examples
    --------
    >>> engine = SpectralTransform(num_samples=4096)
    >>> spectrum = engine.forward_fft(waveform)
    >>> restored = engine.inverse_fft(spectrum)
    >>> power = engine.get_fft_power(waveform)
    """

    def __init__(
        self,
        num_samples: int = 4096,
        workers: Optional[int] = None,
    ) -> None:
        if isinstance(num_samples, bool) or not isinstance(num_samples, Integral):
            raise InvalidInputError(
                f"num_samples must be an integer, got {type(num_samples).__name__}"
            )
        if num_samples < 1:
            raise InvalidInputError(
                f"num_samples must be >= 1, got {num_samples}"
            )
        self._num_samples = int(num_samples)
        self._num_bins = self._num_samples // 2 + 1
        self._workers = workers
        logger.debug("SpectralTransform: N=%d, %d half-spectrum bins",
                     self._num_samples, self._num_bins)

    @property
    def num_samples(self) -> int:
        """Transform length ``N``."""
        return self._num_samples

    @property
    def num_bins(self) -> int:
        """Number of half-spectrum bins, ``N // 2 + 1``."""
        return self._num_bins

    def __repr__(self) -> str:
        return f"SpectralTransform(num_samples={self._num_samples})"

    # -----------------------------------------------------------------
    # Input checks
    # -----------------------------------------------------------------
    def _time_vector(self, time_vec: Any) -> np.ndarray:
        x = np.asarray(time_vec)
        if x.ndim != 1:
            raise InvalidInputError(
                f"Time vector must be 1D, got shape {x.shape}"
            )
        if np.iscomplexobj(x):
            raise InvalidInputError("Time vector must be real-valued")
        if x.shape[0] != self._num_samples:
            raise SizeMismatchError(
                f"Time vector has {x.shape[0]} samples, transform expects "
                f"{self._num_samples}"
            )
        return x.astype(np.float64)

    def _half_spectrum(self, freq_vec: Any, name: str) -> np.ndarray:
        z = np.asarray(freq_vec)
        if z.ndim != 1:
            raise InvalidInputError(f"{name} must be 1D, got shape {z.shape}")
        if z.shape[0] < self._num_bins:
            raise SizeMismatchError(
                f"{name} has {z.shape[0]} bins, transform of length "
                f"{self._num_samples} needs at least {self._num_bins}"
            )
        return z[:self._num_bins].astype(np.complex128)

    # -----------------------------------------------------------------
    # Forward / inverse
    # -----------------------------------------------------------------
    def forward_fft(self, time_vec: Any) -> np.ndarray:
        """Forward real-to-complex transform.

        Parameters
        ----------
        time_vec : array_like
            Real samples, shape ``(N,)``.

        Returns
        -------
        np.ndarray
            Complex128 spectrum, shape ``(N,)``. Bins above ``N // 2`` are
            the conjugate reflection of the lower half.

        Raises
        ------
        SizeMismatchError
            If ``time_vec`` does not hold exactly ``N`` samples.
        """
        x = self._time_vector(time_vec)
        n, n_bins = self._num_samples, self._num_bins

        spectrum = np.empty(n, dtype=np.complex128)
        spectrum[:n_bins] = fft.rfft(x, workers=self._workers)
        # X[k] = conj(X[N - k]) for k = n_bins .. N-1
        spectrum[n_bins:] = np.conj(spectrum[n - n_bins:0:-1])
        return spectrum

    def inverse_fft(self, freq_vec: Any) -> np.ndarray:
        """Inverse complex-to-real transform, normalized by ``1 / N``.

        Parameters
        ----------
        freq_vec : array_like
            Complex spectrum with at least ``N // 2 + 1`` bins. Only the
            half-spectrum is read.

        Returns
        -------
        np.ndarray
            Float64 samples, shape ``(N,)``.

        Raises
        ------
        SizeMismatchError
            If ``freq_vec`` holds fewer than ``N // 2 + 1`` bins.
        """
        half = self._half_spectrum(freq_vec, 'Frequency vector')
        return fft.irfft(half, n=self._num_samples, workers=self._workers)

    # -----------------------------------------------------------------
    # Convolution
    # -----------------------------------------------------------------
    def _multiply(self, time_vec: Any, kernel: Any) -> np.ndarray:
        x = self._time_vector(time_vec)
        h = self._half_spectrum(kernel, 'Kernel')
        spectrum = fft.rfft(x, workers=self._workers)
        spectrum *= h
        return fft.irfft(spectrum, n=self._num_samples, workers=self._workers)

    def convolute(
        self,
        time_vec: Any,
        kernel: Any,
        time_offset: Optional[int] = None,
    ) -> np.ndarray:
        """Multiply the spectrum of ``time_vec`` by ``kernel`` and invert.

        Parameters
        ----------
        time_vec : array_like
            Real samples, shape ``(N,)``.
        kernel : array_like
            Complex frequency-domain multiplier, at least ``N // 2 + 1``
            bins.
        time_offset : int, optional
            Circular shift applied to the result. ``<= 0`` rotates left
            by ``|time_offset|``, ``> 0`` rotates right. ``None`` applies
            no shift.

        Returns
        -------
        np.ndarray
            Float64 samples, shape ``(N,)``.

        Raises
        ------
        SizeMismatchError
            If ``time_vec`` or ``kernel`` has the wrong length.
        """
        if time_offset is not None:
            time_offset = _check_offset(time_offset)
        result = self._multiply(time_vec, kernel)
        if time_offset is None:
            return result
        if time_offset <= 0:
            return _rotate_left(result, -time_offset)
        return _rotate_right(result, time_offset)

    def deconvolute(
        self,
        time_vec: Any,
        kernel: Any,
        time_offset: int = 0,
    ) -> np.ndarray:
        """Apply a deconvolution kernel and shift the result.

        The frequency-domain step is identical to ``convolute``; the
        circular shift uses the opposite direction: ``<= 0`` rotates
        right by ``|time_offset|``, ``> 0`` rotates left.

        Parameters
        ----------
        time_vec : array_like
            Real samples, shape ``(N,)``.
        kernel : array_like
            Complex deconvolution kernel, at least ``N // 2 + 1`` bins.
        time_offset : int
            Circular shift applied to the result. Default 0.

        Returns
        -------
        np.ndarray
            Float64 samples, shape ``(N,)``.

        Raises
        ------
        SizeMismatchError
            If ``time_vec`` or ``kernel`` has the wrong length.
        """
        time_offset = _check_offset(time_offset)
        result = self._multiply(time_vec, kernel)
        if time_offset <= 0:
            return _rotate_right(result, -time_offset)
        return _rotate_left(result, time_offset)

    # -----------------------------------------------------------------
    # Spectral estimates and kernels
    # -----------------------------------------------------------------
    def get_fft_power(self, time_vec: Any) -> np.ndarray:
        """Magnitude of every half-spectrum bin.

        Parameters
        ----------
        time_vec : array_like
            Real samples, shape ``(N,)``. Not modified.

        Returns
        -------
        np.ndarray
            ``|X[k]|`` for ``k = 0 .. N // 2``, float64.
        """
        x = self._time_vector(time_vec)
        return np.abs(fft.rfft(x, workers=self._workers))

    def frequencies(self, sample_period: float = 1.0) -> np.ndarray:
        """Frequencies of the half-spectrum bins.

        Parameters
        ----------
        sample_period : float
            Time between samples (e.g. the tick length in microseconds).
            Default 1.0, giving frequencies in cycles per sample.

        Returns
        -------
        np.ndarray
            Bin frequencies, shape ``(N // 2 + 1,)``.
        """
        if not sample_period > 0:
            raise InvalidInputError(
                f"sample_period must be > 0, got {sample_period}"
            )
        return fft.rfftfreq(self._num_samples, d=sample_period)

    def response_kernel(self, response: Any) -> np.ndarray:
        """Half-spectrum of a time-domain response function.

        Parameters
        ----------
        response : array_like
            Real response samples, at most ``N`` long. Shorter responses
            are zero-padded at the end. A unit impulse at sample 0 gives
            an all-ones kernel.

        Returns
        -------
        np.ndarray
            Complex128 kernel, shape ``(N // 2 + 1,)``.

        Raises
        ------
        SizeMismatchError
            If ``response`` is longer than ``N``.
        """
        r = np.asarray(response)
        if r.ndim != 1 or np.iscomplexobj(r):
            raise InvalidInputError(
                f"Response must be a real 1D vector, got shape {r.shape} "
                f"and dtype {r.dtype}"
            )
        if r.shape[0] > self._num_samples:
            raise SizeMismatchError(
                f"Response has {r.shape[0]} samples, transform length is "
                f"{self._num_samples}"
            )
        return fft.rfft(r.astype(np.float64), n=self._num_samples,
                        workers=self._workers)

    def wiener_kernel(
        self, response_kernel: Any, noise_power: float,
    ) -> np.ndarray:
        """Regularized inverse of a response kernel.

        Computes ``conj(H) / (|H|^2 + noise_power)`` per bin. Bins where
        the denominator is zero are set to zero.

        Parameters
        ----------
        response_kernel : array_like
            Response spectrum ``H``, at least ``N // 2 + 1`` bins.
        noise_power : float
            Regularization ``>= 0``; 0 gives the plain inverse filter.

        Returns
        -------
        np.ndarray
            Complex128 deconvolution kernel, shape ``(N // 2 + 1,)``,
            suitable for ``deconvolute``.
        """
        if not noise_power >= 0:
            raise InvalidInputError(
                f"noise_power must be >= 0, got {noise_power}"
            )
        h = self._half_spectrum(response_kernel, 'Response kernel')
        denominator = np.abs(h) ** 2 + noise_power
        safe = np.where(denominator > 0.0, denominator, 1.0)
        return np.where(denominator > 0.0, np.conj(h) / safe, 0.0)
