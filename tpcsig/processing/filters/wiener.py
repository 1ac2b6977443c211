# -*- coding: utf-8 -*-
"""
Local Wiener Filters - Adaptive local-statistics denoising for waveform arrays.

Provides four adaptive local-Wiener (minimum mean-square error) filters
for ``(channels, ticks)`` detector readout arrays. They share one
windowing substrate and one blend rule and differ only in the flat
estimate ``F`` and in where the noise variance comes from.

``LeeFilter``
    ``F`` = local mean, caller-supplied noise variance.
``MedianWienerFilter`` (MMWF)
    ``F`` = local median, caller-supplied noise variance.
``AdaptiveMedianWienerFilter`` (MMWF*)
    ``F`` = local median, noise variance estimated as the array-wide
    median of a median-aware local variance.
``EnhancedLeeFilter``
    ``F`` = edge-weighted local mean, caller-supplied noise variance.

Algorithm
---------
For every cell, with local variance ``V`` and noise variance ``s2``::

    if s2 > V or V <= 0:  out = F
    else:                 out = F + (1 - s2 / V) * (x - F)

Flat windows (variance under the noise floor) collapse to the flat
estimate; busy windows keep a fraction of the observed excess over it.
``V <= 0`` only happens for constant windows (or rounding in them) and
is always flattened rather than divided by.

Windows are ``window_channels x window_ticks`` cells centered on each
cell and clipped at the array boundary.

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
from abc import abstractmethod
from typing import Annotated, Any, Dict, Tuple

# Third-party
import numpy as np

# tpcsig internal
from tpcsig.processing.base import PlanewiseTransformMixin, WaveformTransform
from tpcsig.processing.params import Desc, Range
from tpcsig.processing.versioning import processor_tags, processor_version
from tpcsig.processing.filters._validation import (
    validate_non_negative,
    validate_positive,
    validate_waveform,
    validate_window_size,
)
from tpcsig.processing.filters._window import (
    local_median,
    local_moments,
    weighted_local_moments,
)
from tpcsig.vocabulary import ProcessorCategory, SampleDomain
from tpcsig.waveform import compute_median

logger = logging.getLogger(__name__)


# ===================================================================
# Shared helpers
# ===================================================================

def wiener_blend(
    observed: np.ndarray,
    flat: np.ndarray,
    variance: np.ndarray,
    noise_variance: float,
) -> np.ndarray:
    """Blend a flat estimate with the observed samples.

    Parameters
    ----------
    observed : np.ndarray
        Observed samples ``x``.
    flat : np.ndarray
        Flat estimate ``F`` (local mean, median or weighted mean).
    variance : np.ndarray
        Local variance ``V``.
    noise_variance : float
        Noise variance ``s2``.

    Returns
    -------
    np.ndarray
        ``F`` where ``s2 > V`` or ``V <= 0``, otherwise
        ``F + (1 - s2 / V) * (x - F)``.
    """
    flatten = (noise_variance > variance) | (variance <= 0.0)
    n_degenerate = int(np.count_nonzero(variance <= 0.0))
    if n_degenerate:
        logger.debug("Flattening %d cells with non-positive local variance",
                     n_degenerate)
    safe_variance = np.where(flatten, 1.0, variance)
    gain = np.where(flatten, 0.0, 1.0 - noise_variance / safe_variance)
    return flat + gain * (observed - flat)


def median_noise_variance(
    waveform: Any, sx: int = 7, sy: int = 7,
) -> float:
    """Estimate the noise variance of a waveform array for MMWF*.

    Computes the median-aware local variance of every cell::

        V = E[x^2] - 2 * mean * median + mean^2

    and returns the median of ``V`` over the whole array.

    Parameters
    ----------
    waveform : array_like
        2D ``(channels, ticks)`` sample array.
    sx, sy : int
        Odd window extents along channels and ticks.

    Returns
    -------
    float
        Estimated noise variance.
    """
    validate_window_size(sx, 'sx')
    validate_window_size(sy, 'sy')
    x = validate_waveform(waveform)
    _, _, noise_variance = _median_statistics(x, sx, sy)
    return noise_variance


def _median_statistics(
    x: np.ndarray, sx: int, sy: int,
) -> Tuple[np.ndarray, np.ndarray, float]:
    """Local median, median-aware variance and its array-wide median."""
    mean, second = local_moments(x, sx, sy)
    median = local_median(x, sx, sy)
    variance = second - 2.0 * mean * median + mean * mean
    return median, variance, compute_median(variance)


# ===================================================================
# Base class
# ===================================================================

class LocalWienerFilter(PlanewiseTransformMixin, WaveformTransform):
    """Abstract base class for the adaptive local-Wiener filters.

    Implements input validation and the blend rule as a template method.
    Concrete subclasses override ``_local_estimates()`` to supply the
    flat estimate, the local variance and the noise variance.

    3D ``(planes, channels, ticks)`` stacks are filtered plane by plane.
    Output is always float64 with the input shape; the input is never
    modified.

    Parameters
    ----------
    window_channels : int
        Odd window extent along the channel axis. Default 7.
    window_ticks : int
        Odd window extent along the tick axis. Default 7.
    """

    window_channels: Annotated[int, Range(min=1),
                               Desc('Window extent along channels (odd)')] = 7
    window_ticks: Annotated[int, Range(min=1),
                            Desc('Window extent along ticks (odd)')] = 7

    def __init__(self, window_channels: int = 7, window_ticks: int = 7) -> None:
        validate_window_size(window_channels, 'window_channels')
        validate_window_size(window_ticks, 'window_ticks')
        self.window_channels = int(window_channels)
        self.window_ticks = int(window_ticks)

    def _validate_params(self, params: Dict[str, Any]) -> None:
        """Filter-specific checks beyond the ``Annotated`` constraints."""
        validate_window_size(params['window_channels'], 'window_channels')
        validate_window_size(params['window_ticks'], 'window_ticks')

    @abstractmethod
    def _local_estimates(
        self, x: np.ndarray, params: Dict[str, Any],
    ) -> Tuple[np.ndarray, np.ndarray, float]:
        """Compute the per-cell statistics for the blend rule.

        Parameters
        ----------
        x : np.ndarray
            Float64 array, shape ``(channels, ticks)``.
        params : Dict[str, Any]
            Resolved tunable parameters.

        Returns
        -------
        flat : np.ndarray
            Flat estimate ``F``, same shape as ``x``.
        variance : np.ndarray
            Local variance ``V``, same shape as ``x``.
        noise_variance : float
            Noise variance ``s2``.
        """
        ...

    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Filter a single ``(channels, ticks)`` plane.

        Parameters
        ----------
        source : np.ndarray
            2D sample array, integer or floating point.

        Returns
        -------
        np.ndarray
            Denoised samples, same shape, float64.

        Raises
        ------
        InvalidInputError
            If the array is empty, ragged, not 2D, or a parameter is out
            of range.
        """
        for name in ('window_channels', 'window_ticks'):
            if name in kwargs:
                validate_window_size(kwargs[name], name)
        params = self._resolve_params(kwargs)
        self._validate_params(params)
        x = validate_waveform(source)

        flat, variance, noise_variance = self._local_estimates(x, params)
        return wiener_blend(x, flat, variance, noise_variance)


# ===================================================================
# Concrete filters
# ===================================================================

@processor_version('1.0.0')
@processor_tags(domains=[SampleDomain.TIME],
                category=ProcessorCategory.DENOISE,
                description='Lee adaptive local-mean Wiener filter')
class LeeFilter(LocalWienerFilter):
    """Lee adaptive local Wiener filter.

    Blends the clipped-window local mean with the observed sample::

        V   = E[x^2] - E[x]^2
        out = E[x] + (1 - s2/V) * (x - E[x])     (s2 <= V)
        out = E[x]                               (s2 > V)

    Parameters
    ----------
    noise_variance : float
        Noise variance ``s2`` of the readout, >= 0.
    window_channels : int
        Odd window extent along channels. Default 7.
    window_ticks : int
        Odd window extent along ticks. Default 7.

    Examples
    --------
    >>> from tpcsig.processing.filters import LeeFilter
    >>> lee = LeeFilter(noise_variance=4.0, window_channels=5)
    >>> denoised = lee.apply(waveforms)
    """

    noise_variance: Annotated[float, Range(min=0.0),
                              Desc('Noise variance of the readout')]

    def __init__(
        self,
        noise_variance: float,
        window_channels: int = 7,
        window_ticks: int = 7,
    ) -> None:
        super().__init__(window_channels, window_ticks)
        validate_non_negative(noise_variance, 'noise_variance')
        self.noise_variance = float(noise_variance)

    def _local_estimates(self, x, params):
        mean, second = local_moments(
            x, params['window_channels'], params['window_ticks'],
        )
        return mean, second - mean * mean, params['noise_variance']


@processor_version('1.0.0')
@processor_tags(domains=[SampleDomain.TIME],
                category=ProcessorCategory.DENOISE,
                description='Median-based local Wiener filter (MMWF)')
class MedianWienerFilter(LocalWienerFilter):
    """Median-based modified Wiener filter (MMWF).

    Same blend rule as ``LeeFilter`` but the flat estimate is the local
    median, which does not smear isolated spikes into their neighbors::

        V   = E[x^2] - E[x]^2
        out = med + (1 - s2/V) * (x - med)       (s2 <= V)
        out = med                                (s2 > V)

    Parameters
    ----------
    noise_variance : float
        Noise variance ``s2`` of the readout, >= 0.
    window_channels : int
        Odd window extent along channels. Default 7.
    window_ticks : int
        Odd window extent along ticks. Default 7.
    """

    noise_variance: Annotated[float, Range(min=0.0),
                              Desc('Noise variance of the readout')]

    def __init__(
        self,
        noise_variance: float,
        window_channels: int = 7,
        window_ticks: int = 7,
    ) -> None:
        super().__init__(window_channels, window_ticks)
        validate_non_negative(noise_variance, 'noise_variance')
        self.noise_variance = float(noise_variance)

    def _local_estimates(self, x, params):
        sx, sy = params['window_channels'], params['window_ticks']
        mean, second = local_moments(x, sx, sy)
        median = local_median(x, sx, sy)
        return median, second - mean * mean, params['noise_variance']


@processor_version('1.0.0')
@processor_tags(domains=[SampleDomain.TIME],
                category=ProcessorCategory.DENOISE,
                description='Self-calibrating median Wiener filter (MMWF*)')
class AdaptiveMedianWienerFilter(LocalWienerFilter):
    """Self-calibrating median-based Wiener filter (MMWF*).

    Needs no noise variance: it is estimated from the array itself as
    the median, over all cells, of the median-aware local variance::

        V_ij = E[x^2] - 2 * E[x] * med + E[x]^2
        s2   = median(V)

    and the MMWF blend is applied with that ``s2``. Each plane of a 3D
    stack gets its own estimate.

    Parameters
    ----------
    window_channels : int
        Odd window extent along channels. Default 7.
    window_ticks : int
        Odd window extent along ticks. Default 7.
    """

    def __init__(self, window_channels: int = 7, window_ticks: int = 7) -> None:
        super().__init__(window_channels, window_ticks)

    def _local_estimates(self, x, params):
        median, variance, noise_variance = _median_statistics(
            x, params['window_channels'], params['window_ticks'],
        )
        logger.debug("MMWF* estimated noise variance %.6g", noise_variance)
        return median, variance, noise_variance


@processor_version('1.0.0')
@processor_tags(domains=[SampleDomain.TIME],
                category=ProcessorCategory.DENOISE,
                description='Edge-preserving weighted Lee filter')
class EnhancedLeeFilter(LocalWienerFilter):
    """Edge-preserving enhanced Lee filter.

    Replaces the plain window average with a weighted one in which each
    neighbor is down-weighted by its squared difference from the center
    sample::

        w   = 1 / (1 + a * max(epsilon, (x_c - x_n)^2)),   sum(w) = 1
        F   = sum(w * x_n)
        V   = sum(w * x_n^2) - F^2

    then applies the Lee blend with ``F`` and ``V``. Signal edges keep
    their contrast because samples across the edge barely contribute.

    Parameters
    ----------
    noise_variance : float
        Noise variance ``s2`` of the readout, >= 0.
    window_channels : int
        Odd window extent along channels. Default 7.
    window_ticks : int
        Odd window extent along ticks. Default 7.
    a : float
        Weighting strength, > 0. Default 1.0.
    epsilon : float
        Floor on the squared difference, > 0. Default 2.5.
    """

    noise_variance: Annotated[float, Range(min=0.0),
                              Desc('Noise variance of the readout')]
    a: Annotated[float, Range(min=0.0),
                 Desc('Edge weighting strength (> 0)')] = 1.0
    epsilon: Annotated[float, Range(min=0.0),
                       Desc('Floor on squared neighbor difference (> 0)')] = 2.5

    def __init__(
        self,
        noise_variance: float,
        window_channels: int = 7,
        window_ticks: int = 7,
        a: float = 1.0,
        epsilon: float = 2.5,
    ) -> None:
        super().__init__(window_channels, window_ticks)
        validate_non_negative(noise_variance, 'noise_variance')
        validate_positive(a, 'a')
        validate_positive(epsilon, 'epsilon')
        self.noise_variance = float(noise_variance)
        self.a = float(a)
        self.epsilon = float(epsilon)

    def _validate_params(self, params):
        super()._validate_params(params)
        validate_positive(params['a'], 'a')
        validate_positive(params['epsilon'], 'epsilon')

    def _local_estimates(self, x, params):
        mean, second = weighted_local_moments(
            x, params['window_channels'], params['window_ticks'],
            float(params['a']), float(params['epsilon']),
        )
        return mean, second - mean * mean, params['noise_variance']


# ===================================================================
# Functional interface
# ===================================================================

def lee_filter(
    waveform: Any, noise_variance: float, sx: int = 7, sy: int = 7,
) -> np.ndarray:
    """Apply ``LeeFilter`` to a waveform array.

    Parameters
    ----------
    waveform : array_like
        ``(channels, ticks)`` samples or a ``(planes, channels, ticks)``
        stack.
    noise_variance : float
        Noise variance, >= 0.
    sx, sy : int
        Odd window extents along channels and ticks. Default 7.

    Returns
    -------
    np.ndarray
        Denoised float64 array, same shape as ``waveform``.
    """
    return LeeFilter(noise_variance, sx, sy).apply(waveform)


def mmwf(
    waveform: Any, noise_variance: float, sx: int = 7, sy: int = 7,
) -> np.ndarray:
    """Apply ``MedianWienerFilter`` (MMWF) to a waveform array."""
    return MedianWienerFilter(noise_variance, sx, sy).apply(waveform)


def mmwf_star(waveform: Any, sx: int = 7, sy: int = 7) -> np.ndarray:
    """Apply ``AdaptiveMedianWienerFilter`` (MMWF*) to a waveform array."""
    return AdaptiveMedianWienerFilter(sx, sy).apply(waveform)


def enhanced_lee_filter(
    waveform: Any,
    noise_variance: float,
    sx: int = 7,
    sy: int = 7,
    a: float = 1.0,
    epsilon: float = 2.5,
) -> np.ndarray:
    """Apply ``EnhancedLeeFilter`` to a waveform array.

    Parameters
    ----------
    waveform : array_like
        ``(channels, ticks)`` samples or a ``(planes, channels, ticks)``
        stack.
    noise_variance : float
        Noise variance, >= 0.
    sx, sy : int
        Odd window extents along channels and ticks. Default 7.
    a : float
        Edge weighting strength, > 0. Default 1.0.
    epsilon : float
        Floor on the squared neighbor difference, > 0. Default 2.5.

    Returns
    -------
    np.ndarray
        Denoised float64 array, same shape as ``waveform``.
    """
    return EnhancedLeeFilter(noise_variance, sx, sy, a, epsilon).apply(waveform)
