# -*- coding: utf-8 -*-
"""
Waveform Statistics - Scalar statistics of raw detector waveforms.

Stateless helper functions consumed by the denoising and deconvolution
code: medians, noise power over a selection mask, and pedestal / RMS
estimators for single-channel waveforms.

Pedestal estimation
-------------------
The pedestal (baseline) of a raw waveform is estimated robustly from
its histogram: samples are rounded to integer ADC bins, the most
populated bin is located, and the pedestal is the count-weighted mean
of the bins within ``min(16, range // 2 + 1)`` of it. Signal pulses far
from the baseline therefore do not pull the estimate.

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
from dataclasses import dataclass
from typing import Any, Optional, Tuple

# Third-party
import numpy as np

# tpcsig internal
from tpcsig.exceptions import InvalidInputError

# Half-width cap, in ADC bins, of the pedestal averaging neighborhood.
_MAX_PEDESTAL_BINS = 16
# Samples beyond this many RMS from the pedestal are dropped for the
# truncated RMS of mean_and_truncated_rms.
_TRUNCATION_SIGMA = 2.5
# Fraction of smallest deviations kept by truncated_rms.
_TRUNCATED_FRACTION = 0.6


@dataclass(frozen=True)
class WaveformStats:
    """Pedestal and noise estimates of one waveform."""

    pedestal: float
    """Histogram-mode pedestal estimate."""

    rms: float
    """RMS of all samples about the pedestal."""

    num_bins: int
    """Samples contributing to the pedestal, or to the truncated RMS
    when one was computed."""

    truncated_rms: Optional[float] = None
    """RMS of the samples within 2.5 RMS of the pedestal, if computed."""


def _as_vector(values: Any, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64).ravel()
    if arr.size == 0:
        raise InvalidInputError(f"{name} must not be empty")
    return arr


def compute_median(values: Any) -> float:
    """Median of a flat numeric sequence.

    Even-length inputs return the mean of the two middle values.

    Raises
    ------
    InvalidInputError
        If ``values`` is empty.
    """
    return float(np.median(_as_vector(values, 'values')))


def compute_noise_power(waveforms: Any, selection: Any) -> float:
    """Mean square of the selected samples.

    Parameters
    ----------
    waveforms : array_like
        ``(channels, ticks)`` samples, typically after coherent noise
        removal.
    selection : array_like of bool
        Mask of the same shape; ``True`` marks samples to include
        (e.g. samples outside any signal region of interest).

    Returns
    -------
    float
        ``mean(x[selection] ** 2)``, or 0.0 when nothing is selected.

    Raises
    ------
    InvalidInputError
        If the two arrays differ in shape.
    """
    x = np.asarray(waveforms, dtype=np.float64)
    mask = np.asarray(selection, dtype=bool)
    if x.shape != mask.shape:
        raise InvalidInputError(
            f"selection shape {mask.shape} does not match waveform "
            f"shape {x.shape}"
        )
    selected = x[mask]
    if selected.size == 0:
        return 0.0
    return float(np.mean(selected * selected))


def _round_half_away(x: np.ndarray) -> np.ndarray:
    return np.sign(x) * np.floor(np.abs(x) + 0.5)


def _histogram_pedestal(w: np.ndarray) -> Tuple[float, int]:
    """Pedestal from the neighborhood of the most populated ADC bin."""
    min_val = int(np.floor(w.min()))
    max_val = int(np.ceil(w.max()))
    n_range = max_val - min_val + 1

    bins = _round_half_away(w).astype(np.int64) - min_val
    counts = np.bincount(bins, minlength=n_range)
    mode_bin = int(np.argmax(counts))

    half = min(_MAX_PEDESTAL_BINS, n_range // 2 + 1)
    lo = max(mode_bin - half, 0)
    hi = min(mode_bin + half, n_range - 1)
    idx = np.arange(lo, hi + 1)
    sel = counts[lo:hi + 1]
    n_used = int(sel.sum())
    return float(np.sum((idx + min_val) * sel)) / n_used, n_used


def mean_and_rms(waveform: Any) -> WaveformStats:
    """Histogram-mode pedestal and RMS about it.

    Parameters
    ----------
    waveform : array_like
        1D raw samples of one channel.

    Returns
    -------
    WaveformStats
        ``pedestal``, ``rms`` and ``num_bins`` (samples in the pedestal
        neighborhood).
    """
    w = _as_vector(waveform, 'waveform')
    pedestal, n_used = _histogram_pedestal(w)
    dev = w - pedestal
    rms = float(np.sqrt(np.mean(dev * dev)))
    return WaveformStats(pedestal=pedestal, rms=rms, num_bins=n_used)


def mean_and_truncated_rms(waveform: Any) -> WaveformStats:
    """Histogram-mode pedestal, full RMS and truncated RMS.

    The truncated RMS only uses samples within 2.5 full-RMS of the
    pedestal; ``num_bins`` is the number of those samples. The input is
    not modified.

    Parameters
    ----------
    waveform : array_like
        1D raw samples of one channel.

    Returns
    -------
    WaveformStats
    """
    w = _as_vector(waveform, 'waveform')
    pedestal, _ = _histogram_pedestal(w)
    dev = w - pedestal
    rms = float(np.sqrt(np.mean(dev * dev)))

    kept = dev[np.abs(dev) <= _TRUNCATION_SIGMA * rms]
    truncated = float(np.sqrt(np.mean(kept * kept)))
    return WaveformStats(pedestal=pedestal, rms=rms, num_bins=int(kept.size),
                         truncated_rms=truncated)


def truncated_rms(waveform: Any, pedestal: float) -> float:
    """RMS of the 60 % of samples closest to ``pedestal``.

    Parameters
    ----------
    waveform : array_like
        1D raw samples of one channel.
    pedestal : float
        Baseline to subtract.

    Returns
    -------
    float
        Truncated RMS.
    """
    w = _as_vector(waveform, 'waveform')
    dev = np.sort(np.abs(w - pedestal))
    n_keep = max(1, int(_TRUNCATED_FRACTION * dev.size))
    kept = dev[:n_keep]
    return float(np.sqrt(np.mean(kept * kept)))
