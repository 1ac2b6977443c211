# -*- coding: utf-8 -*-
"""
Clipped-Window Local Statistics - Shared windowing substrate for the Wiener filters.

Computes per-cell statistics over a rectangular ``sx x sy`` neighborhood
centered on every cell of a ``(channels, ticks)`` array. Windows are
clipped at the array boundary: cells outside the array neither add to
the sums nor to the sample count, so edge windows are simply smaller.
There is no reflection, wraparound, or padding value.

Algorithm
---------
Plain moments use two separable ``uniform_filter`` passes with
``mode='constant'`` (zero outside the array) and divide the resulting
window sums by the exact in-bounds cell count::

    mean   = sum(x)   / n
    second = sum(x^2) / n

The median and the edge-weighted moments need the individual window
members, which are gathered from a NaN-padded copy of the array.

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
from typing import Tuple

# Third-party
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from scipy.ndimage import uniform_filter

# Upper bound on window elements materialized at once by local_median.
_MEDIAN_CHUNK_ELEMENTS = 1 << 22


def _axis_counts(length: int, half: int) -> np.ndarray:
    """Number of in-bounds positions of a clipped 1D window per index."""
    idx = np.arange(length)
    lower = np.maximum(idx - half, 0)
    upper = np.minimum(idx + half, length - 1)
    return (upper - lower + 1).astype(np.float64)


def window_counts(shape: Tuple[int, int], sx: int, sy: int) -> np.ndarray:
    """Number of in-bounds cells in the clipped window of every cell.

    Parameters
    ----------
    shape : Tuple[int, int]
        Array shape ``(channels, ticks)``.
    sx, sy : int
        Odd window extents along channels and ticks.

    Returns
    -------
    np.ndarray
        Float64 counts, same shape as the array.
    """
    rows = _axis_counts(shape[0], sx // 2)
    cols = _axis_counts(shape[1], sy // 2)
    return np.outer(rows, cols)


def local_moments(
    x: np.ndarray, sx: int, sy: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """Clipped-window mean and mean of squares.

    Parameters
    ----------
    x : np.ndarray
        Float64 array, shape ``(channels, ticks)``.
    sx, sy : int
        Odd window extents along channels and ticks.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(mean, second_moment)``, each the same shape as ``x``.
    """
    counts = window_counts(x.shape, sx, sy)
    area = float(sx * sy)
    # uniform_filter returns sum / area with zeros outside the array
    sum_x = uniform_filter(x, size=(sx, sy), mode='constant', cval=0.0) * area
    sum_x2 = uniform_filter(
        x * x, size=(sx, sy), mode='constant', cval=0.0,
    ) * area
    return sum_x / counts, sum_x2 / counts


def _nan_padded(x: np.ndarray, sx: int, sy: int) -> np.ndarray:
    hx, hy = sx // 2, sy // 2
    return np.pad(x, ((hx, hx), (hy, hy)), mode='constant',
                  constant_values=np.nan)


def local_median(x: np.ndarray, sx: int, sy: int) -> np.ndarray:
    """Clipped-window median.

    Even-sized boundary windows take the mean of the two middle values.

    Parameters
    ----------
    x : np.ndarray
        Float64 array, shape ``(channels, ticks)``.
    sx, sy : int
        Odd window extents along channels and ticks.

    Returns
    -------
    np.ndarray
        Local medians, same shape as ``x``.
    """
    if sx == 1 and sy == 1:
        return x.copy()

    windows = sliding_window_view(_nan_padded(x, sx, sy), (sx, sy))
    n_channels, n_ticks = x.shape
    rows_per_chunk = max(1, _MEDIAN_CHUNK_ELEMENTS // (n_ticks * sx * sy))

    out = np.empty_like(x)
    for start in range(0, n_channels, rows_per_chunk):
        stop = min(start + rows_per_chunk, n_channels)
        out[start:stop] = np.nanmedian(windows[start:stop], axis=(2, 3))
    return out


def weighted_local_moments(
    x: np.ndarray, sx: int, sy: int, a: float, epsilon: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """Edge-preserving weighted mean and mean of squares.

    Each window member gets the weight::

        w = 1 / (1 + a * max(epsilon, (center - neighbor)^2))

    and the weights of every clipped window are normalized to sum to 1,
    so neighbors that differ sharply from the center contribute little.

    Parameters
    ----------
    x : np.ndarray
        Float64 array, shape ``(channels, ticks)``.
    sx, sy : int
        Odd window extents along channels and ticks.
    a : float
        Weighting strength, > 0.
    epsilon : float
        Floor on the squared difference, > 0. Differences below it are
        treated as noise and weighted equally.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(weighted_mean, weighted_second_moment)``.
    """
    n_channels, n_ticks = x.shape
    padded = _nan_padded(x, sx, sy)

    weight_sum = np.zeros_like(x)
    weighted_x = np.zeros_like(x)
    weighted_x2 = np.zeros_like(x)

    # One shifted view per window offset keeps memory at O(channels * ticks)
    for dx in range(sx):
        for dy in range(sy):
            neighbor = padded[dx:dx + n_channels, dy:dy + n_ticks]
            inside = ~np.isnan(neighbor)
            neighbor = np.where(inside, neighbor, 0.0)
            diff2 = (x - neighbor) ** 2
            w = np.where(inside, 1.0 / (1.0 + a * np.maximum(epsilon, diff2)),
                         0.0)
            weight_sum += w
            weighted_x += w * neighbor
            weighted_x2 += w * neighbor * neighbor

    return weighted_x / weight_sum, weighted_x2 / weight_sum
