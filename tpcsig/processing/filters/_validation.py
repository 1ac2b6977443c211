# -*- coding: utf-8 -*-
"""
Filter Validation Helpers - Shared window, sample array and scalar validation.

Provides reusable validation functions for the local-statistics filters.
Every filter calls these helpers so that window dimensions, waveform
arrays and tuning scalars are rejected consistently with
``InvalidInputError`` before any output is produced.

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
import math
from numbers import Integral, Real
from typing import Any

# Third-party
import numpy as np

# tpcsig internal
from tpcsig.exceptions import InvalidInputError


def validate_window_size(size: int, name: str = 'window_size') -> None:
    """Validate that a window dimension is an odd integer >= 1.

    Parameters
    ----------
    size : int
        The window dimension to validate.
    name : str
        Parameter name for error messages. Default ``'window_size'``.

    Raises
    ------
    InvalidInputError
        If ``size`` is not an integer, is less than 1, or is even.
    """
    if isinstance(size, bool) or not isinstance(size, Integral):
        raise InvalidInputError(
            f"{name} must be an integer, got {type(size).__name__}"
        )
    if size < 1:
        raise InvalidInputError(f"{name} must be >= 1, got {size}")
    if size % 2 == 0:
        raise InvalidInputError(f"{name} must be odd, got {size}")


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a scalar is a finite real number >= 0.

    Raises
    ------
    InvalidInputError
        If ``value`` is not real, not finite, or negative.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(
            f"{name} must be a real number, got {type(value).__name__}"
        )
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"{name} must be finite and >= 0, got {value}")


def validate_positive(value: float, name: str) -> None:
    """Validate that a scalar is a finite real number > 0.

    Raises
    ------
    InvalidInputError
        If ``value`` is not real, not finite, or not strictly positive.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(
            f"{name} must be a real number, got {type(value).__name__}"
        )
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{name} must be finite and > 0, got {value}")


def validate_waveform(source: Any) -> np.ndarray:
    """Validate a ``(channels, ticks)`` sample array and return it as float64.

    Nested sequences are converted with ``numpy.asarray``. Integer and
    floating-point dtypes are accepted; the returned array is always a
    new float64 array so the caller's data is never modified.

    Parameters
    ----------
    source : array_like
        2D sample array, rows are channels and columns are ticks.

    Returns
    -------
    np.ndarray
        Float64 copy of ``source``.

    Raises
    ------
    InvalidInputError
        If ``source`` is ragged, not 2D, empty, or not a real numeric
        array.
    """
    try:
        arr = np.asarray(source)
    except ValueError as exc:
        # numpy refuses inhomogeneous nested sequences
        raise InvalidInputError(
            f"Waveform rows must all have the same length: {exc}"
        ) from exc

    if arr.dtype == object:
        raise InvalidInputError(
            "Waveform rows must all have the same length and hold numbers"
        )
    if arr.ndim != 2:
        raise InvalidInputError(
            f"Waveform must be 2D (channels, ticks), got {arr.ndim}D "
            f"with shape {arr.shape}"
        )
    if arr.size == 0:
        raise InvalidInputError(
            f"Waveform must not be empty, got shape {arr.shape}"
        )
    if arr.dtype.kind not in 'iuf':
        raise InvalidInputError(
            f"Waveform must hold integer or floating-point samples, "
            f"got dtype {arr.dtype}"
        )
    return arr.astype(np.float64)
