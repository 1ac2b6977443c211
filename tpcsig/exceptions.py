# -*- coding: utf-8 -*-
"""
tpcsig Exception Hierarchy - Domain-specific exceptions for tpcsig operations.

Provides a small exception hierarchy that lets calling frameworks catch
tpcsig-specific errors distinctly from Python built-in exceptions. All
tpcsig exceptions subclass both ``TpcsigError`` and ``ValueError`` so
existing ``except ValueError`` handlers keep working.

Author
------
Steven Siebert

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


class TpcsigError(Exception):
    """Base exception for all tpcsig errors."""


class InvalidInputError(TpcsigError, ValueError):
    """Invalid sample array, window or filter parameter.

    Raised for empty or ragged waveform arrays, arrays of the wrong
    dimensionality or dtype, non-positive or even window dimensions,
    and out-of-range filter tuning values.
    """


class SizeMismatchError(TpcsigError, ValueError):
    """Vector length does not match the configured transform length.

    Raised by ``SpectralTransform`` before any output is produced when a
    time-domain vector is not exactly ``N`` samples long, or a
    frequency-domain vector or kernel holds fewer than ``N // 2 + 1``
    bins.
    """
