# -*- coding: utf-8 -*-
"""
Local-Statistics Filters - Adaptive local-Wiener denoising of waveform arrays.

All filters inherit from ``PlanewiseTransformMixin`` and
``WaveformTransform``, so 3D ``(planes, channels, ticks)`` stacks are
filtered plane by plane.

Adaptive Filters
    ``LeeFilter`` - local-mean Wiener filter
    ``MedianWienerFilter`` - local-median Wiener filter (MMWF)
    ``AdaptiveMedianWienerFilter`` - MMWF with self-estimated noise (MMWF*)
    ``EnhancedLeeFilter`` - edge-preserving weighted Lee filter

Functions
    ``lee_filter``, ``mmwf``, ``mmwf_star``, ``enhanced_lee_filter``,
    ``median_noise_variance``, ``wiener_blend``

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

from tpcsig.processing.filters.wiener import (
    AdaptiveMedianWienerFilter,
    EnhancedLeeFilter,
    LeeFilter,
    LocalWienerFilter,
    MedianWienerFilter,
    enhanced_lee_filter,
    lee_filter,
    median_noise_variance,
    mmwf,
    mmwf_star,
    wiener_blend,
)

__all__ = [
    'LocalWienerFilter',
    'LeeFilter',
    'MedianWienerFilter',
    'AdaptiveMedianWienerFilter',
    'EnhancedLeeFilter',
    'lee_filter',
    'mmwf',
    'mmwf_star',
    'enhanced_lee_filter',
    'median_noise_variance',
    'wiener_blend',
]
