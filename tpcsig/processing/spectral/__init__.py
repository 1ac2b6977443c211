# -*- coding: utf-8 -*-
"""
Spectral Processing - Fixed-length FFT engine and per-channel deconvolution.

``SpectralTransform``
    Real FFT engine of fixed length with forward/inverse transforms,
    kernel convolution and deconvolution with circular time shift,
    half-spectrum power, response and Wiener kernels.
``SpectralDeconvolution``
    ``WaveformTransform`` applying a kernel to every channel of a
    ``(channels, ticks)`` array.

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

from tpcsig.processing.spectral.transform import SpectralTransform
from tpcsig.processing.spectral.deconvolution import SpectralDeconvolution

__all__ = [
    'SpectralTransform',
    'SpectralDeconvolution',
]
