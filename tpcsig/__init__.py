# -*- coding: utf-8 -*-
"""
tpcsig - TPC Signal processing library.

Building blocks for cleaning detector-waveform readout arrays indexed
``(channel, tick)``: adaptive local-Wiener denoising filters, a
fixed-length FFT engine for kernel convolution and deconvolution, and
scalar pedestal / noise statistics.

Dependencies
------------
numpy
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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from tpcsig.exceptions import (
    TpcsigError,
    InvalidInputError,
    SizeMismatchError,
)
from tpcsig.vocabulary import (
    ProcessorCategory,
    SampleDomain,
)

__all__ = [
    'TpcsigError',
    'InvalidInputError',
    'SizeMismatchError',
    'ProcessorCategory',
    'SampleDomain',
]
