# -*- coding: utf-8 -*-
"""
Waveform Processing Module - Processor framework, filters and spectral tools.

Sub-modules
-----------
filters/
    Adaptive local-Wiener denoising -- Lee, MMWF, MMWF*, enhanced Lee.
    All auto-handle 3D plane stacks via ``PlanewiseTransformMixin``.
spectral/
    ``SpectralTransform`` FFT engine and ``SpectralDeconvolution``.
pipeline.py
    Sequential composition of ``WaveformTransform`` steps.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers for tunable
    parameters via ``Annotated`` type hints.

Usage
-----
Deconvolve every channel, then denoise the readout array:

    >>> from tpcsig.processing import Pipeline
    >>> from tpcsig.processing.filters import LeeFilter
    >>> from tpcsig.processing.spectral import (
    ...     SpectralDeconvolution, SpectralTransform,
    ... )
    >>>
    >>> engine = SpectralTransform(num_samples=waveforms.shape[1])
    >>> kernel = engine.wiener_kernel(engine.response_kernel(response), 0.01)
    >>> pipe = Pipeline([
    ...     SpectralDeconvolution(kernel=kernel),
    ...     LeeFilter(noise_variance=4.0, window_channels=3),
    ... ])
    >>> cleaned = pipe.apply(waveforms)

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

from tpcsig.processing.base import (
    PlanewiseTransformMixin,
    WaveformProcessor,
    WaveformTransform,
)
from tpcsig.processing.params import Desc, Options, ParamSpec, Range
from tpcsig.processing.pipeline import Pipeline
from tpcsig.processing.versioning import processor_tags, processor_version
from tpcsig.processing.filters import (
    AdaptiveMedianWienerFilter,
    EnhancedLeeFilter,
    LeeFilter,
    MedianWienerFilter,
)
from tpcsig.processing.spectral import SpectralDeconvolution, SpectralTransform

__all__ = [
    'WaveformProcessor',
    'WaveformTransform',
    'PlanewiseTransformMixin',
    'Pipeline',
    'processor_version',
    'processor_tags',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'LeeFilter',
    'MedianWienerFilter',
    'AdaptiveMedianWienerFilter',
    'EnhancedLeeFilter',
    'SpectralTransform',
    'SpectralDeconvolution',
]
