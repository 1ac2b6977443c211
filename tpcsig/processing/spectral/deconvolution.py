# -*- coding: utf-8 -*-
"""
Spectral Deconvolution - Per-channel frequency-domain filtering of waveform arrays.

Wraps ``SpectralTransform`` as a ``WaveformTransform`` so a fixed
frequency-domain kernel can be applied to every channel of a
``(channels, ticks)`` array and chained with the local-Wiener filters
in a ``Pipeline``.

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
from numbers import Integral
from typing import Annotated, Any, Optional

# Third-party
import numpy as np

# tpcsig internal
from tpcsig.exceptions import InvalidInputError
from tpcsig.processing.base import PlanewiseTransformMixin, WaveformTransform
from tpcsig.processing.params import Desc, Options
from tpcsig.processing.versioning import processor_tags, processor_version
from tpcsig.processing.filters._validation import validate_waveform
from tpcsig.processing.spectral.transform import SpectralTransform
from tpcsig.vocabulary import ProcessorCategory, SampleDomain


@processor_version('1.0.0')
@processor_tags(domains=[SampleDomain.TIME],
                category=ProcessorCategory.DECONVOLUTION,
                description='Per-channel FFT convolution / deconvolution')
class SpectralDeconvolution(PlanewiseTransformMixin, WaveformTransform):
    """Apply a frequency-domain kernel to every channel of a waveform array.

    Each row of a ``(channels, ticks)`` array is transformed with a
    ``SpectralTransform`` of length ``ticks``, multiplied by ``kernel``,
    inverted and circularly shifted by ``time_offset`` using the
    ``deconvolute`` (default) or ``convolute`` shift convention.

    Parameters
    ----------
    kernel : array_like
        Complex frequency-domain kernel with at least ``ticks // 2 + 1``
        bins, e.g. from ``SpectralTransform.wiener_kernel``.
    time_offset : int
        Circular shift in ticks applied after filtering. Default 0.
    mode : str
        ``'deconvolute'`` or ``'convolute'``; selects the shift
        direction convention. Default ``'deconvolute'``.
    workers : int, optional
        Worker threads forwarded to ``scipy.fft``.

    Examples
    --------
    >>> engine = SpectralTransform(num_samples=4096)
    >>> kernel = engine.wiener_kernel(engine.response_kernel(response), 0.01)
    >>> deconv = SpectralDeconvolution(kernel=kernel, time_offset=-20)
    >>> sharpened = deconv.apply(waveforms)
    """

    time_offset: Annotated[int, Desc('Circular shift in ticks')] = 0
    mode: Annotated[str, Options('deconvolute', 'convolute'),
                    Desc('Shift direction convention')] = 'deconvolute'

    def __init__(
        self,
        kernel: Any,
        time_offset: int = 0,
        mode: str = 'deconvolute',
        workers: Optional[int] = None,
    ) -> None:
        kernel = np.asarray(kernel)
        if kernel.ndim != 1 or kernel.size == 0:
            raise InvalidInputError(
                f"kernel must be a non-empty 1D vector, got shape {kernel.shape}"
            )
        if isinstance(time_offset, bool) or not isinstance(time_offset, Integral):
            raise InvalidInputError(
                f"time_offset must be an integer, got {type(time_offset).__name__}"
            )
        if mode not in ('deconvolute', 'convolute'):
            raise InvalidInputError(
                f"mode must be 'deconvolute' or 'convolute', got {mode!r}"
            )
        self.kernel = kernel.astype(np.complex128)
        self.time_offset = int(time_offset)
        self.mode = mode
        self.workers = workers

    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Filter every channel of a single ``(channels, ticks)`` plane.

        Parameters
        ----------
        source : np.ndarray
            2D sample array.

        Returns
        -------
        np.ndarray
            Filtered samples, same shape, float64.

        Raises
        ------
        SizeMismatchError
            If ``kernel`` has fewer than ``ticks // 2 + 1`` bins.
        """
        params = self._resolve_params(kwargs)
        x = validate_waveform(source)
        engine = SpectralTransform(x.shape[1], workers=self.workers)

        if params['mode'] == 'convolute':
            rows = [engine.convolute(row, self.kernel, params['time_offset'])
                    for row in x]
        else:
            rows = [engine.deconvolute(row, self.kernel, params['time_offset'])
                    for row in x]
        return np.stack(rows)
