# -*- coding: utf-8 -*-
"""
Pipeline - Sequential composition of waveform transforms.

Chains ``WaveformTransform`` instances so that, for example, spectral
deconvolution of each channel can be followed by adaptive spatial
denoising of the whole readout array.

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
from typing import Any, List, Sequence

# Third-party
import numpy as np

# tpcsig internal
from tpcsig.processing.base import WaveformTransform

logger = logging.getLogger(__name__)


class Pipeline(WaveformTransform):
    """Sequential chain of waveform transforms.

    Applies a sequence of ``WaveformTransform`` instances in order,
    passing the output of each as the input to the next. The pipeline is
    itself a ``WaveformTransform``, so pipelines nest.

    Parameters
    ----------
    steps : Sequence[WaveformTransform]
        Ordered transforms to apply. Must contain at least one.

    Examples
    --------
    >>> from tpcsig.processing import Pipeline
    >>> from tpcsig.processing.filters import LeeFilter
    >>> from tpcsig.processing.spectral import SpectralDeconvolution
    >>>
    >>> pipe = Pipeline([
    ...     SpectralDeconvolution(kernel=kernel, time_offset=-20),
    ...     LeeFilter(noise_variance=4.0),
    ... ])
    >>> result = pipe.apply(waveforms)
    """

    __processor_version__ = '1.0.0'

    def __init__(self, steps: Sequence[WaveformTransform]) -> None:
        if not steps:
            raise ValueError("Pipeline requires at least one transform")
        for i, step in enumerate(steps):
            if not isinstance(step, WaveformTransform):
                raise TypeError(
                    f"Step {i} is not a WaveformTransform: {type(step).__name__}"
                )
        self._steps: List[WaveformTransform] = list(steps)

    @property
    def steps(self) -> List[WaveformTransform]:
        """Shallow copy of the ordered step list."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        step_names = [type(s).__name__ for s in self._steps]
        return f"Pipeline({step_names})"

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply all transforms in sequence.

        Parameters
        ----------
        source : np.ndarray
            Input waveform array.
        **kwargs
            Keyword arguments forwarded to each step's ``apply()``.
            ``progress_callback`` is intercepted and rescaled so each
            step reports its proportional share of overall progress.

        Returns
        -------
        np.ndarray
            Output after all transforms have been applied.
        """
        n = len(self._steps)
        outer_cb = kwargs.pop('progress_callback', None)

        result = source
        for i, step in enumerate(self._steps):
            logger.debug("Pipeline step %d/%d: %s", i + 1, n,
                         type(step).__qualname__)

            step_kwargs = dict(kwargs)
            if outer_cb is not None:
                base = i / n
                scale = 1.0 / n
                step_kwargs['progress_callback'] = (
                    lambda f, _b=base, _s=scale: outer_cb(_b + f * _s)
                )

            result = step.apply(result, **step_kwargs)

            if outer_cb is not None:
                outer_cb((i + 1) / n)

        return result
