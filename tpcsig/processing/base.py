# -*- coding: utf-8 -*-
"""
Waveform Processing Base Classes - Abstract interfaces for waveform processors.

Defines the ``WaveformProcessor`` common base class and the
``WaveformTransform`` ABC for dense ``(channels, ticks)`` array
transforms. ``WaveformProcessor`` provides version checking at first
instantiation and ``typing.Annotated``-based tunable parameter
declarations with automatic ``__init__`` generation and runtime
resolution through ``**kwargs``.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# tpcsig internal
from tpcsig.exceptions import InvalidInputError
from tpcsig.processing.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)


class WaveformProcessor(ABC):
    """
    Common base class for all waveform processors.

    Provides two cross-cutting capabilities:

    **Version checking**: Concrete subclasses that do not declare a processor
    version via ``@processor_version('x.y.z')`` trigger a ``UserWarning``
    at first instantiation. The check uses ``__new__`` rather than
    ``__init_subclass__`` so that decorators have been applied by the time
    the check runs.

    **Tunable parameter flow**: Subclasses declare tunable parameters as
    ``typing.Annotated`` class-body fields using constraint markers from
    :mod:`tpcsig.processing.params` (``Range``, ``Options``, ``Desc``).
    ``__init_subclass__`` collects these into ``__param_specs__`` and
    generates an ``__init__`` (unless the subclass defines its own).
    At runtime, ``_resolve_params(kwargs)`` merges instance values with
    keyword-argument overrides and validates constraints.
    """

    # Track which classes have been checked to warn only once per class.
    _version_warned_classes: set = set()

    #: Tuple of :class:`~tpcsig.processing.params.ParamSpec` built
    #: by ``__init_subclass__`` from ``Annotated`` fields.
    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'WaveformProcessor':
        if cls not in WaveformProcessor._version_warned_classes:
            WaveformProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    # -----------------------------------------------------------------
    # Tunable parameter resolution
    # -----------------------------------------------------------------
    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance values with runtime *kwargs* overrides.

        For each declared parameter in ``__param_specs__`` the *kwargs*
        value wins over the instance attribute. Every resolved value is
        validated against its spec.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            Runtime keyword arguments. Non-parameter keys (e.g.
            ``progress_callback``) are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        ValueError
            If a value violates range or choices constraints.
        """
        specs = type(self).__param_specs__
        resolved = {
            s.name: kwargs[s.name] if s.name in kwargs else getattr(self, s.name)
            for s in specs
        }
        for s in specs:
            s.validate(resolved[s.name])
        return resolved

    def _report_progress(
        self, kwargs: Dict[str, Any], fraction: float
    ) -> None:
        """Report progress to an optional ``progress_callback`` kwarg.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            The keyword arguments passed to the processor method.
        fraction : float
            Progress fraction in [0.0, 1.0].
        """
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class WaveformTransform(WaveformProcessor):
    """
    Abstract base class for waveform array transforms.

    Takes a source sample array indexed ``(channel, tick)`` and produces a
    new array of the same shape. The source is never modified.
    """

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Apply the transform to a source waveform array.

        Parameters
        ----------
        source : np.ndarray
            Input samples, shape ``(channels, ticks)`` or
            ``(planes, channels, ticks)``.

        Returns
        -------
        np.ndarray
            Transformed samples.
        """
        ...


class PlanewiseTransformMixin:
    """Mixin that applies a 2D transform to each plane of a 3D stack.

    When mixed into a ``WaveformTransform`` subclass, ``apply()`` accepts
    3D ``(planes, channels, ticks)`` arrays (e.g. the readout planes of a
    wire chamber) and applies ``_apply_2d()`` to every plane
    independently. 2D inputs go straight to ``_apply_2d()``.

    Usage
    -----
    ::

        class MyFilter(PlanewiseTransformMixin, WaveformTransform):
            def _apply_2d(self, source, **kwargs):
                ...
    """

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the transform, handling both 2D and 3D inputs.

        Parameters
        ----------
        source : np.ndarray
            2D ``(channels, ticks)`` or 3D ``(planes, channels, ticks)``
            array. Nested sequences are passed through unchanged so the
            2D implementation can validate them.

        Returns
        -------
        np.ndarray
            Transformed samples with the same dimensionality as the input.
        """
        if isinstance(source, np.ndarray) and source.ndim == 3:
            n_planes = source.shape[0]
            if source.size == 0:
                raise InvalidInputError(
                    f"Waveform stack must not be empty, got shape {source.shape}"
                )
            planes = []
            for p in range(n_planes):
                planes.append(self._apply_2d(source[p], **kwargs))
                self._report_progress(kwargs, (p + 1) / n_planes)
            return np.stack(planes)
        return self._apply_2d(source, **kwargs)

    @abstractmethod
    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the transform to a single ``(channels, ticks)`` plane."""
        ...
