# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability tag decorators.

Provides the ``@processor_version`` class decorator for stamping semantic
version strings on waveform processor classes, and ``@processor_tags``
for attaching category and sample-domain metadata used to discover
processors by capability.

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

# Standard library
from typing import Optional, Sequence, Type, TypeVar
import importlib.metadata

# tpcsig vocabulary
from tpcsig.vocabulary import ProcessorCategory, SampleDomain

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator that stamps a processor version on a processor class.

    Sets ``__processor_version__`` as a class attribute. This version is
    the single source of truth for both the algorithm version and the
    output format version.

    If no version is given it is taken from the installed ``tpcsig``
    package metadata, or ``"unknown"`` when the package is not installed.

    Parameters
    ----------
    version : str, optional
        Semantic version string (e.g., ``'1.0.0'``).

    Returns
    -------
    Callable
        Class decorator that sets ``__processor_version__`` on the class.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class MyFilter(WaveformTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> MyFilter.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('tpcsig')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator


def processor_tags(
    domains: Optional[Sequence[SampleDomain]] = None,
    category: Optional[ProcessorCategory] = None,
    description: Optional[str] = None,
):
    """Class decorator for processor capability metadata.

    Stamps ``__processor_tags__`` on the class with sample-domain,
    category, and description metadata.

    Parameters
    ----------
    domains : Sequence[SampleDomain], optional
        Sample domains this processor consumes.
    category : ProcessorCategory, optional
        Processing category.
    description : str, optional
        Short human-readable description of the processor's purpose.

    Raises
    ------
    TypeError
        If any element of *domains* is not a ``SampleDomain`` or
        *category* is not a ``ProcessorCategory``.

    Examples
    --------
    >>> from tpcsig.vocabulary import ProcessorCategory, SampleDomain
    >>> @processor_tags(domains=[SampleDomain.TIME],
    ...                 category=ProcessorCategory.DENOISE)
    ... class MyFilter(WaveformTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> MyFilter.__processor_tags__['category']
    <ProcessorCategory.DENOISE: 'denoise'>
    """
    # Validate eagerly so typos fail at import time
    if domains is not None:
        for d in domains:
            if not isinstance(d, SampleDomain):
                raise TypeError(
                    f"domains must be SampleDomain members, got {d!r}"
                )
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'domains': tuple(domains) if domains else (),
            'category': category,
            'description': description,
        }
        return cls
    return decorator
