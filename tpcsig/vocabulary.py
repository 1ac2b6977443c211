# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the tpcsig framework.

Defines the controlled vocabularies used to tag processors: the
processing category and the sample domain a processor operates in.
Tag values are enum members so typos fail at import time rather than
silently producing an untagged processor.

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

from enum import Enum


class SampleDomain(Enum):
    """Domain of the samples a processor consumes.

    Waveform arrays are indexed ``(channel, tick)`` in the time domain;
    frequency-domain processors work on half-spectrum bins.
    """

    TIME = "time"
    FREQUENCY = "frequency"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging.

    Each value corresponds to a functional grouping of waveform
    processing operations.
    """

    DENOISE = "denoise"
    DECONVOLUTION = "deconvolution"
