"""Verbosity to severity threshold mapping."""

import logging
from enum import IntEnum

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class Threshold(IntEnum):
    """Minimum severity accepted by every sink, expressed as a logging level."""

    WARN = logging.WARNING
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    TRACE = TRACE


_BY_VERBOSITY = (Threshold.WARN, Threshold.INFO, Threshold.DEBUG)


def verbosity_to_level(verbosity: int) -> Threshold:
    """Map ``-v`` style verbosity to a threshold.

    0 is WARN, 1 INFO, 2 DEBUG and anything higher saturates to TRACE.
    """
    if verbosity <= 0:
        return Threshold.WARN
    if verbosity < len(_BY_VERBOSITY):
        return _BY_VERBOSITY[verbosity]
    return Threshold.TRACE
