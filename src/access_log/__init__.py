"""Access-log recording for the honeypot HTTP front end.

Build a :class:`Pipeline` once at startup with :func:`build_pipeline` and
hand it to an :class:`AccessLogRecorder`; the recorder turns each completed
HTTP transaction into one flat ``access-log`` event.
"""

from .errors import DirectoryCreationError
from .levels import TRACE, Threshold, verbosity_to_level
from .pipeline import ACCESS_LOG_TARGET, Pipeline, build_pipeline
from .recorder import AccessLogRecorder, build_access_log_record
from .transaction import HttpTransaction

__all__ = [
    "ACCESS_LOG_TARGET",
    "AccessLogRecorder",
    "DirectoryCreationError",
    "HttpTransaction",
    "Pipeline",
    "TRACE",
    "Threshold",
    "build_access_log_record",
    "build_pipeline",
    "verbosity_to_level",
]
