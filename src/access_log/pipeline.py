"""Fan-out logging pipeline: a console sink and a flat-file sink."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Mapping, Optional, TextIO

from .errors import DirectoryCreationError
from .formatters import ConsoleFormatter, FlatJsonFormatter
from .levels import Threshold
from .metrics import SINK_ERRORS

ACCESS_LOG_TARGET = "access-log"
PIPELINE_LOGGER_NAME = "honeyaml"

logger = logging.getLogger(__name__)


class _FileSink(logging.FileHandler):
    def handleError(self, record: logging.LogRecord) -> None:
        SINK_ERRORS.labels(sink="file").inc()
        super().handleError(record)


class _ConsoleSink(logging.StreamHandler):
    def handleError(self, record: logging.LogRecord) -> None:
        SINK_ERRORS.labels(sink="console").inc()
        super().handleError(record)


class Pipeline:
    """Receives events and hands each one to every sink that admits it.

    The underlying logger is private to the pipeline and never registered
    with :mod:`logging`, so building a pipeline leaves global logging state
    untouched. Each handler serialises its own writes under the handler
    lock, which keeps concurrent events on separate lines.
    """

    def __init__(
        self, sink_logger: logging.Logger, file_path: str, threshold: Threshold
    ) -> None:
        self._logger = sink_logger
        self._file_path = file_path
        self._threshold = threshold

    @property
    def threshold(self) -> Threshold:
        return self._threshold

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def handlers(self) -> list[logging.Handler]:
        return list(self._logger.handlers)

    def is_enabled_for(self, level: int) -> bool:
        return level >= self._threshold

    def emit(
        self,
        level: int,
        target: str,
        fields: Mapping[str, Any],
        message: str = "",
    ) -> None:
        """Deliver one event to the sinks.

        Sink write failures are handled inside each sink and do not reach
        the caller.
        """
        if not self.is_enabled_for(level):
            return
        self._logger.log(level, message, extra={"target": target, "fields": dict(fields)})

    def close(self) -> None:
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()


def build_pipeline(
    directory: str,
    file_prefix: str,
    threshold: Threshold,
    stream: Optional[TextIO] = None,
) -> Pipeline:
    """Create the log directory and wire the file and console sinks.

    The file ``directory/file_prefix`` is opened in append mode and is never
    rotated, so tools tailing a single file name keep working across
    restarts.

    Raises:
        DirectoryCreationError: ``directory`` does not exist and cannot be
            created.
    """
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(directory, str(exc)) from exc

    file_path = os.path.join(directory, file_prefix)

    sink_logger = logging.Logger(PIPELINE_LOGGER_NAME, level=threshold)
    sink_logger.propagate = False

    file_sink = _FileSink(file_path, mode="a", encoding="utf-8")
    file_sink.setLevel(threshold)
    file_sink.setFormatter(FlatJsonFormatter())
    sink_logger.addHandler(file_sink)

    console_sink = _ConsoleSink(stream if stream is not None else sys.stdout)
    console_sink.setLevel(threshold)
    console_sink.setFormatter(ConsoleFormatter())
    sink_logger.addHandler(console_sink)

    logger.debug(
        "Access-log pipeline writing to %s at threshold %s", file_path, threshold.name
    )
    return Pipeline(sink_logger, file_path, threshold)
