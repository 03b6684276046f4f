"""Turns one HTTP transaction into a flat ``access-log`` event."""

from __future__ import annotations

import logging
import sys
from typing import Dict, Union

from .extract import find_header, flatten_body, split_host, split_user_agent
from .metrics import ACCESS_LOG_RECORDS, EMIT_FAILURES
from .pipeline import ACCESS_LOG_TARGET, Pipeline
from .transaction import HttpTransaction

FieldValue = Union[str, int]

# header name -> record field, copied through verbatim
PASS_THROUGH_HEADERS = (
    ("authorization", "authorization"),
    ("accept", "accept"),
    ("content-type", "content_type"),
    ("content-length", "content_length"),
)


def build_access_log_record(transaction: HttpTransaction) -> Dict[str, FieldValue]:
    """Derive the flat record for ``transaction``.

    Fields whose value comes out empty are left out entirely; only
    ``status_code`` is always present.
    """
    headers = transaction.headers
    host, dest_port = split_host(find_header(headers, "host"))
    user_agent = find_header(headers, "user-agent")
    browser, platform, device_info, engine_version = split_user_agent(user_agent)

    candidates = [
        ("src_ip", transaction.src_ip),
        ("path", transaction.path),
        ("method", transaction.method),
        ("query_string", transaction.query_string),
        ("body", flatten_body(transaction.body)),
        ("status_code", int(transaction.status_code)),
        ("host", host),
        ("dest_port", dest_port),
        ("user_agent_browser", browser),
        ("user_agent_platform", platform),
        ("user_agent_device_info", device_info),
        ("user_agent_engine_version", engine_version),
    ]
    candidates.extend(
        (field, find_header(headers, header)) for header, field in PASS_THROUGH_HEADERS
    )
    candidates.append(("user_agent", user_agent))
    return {key: value for key, value in candidates if value != ""}


class AccessLogRecorder:
    """Emits one WARN-level ``access-log`` event per completed request."""

    def __init__(self, pipeline: Pipeline) -> None:
        self.pipeline = pipeline

    def record(self, transaction: HttpTransaction) -> None:
        """Log ``transaction``. Never raises; a lost line is the worst case."""
        try:
            fields = build_access_log_record(transaction)
            self.pipeline.emit(logging.WARNING, ACCESS_LOG_TARGET, fields)
            ACCESS_LOG_RECORDS.inc()
        except Exception as e:
            EMIT_FAILURES.inc()
            print(
                f"ERROR in AccessLogRecorder.record: {e}. "
                f"Request: {transaction.method} {transaction.path}",
                file=sys.stderr,
            )
