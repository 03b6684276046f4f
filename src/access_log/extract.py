"""Best-effort field extraction from raw request data.

Every helper here is total: malformed input yields a default value
instead of an exception.
"""

from __future__ import annotations

import json
import re
from typing import Iterable, Optional, Tuple

DEFAULT_PORT = "80"

_UA_DELIMITERS = re.compile(r"[();]")
_UA_FIELDS = 4

Headers = Iterable[Tuple[str, str]]


def find_header(headers: Headers, name: str) -> str:
    """Return the value of the first header called ``name``, or ``""``."""
    wanted = name.lower()
    for header_name, value in headers:
        if header_name.lower() == wanted:
            return value
    return ""


def split_host(host_header: str) -> Tuple[str, str]:
    """Split a Host header into ``(host, dest_port)``.

    >>> split_host("example.com:8080")
    ('example.com', '8080')
    >>> split_host("example.com")
    ('example.com', '80')
    """
    if not host_header:
        return "", ""
    host, sep, port = host_header.partition(":")
    if not sep:
        return host_header, DEFAULT_PORT
    return host, port


def split_user_agent(user_agent: str) -> Tuple[str, str, str, str]:
    """Positional heuristic split of a User-Agent string.

    Returns ``(browser, platform, device_info, engine_version)``; this is
    not a real UA parser and simply cuts on ``(``, ``)`` and ``;``.
    """
    parts = [part.strip() for part in _UA_DELIMITERS.split(user_agent)][:_UA_FIELDS]
    parts.extend([""] * (_UA_FIELDS - len(parts)))
    browser, platform, device_info, engine_version = parts
    return browser, platform, device_info, engine_version


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def flatten_body(body: str) -> str:
    """Collapse a JSON object body into ``key:value`` pairs joined by commas.

    Only string values are kept; any other JSON value leaves an empty slot
    after the colon. Bodies that are not a JSON object come back unchanged.
    """
    try:
        parsed = json.loads(body, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return body
    if not isinstance(parsed, dict):
        return body
    return ",".join(
        f"{key}:{value if isinstance(value, str) else ''}"
        for key, value in parsed.items()
    )


def _forwarded_for(value: str) -> str:
    first = value.split(",", 1)[0]
    for pair in first.split(";"):
        key, sep, addr = pair.strip().partition("=")
        if sep and key.lower() == "for":
            return addr.strip().strip('"')
    return ""


def resolve_source_ip(headers: Headers, peer: Optional[str]) -> str:
    """Best guess at the client address.

    Checks ``Forwarded: for=`` first, then the first ``X-Forwarded-For``
    entry, then falls back to the socket peer.
    """
    headers = list(headers)
    forwarded = _forwarded_for(find_header(headers, "forwarded"))
    if forwarded:
        return forwarded
    x_forwarded_for = find_header(headers, "x-forwarded-for").split(",", 1)[0].strip()
    if x_forwarded_for:
        return x_forwarded_for
    return peer or ""
