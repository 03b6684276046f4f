"""The completed HTTP exchange handed over by the serving layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Tuple

from .extract import resolve_source_ip


def decode_header_value(raw: bytes) -> str:
    """Decode a raw header value, or return ``""`` unless it is visible ASCII.

    Tab is the only control character allowed.
    """
    if any(byte != 0x09 and not 0x20 <= byte <= 0x7E for byte in raw):
        return ""
    return raw.decode("ascii")


@dataclass(frozen=True)
class HttpTransaction:
    method: str
    path: str
    status_code: int
    src_ip: str = ""
    query_string: str = ""
    headers: Tuple[Tuple[str, str], ...] = ()
    body: str = ""

    @classmethod
    def from_asgi(
        cls, scope: Mapping[str, Any], body: bytes, status_code: int
    ) -> "HttpTransaction":
        """Build a transaction from an ASGI HTTP scope and the buffered body."""
        headers = tuple(_decode_headers(scope.get("headers") or ()))
        client = scope.get("client")
        peer = client[0] if client else None
        return cls(
            method=scope.get("method", ""),
            path=scope.get("path", ""),
            status_code=status_code,
            src_ip=resolve_source_ip(headers, peer),
            query_string=(scope.get("query_string") or b"").decode("latin-1"),
            headers=headers,
            body=body.decode("utf-8", errors="replace"),
        )


def _decode_headers(raw_headers: Iterable[Tuple[bytes, bytes]]):
    for name, value in raw_headers:
        yield name.decode("latin-1").lower(), decode_header_value(value)
