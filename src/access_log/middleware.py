"""ASGI middleware that records every request the app answers."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, MutableMapping

from fastapi import FastAPI

from .config import DEFAULT_MAX_BODY_BYTES, AccessLogSettings
from .recorder import AccessLogRecorder
from .transaction import HttpTransaction

Scope = MutableMapping[str, Any]
Message = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]


class AccessLogMiddleware:
    """Capture the start of the request body, run the app, then log the exchange.

    Body messages are read up front until ``max_body_bytes`` have been seen
    and replayed to the app, so the body is logged even when the endpoint
    never reads it. Anything past the cap streams straight through to the
    app and is not kept. Recording happens after the response has been sent
    and cannot fail the request.
    """

    def __init__(
        self,
        app: ASGIApp,
        recorder: AccessLogRecorder,
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
    ) -> None:
        self.app = app
        self.recorder = recorder
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        pending: list[Message] = []
        captured = bytearray()
        more_body = True
        while more_body and len(captured) < self.max_body_bytes:
            message = await receive()
            pending.append(message)
            if message["type"] != "http.request":
                # client went away before the body arrived
                break
            captured.extend(message.get("body", b""))
            more_body = message.get("more_body", False)
        body_bytes = bytes(captured[: self.max_body_bytes])
        del captured

        async def replay() -> Message:
            if pending:
                return pending.pop(0)
            return await receive()

        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, replay, send_wrapper)
        finally:
            self.recorder.record(HttpTransaction.from_asgi(scope, body_bytes, status_code))


def add_access_logging(
    app: FastAPI, recorder: AccessLogRecorder, max_body_bytes: int | None = None
) -> None:
    if max_body_bytes is None:
        max_body_bytes = AccessLogSettings().max_body
    app.add_middleware(AccessLogMiddleware, recorder=recorder, max_body_bytes=max_body_bytes)
