"""Base class for header-driven context middleware.

A header context middleware:
1. Takes an identifier from an incoming request header, or generates one
2. Stores it in ``scope["state"]`` so routes and handlers can read it
3. Adds it to the logging context
4. Echoes it in the response headers
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from starlette.datastructures import MutableHeaders

from community_service.infra.logging.context import clear_log_context, set_log_context

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send


class HeaderContextMiddleware(ABC):
    """Pure ASGI middleware propagating one header value.

    Subclasses define:
    - header_name: lowercase HTTP header to read and write
    - state_key: key in ``scope["state"]``
    - log_context_key: key in the logging context
    - generate_value(): value used when the header is missing

    Example:
        class TraceTagMiddleware(HeaderContextMiddleware):
            header_name = "x-trace-tag"
            state_key = "trace_tag"
            log_context_key = "trace_tag"

            def generate_value(self) -> str:
                return generate_uuid()
    """

    header_name: str
    state_key: str
    log_context_key: str

    should_clear_context_on_finish: bool = False

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    @abstractmethod
    def generate_value(self) -> str:
        """Return a fresh value for requests that carry no header."""
        ...

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        value = self._extract_or_generate(scope)
        scope.setdefault("state", {})[self.state_key] = value
        set_log_context(**{self.log_context_key: value})

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(self.header_name, value)
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            if self.should_clear_context_on_finish:
                clear_log_context()

    def _extract_or_generate(self, scope: Scope) -> str:
        """Return the header value, a value set upstream, or a new one."""
        if existing := scope.get("state", {}).get(self.state_key):
            return existing

        for name, raw in scope.get("headers", []):
            if name == self.header_name.encode("latin-1") and raw:
                return raw.decode("latin-1")

        return self.generate_value()


def generate_uuid() -> str:
    """Generate a new UUID v4 string."""
    return str(uuid.uuid4())
