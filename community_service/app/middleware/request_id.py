"""Request ID middleware for per-request log correlation.

This middleware:
1. Reads the request ID from the X-Request-ID header if present
2. Generates a new UUID if the header is missing
3. Stores the ID in request.state.request_id
4. Adds the ID to the logging context
5. Returns X-Request-ID in the response headers
6. Clears the logging context after the request completes
"""

from __future__ import annotations

from community_service.app.middleware.base import HeaderContextMiddleware, generate_uuid


class RequestIDMiddleware(HeaderContextMiddleware):
    """Attach a request ID to every HTTP request.

    Problem details returned by the exception handlers carry the same ID
    as ``request_id``, so a client report can be matched to log lines.

    Usage:
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)
    """

    header_name = "x-request-id"
    state_key = "request_id"
    log_context_key = "request_id"
    should_clear_context_on_finish = True

    def generate_value(self) -> str:
        return generate_uuid()
