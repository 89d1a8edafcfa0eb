"""Request Context — request ids, timing headers and one access-log line per request.

Invariants:
    - Every response carries x-request-id (propagated from the caller when given)
      and x-response-time-ms
    - request.state.request_id is set before any route or handler runs
    - Request bodies are never logged
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger("crm.access")


def register_request_context(app: FastAPI) -> None:
    """Install the request-context middleware on the app."""

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000.0

        response.headers["x-request-id"] = request_id
        response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
