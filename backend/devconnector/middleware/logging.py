"""
DevConnector Backend — Access Log Middleware
==============================================

What:  One log line per HTTP request: method, path, status, duration,
       request id, authenticated user and client IP.
How:   Times the downstream call and logs to `devconnector.access` at a
       level chosen from the status class (5xx ERROR, 4xx WARNING, else
       INFO). Structured fields are also passed through `extra`.

Request bodies and auth headers are never logged: they carry passwords
and tokens.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from devconnector.middleware.request_id import request_id_var

logger = logging.getLogger("devconnector.access")

QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        # set by the auth dependency on protected routes
        user_id = getattr(request.state, "user_id", "-")

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            user_id,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "user_id": user_id,
                "client_ip": client_ip,
            },
        )
        return response
