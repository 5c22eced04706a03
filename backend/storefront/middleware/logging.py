"""
Storefront Backend: Request Logging Middleware
===============================================

What:  Counts every HTTP request and logs it on completion.
How:   A process-wide RequestCounter is incremented on arrival; the log line
       carries method, path, status, duration, request id and the running
       total.
When:  After RequestIDMiddleware (uses its request id).

Log line:
    GET /order/o1 200 3.2ms [a1b2c3d4] total=17

Request bodies are never logged: PATCH /user/{id} carries passwords.
"""

import logging
import threading
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from storefront.middleware.request_id import request_id_var

logger = logging.getLogger("storefront.access")


class RequestCounter:
    """
    Process-wide running count of handled requests.

    Starts at zero, is never persisted and resets with the process. The lock
    keeps increments exact even if requests are served from several threads.
    """

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


request_counter = RequestCounter()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with its status code and duration.

    5xx → ERROR, 4xx → WARNING, everything else → INFO.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Why perf_counter: monotonic and higher resolution than time.time()
        start_time = time.perf_counter()
        total = request_counter.increment()
        # Why count on arrival: requests that crash downstream still count

        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        # Why per-status levels: 5xx needs investigation, 4xx is usually the
        # client, the rest is routine traffic
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] total=%d",
            method,
            path,
            status,
            duration_ms,
            rid,
            total,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "total_requests": total,
            },
        )

        return response
