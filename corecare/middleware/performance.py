"""
Performance Monitoring Middleware

Times every HTTP request, records it in a Prometheus histogram and logs
slow requests.
"""

import re
import time
import logging

from prometheus_client import Histogram

from corecare.core.config import settings

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 2000

http_request_duration_seconds = Histogram(
    "corecare_http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status_code"],
)


class PerformanceMiddleware:
    """Middleware to track HTTP request performance metrics"""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        if self._should_skip_monitoring(path):
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            logger.error(f"Request processing error: {e}")
            raise
        finally:
            elapsed = time.perf_counter() - start_time
            self._record_request_metrics(scope.get("method", ""), path, status_code, elapsed)

    def _should_skip_monitoring(self, path: str) -> bool:
        """Determine if we should skip monitoring for this path"""
        api = settings.API_V1_STR
        skip_paths = [
            f"{api}/docs",
            f"{api}/redoc",
            f"{api}/openapi.json",
            "/favicon.ico",
            "/health",
            "/metrics",  # Avoid recursion on metrics endpoints
        ]
        return any(path.startswith(skip_path) for skip_path in skip_paths)

    def _record_request_metrics(self, method: str, path: str, status_code: int, elapsed: float):
        endpoint = self._clean_endpoint_path(path)
        http_request_duration_seconds.labels(
            method=method, endpoint=endpoint, status_code=str(status_code)
        ).observe(elapsed)

        response_time_ms = elapsed * 1000
        if response_time_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow request: {method} {endpoint} "
                f"took {response_time_ms:.0f}ms (status: {status_code})"
            )
        else:
            logger.debug(f"{method} {endpoint} {status_code} {response_time_ms:.1f}ms")

    @staticmethod
    def _clean_endpoint_path(path: str) -> str:
        """Collapse numeric path segments so metrics labels stay bounded"""
        return re.sub(r"/\d+(?=/|$)", "/{id}", path)
