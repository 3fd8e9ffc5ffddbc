# 📄 File: hub/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to the back office: what was asked for, who answered,
# and how long it took. Passwords and login tokens never end up in the diary.
# 🧪 Purpose (Technical Summary):
# Request logging middleware binding the request id to the logging context for the whole request,
# recording start/completion with timing, and redacting sensitive headers.
# 🔗 Dependencies:
# starlette, logging, time, hub.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# hub.main (middleware registration)

import logging
import time
from typing import Any, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from hub.shared.utils.logging import log_context

from . import REQUEST_ID_HEADER, get_middleware_config, get_or_create_request_id, should_exclude_path

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware.

    Every log record emitted while a request is handled, in any module,
    carries that request's id.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        config = get_middleware_config("logging")
        self.sensitive_headers = {header.lower() for header in config.get("sensitive_headers", [])}

        # Performance threshold for warnings
        self.slow_request_threshold = 2.0  # seconds

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = get_or_create_request_id(request)

        with log_context(request_id=request_id):
            if should_exclude_path("logging", request.url.path):
                return await call_next(request)

            start_time = time.perf_counter()
            logger.info(f"→ {request.method} {request.url.path}")
            logger.debug(f"Request headers: {self._filter_sensitive_headers(dict(request.headers))}")

            try:
                response = await call_next(request)
            except Exception as e:
                processing_time_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    f"✗ {request.method} {request.url.path} failed after {processing_time_ms:.2f}ms: "
                    f"{type(e).__name__}"
                )
                raise

            processing_time_ms = (time.perf_counter() - start_time) * 1000
            message = f"← {request.method} {request.url.path} {response.status_code} ({processing_time_ms:.2f}ms)"
            if processing_time_ms > self.slow_request_threshold * 1000:
                logger.warning(f"Slow request: {message}")
            else:
                logger.info(message)

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Response-Time"] = f"{processing_time_ms:.2f}ms"
            return response

    def _filter_sensitive_headers(self, headers: Dict[str, str]) -> Dict[str, Any]:
        """
        Filter out sensitive headers from logging

        Args:
            headers: Request headers

        Returns:
            Filtered headers dictionary
        """
        filtered = {}
        for key, value in headers.items():
            key_lower = key.lower()
            if key_lower in self.sensitive_headers or "password" in key_lower or "secret" in key_lower:
                filtered[key] = "[REDACTED]"
            else:
                filtered[key] = value
        return filtered
