# 📄 File: hub/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the helpers that look at every request on its way in and out: one writes the request
# diary, the other turns crashes and rule violations into tidy error answers.
# 🧪 Purpose (Technical Summary):
# Package initialization for API middleware: shared configuration (excluded paths, sensitive
# headers), path exclusion checks and request id correlation used by both middleware classes.
# 🔗 Dependencies:
# starlette Request, uuid
# 🔄 Connected Modules / Calls From:
# hub.main (middleware registration), error_handling.py, logging.py

"""
Back-office API Middleware Package

Middleware Stack Order (outermost first):
    1. RequestLoggingMiddleware (binds the request id, logs start/completion)
    2. ErrorHandlingMiddleware (turns uncaught errors into the error envelope)
    3. Application Routes (innermost)
"""

import uuid
from typing import Any, Dict

from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"

# Middleware configuration constants
MIDDLEWARE_CONFIG: Dict[str, Dict[str, Any]] = {
    "logging": {
        "exclude_paths": [
            "/api/v1/health",
            "/docs",
            "/redoc",
            "/openapi.json",
        ],
        "sensitive_headers": [
            "authorization",
            "cookie",
            "x-api-key",
        ],
    },
    "error_handling": {
        "include_traceback": False,
    },
}


def get_middleware_config(middleware_name: str) -> Dict[str, Any]:
    return MIDDLEWARE_CONFIG.get(middleware_name, {})


def should_exclude_path(middleware_name: str, path: str) -> bool:
    """
    Check if a path should be excluded from middleware processing

    Args:
        middleware_name: Name of the middleware
        path: Request path to check

    Returns:
        True if path should be excluded, False otherwise
    """
    exclude_paths = get_middleware_config(middleware_name).get("exclude_paths", [])

    # Exact matches and prefix matches
    for exclude_path in exclude_paths:
        if path == exclude_path or path.startswith(exclude_path + "/"):
            return True

    return False


def get_or_create_request_id(request: Request) -> str:
    """
    Request id shared by every middleware handling ``request``.

    Reuses one already bound to the request, then the client's header,
    and generates a new one otherwise.
    """
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        return request_id

    request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
    request.state.request_id = request_id
    return request_id


__all__ = [
    "MIDDLEWARE_CONFIG",
    "REQUEST_ID_HEADER",
    "get_middleware_config",
    "get_or_create_request_id",
    "should_exclude_path",
]
