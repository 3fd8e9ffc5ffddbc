"""
Common FastAPI dependencies for the back-office API.
Expose the per-application database, security and settings objects stored on
``app.state`` by the lifespan, plus bearer token extraction.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config.settings import Settings
from ..infrastructure.database.connection import DatabaseConnectionManager
from ..infrastructure.database.session import DatabaseSessionManager
from .exceptions import InvalidCredentialsError
from .security import SecurityManager

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation; missing headers are reported
# as invalid credentials instead of FastAPI's default 403.
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_connection_manager(request: Request) -> DatabaseConnectionManager:
    return request.app.state.db


def get_session_manager(request: Request) -> DatabaseSessionManager:
    return request.app.state.sessions


def get_security_manager(request: Request) -> SecurityManager:
    return request.app.state.security


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Raw token from the ``Authorization: Bearer`` header.

    Raises:
        InvalidCredentialsError: If the header is missing or not a bearer token
    """
    if credentials is None or not credentials.credentials:
        raise InvalidCredentialsError()
    return credentials.credentials
