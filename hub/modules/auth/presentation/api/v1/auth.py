# 📄 File: hub/modules/auth/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# This file contains the sign-in, "who am I" and logout endpoints.
#
# 🧪 Purpose (Technical Summary):
# FastAPI auth endpoints over AuthService. The session token travels in the
# ``Authorization: Bearer`` header; every authentication failure is a uniform 401.
#
# 🔗 Dependencies:
# - FastAPI router
# - hub.modules.auth.domain.services.auth_service
# - hub.shared.core.dependencies (bearer token extraction)
#
# 🔄 Connected Modules / Calls From:
# - hub.modules.auth.presentation.api (router inclusion)

"""
Auth API Endpoints

Endpoints:
- POST /signin: Exchange email and password for a session token
- GET /session: Resolve the bearer token to the current session
- POST /logout: Lock the bearer token's session
"""

from fastapi import APIRouter, Depends

from hub.modules.auth.domain.services.auth_service import AuthService
from hub.modules.auth.presentation.api.schemas.auth_schemas import SessionEnvelope, SignInRequest
from hub.modules.auth.presentation.dependencies import get_auth_service
from hub.shared.core.dependencies import get_bearer_token
from hub.shared.core.exceptions import InvalidCredentialsError
from hub.shared.utils.responses import EmptyResponse, success_response

# Create router
auth_router = APIRouter()

_UNAUTHORIZED_RESPONSE = {401: {"description": "Invalid credentials"}}


@auth_router.post(
    "/signin",
    response_model=SessionEnvelope,
    summary="Sign in",
    responses={**_UNAUTHORIZED_RESPONSE, 403: {"description": "Account is disabled"}},
)
async def sign_in(
    credentials: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Sign in with an email owned by the account's entity.

    Returns:
        SessionEnvelope: The session, including the bearer token to use
    """
    session_info = await auth_service.sign_in(credentials.email, credentials.password)
    return success_response("Signed in!", session_info)


@auth_router.get(
    "/session",
    response_model=SessionEnvelope,
    summary="Current session",
    responses=_UNAUTHORIZED_RESPONSE,
)
async def get_session(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    session_info = await auth_service.get_session_by_token(token)
    if session_info is None:
        raise InvalidCredentialsError()
    return success_response("Session retrieved!", session_info)


@auth_router.post(
    "/logout",
    response_model=EmptyResponse,
    summary="Log out",
    responses=_UNAUTHORIZED_RESPONSE,
)
async def logout(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    await auth_service.logout(token)
    return success_response("Logged out!")
