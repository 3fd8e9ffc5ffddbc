# 📄 File: hub/modules/auth/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Bundles the sign-in, session and logout endpoints so the main app can plug them in with one call.
#
# 🧪 Purpose (Technical Summary):
# API package initialization exposing a factory for the auth router.
#
# 🔗 Dependencies:
# - FastAPI APIRouter
# - hub.modules.auth.presentation.api.v1.auth
#
# 🔄 Connected Modules / Calls From:
# - hub.api.v1.router

from fastapi import APIRouter

__all__ = ["create_auth_router"]


def create_auth_router() -> APIRouter:
    """
    Create the auth API router.

    Returns:
        APIRouter: Router with the sign-in, session and logout endpoints
    """
    from hub.modules.auth.presentation.api.v1.auth import auth_router

    return auth_router
