# 📄 File: hub/modules/accounts/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Bundles the account web endpoints so the main app can plug them in with one call.
#
# 🧪 Purpose (Technical Summary):
# API package initialization exposing a factory for the account router.
#
# 🔗 Dependencies:
# - FastAPI APIRouter
# - hub.modules.accounts.presentation.api.v1.accounts
#
# 🔄 Connected Modules / Calls From:
# - hub.api.v1.router

from fastapi import APIRouter

__all__ = ["create_accounts_router"]


def create_accounts_router() -> APIRouter:
    """
    Create the accounts API router.

    Returns:
        APIRouter: Router with every account endpoint, mounted by the caller under its prefix
    """
    from hub.modules.accounts.presentation.api.v1.accounts import accounts_router

    # Collection routes use the "" path, so this router is only mountable under a prefix
    return accounts_router
