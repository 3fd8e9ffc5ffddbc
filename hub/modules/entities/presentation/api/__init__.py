# 📄 File: hub/modules/entities/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Bundles the entity web endpoints so the main app can plug them in with one call.
#
# 🧪 Purpose (Technical Summary):
# API package initialization exposing a factory for the entity router.
#
# 🔗 Dependencies:
# - FastAPI APIRouter
# - hub.modules.entities.presentation.api.v1.entities
#
# 🔄 Connected Modules / Calls From:
# - hub.api.v1.router

from fastapi import APIRouter

__all__ = ["create_entities_router"]


def create_entities_router() -> APIRouter:
    """
    Create the entities API router.

    Returns:
        APIRouter: Router with every entity endpoint, mounted by the caller under its prefix
    """
    from hub.modules.entities.presentation.api.v1.entities import entities_router

    # Collection routes use the "" path, so this router is only mountable under a prefix
    return entities_router
