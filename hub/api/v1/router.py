# 📄 File: hub/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API: sends entity requests to the entity endpoints,
# account requests to the account endpoints, and sign-in requests to the sign-in endpoints.
# 🧪 Purpose (Technical Summary):
# Main API v1 router aggregation combining the module routers under their prefixes plus the
# health check.
# 🔗 Dependencies:
# FastAPI, module presentation packages, hub.api.v1.health
# 🔄 Connected Modules / Calls From:
# hub.main (mounted at /api/v1)

from fastapi import APIRouter

from hub.modules.accounts.presentation.api import create_accounts_router
from hub.modules.auth.presentation.api import create_auth_router
from hub.modules.entities.presentation.api import create_entities_router

from . import API_TAGS, ROUTE_PREFIXES
from .health import health_router

# Create main API v1 router
api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=[API_TAGS["health"]])

api_v1_router.include_router(
    create_entities_router(),
    prefix=ROUTE_PREFIXES["entities"],
    tags=[API_TAGS["entities"]],
)
api_v1_router.include_router(
    create_accounts_router(),
    prefix=ROUTE_PREFIXES["accounts"],
    tags=[API_TAGS["accounts"]],
)
api_v1_router.include_router(
    create_auth_router(),
    prefix=ROUTE_PREFIXES["auth"],
    tags=[API_TAGS["auth"]],
)
