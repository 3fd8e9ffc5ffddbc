# 📄 File: hub/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick checkup endpoint that tells monitoring tools whether the back office can reach its database.
# 🧪 Purpose (Technical Summary):
# Health check endpoint reporting database connectivity through DatabaseConnectionManager.health_check.
# Answers 200 when healthy and 503 otherwise, with the same body shape.
# 🔗 Dependencies:
# FastAPI, hub.shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# hub.api.v1.router, monitoring systems, load balancers

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hub.shared.config.settings import Settings
from hub.shared.core.dependencies import get_app_settings, get_connection_manager
from hub.shared.infrastructure.database.connection import DatabaseConnectionManager

# Create router for health endpoints
health_router = APIRouter()


@health_router.get(
    "/health",
    summary="Basic Health Check",
    description="Report service and database availability",
)
async def health_check(
    db: DatabaseConnectionManager = Depends(get_connection_manager),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    database = await db.health_check()
    healthy = database.get("status") == "healthy"

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "database": database,
        },
    )
