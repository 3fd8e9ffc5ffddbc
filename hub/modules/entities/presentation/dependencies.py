# 📄 File: hub/modules/entities/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Builds the entity service for each request using the app's shared database access.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency provider wiring EntitiesService to the application's DatabaseSessionManager.
# 🔗 Dependencies:
# FastAPI Depends, hub.shared.core.dependencies, EntitiesService
# 🔄 Connected Modules / Calls From:
# Entity API endpoints, accounts presentation dependencies

from fastapi import Depends

from hub.modules.entities.domain.services.entity_service import EntitiesService
from hub.shared.core.dependencies import get_session_manager
from hub.shared.infrastructure.database.session import DatabaseSessionManager


def get_entities_service(
    sessions: DatabaseSessionManager = Depends(get_session_manager),
) -> EntitiesService:
    return EntitiesService(sessions)
