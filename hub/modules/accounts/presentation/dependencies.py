# 📄 File: hub/modules/accounts/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Builds the account service for each request from the app's shared database and security tools.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency provider composing AccountsService from the session manager, the entity
# service and the application's SecurityManager.
# 🔗 Dependencies:
# FastAPI Depends, shared dependencies, entity dependencies
# 🔄 Connected Modules / Calls From:
# Account API endpoints

from fastapi import Depends

from hub.modules.accounts.domain.services.account_service import AccountsService
from hub.modules.entities.domain.services.entity_service import EntitiesService
from hub.modules.entities.presentation.dependencies import get_entities_service
from hub.shared.core.dependencies import get_security_manager, get_session_manager
from hub.shared.core.security import SecurityManager
from hub.shared.infrastructure.database.session import DatabaseSessionManager


def get_accounts_service(
    sessions: DatabaseSessionManager = Depends(get_session_manager),
    entities_service: EntitiesService = Depends(get_entities_service),
    security: SecurityManager = Depends(get_security_manager),
) -> AccountsService:
    return AccountsService(sessions, entities_service, security)
