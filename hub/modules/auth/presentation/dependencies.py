# 📄 File: hub/modules/auth/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Builds the sign-in service for each request from the app's shared database and security tools.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency provider composing AuthService from the session manager, SecurityManager and
# the application settings.
# 🔗 Dependencies:
# FastAPI Depends, shared dependencies
# 🔄 Connected Modules / Calls From:
# Auth API endpoints

from fastapi import Depends

from hub.modules.auth.domain.services.auth_service import AuthService
from hub.shared.config.settings import Settings
from hub.shared.core.dependencies import get_app_settings, get_security_manager, get_session_manager
from hub.shared.core.security import SecurityManager
from hub.shared.infrastructure.database.session import DatabaseSessionManager


def get_auth_service(
    sessions: DatabaseSessionManager = Depends(get_session_manager),
    security: SecurityManager = Depends(get_security_manager),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(sessions, security, settings)
