# 📄 File: hub/modules/auth/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the sign-in data shapes in one place
# 🧪 Purpose (Technical Summary):
# Package exports for session projections and permission snapshot helpers
# 🔗 Dependencies:
# session.py
# 🔄 Connected Modules / Calls From:
# Auth service, auth API schemas

from .session import (
    ModulePermissions,
    RoleSnapshot,
    SessionInfo,
    SignInCredentials,
    build_role_snapshot,
    group_module_permissions,
)

__all__ = [
    "ModulePermissions",
    "RoleSnapshot",
    "SessionInfo",
    "SignInCredentials",
    "build_role_snapshot",
    "group_module_permissions",
]
