# 📄 File: hub/modules/auth/domain/models/session.py
# 🧭 Purpose (Layman Explanation):
# Describes what a signed-in user gets back: who they are, which role they have, and what that
# role allows them to do in each part of the back office.
# 🧪 Purpose (Technical Summary):
# Pydantic projections for sign-in results and the role permission snapshot, plus the grouping
# that folds role/module/permission grant rows into an ordered, deduplicated module list.
# 🔗 Dependencies:
# pydantic, entity domain models
# 🔄 Connected Modules / Calls From:
# auth_service.py, auth API schemas

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field

from hub.modules.entities.domain.models import EntityInfo
from hub.shared.utils.helpers import deduplicate_list


class SignInCredentials(BaseModel):
    email: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)


class ModulePermissions(BaseModel):
    """Permission names a role holds within one module."""

    name: str
    permissions: List[str] = Field(default_factory=list)


class RoleSnapshot(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    modules: List[ModulePermissions] = Field(default_factory=list)


class SessionInfo(BaseModel):
    """
    Caller identity resolved from a session.

    ``id`` is the account id; ``session_id`` is the stored session row.
    The username, entity and role are loaded fresh on every resolution.
    """

    id: int
    session_id: int
    token: str
    username: str
    entity: EntityInfo
    role: RoleSnapshot
    created_at: datetime


def group_module_permissions(pairs: Iterable[Tuple[str, str]]) -> List[ModulePermissions]:
    """
    Group ``(module name, permission name)`` pairs by module.

    Modules keep their first-seen order, and so do permissions within a
    module; repeated pairs are dropped.
    """
    modules: Dict[str, ModulePermissions] = {}

    for module_name, permission_name in deduplicate_list(pairs):
        module = modules.setdefault(module_name, ModulePermissions(name=module_name))
        module.permissions.append(permission_name)

    return list(modules.values())


def build_role_snapshot(role_model: Any) -> RoleSnapshot:
    """Map a ``RoleModel`` with loaded grants (module and permission joined)."""
    pairs = (
        (grant.module.name, grant.permission.name)
        for grant in role_model.module_permissions
    )
    return RoleSnapshot(
        id=role_model.id,
        name=role_model.name,
        description=role_model.description,
        modules=group_module_permissions(pairs),
    )
