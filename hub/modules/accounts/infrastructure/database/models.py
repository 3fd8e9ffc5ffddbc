# 📄 File: hub/modules/accounts/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how login accounts are stored, and the catalog of roles that says what each
# account may do in each part (module) of the back office.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for accounts and the static authorization catalog: roles, modules,
# permissions and the role/module/permission join table.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - hub.shared.config.database (declarative base, timestamp mixin)
# - hub.modules.entities.infrastructure.database.models (account -> entity link)
#
# 🔄 Connected Modules / Calls From:
# - account_repository.py (CRUD operations)
# - hub.modules.auth (sign-in lookups, permission snapshots)
# - DatabaseConnectionManager.sync_schema (table creation)

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from hub.modules.entities.infrastructure.database.models import EntityModel  # noqa: F401 (mapper registry)
from hub.shared.config.database import DatabaseBase, TimestampMixin


# =============================================================================
# AUTHORIZATION CATALOG
# =============================================================================

class RoleModel(TimestampMixin, DatabaseBase):
    """A named set of (module, permission) grants."""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(40), unique=True, nullable=False)
    description = Column(Text, nullable=True)

    module_permissions = relationship(
        "RoleModulePermissionModel",
        back_populates="role",
        order_by="RoleModulePermissionModel.id",
    )


class ModuleModel(TimestampMixin, DatabaseBase):
    """An area of the back office that permissions are scoped to."""
    __tablename__ = "modules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(40), unique=True, nullable=False)
    description = Column(Text, nullable=True)


class PermissionModel(TimestampMixin, DatabaseBase):
    """An action such as read, create, update or delete."""
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(40), unique=True, nullable=False)
    description = Column(Text, nullable=True)


class RoleModulePermissionModel(TimestampMixin, DatabaseBase):
    """
    One grant: ``role`` may perform ``permission`` in ``module``.

    Duplicate grants are not prevented here; snapshots deduplicate them.
    """
    __tablename__ = "role_module_permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    module_id = Column(Integer, ForeignKey("modules.id", ondelete="CASCADE"), nullable=False)
    permission_id = Column(Integer, ForeignKey("permissions.id", ondelete="CASCADE"), nullable=False)

    role = relationship("RoleModel", back_populates="module_permissions")
    module = relationship("ModuleModel", lazy="joined")
    permission = relationship("PermissionModel", lazy="joined")


# =============================================================================
# ACCOUNT MODEL
# =============================================================================

class AccountModel(TimestampMixin, DatabaseBase):
    """
    SQLAlchemy model for a login credential.

    Each account belongs to exactly one entity (and an entity has at most
    one account) and carries exactly one role.
    """
    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("entity_id", name="uq_accounts_entity_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    username = Column(String(20), unique=True, nullable=False, comment="Login name")
    password_hash = Column(String(255), nullable=False, comment="bcrypt password hash")
    enabled = Column(Boolean, nullable=False, default=True, comment="Disabled accounts cannot sign in")

    entity = relationship("EntityModel")
    role = relationship("RoleModel")

    def __repr__(self) -> str:
        return f"<AccountModel(id={self.id}, username='{self.username}')>"
