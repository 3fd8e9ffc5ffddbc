# 📄 File: hub/modules/auth/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how each login is remembered: which account signed in, a random secret that ties the
# login to its token, when it expires, and whether the user already logged out.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for issued sessions. Sessions are locked on logout and never deleted.
# account_id carries no foreign key so that deleting an account leaves its sessions orphaned.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - hub.shared.config.database (declarative base, timestamp mixin)
#
# 🔄 Connected Modules / Calls From:
# - session_repository.py
# - DatabaseConnectionManager.sync_schema (table creation)

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from hub.shared.config.database import DatabaseBase, TimestampMixin
from hub.shared.utils.helpers import generate_uuid


class SessionModel(TimestampMixin, DatabaseBase):
    """An issued login."""
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, nullable=False, index=True, comment="Owning account (not enforced)")
    token_uuid = Column(
        String(36),
        unique=True,
        nullable=False,
        default=generate_uuid,
        comment="Random identifier embedded in the session token"
    )
    locked = Column(Boolean, nullable=False, default=False, comment="True once logged out")
    expire_at = Column(DateTime, nullable=False, comment="Expiry (UTC)")

    def __repr__(self) -> str:
        return f"<SessionModel(id={self.id}, account_id={self.account_id}, locked={self.locked})>"
