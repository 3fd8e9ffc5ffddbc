# 📄 File: hub/shared/config/database.py
#
# 🧭 Purpose (Layman Explanation):
# Describes how the back office talks to its database: which connection options
# each kind of database needs, and the common base every table definition builds on.
#
# 🧪 Purpose (Technical Summary):
# Dialect-specific SQLAlchemy async engine options, the declarative base with a
# constraint naming convention, and a timestamp mixin shared by all ORM models.
#
# 🔗 Dependencies:
# - SQLAlchemy (MetaData, DeclarativeBase)
# - hub.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - hub.shared.infrastructure.database.connection
# - All module ORM models (infrastructure/database/models.py)

from typing import Any, Dict

from sqlalchemy import Column, DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase

from hub.shared.utils.helpers import utc_now

from .settings import Settings


# =============================================================================
# DATABASE CONFIGURATION
# =============================================================================

class DatabaseConfig:
    """Database configuration class with dialect-specific engine settings."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def database_url(self) -> str:
        """Get the database URL for async connections."""
        return self.settings.database_url

    @property
    def engine_kwargs(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine configuration based on dialect."""
        base_config: Dict[str, Any] = {
            "echo": self.settings.DB_ECHO,
        }

        if self.settings.is_sqlite:
            # SQLite has no server pool to tune
            return base_config

        base_config.update({
            "pool_size": self.settings.DB_POOL_SIZE,
            "max_overflow": self.settings.DB_MAX_OVERFLOW,
            "pool_timeout": self.settings.DB_POOL_TIMEOUT,
            "pool_recycle": self.settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
            "connect_args": {
                "server_settings": {
                    "application_name": f"stexcore_hub_{self.settings.ENVIRONMENT}",
                    "jit": "off",
                }
            },
        })

        if self.settings.is_production:
            base_config["connect_args"]["command_timeout"] = 60

        return base_config


# =============================================================================
# DATABASE MODELS BASE CLASS
# =============================================================================

# Naming convention for database constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class DatabaseBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Every table of the back office is registered on this metadata, which is
    what the startup schema sync creates.
    """
    metadata = metadata


class TimestampMixin:
    """Adds created_at / updated_at bookkeeping columns."""

    created_at = Column(DateTime, nullable=False, default=utc_now, comment="Row creation time (UTC)")
    updated_at = Column(
        DateTime,
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        comment="Last modification time (UTC)"
    )
