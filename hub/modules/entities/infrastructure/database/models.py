# 📄 File: hub/modules/entities/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how people and organizations ("entities") are stored in the database,
# together with the email addresses and phone numbers that belong to each of them.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the entity aggregate: entities, emails and phones, with the
# unique indexes that back up the application-level uniqueness checks.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - hub.shared.config.database (declarative base, timestamp mixin)
#
# 🔄 Connected Modules / Calls From:
# - entity_repository.py (CRUD operations)
# - hub.modules.accounts.infrastructure.database.models (account -> entity link)
# - DatabaseConnectionManager.sync_schema (table creation)

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from hub.shared.config.database import DatabaseBase, TimestampMixin


# =============================================================================
# ENTITY MODEL
# =============================================================================

class EntityModel(TimestampMixin, DatabaseBase):
    """
    SQLAlchemy model for a person or organization.

    The (national_id, nationality_type) pair identifies an entity and is
    unique across the table.
    """
    __tablename__ = "entities"
    __table_args__ = (
        UniqueConstraint("national_id", "nationality_type", name="uq_entities_national_id_nationality_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(40), nullable=False, comment="Given name")
    lastname = Column(String(40), nullable=False, comment="Family name")
    birthdate = Column(Date, nullable=False, comment="Birth or foundation date")
    national_id = Column(String(15), nullable=False, index=True, comment="National document number")
    nationality_type = Column(String(1), nullable=False, comment="Document type letter (V, E, J, ...)")

    emails = relationship(
        "EmailModel",
        back_populates="entity",
        cascade="all, delete-orphan",
        order_by="EmailModel.id",
    )
    phones = relationship(
        "PhoneModel",
        back_populates="entity",
        cascade="all, delete-orphan",
        order_by="PhoneModel.id",
    )

    def __repr__(self) -> str:
        return f"<EntityModel(id={self.id}, national_id='{self.nationality_type}-{self.national_id}')>"


# =============================================================================
# CONTACT MODELS
# =============================================================================

class EmailModel(TimestampMixin, DatabaseBase):
    """Email address owned by an entity. Addresses are globally unique."""
    __tablename__ = "emails"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_id = Column(
        Integer,
        ForeignKey("entities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    email_address = Column(String(100), unique=True, nullable=False)
    verified_at = Column(DateTime, nullable=True, comment="When the address was verified")

    entity = relationship("EntityModel", back_populates="emails")


class PhoneModel(TimestampMixin, DatabaseBase):
    """Phone number owned by an entity. Numbers are globally unique."""
    __tablename__ = "phones"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_id = Column(
        Integer,
        ForeignKey("entities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    phone = Column(String(20), unique=True, nullable=False)
    verified_at = Column(DateTime, nullable=True, comment="When the number was verified")

    entity = relationship("EntityModel", back_populates="phones")
