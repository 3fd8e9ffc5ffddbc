# 📄 File: hub/modules/accounts/domain/models/account.py
# 🧭 Purpose (Layman Explanation):
# Defines what a login account looks like: its username, password, role, whether it is enabled,
# and which entity (person or organization) it belongs to.
# 🧪 Purpose (Technical Summary):
# Pydantic value types for account create/update payloads, the account projection merged with
# its entity, and the conflict report accumulated while validating an account write.
# 🔗 Dependencies:
# pydantic, datetime, typing, entity domain models, shared exceptions
# 🔄 Connected Modules / Calls From:
# account_service.py, account API schemas

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from hub.modules.entities.domain.models import EntityConflict, EntityData, EntityInfo
from hub.shared.core.exceptions import AccountConflictError


class AccountCreate(BaseModel):
    """
    New account payload.

    Entity linkage:
    - ``entity_id`` only: link the existing entity as it is
    - ``entity_id`` and ``entity``: update that entity, then link it
    - ``entity`` only: create a new entity and link it
    """

    username: str = Field(..., min_length=1, max_length=20)
    password: str = Field(..., min_length=1, max_length=128)
    enabled: bool = True
    role_id: int
    entity_id: Optional[int] = None
    entity: Optional[EntityData] = None

    @model_validator(mode="after")
    def require_entity_reference(self) -> "AccountCreate":
        if self.entity_id is None and self.entity is None:
            raise ValueError("Either entity_id or entity must be provided")
        return self


class AccountUpdate(BaseModel):
    """Partial account update; ``entity`` replaces the linked entity's data."""

    username: Optional[str] = Field(None, min_length=1, max_length=20)
    password: Optional[str] = Field(None, min_length=1, max_length=128)
    enabled: Optional[bool] = None
    role_id: Optional[int] = None
    entity: Optional[EntityData] = None


class AccountInfo(BaseModel):
    """Account projection merged with its entity. Never carries the password hash."""

    id: int
    username: str
    enabled: bool
    role_id: int
    entity_id: int
    entity: Optional[EntityInfo] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, model: Any, entity: Optional[EntityInfo] = None) -> "AccountInfo":
        return cls(
            id=model.id,
            username=model.username,
            enabled=model.enabled,
            role_id=model.role_id,
            entity_id=model.entity_id,
            entity=entity,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class AccountConflictReport(BaseModel):
    """
    Every validation outcome of an account write, collected before deciding.
    """

    entity_conflict: Optional[EntityConflict] = None
    username_used: bool = False
    another_account_with_entity: bool = False

    @property
    def has_conflicts(self) -> bool:
        entity_failed = self.entity_conflict is not None and self.entity_conflict.has_conflicts
        return entity_failed or self.username_used or self.another_account_with_entity

    def to_error(self) -> AccountConflictError:
        entity_failed = self.entity_conflict is not None and self.entity_conflict.has_conflicts
        return AccountConflictError(
            username_used=self.username_used,
            another_account_with_entity=self.another_account_with_entity,
            entity_error=self.entity_conflict.to_error() if entity_failed else None,
        )
