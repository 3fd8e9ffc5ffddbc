# 📄 File: hub/modules/entities/domain/models/entity.py
# 🧭 Purpose (Layman Explanation):
# Defines what an "entity" (a person or organization) looks like inside the back office: identity
# fields plus the lists of emails and phones, and how a document number such as "V-12345678" is read.
# 🧪 Purpose (Technical Summary):
# Pydantic value types for entity payloads and projections, the DNI search key parser, and the
# conflict/update-plan structures produced by the entity reconciliation algorithm.
# 🔗 Dependencies:
# pydantic, datetime, typing, hub.shared.core.exceptions, hub.shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# entity_service.py, account_service.py, auth domain models, entity API schemas

import re
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hub.shared.core.exceptions import EntityConflictError
from hub.shared.utils.helpers import deduplicate_list

# Fields copied 1:1 between payloads and the entities table
ENTITY_FIELDS = ("name", "lastname", "birthdate", "national_id", "nationality_type")

_LETTER_PREFIX = re.compile(r"^[A-Za-z]")


class EntityData(BaseModel):
    """
    Entity payload: identity fields plus the desired contact lists.

    Used both for creation and for full-replacement updates.
    """

    name: str = Field(..., min_length=1, max_length=40)
    lastname: str = Field(..., min_length=1, max_length=40)
    birthdate: date
    national_id: str = Field(..., min_length=1, max_length=15)
    nationality_type: str = Field(..., min_length=1, max_length=1)
    emails: List[str] = Field(default_factory=list)
    phones: List[str] = Field(default_factory=list)

    @field_validator("emails", "phones")
    @classmethod
    def drop_repeated_contacts(cls, v: List[str]) -> List[str]:
        """Repeated addresses in one request collapse to their first occurrence."""
        return deduplicate_list(v)

    def entity_fields(self) -> Dict[str, Any]:
        return {field: getattr(self, field) for field in ENTITY_FIELDS}


class EntityInfo(EntityData):
    """Entity projection with its contacts flattened to plain strings."""

    model_config = ConfigDict(from_attributes=True)

    id: int

    @classmethod
    def from_model(cls, model: Any) -> "EntityInfo":
        """Map an ``EntityModel`` with loaded ``emails``/``phones`` collections."""
        return cls(
            id=model.id,
            name=model.name,
            lastname=model.lastname,
            birthdate=model.birthdate,
            national_id=model.national_id,
            nationality_type=model.nationality_type,
            emails=[email.email_address for email in model.emails],
            phones=[phone.phone for phone in model.phones],
        )


class DniQuery(BaseModel):
    """Parsed ``[nationality_type-]national_id`` search key."""

    national_id: str
    nationality_type: Optional[str] = None


def parse_dni(dni: str) -> DniQuery:
    """
    Parse a composite document key.

    ``"V-12345678"`` -> type ``V``, id ``12345678``. Without a separator a
    leading letter is taken as the type: ``"V12345678"`` gives the same
    result, while ``"12345678"`` leaves the type unconstrained. With a
    separator the first piece is used verbatim and pieces after the second
    are ignored.
    """
    if "-" in dni:
        parts = dni.split("-")
        return DniQuery(nationality_type=parts[0], national_id=parts[1])

    if _LETTER_PREFIX.match(dni):
        return DniQuery(nationality_type=dni[0], national_id=dni[1:])

    return DniQuery(national_id=dni)


class EntityConflict(BaseModel):
    """Outcome of the uniqueness checks for one entity write."""

    duplicated_national_id: bool = False
    emails_used: List[str] = Field(default_factory=list)
    phones_used: List[str] = Field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return self.duplicated_national_id or bool(self.emails_used) or bool(self.phones_used)

    def to_error(self) -> EntityConflictError:
        return EntityConflictError(
            duplicated_national_id=self.duplicated_national_id,
            emails_used=self.emails_used,
            phones_used=self.phones_used,
        )


class EntityUpdatePlan(BaseModel):
    """
    Everything an entity update will write, computed before any write happens.

    ``changes`` only holds fields whose stored value differs from the payload.
    """

    entity_id: int
    changes: Dict[str, Any] = Field(default_factory=dict)
    email_ids_to_delete: List[int] = Field(default_factory=list)
    emails_to_create: List[str] = Field(default_factory=list)
    phone_ids_to_delete: List[int] = Field(default_factory=list)
    phones_to_create: List[str] = Field(default_factory=list)
    conflict: EntityConflict = Field(default_factory=EntityConflict)

    @property
    def is_empty(self) -> bool:
        return not (
            self.changes
            or self.email_ids_to_delete
            or self.emails_to_create
            or self.phone_ids_to_delete
            or self.phones_to_create
        )
