# 📄 File: hub/modules/entities/infrastructure/database/entity_repository.py
# 🧭 Purpose (Layman Explanation):
# This file does the actual reading and writing of entities, emails and phones in the database,
# including the lookups used to detect duplicated documents, emails or phone numbers.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository bound to one AsyncSession. It never commits; transaction boundaries
# belong to the calling service. Database errors propagate unchanged.
#
# 🔗 Dependencies:
# - SQLAlchemy async session and query operations
# - hub.modules.entities.infrastructure.database.models
#
# 🔄 Connected Modules / Calls From:
# - hub.modules.entities.domain.services.entity_service
# - hub.modules.accounts.domain.services.account_service (entity existence checks)

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hub.modules.entities.infrastructure.database.models import EmailModel, EntityModel, PhoneModel

logger = logging.getLogger(__name__)


class EntityRepository:
    """
    Database access for the entity aggregate.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def _with_contacts(self):
        return (
            select(EntityModel)
            .options(selectinload(EntityModel.emails), selectinload(EntityModel.phones))
            .execution_options(populate_existing=True)
        )

    async def get_by_id(self, entity_id: int) -> Optional[EntityModel]:
        """Entity row only, contacts not loaded."""
        return await self._session.get(EntityModel, entity_id)

    async def exists(self, entity_id: int) -> bool:
        stmt = select(EntityModel.id).where(EntityModel.id == entity_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_with_contacts(self, entity_id: int) -> Optional[EntityModel]:
        stmt = self._with_contacts().where(EntityModel.id == entity_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_contacts(self) -> List[EntityModel]:
        stmt = self._with_contacts().order_by(EntityModel.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def search_by_national_id(
        self,
        national_id: str,
        nationality_type: Optional[str] = None
    ) -> List[EntityModel]:
        stmt = self._with_contacts().where(EntityModel.national_id == national_id)
        if nationality_type is not None:
            stmt = stmt.where(EntityModel.nationality_type == nationality_type)
        result = await self._session.execute(stmt.order_by(EntityModel.id))
        return list(result.scalars().all())

    async def list_emails(self, entity_id: int) -> List[EmailModel]:
        stmt = select(EmailModel).where(EmailModel.entity_id == entity_id).order_by(EmailModel.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_phones(self, entity_id: int) -> List[PhoneModel]:
        stmt = select(PhoneModel).where(PhoneModel.entity_id == entity_id).order_by(PhoneModel.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    # -------------------------------------------------------------------------
    # Uniqueness lookups
    # -------------------------------------------------------------------------

    async def national_id_taken(
        self,
        national_id: str,
        nationality_type: str,
        exclude_entity_id: Optional[int] = None
    ) -> bool:
        """Whether another entity already holds this document pair."""
        stmt = select(EntityModel.id).where(
            EntityModel.national_id == national_id,
            EntityModel.nationality_type == nationality_type,
        )
        if exclude_entity_id is not None:
            stmt = stmt.where(EntityModel.id != exclude_entity_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def emails_in_use(
        self,
        addresses: Sequence[str],
        exclude_entity_id: Optional[int] = None
    ) -> List[str]:
        """Subset of ``addresses`` already stored, in request order."""
        if not addresses:
            return []
        stmt = select(EmailModel.email_address).where(EmailModel.email_address.in_(addresses))
        if exclude_entity_id is not None:
            stmt = stmt.where(EmailModel.entity_id != exclude_entity_id)
        result = await self._session.execute(stmt)
        used = set(result.scalars().all())
        return [address for address in addresses if address in used]

    async def phones_in_use(
        self,
        numbers: Sequence[str],
        exclude_entity_id: Optional[int] = None
    ) -> List[str]:
        """Subset of ``numbers`` already stored, in request order."""
        if not numbers:
            return []
        stmt = select(PhoneModel.phone).where(PhoneModel.phone.in_(numbers))
        if exclude_entity_id is not None:
            stmt = stmt.where(PhoneModel.entity_id != exclude_entity_id)
        result = await self._session.execute(stmt)
        used = set(result.scalars().all())
        return [number for number in numbers if number in used]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, fields: Dict[str, Any]) -> EntityModel:
        entity_model = EntityModel(**fields)
        self._session.add(entity_model)
        await self._session.flush()  # Get the generated ID
        return entity_model

    async def update_fields(self, entity_model: EntityModel, changes: Dict[str, Any]) -> int:
        """Apply changed columns to a loaded row. Returns 1 when anything was written."""
        if not changes:
            return 0
        for field, value in changes.items():
            setattr(entity_model, field, value)
        await self._session.flush()
        return 1

    async def add_emails(self, entity_id: int, addresses: Sequence[str]) -> int:
        if not addresses:
            return 0
        self._session.add_all(
            [EmailModel(entity_id=entity_id, email_address=address) for address in addresses]
        )
        await self._session.flush()
        return len(addresses)

    async def add_phones(self, entity_id: int, numbers: Sequence[str]) -> int:
        if not numbers:
            return 0
        self._session.add_all([PhoneModel(entity_id=entity_id, phone=number) for number in numbers])
        await self._session.flush()
        return len(numbers)

    async def delete_emails(self, email_ids: Sequence[int]) -> int:
        if not email_ids:
            return 0
        result = await self._session.execute(delete(EmailModel).where(EmailModel.id.in_(email_ids)))
        return result.rowcount

    async def delete_phones(self, phone_ids: Sequence[int]) -> int:
        if not phone_ids:
            return 0
        result = await self._session.execute(delete(PhoneModel).where(PhoneModel.id.in_(phone_ids)))
        return result.rowcount

    async def delete(self, entity_id: int) -> int:
        """
        Delete the entity and its contacts.

        Returns:
            int: Rows removed across the emails, phones and entities tables
        """
        emails = await self._session.execute(delete(EmailModel).where(EmailModel.entity_id == entity_id))
        phones = await self._session.execute(delete(PhoneModel).where(PhoneModel.entity_id == entity_id))
        entity = await self._session.execute(delete(EntityModel).where(EntityModel.id == entity_id))

        logger.debug(
            f"Deleted entity {entity_id}: {entity.rowcount} entity, "
            f"{emails.rowcount} emails, {phones.rowcount} phones"
        )
        return emails.rowcount + phones.rowcount + entity.rowcount
