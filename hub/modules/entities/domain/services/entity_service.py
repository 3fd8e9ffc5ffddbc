# 📄 File: hub/modules/entities/domain/services/entity_service.py
# 🧭 Purpose (Layman Explanation):
# This file contains the rules for managing entities: no two entities may share a document number,
# and no email or phone can belong to two entities. Updates only add and remove the contacts that
# actually changed, and nothing is saved if any rule would be broken.
# 🧪 Purpose (Technical Summary):
# Domain service implementing consistency-checked entity CRUD. Mutations come in two explicit
# shapes: ``op()`` owns a transaction from the session manager, ``op_in(session, ...)`` takes part
# in a caller's transaction and never finalizes it.
# 🔗 Dependencies:
# Entity domain models, EntityRepository, DatabaseSessionManager, shared exceptions
# 🔄 Connected Modules / Calls From:
# Entity API endpoints, AccountsService

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from hub.shared.infrastructure.database.session import DatabaseSessionManager

from ..models.entity import (
    EntityConflict,
    EntityData,
    EntityInfo,
    EntityUpdatePlan,
    parse_dni,
)
from ...infrastructure.database.entity_repository import EntityRepository

logger = logging.getLogger(__name__)


class EntitiesService:
    """
    Domain service for the entity aggregate.

    Uniqueness checks run inside the write transaction, before any write,
    so a rejected request leaves no rows behind.
    """

    def __init__(self, sessions: DatabaseSessionManager):
        self._sessions = sessions

    # =========================================================================
    # READS
    # =========================================================================

    async def get_entity(self, entity_id: int) -> Optional[EntityInfo]:
        async with self._sessions.session() as session:
            return await self.get_entity_in(session, entity_id)

    async def get_entity_in(self, session: AsyncSession, entity_id: int) -> Optional[EntityInfo]:
        entity_model = await EntityRepository(session).get_with_contacts(entity_id)
        return EntityInfo.from_model(entity_model) if entity_model else None

    async def get_all_entities(self) -> List[EntityInfo]:
        async with self._sessions.session() as session:
            entity_models = await EntityRepository(session).list_with_contacts()
            return [EntityInfo.from_model(model) for model in entity_models]

    async def search_entities_by_dni(self, dni: str) -> List[EntityInfo]:
        """
        Find entities by a ``[nationality_type-]national_id`` key.

        The document pair is unique, but every match is returned.
        """
        query = parse_dni(dni)
        async with self._sessions.session() as session:
            entity_models = await EntityRepository(session).search_by_national_id(
                query.national_id, query.nationality_type
            )
            return [EntityInfo.from_model(model) for model in entity_models]

    # =========================================================================
    # CREATE
    # =========================================================================

    async def create_entity(self, data: EntityData) -> EntityInfo:
        """
        Create an entity with its emails and phones in a new transaction.

        Raises:
            EntityConflictError: Document pair, emails or phones already in use
        """
        async with self._sessions.transaction() as session:
            return await self.create_entity_in(session, data)

    async def create_entity_in(self, session: AsyncSession, data: EntityData) -> EntityInfo:
        """Same as ``create_entity`` inside the caller's transaction."""
        conflict = await self.find_create_conflicts(session, data)
        if conflict.has_conflicts:
            logger.warning(f"Entity creation rejected: {conflict.model_dump()}")
            raise conflict.to_error()

        return await self.insert_entity(session, data)

    async def find_create_conflicts(self, session: AsyncSession, data: EntityData) -> EntityConflict:
        repository = EntityRepository(session)
        # Awaited in turn: one AsyncSession cannot run statements concurrently
        return EntityConflict(
            duplicated_national_id=await repository.national_id_taken(data.national_id, data.nationality_type),
            emails_used=await repository.emails_in_use(data.emails),
            phones_used=await repository.phones_in_use(data.phones),
        )

    async def insert_entity(self, session: AsyncSession, data: EntityData) -> EntityInfo:
        """Write an already validated entity and its contacts."""
        repository = EntityRepository(session)

        entity_model = await repository.create(data.entity_fields())
        await repository.add_emails(entity_model.id, data.emails)
        await repository.add_phones(entity_model.id, data.phones)

        logger.info(
            f"Created entity {entity_model.id} with {len(data.emails)} emails and {len(data.phones)} phones"
        )
        return EntityInfo(id=entity_model.id, **data.model_dump())

    # =========================================================================
    # UPDATE
    # =========================================================================

    async def update_entity(self, entity_id: int, data: EntityData) -> int:
        """
        Replace an entity's fields and contact lists in a new transaction.

        Returns:
            int: 1 if anything was written, else 0 (also 0 for an unknown id)

        Raises:
            EntityConflictError: Another entity holds the document pair or
                one of the emails/phones being added
        """
        async with self._sessions.transaction() as session:
            return await self.update_entity_in(session, entity_id, data)

    async def update_entity_in(self, session: AsyncSession, entity_id: int, data: EntityData) -> int:
        """Same as ``update_entity`` inside the caller's transaction."""
        plan = await self.plan_update(session, entity_id, data)
        if plan is None:
            return 0

        if plan.conflict.has_conflicts:
            logger.warning(f"Entity {entity_id} update rejected: {plan.conflict.model_dump()}")
            raise plan.conflict.to_error()

        return await self.apply_update(session, plan)

    async def plan_update(
        self,
        session: AsyncSession,
        entity_id: int,
        data: EntityData
    ) -> Optional[EntityUpdatePlan]:
        """
        Diff the stored entity against ``data`` and check the diff for conflicts.

        Contacts are compared by exact string equality. Conflict lookups
        ignore rows owned by the entity itself.

        Returns:
            The plan, or None when the entity does not exist
        """
        repository = EntityRepository(session)

        entity_model = await repository.get_by_id(entity_id)
        if entity_model is None:
            return None

        current_emails = await repository.list_emails(entity_id)
        current_phones = await repository.list_phones(entity_id)
        current_addresses = {email.email_address for email in current_emails}
        current_numbers = {phone.phone for phone in current_phones}

        emails_to_create = [address for address in data.emails if address not in current_addresses]
        phones_to_create = [number for number in data.phones if number not in current_numbers]

        # Same session as the reads above, so these lookups stay sequential
        conflict = EntityConflict(
            duplicated_national_id=await repository.national_id_taken(
                data.national_id, data.nationality_type, exclude_entity_id=entity_id
            ),
            emails_used=await repository.emails_in_use(emails_to_create, exclude_entity_id=entity_id),
            phones_used=await repository.phones_in_use(phones_to_create, exclude_entity_id=entity_id),
        )

        return EntityUpdatePlan(
            entity_id=entity_id,
            changes={
                field: value
                for field, value in data.entity_fields().items()
                if getattr(entity_model, field) != value
            },
            email_ids_to_delete=[email.id for email in current_emails if email.email_address not in data.emails],
            emails_to_create=emails_to_create,
            phone_ids_to_delete=[phone.id for phone in current_phones if phone.phone not in data.phones],
            phones_to_create=phones_to_create,
            conflict=conflict,
        )

    async def apply_update(self, session: AsyncSession, plan: EntityUpdatePlan) -> int:
        """Write a conflict-free plan. Each step is skipped when it has nothing to do."""
        if plan.is_empty:
            return 0

        repository = EntityRepository(session)
        entity_model = await repository.get_by_id(plan.entity_id)

        affected = await repository.update_fields(entity_model, plan.changes)
        affected += await repository.delete_emails(plan.email_ids_to_delete)
        affected += await repository.delete_phones(plan.phone_ids_to_delete)
        affected += await repository.add_emails(plan.entity_id, plan.emails_to_create)
        affected += await repository.add_phones(plan.entity_id, plan.phones_to_create)

        if affected:
            logger.info(
                f"Updated entity {plan.entity_id}: fields={sorted(plan.changes)}, "
                f"+{len(plan.emails_to_create)}/-{len(plan.email_ids_to_delete)} emails, "
                f"+{len(plan.phones_to_create)}/-{len(plan.phone_ids_to_delete)} phones"
            )
        return 1 if affected else 0

    # =========================================================================
    # DELETE
    # =========================================================================

    async def delete_entity(self, entity_id: int) -> bool:
        """
        Delete an entity and all its contacts in a new transaction.

        Returns:
            bool: Whether any row was removed
        """
        async with self._sessions.transaction() as session:
            removed = await EntityRepository(session).delete(entity_id)

        if removed:
            logger.info(f"Deleted entity {entity_id}")
        return removed > 0
