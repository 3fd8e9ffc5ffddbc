# 📄 File: hub/modules/accounts/domain/services/account_service.py
# 🧭 Purpose (Layman Explanation):
# This file contains the rules for login accounts: a username can only be used once, a person can
# only have one account, and an account can be created together with (or on top of) its person's
# record. When something is wrong, every problem is reported at once and nothing is saved.
# 🧪 Purpose (Technical Summary):
# Domain service for the account lifecycle composed over EntitiesService. Account writes always
# own their transaction; entity work joins it through the entity service's participating shape.
# Validation outcomes are accumulated in an AccountConflictReport and decided once.
# 🔗 Dependencies:
# Account domain models, AccountRepository, EntitiesService, SecurityManager, session manager
# 🔄 Connected Modules / Calls From:
# Account API endpoints

import logging
from typing import Any, Dict, List, Optional

from hub.modules.entities.domain.models import EntityInfo, EntityUpdatePlan
from hub.modules.entities.domain.services.entity_service import EntitiesService
from hub.modules.entities.infrastructure.database.entity_repository import EntityRepository
from hub.shared.core.exceptions import AccountConflictError, NotFoundError
from hub.shared.core.security import SecurityManager
from hub.shared.infrastructure.database.session import DatabaseSessionManager

from ..models.account import AccountConflictReport, AccountCreate, AccountInfo, AccountUpdate
from ...infrastructure.database.account_repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountsService:
    """
    Domain service for account management business logic.
    """

    def __init__(
        self,
        sessions: DatabaseSessionManager,
        entities_service: EntitiesService,
        security: SecurityManager,
    ):
        self._sessions = sessions
        self._entities = entities_service
        self._security = security

    # =========================================================================
    # READS
    # =========================================================================

    async def get_account(self, account_id: int) -> Optional[AccountInfo]:
        async with self._sessions.session() as session:
            account_model = await AccountRepository(session).get_with_entity(account_id)
            if account_model is None:
                return None
            return AccountInfo.from_model(account_model, EntityInfo.from_model(account_model.entity))

    async def get_all_accounts(self) -> List[AccountInfo]:
        async with self._sessions.session() as session:
            account_models = await AccountRepository(session).list_with_entity()
            return [
                AccountInfo.from_model(model, EntityInfo.from_model(model.entity))
                for model in account_models
            ]

    # =========================================================================
    # CREATE
    # =========================================================================

    async def create_account(self, data: AccountCreate) -> AccountInfo:
        """
        Create an account, resolving its entity in the same transaction.

        Entity conflicts, a taken username and an already linked entity are
        all collected before deciding, and reported together.

        Raises:
            AccountConflictError: Any uniqueness rule failed
            NotFoundError: Unknown role_id or entity_id
        """
        async with self._sessions.transaction() as session:
            accounts = AccountRepository(session)

            if not await accounts.role_exists(data.role_id):
                raise NotFoundError(f"Role '{data.role_id}' not found!", resource_type="role", resource_id=data.role_id)

            report = AccountConflictReport()
            entity_plan: Optional[EntityUpdatePlan] = None

            if data.entity is not None and data.entity_id is not None:
                entity_plan = await self._entities.plan_update(session, data.entity_id, data.entity)
                if entity_plan is None:
                    raise self._entity_not_found(data.entity_id)
                report.entity_conflict = entity_plan.conflict
            elif data.entity is not None:
                report.entity_conflict = await self._entities.find_create_conflicts(session, data.entity)
            elif not await EntityRepository(session).exists(data.entity_id):
                raise self._entity_not_found(data.entity_id)

            report.username_used = await accounts.username_taken(data.username)
            if data.entity_id is not None:
                report.another_account_with_entity = await accounts.entity_linked(data.entity_id)

            if report.has_conflicts:
                logger.warning(f"Account creation rejected for '{data.username}': {report.model_dump()}")
                raise report.to_error()

            entity_id = data.entity_id
            if entity_plan is not None:
                await self._entities.apply_update(session, entity_plan)
            elif data.entity is not None:
                created = await self._entities.insert_entity(session, data.entity)
                entity_id = created.id

            account_model = await accounts.create({
                "entity_id": entity_id,
                "role_id": data.role_id,
                "username": data.username,
                "password_hash": self._security.get_password_hash(data.password),
                "enabled": data.enabled,
            })
            entity = await self._entities.get_entity_in(session, entity_id)

        logger.info(f"Created account {account_model.id} ('{account_model.username}') for entity {entity_id}")
        return AccountInfo.from_model(account_model, entity)

    # =========================================================================
    # UPDATE / DELETE
    # =========================================================================

    async def update_account(self, account_id: int, data: AccountUpdate) -> int:
        """
        Update an account and, when given, its linked entity, as one unit.

        Returns:
            int: Entity change indicator (0/1) plus updated account rows;
                 0 for an unknown account

        Raises:
            EntityConflictError: The entity payload conflicts with another entity
            AccountConflictError: The new username belongs to another account
        """
        async with self._sessions.transaction() as session:
            accounts = AccountRepository(session)
            account_model = await accounts.get_by_id(account_id)
            if account_model is None:
                return 0

            entity_changed = 0
            if data.entity is not None:
                entity_changed = await self._entities.update_entity_in(session, account_model.entity_id, data.entity)

            if data.username is not None and await accounts.username_taken(data.username, exclude_account_id=account_id):
                logger.warning(f"Account {account_id} update rejected: username '{data.username}' taken")
                raise AccountConflictError(username_used=True)

            if data.role_id is not None and not await accounts.role_exists(data.role_id):
                raise NotFoundError(f"Role '{data.role_id}' not found!", resource_type="role", resource_id=data.role_id)

            account_rows = await accounts.update(account_id, self._account_values(data))

        logger.info(f"Updated account {account_id} (entity changed: {bool(entity_changed)})")
        return entity_changed + account_rows

    async def delete_account(self, account_id: int) -> int:
        """
        Delete an account. The entity and any sessions are left in place.

        Returns:
            int: Deleted row count
        """
        async with self._sessions.transaction() as session:
            deleted = await AccountRepository(session).delete(account_id)

        if deleted:
            logger.info(f"Deleted account {account_id}")
        return deleted

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _account_values(self, data: AccountUpdate) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        if data.username is not None:
            values["username"] = data.username
        if data.password is not None:
            values["password_hash"] = self._security.get_password_hash(data.password)
        if data.enabled is not None:
            values["enabled"] = data.enabled
        if data.role_id is not None:
            values["role_id"] = data.role_id
        return values

    @staticmethod
    def _entity_not_found(entity_id: int) -> NotFoundError:
        return NotFoundError(f"Entity '{entity_id}' not found!", resource_type="entity", resource_id=entity_id)
