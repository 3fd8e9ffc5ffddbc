# 📄 File: hub/modules/accounts/infrastructure/database/account_repository.py
# 🧭 Purpose (Layman Explanation):
# This file reads and writes login accounts in the database, and loads an account together with
# its person/organization and everything its role allows it to do.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository for accounts bound to one AsyncSession. Provides uniqueness lookups,
# row-count returning updates/deletes, and eager-loaded account -> entity -> role -> grants reads
# for the auth path. Never commits.
#
# 🔗 Dependencies:
# - SQLAlchemy async session and query operations
# - Account, catalog and entity ORM models
#
# 🔄 Connected Modules / Calls From:
# - hub.modules.accounts.domain.services.account_service
# - hub.modules.auth.domain.services.auth_service

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hub.modules.accounts.infrastructure.database.models import AccountModel, RoleModel
from hub.modules.entities.infrastructure.database.models import EmailModel, EntityModel

logger = logging.getLogger(__name__)


class AccountRepository:
    """
    Database access for accounts.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def _with_entity(self):
        return (
            select(AccountModel)
            .options(
                selectinload(AccountModel.entity).selectinload(EntityModel.emails),
                selectinload(AccountModel.entity).selectinload(EntityModel.phones),
            )
            .execution_options(populate_existing=True)
        )

    def _with_entity_and_role(self):
        return self._with_entity().options(
            selectinload(AccountModel.role).selectinload(RoleModel.module_permissions)
        )

    async def get_by_id(self, account_id: int) -> Optional[AccountModel]:
        """Account row only."""
        return await self._session.get(AccountModel, account_id)

    async def get_with_entity(self, account_id: int) -> Optional[AccountModel]:
        stmt = self._with_entity().where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_entity(self) -> List[AccountModel]:
        stmt = self._with_entity().order_by(AccountModel.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_with_role(self, account_id: int) -> Optional[AccountModel]:
        """Account with entity, contacts, role and the role's grants."""
        stmt = self._with_entity_and_role().where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_role_by_email(self, email_address: str) -> Optional[AccountModel]:
        """
        Account owning the entity that owns ``email_address``.

        Email addresses are unique, so at most one account matches.
        """
        stmt = (
            self._with_entity_and_role()
            .join(EmailModel, EmailModel.entity_id == AccountModel.entity_id)
            .where(EmailModel.email_address == email_address)
        )
        result = await self._session.execute(stmt)
        return result.scalars().first()

    # -------------------------------------------------------------------------
    # Uniqueness lookups
    # -------------------------------------------------------------------------

    async def username_taken(self, username: str, exclude_account_id: Optional[int] = None) -> bool:
        stmt = select(AccountModel.id).where(AccountModel.username == username)
        if exclude_account_id is not None:
            stmt = stmt.where(AccountModel.id != exclude_account_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def entity_linked(self, entity_id: int) -> bool:
        """Whether some account already belongs to ``entity_id``."""
        stmt = select(AccountModel.id).where(AccountModel.entity_id == entity_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def role_exists(self, role_id: int) -> bool:
        stmt = select(RoleModel.id).where(RoleModel.id == role_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, fields: Dict[str, Any]) -> AccountModel:
        account_model = AccountModel(**fields)
        self._session.add(account_model)
        await self._session.flush()  # Get the generated ID and defaults
        logger.debug(f"Created account row {account_model.id}")
        return account_model

    async def update(self, account_id: int, values: Dict[str, Any]) -> int:
        """Update columns of one account. Returns the affected row count."""
        if not values:
            return 0
        stmt = update(AccountModel).where(AccountModel.id == account_id).values(**values)
        result = await self._session.execute(stmt)
        return result.rowcount

    async def delete(self, account_id: int) -> int:
        result = await self._session.execute(delete(AccountModel).where(AccountModel.id == account_id))
        return result.rowcount
