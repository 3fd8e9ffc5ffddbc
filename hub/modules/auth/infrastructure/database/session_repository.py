# 📄 File: hub/modules/auth/infrastructure/database/session_repository.py
# 🧭 Purpose (Layman Explanation):
# Saves new logins, finds a login that is still valid, and marks a login as finished on logout.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository for the sessions table bound to one AsyncSession. Never commits.
#
# 🔗 Dependencies:
# - SQLAlchemy async session and query operations
# - hub.modules.auth.infrastructure.database.models
#
# 🔄 Connected Modules / Calls From:
# - hub.modules.auth.domain.services.auth_service

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hub.modules.auth.infrastructure.database.models import SessionModel


class SessionRepository:
    """Database access for issued sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, account_id: int, token_uuid: str, expire_at: datetime) -> SessionModel:
        session_model = SessionModel(
            account_id=account_id,
            token_uuid=token_uuid,
            locked=False,
            expire_at=expire_at,
        )
        self._session.add(session_model)
        await self._session.flush()  # Get the generated ID
        return session_model

    async def find_active(
        self,
        session_id: int,
        token_uuid: str,
        account_id: int,
        now: datetime
    ) -> Optional[SessionModel]:
        """
        Session matching every identifier from a token, still unlocked and unexpired.
        """
        stmt = select(SessionModel).where(
            SessionModel.id == session_id,
            SessionModel.token_uuid == token_uuid,
            SessionModel.account_id == account_id,
            SessionModel.locked.is_(False),
            SessionModel.expire_at > now,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def lock(self, session_id: int, token_uuid: str, account_id: int) -> int:
        """
        Lock an unlocked session matched by its own id and stored token identifier.

        Returns:
            int: Affected row count (0 or 1)
        """
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id == session_id,
                SessionModel.token_uuid == token_uuid,
                SessionModel.account_id == account_id,
                SessionModel.locked.is_(False),
            )
            .values(locked=True)
        )
        result = await self._session.execute(stmt)
        return result.rowcount
