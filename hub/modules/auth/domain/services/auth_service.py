# 📄 File: hub/modules/auth/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Signs users in with their email and password, tells who is behind a login token, and logs users
# out. Every failure looks the same from outside ("invalid credentials") so nobody can tell whether
# the email, the password or the token was the problem.
# 🧪 Purpose (Technical Summary):
# Session lifecycle service: issue (session row + signed token), resolve (token -> unlocked,
# unexpired session -> fresh account/role snapshot) and revoke (lock by session id, stored token
# identifier and account id). Token failures are narrowed to InvalidCredentialsError.
# 🔗 Dependencies:
# SessionRepository, AccountRepository, SecurityManager, Settings, session manager
# 🔄 Connected Modules / Calls From:
# Auth API endpoints

import logging
from datetime import timedelta
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from hub.modules.accounts.infrastructure.database.account_repository import AccountRepository
from hub.modules.accounts.infrastructure.database.models import AccountModel
from hub.modules.entities.domain.models import EntityInfo
from hub.shared.config.settings import Settings
from hub.shared.core.exceptions import AccountDisabledError, InvalidCredentialsError
from hub.shared.core.security import SecurityManager
from hub.shared.infrastructure.database.session import DatabaseSessionManager
from hub.shared.utils.helpers import generate_uuid, utc_now

from ..models.session import SessionInfo, build_role_snapshot
from ...infrastructure.database.models import SessionModel
from ...infrastructure.database.session_repository import SessionRepository

logger = logging.getLogger(__name__)


class AuthService:
    """
    Domain service for session issuance, verification and revocation.
    """

    def __init__(
        self,
        sessions: DatabaseSessionManager,
        security: SecurityManager,
        settings: Settings,
    ):
        self._sessions = sessions
        self._security = security
        self._session_lifetime = timedelta(milliseconds=settings.SESSION_EXPIRE_MS)

    async def sign_in(self, email: str, password: str) -> SessionInfo:
        """
        Open a new session for the account owning ``email``.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            AccountDisabledError: Correct credentials for a disabled account
        """
        async with self._sessions.transaction() as session:
            account_model = await AccountRepository(session).get_with_role_by_email(email)

            if account_model is None or not self._security.verify_password(password, account_model.password_hash):
                logger.warning("Sign-in rejected: invalid credentials")
                raise InvalidCredentialsError()

            if not account_model.enabled:
                logger.warning(f"Sign-in rejected: account {account_model.id} is disabled")
                raise AccountDisabledError()

            expire_at = utc_now() + self._session_lifetime
            session_model = await SessionRepository(session).create(
                account_id=account_model.id,
                token_uuid=generate_uuid(),
                expire_at=expire_at,
            )
            token = self._security.create_session_token(
                account_id=account_model.id,
                session_id=session_model.id,
                token_uuid=session_model.token_uuid,
                expires_at=expire_at,
            )
            session_info = self._session_info(token, account_model, session_model)

        logger.info(f"Account {account_model.id} signed in (session {session_model.id})")
        return session_info

    async def get_session_by_token(self, token: str) -> Optional[SessionInfo]:
        """
        Resolve a token to its session and the account's current state.

        Returns:
            SessionInfo, or None when the session is unknown, locked or expired

        Raises:
            InvalidCredentialsError: The token itself does not verify, or the
                session's account no longer exists
        """
        async with self._sessions.session() as session:
            resolved = await self._resolve(session, token)
            if resolved is None:
                return None
            session_model, account_model = resolved
            return self._session_info(token, account_model, session_model)

    async def logout(self, token: str) -> None:
        """
        Lock the session behind ``token``.

        Raises:
            InvalidCredentialsError: Nothing resolvable, or the session was
                locked concurrently
        """
        async with self._sessions.transaction() as session:
            resolved = await self._resolve(session, token)
            if resolved is None:
                raise InvalidCredentialsError()

            session_model, _ = resolved
            locked = await SessionRepository(session).lock(
                session_id=session_model.id,
                token_uuid=session_model.token_uuid,
                account_id=session_model.account_id,
            )
            if not locked:
                raise InvalidCredentialsError()

        logger.info(f"Session {session_model.id} locked for account {session_model.account_id}")

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _resolve(
        self,
        session: AsyncSession,
        token: str
    ) -> Optional[Tuple[SessionModel, AccountModel]]:
        payload = self._security.verify_session_token(token)

        session_model = await SessionRepository(session).find_active(
            session_id=payload.session_id,
            token_uuid=payload.token_uuid,
            account_id=payload.account_id,
            now=utc_now(),
        )
        if session_model is None:
            logger.debug(f"No active session {payload.session_id} for account {payload.account_id}")
            return None

        account_model = await AccountRepository(session).get_with_role(session_model.account_id)
        if account_model is None:
            logger.warning(f"Session {session_model.id} belongs to missing account {session_model.account_id}")
            raise InvalidCredentialsError()

        return session_model, account_model

    @staticmethod
    def _session_info(token: str, account_model: AccountModel, session_model: SessionModel) -> SessionInfo:
        return SessionInfo(
            id=account_model.id,
            session_id=session_model.id,
            token=token,
            username=account_model.username,
            entity=EntityInfo.from_model(account_model.entity),
            role=build_role_snapshot(account_model.role),
            created_at=account_model.created_at,
        )
