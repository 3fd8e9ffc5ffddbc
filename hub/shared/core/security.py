"""
Security utilities for session token signing/verification and password hashing.

Session tokens are HMAC-signed JWTs carrying just enough to locate a stored
session row; everything else about the caller is reloaded from the database.
"""

import logging
from datetime import datetime
from typing import Any, Dict

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from ..config.settings import Settings
from .exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)


class SessionTokenPayload(BaseModel):
    """Claims identifying a stored session."""
    version: str
    account_id: int
    session_id: int
    token_uuid: str


class SecurityManager:
    """
    Centralized security manager for authentication.
    Handles session JWTs and password hashing with the configured secrets.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.algorithm = settings.JWT_ALGORITHM
        self.secret_key = settings.API_KEY
        self.issuer = settings.JWT_ISSUER
        self.audience = settings.JWT_AUDIENCE
        self.version = settings.AUTH_VERSION
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

        if not self.secret_key:
            logger.warning("API_KEY is empty, session tokens are signed with an empty key")

    def create_session_token(
        self,
        account_id: int,
        session_id: int,
        token_uuid: str,
        expires_at: datetime
    ) -> str:
        """
        Create a signed session token.

        Args:
            account_id: Owning account id
            session_id: Stored session row id
            token_uuid: Random identifier stored on the session row
            expires_at: Naive UTC expiry, identical to the session row's

        Returns:
            str: Encoded JWT token
        """
        to_encode: Dict[str, Any] = SessionTokenPayload(
            version=self.version,
            account_id=account_id,
            session_id=session_id,
            token_uuid=token_uuid,
        ).model_dump()

        to_encode.update({
            "exp": expires_at,
            "iss": self.issuer,
            "aud": self.audience,
        })

        encoded_jwt = jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Session token created for account: {account_id}")
        return encoded_jwt

    def verify_session_token(self, token: str) -> SessionTokenPayload:
        """
        Verify and decode a session token.

        Signature, issuer, audience and expiry are checked by the JWT library;
        the payload shape and scheme version are checked here.

        Raises:
            InvalidCredentialsError: For every kind of verification failure
        """
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
            payload = SessionTokenPayload.model_validate(claims)
        except (JWTError, ValidationError) as e:
            logger.warning(f"Session token rejected: {type(e).__name__}")
            raise InvalidCredentialsError()

        if payload.version != self.version:
            logger.warning(f"Session token version mismatch: {payload.version}")
            raise InvalidCredentialsError()

        return payload

    def get_password_hash(self, password: str) -> str:
        """Hash password using bcrypt."""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify password against hash.

        A stored value that is not a recognizable hash never matches.
        """
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            logger.warning("Stored password hash could not be identified")
            return False
