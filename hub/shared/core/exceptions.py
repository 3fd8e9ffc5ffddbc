# 📄 File: hub/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the back office uses to say exactly
# what went wrong (a duplicated document number, a taken username, a bad password...)
# instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# machine-readable conflict details, and serialization for API error responses.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# Domain services, security helpers, error handling middleware, API endpoints

from typing import Any, Dict, List, Optional, Sequence

from fastapi import status


class HubException(Exception):
    """
    Base exception class for the back-office API.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# CONFLICT EXCEPTIONS
# =============================================================================

class EntityConflictError(HubException):
    """
    Raised when an entity write would break a uniqueness rule.

    Carries which rules were violated: another entity already holds the
    same (national_id, nationality_type) pair, and/or some of the requested
    email addresses or phone numbers already belong to another entity.
    """

    def __init__(
        self,
        duplicated_national_id: bool = False,
        emails_used: Optional[Sequence[str]] = None,
        phones_used: Optional[Sequence[str]] = None,
        message: str = "Conflicts encountered!"
    ):
        self.duplicated_national_id = duplicated_national_id
        self.emails_used: List[str] = list(emails_used or [])
        self.phones_used: List[str] = list(phones_used or [])

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=self.conflict_details(),
            error_code="ENTITY_CONFLICT"
        )

    def conflict_details(self) -> Dict[str, Any]:
        return {
            "duplicated_national_id": self.duplicated_national_id,
            "emails_used": self.emails_used,
            "phones_used": self.phones_used,
        }


class AccountConflictError(HubException):
    """
    Raised when an account write would break a uniqueness rule.

    Bundles the account level flags with the entity conflict found while
    resolving the account's entity, so a client sees every problem at once.
    """

    def __init__(
        self,
        username_used: bool = False,
        another_account_with_entity: bool = False,
        entity_error: Optional[EntityConflictError] = None,
        message: str = "Conflicts encountered!"
    ):
        self.username_used = username_used
        self.another_account_with_entity = another_account_with_entity
        self.entity_error = entity_error

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details={
                "username_used": username_used,
                "another_account_with_entity": another_account_with_entity,
                "entity": entity_error.conflict_details() if entity_error else None,
            },
            error_code="ACCOUNT_CONFLICT"
        )


class ConflictError(HubException):
    """
    Exception raised for conflicts detected by the database itself,
    e.g. a unique index or foreign key rejecting a write.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="INTEGRITY_CONFLICT"
        )


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class InvalidCredentialsError(HubException):
    """
    Exception raised for any authentication failure.

    Unknown email, wrong password, malformed/expired/tampered token and
    unresolvable session all map here, so callers cannot tell them apart.
    """

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="INVALID_CREDENTIALS"
        )


class AccountDisabledError(HubException):
    """Exception raised when valid credentials belong to a disabled account."""

    def __init__(self, message: str = "Account is disabled"):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="ACCOUNT_DISABLED"
        )


# =============================================================================
# RESOURCE EXCEPTIONS
# =============================================================================

class NotFoundError(HubException):
    """
    Exception raised when requested resource is not found.
    Used for missing entities, accounts and roles.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class DatabaseError(HubException):
    """
    Exception raised for database infrastructure failures.
    Used for an uninitialized engine or failed connectivity checks.
    """

    def __init__(
        self,
        message: str = "Database error",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATABASE_ERROR"
        )
