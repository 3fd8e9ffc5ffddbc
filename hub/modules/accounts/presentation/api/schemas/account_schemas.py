# 📄 File: hub/modules/accounts/presentation/api/schemas/account_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the account endpoints accept and return, with examples for the API docs.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for account endpoints layered on the account domain types.
# 🔗 Dependencies:
# pydantic, hub.modules.accounts.domain.models
# 🔄 Connected Modules / Calls From:
# hub.modules.accounts.presentation.api.v1.accounts

from typing import List

from pydantic import ConfigDict

from hub.modules.accounts.domain.models import AccountCreate, AccountInfo, AccountUpdate
from hub.shared.utils.responses import ApiResponse


class AccountCreateRequest(AccountCreate):
    """Create an account for an existing entity, an updated entity, or a new one."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "mperez",
                "password": "s3cret-pass",
                "enabled": True,
                "role_id": 1,
                "entity": {
                    "name": "Maria",
                    "lastname": "Perez",
                    "birthdate": "1990-04-12",
                    "national_id": "12345678",
                    "nationality_type": "V",
                    "emails": ["maria.perez@example.com"],
                    "phones": [],
                },
            }
        }
    )


class AccountUpdateRequest(AccountUpdate):
    """Only the provided fields are changed."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"enabled": False}}
    )


class AccountResponse(AccountInfo):
    model_config = ConfigDict(from_attributes=True)


AccountEnvelope = ApiResponse[AccountResponse]
AccountListEnvelope = ApiResponse[List[AccountResponse]]
