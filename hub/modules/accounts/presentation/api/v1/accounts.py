# 📄 File: hub/modules/accounts/presentation/api/v1/accounts.py
# 🧭 Purpose (Layman Explanation):
# This file contains the web endpoints for login accounts: list, look up, create, change and delete.
#
# 🧪 Purpose (Technical Summary):
# FastAPI account endpoints delegating to AccountsService and wrapping results in the
# {message, data} envelope. Account conflicts render as 409 with nested entity details.
#
# 🔗 Dependencies:
# - FastAPI router, status codes, Path parameters
# - hub.modules.accounts.domain.services.account_service
# - hub.modules.accounts.presentation.api.schemas.account_schemas
#
# 🔄 Connected Modules / Calls From:
# - hub.modules.accounts.presentation.api (router inclusion)

from fastapi import APIRouter, Depends, Path, status

from hub.modules.accounts.domain.services.account_service import AccountsService
from hub.modules.accounts.presentation.api.schemas.account_schemas import (
    AccountCreateRequest,
    AccountEnvelope,
    AccountListEnvelope,
    AccountUpdateRequest,
)
from hub.modules.accounts.presentation.dependencies import get_accounts_service
from hub.shared.core.exceptions import NotFoundError
from hub.shared.utils.responses import EmptyResponse, success_response

# Create router
accounts_router = APIRouter()


def _account_not_found(account_id: int) -> NotFoundError:
    return NotFoundError(
        message=f"Account '{account_id}' not found!",
        resource_type="account",
        resource_id=account_id,
    )


@accounts_router.get(
    "",
    response_model=AccountListEnvelope,
    summary="List accounts",
)
async def get_all_accounts(
    accounts_service: AccountsService = Depends(get_accounts_service),
):
    accounts = await accounts_service.get_all_accounts()
    return success_response("Retrieved all accounts!", accounts)


@accounts_router.post(
    "",
    response_model=AccountEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create account",
    description="Create an account for an existing entity, an updated entity, or a new entity",
    responses={
        404: {"description": "Role or entity not found"},
        409: {"description": "Username taken, entity already linked, or entity conflicts"},
    },
)
async def create_account(
    account_data: AccountCreateRequest,
    accounts_service: AccountsService = Depends(get_accounts_service),
):
    """
    Create a new account.

    Args:
        account_data: Account fields plus entity_id and/or entity payload
        accounts_service: Injected account service

    Returns:
        AccountEnvelope: The created account with its entity
    """
    account = await accounts_service.create_account(account_data)
    return success_response("Account created!", account)


@accounts_router.get(
    "/{account_id}",
    response_model=AccountEnvelope,
    summary="Get account",
    responses={404: {"description": "Account not found"}},
)
async def get_account(
    account_id: int = Path(..., ge=1),
    accounts_service: AccountsService = Depends(get_accounts_service),
):
    account = await accounts_service.get_account(account_id)
    if account is None:
        raise _account_not_found(account_id)
    return success_response("Retrieved account!", account)


@accounts_router.put(
    "/{account_id}",
    response_model=EmptyResponse,
    summary="Update account",
    responses={404: {"description": "Account not found"}, 409: {"description": "Conflicts encountered"}},
)
async def update_account(
    account_data: AccountUpdateRequest,
    account_id: int = Path(..., ge=1),
    accounts_service: AccountsService = Depends(get_accounts_service),
):
    changed = await accounts_service.update_account(account_id, account_data)
    if changed:
        return success_response("Account updated!")

    if await accounts_service.get_account(account_id) is None:
        raise _account_not_found(account_id)
    return success_response("Account unchanged!")


@accounts_router.delete(
    "/{account_id}",
    response_model=EmptyResponse,
    summary="Delete account",
    responses={404: {"description": "Account not found"}},
)
async def delete_account(
    account_id: int = Path(..., ge=1),
    accounts_service: AccountsService = Depends(get_accounts_service),
):
    deleted = await accounts_service.delete_account(account_id)
    if not deleted:
        raise _account_not_found(account_id)
    return success_response("Account deleted!")
