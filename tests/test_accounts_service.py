"""Tests for AccountsService: the three entity linkage modes and conflict accumulation."""
import pytest
from sqlalchemy import select

from hub.modules.accounts.domain.models import AccountCreate, AccountUpdate
from hub.modules.accounts.infrastructure.database.models import AccountModel
from hub.modules.entities.infrastructure.database.models import EntityModel
from hub.shared.core.exceptions import AccountConflictError, EntityConflictError, NotFoundError

from .conftest import PASSWORD, make_entity


async def stored_account(sessions, account_id) -> AccountModel:
    async with sessions.session() as session:
        return await session.get(AccountModel, account_id)


async def test_create_with_new_entity(accounts_service, entities_service, sessions, roles):
    account = await accounts_service.create_account(
        AccountCreate(username="mperez", password=PASSWORD, role_id=roles["admin"], entity=make_entity())
    )

    assert account.username == "mperez"
    assert account.enabled is True
    assert account.entity.emails == ["maria@example.com"]
    assert account.entity_id == account.entity.id
    assert await entities_service.get_entity(account.entity_id) == account.entity


async def test_password_is_stored_as_salted_hash(accounts_service, security, sessions, account):
    stored = await stored_account(sessions, account.id)

    assert stored.password_hash != PASSWORD
    assert stored.password_hash.startswith("$2")
    assert security.verify_password(PASSWORD, stored.password_hash)
    assert security.get_password_hash(PASSWORD) != stored.password_hash


async def test_create_linking_existing_entity(accounts_service, entities_service, roles):
    entity = await entities_service.create_entity(make_entity())

    account = await accounts_service.create_account(
        AccountCreate(username="mperez", password=PASSWORD, role_id=roles["viewer"], entity_id=entity.id)
    )

    assert account.entity_id == entity.id
    assert account.role_id == roles["viewer"]
    assert account.entity == entity


async def test_create_updating_existing_entity(accounts_service, entities_service, roles):
    entity = await entities_service.create_entity(make_entity())

    account = await accounts_service.create_account(
        AccountCreate(
            username="mperez",
            password=PASSWORD,
            role_id=roles["admin"],
            entity_id=entity.id,
            entity=make_entity(name="Mariana", emails=["mariana@example.com"]),
        )
    )

    assert account.entity_id == entity.id
    assert account.entity.name == "Mariana"
    assert account.entity.emails == ["mariana@example.com"]


async def test_unknown_entity_id(accounts_service, roles):
    with pytest.raises(NotFoundError):
        await accounts_service.create_account(
            AccountCreate(username="mperez", password=PASSWORD, role_id=roles["admin"], entity_id=999)
        )


async def test_unknown_role(accounts_service, entities_service, roles):
    entity = await entities_service.create_entity(make_entity())

    with pytest.raises(NotFoundError):
        await accounts_service.create_account(
            AccountCreate(username="mperez", password=PASSWORD, role_id=999, entity_id=entity.id)
        )


async def test_every_account_conflict_is_reported_at_once(accounts_service, entities_service, sessions, account, roles):
    other = await entities_service.create_entity(
        make_entity(national_id="87654321", emails=["other@example.com"], phones=[])
    )

    with pytest.raises(AccountConflictError) as exc_info:
        await accounts_service.create_account(
            AccountCreate(
                username="mperez",
                password=PASSWORD,
                role_id=roles["admin"],
                entity_id=account.entity_id,
                entity=make_entity(
                    name="Changed",
                    emails=["maria@example.com", "other@example.com"],
                ),
            )
        )

    details = exc_info.value.details
    assert details["username_used"] is True
    assert details["another_account_with_entity"] is True
    assert details["entity"] == {
        "duplicated_national_id": False,
        "emails_used": ["other@example.com"],
        "phones_used": [],
    }

    # Nothing from the rejected request was written
    assert (await entities_service.get_entity(account.entity_id)).name == "Maria"
    assert (await entities_service.get_entity(other.id)).emails == ["other@example.com"]


async def test_new_entity_conflict_creates_neither_entity_nor_account(accounts_service, sessions, account, roles):
    with pytest.raises(AccountConflictError) as exc_info:
        await accounts_service.create_account(
            AccountCreate(username="another", password=PASSWORD, role_id=roles["admin"], entity=make_entity())
        )

    details = exc_info.value.details
    assert details["username_used"] is False
    assert details["another_account_with_entity"] is False
    assert details["entity"]["duplicated_national_id"] is True

    async with sessions.session() as session:
        entities = (await session.execute(select(EntityModel))).scalars().all()
        accounts = (await session.execute(select(AccountModel))).scalars().all()
    assert len(entities) == 1
    assert len(accounts) == 1


async def test_get_and_list_accounts(accounts_service, account):
    fetched = await accounts_service.get_account(account.id)
    assert fetched.username == "mperez"
    assert fetched.entity.national_id == "12345678"

    assert [item.id for item in await accounts_service.get_all_accounts()] == [account.id]
    assert await accounts_service.get_account(999) is None


async def test_update_account_fields(accounts_service, security, sessions, account, roles):
    changed = await accounts_service.update_account(
        account.id,
        AccountUpdate(username="maria", password="new password", enabled=False, role_id=roles["viewer"]),
    )

    assert changed == 1
    stored = await stored_account(sessions, account.id)
    assert stored.username == "maria"
    assert stored.enabled is False
    assert stored.role_id == roles["viewer"]
    assert security.verify_password("new password", stored.password_hash)


async def test_update_account_with_entity(accounts_service, entities_service, account):
    changed = await accounts_service.update_account(
        account.id,
        AccountUpdate(enabled=False, entity=make_entity(phones=["+58-414-1112233"])),
    )

    assert changed == 2
    assert (await entities_service.get_entity(account.entity_id)).phones == ["+58-414-1112233"]


async def test_update_to_taken_username(accounts_service, entities_service, account, roles):
    entity = await entities_service.create_entity(make_entity(national_id="2", emails=[], phones=[]))
    other = await accounts_service.create_account(
        AccountCreate(username="other", password=PASSWORD, role_id=roles["admin"], entity_id=entity.id)
    )

    with pytest.raises(AccountConflictError) as exc_info:
        await accounts_service.update_account(other.id, AccountUpdate(username="mperez"))

    assert exc_info.value.details["username_used"] is True

    # Keeping one's own username is not a conflict
    assert await accounts_service.update_account(account.id, AccountUpdate(username="mperez")) == 1


async def test_update_entity_conflict_rolls_back_account_changes(accounts_service, entities_service, sessions, account):
    await entities_service.create_entity(make_entity(national_id="2", emails=["taken@example.com"], phones=[]))

    with pytest.raises(EntityConflictError):
        await accounts_service.update_account(
            account.id,
            AccountUpdate(enabled=False, entity=make_entity(emails=["taken@example.com"])),
        )

    assert (await stored_account(sessions, account.id)).enabled is True


async def test_update_unknown_account(accounts_service, roles):
    assert await accounts_service.update_account(999, AccountUpdate(enabled=False)) == 0


async def test_delete_account_keeps_entity(accounts_service, entities_service, account):
    assert await accounts_service.delete_account(account.id) == 1
    assert await accounts_service.get_account(account.id) is None
    assert await entities_service.get_entity(account.entity_id) is not None
    assert await accounts_service.delete_account(account.id) == 0
