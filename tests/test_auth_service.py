"""Tests for AuthService: sign-in, token resolution and logout."""
from datetime import timedelta

import pytest
from jose import jwt
from sqlalchemy import select, update

from hub.modules.accounts.domain.models import AccountUpdate
from hub.modules.auth.infrastructure.database.models import SessionModel
from hub.modules.auth.infrastructure.database.session_repository import SessionRepository
from hub.shared.core.exceptions import AccountDisabledError, InvalidCredentialsError
from hub.shared.core.security import SecurityManager
from hub.shared.utils.helpers import utc_now

from .conftest import PASSWORD


async def stored_session(sessions, session_id) -> SessionModel:
    async with sessions.session() as session:
        return await session.get(SessionModel, session_id)


async def test_sign_in_issues_session_and_token(auth_service, security, settings, sessions, account, roles):
    info = await auth_service.sign_in("maria@example.com", PASSWORD)

    assert info.id == account.id
    assert info.username == "mperez"
    assert info.entity.id == account.entity_id
    assert info.role.id == roles["admin"]
    assert info.role.name == "admin"

    row = await stored_session(sessions, info.session_id)
    assert row.account_id == account.id
    assert row.locked is False
    lifetime = row.expire_at - row.created_at
    assert abs(lifetime - timedelta(milliseconds=settings.SESSION_EXPIRE_MS)) < timedelta(seconds=5)

    payload = security.verify_session_token(info.token)
    assert payload.version == "auth@1.0.0"
    assert payload.account_id == account.id
    assert payload.session_id == info.session_id
    assert payload.token_uuid == row.token_uuid

    claims = jwt.get_unverified_claims(info.token)
    assert claims["iss"] == "stexcore-hub"
    assert claims["aud"] == "stexcore-hub"


async def test_each_sign_in_gets_its_own_token_identifier(auth_service, sessions, account):
    first = await auth_service.sign_in("maria@example.com", PASSWORD)
    second = await auth_service.sign_in("maria@example.com", PASSWORD)

    assert first.session_id != second.session_id
    first_row = await stored_session(sessions, first.session_id)
    second_row = await stored_session(sessions, second.session_id)
    assert first_row.token_uuid != second_row.token_uuid


async def test_permission_snapshot_is_grouped_and_deduplicated(auth_service, account):
    info = await auth_service.sign_in("maria@example.com", PASSWORD)

    modules = [(module.name, module.permissions) for module in info.role.modules]
    assert modules == [
        ("entities", ["read", "create"]),
        ("accounts", ["read"]),
    ]


async def test_wrong_password(auth_service, sessions, account):
    with pytest.raises(InvalidCredentialsError):
        await auth_service.sign_in("maria@example.com", "wrong password")

    async with sessions.session() as session:
        assert (await session.execute(select(SessionModel))).scalars().all() == []


async def test_unknown_email(auth_service, account):
    with pytest.raises(InvalidCredentialsError):
        await auth_service.sign_in("nobody@example.com", PASSWORD)


async def test_disabled_account_is_reported_only_after_credentials_match(auth_service, accounts_service, account):
    await accounts_service.update_account(account.id, AccountUpdate(enabled=False))

    with pytest.raises(InvalidCredentialsError):
        await auth_service.sign_in("maria@example.com", "wrong password")

    with pytest.raises(AccountDisabledError):
        await auth_service.sign_in("maria@example.com", PASSWORD)


async def test_token_round_trip_matches_sign_in(auth_service, account):
    signed_in = await auth_service.sign_in("maria@example.com", PASSWORD)

    resolved = await auth_service.get_session_by_token(signed_in.token)

    assert resolved == signed_in


async def test_resolution_reloads_account_state(auth_service, accounts_service, account, roles):
    signed_in = await auth_service.sign_in("maria@example.com", PASSWORD)
    await accounts_service.update_account(account.id, AccountUpdate(username="maria", role_id=roles["viewer"]))

    resolved = await auth_service.get_session_by_token(signed_in.token)

    assert resolved.username == "maria"
    assert resolved.role.name == "viewer"
    assert resolved.role.modules == []


async def test_tampered_token(auth_service, account):
    token = (await auth_service.sign_in("maria@example.com", PASSWORD)).token
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")])

    with pytest.raises(InvalidCredentialsError):
        await auth_service.get_session_by_token(tampered)


async def test_token_signed_with_another_key(auth_service, settings, account):
    other_settings = settings.model_copy(update={"API_KEY": "another-key"})
    token = SecurityManager(other_settings).create_session_token(
        account_id=account.id, session_id=1, token_uuid="x", expires_at=utc_now() + timedelta(hours=1)
    )

    with pytest.raises(InvalidCredentialsError):
        await auth_service.get_session_by_token(token)


async def test_expired_token(auth_service, security, account):
    token = security.create_session_token(
        account_id=account.id, session_id=1, token_uuid="x", expires_at=utc_now() - timedelta(minutes=1)
    )

    with pytest.raises(InvalidCredentialsError):
        await auth_service.get_session_by_token(token)


async def test_malformed_token(auth_service):
    with pytest.raises(InvalidCredentialsError):
        await auth_service.get_session_by_token("not-a-token")


async def test_expired_session_row_resolves_to_nothing(auth_service, sessions, account):
    info = await auth_service.sign_in("maria@example.com", PASSWORD)

    async with sessions.transaction() as session:
        await session.execute(
            update(SessionModel)
            .where(SessionModel.id == info.session_id)
            .values(expire_at=utc_now() - timedelta(seconds=1))
        )

    assert await auth_service.get_session_by_token(info.token) is None


async def test_logout_locks_session(auth_service, sessions, account):
    info = await auth_service.sign_in("maria@example.com", PASSWORD)

    await auth_service.logout(info.token)

    assert (await stored_session(sessions, info.session_id)).locked is True
    assert await auth_service.get_session_by_token(info.token) is None


async def test_second_logout_fails(auth_service, account):
    info = await auth_service.sign_in("maria@example.com", PASSWORD)
    await auth_service.logout(info.token)

    with pytest.raises(InvalidCredentialsError):
        await auth_service.logout(info.token)


async def test_logout_leaves_other_sessions_active(auth_service, account):
    first = await auth_service.sign_in("maria@example.com", PASSWORD)
    second = await auth_service.sign_in("maria@example.com", PASSWORD)

    await auth_service.logout(first.token)

    assert await auth_service.get_session_by_token(second.token) is not None


async def test_logout_matches_stored_token_identifier_not_raw_token(auth_service, sessions, account):
    """
    Locking with the raw token in place of the stored token identifier
    matches nothing; logout must use the identifier carried in the token.
    """
    info = await auth_service.sign_in("maria@example.com", PASSWORD)

    async with sessions.transaction() as session:
        locked = await SessionRepository(session).lock(
            session_id=info.session_id,
            token_uuid=info.token,
            account_id=info.id,
        )
    assert locked == 0
    assert (await stored_session(sessions, info.session_id)).locked is False

    await auth_service.logout(info.token)
    assert (await stored_session(sessions, info.session_id)).locked is True


async def test_session_of_deleted_account(auth_service, accounts_service, account):
    info = await auth_service.sign_in("maria@example.com", PASSWORD)
    await accounts_service.delete_account(account.id)

    with pytest.raises(InvalidCredentialsError):
        await auth_service.get_session_by_token(info.token)
