"""Shared pytest fixtures.

Every test gets its own SQLite file under ``tmp_path`` with the schema
synced, so tests never see each other's rows.
"""
from datetime import date
from typing import Dict

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from hub.main import create_application
from hub.modules import register_models
from hub.modules.accounts.domain.models import AccountCreate
from hub.modules.accounts.domain.services.account_service import AccountsService
from hub.modules.accounts.infrastructure.database.models import (
    ModuleModel,
    PermissionModel,
    RoleModel,
    RoleModulePermissionModel,
)
from hub.modules.auth.domain.services.auth_service import AuthService
from hub.modules.entities.domain.models import EntityData
from hub.modules.entities.domain.services.entity_service import EntitiesService
from hub.shared.config.settings import Settings
from hub.shared.core.security import SecurityManager
from hub.shared.infrastructure.database import DatabaseConnectionManager, DatabaseSessionManager

PASSWORD = "correct horse battery"


def make_entity(
    national_id: str = "12345678",
    nationality_type: str = "V",
    emails=("maria@example.com",),
    phones=("+58-412-5550001",),
    name: str = "Maria",
) -> EntityData:
    return EntityData(
        name=name,
        lastname="Perez",
        birthdate=date(1990, 4, 12),
        national_id=national_id,
        nationality_type=nationality_type,
        emails=list(emails),
        phones=list(phones),
    )


async def seed_catalog(sessions: DatabaseSessionManager) -> Dict[str, int]:
    """
    One admin role with a repeated grant and one role with no grants.

    Admin grants, in insertion order:
    entities/read, entities/create, entities/read (repeated), accounts/read.
    """
    async with sessions.transaction() as session:
        admin = RoleModel(name="admin", description="Back-office administrator")
        viewer = RoleModel(name="viewer", description=None)
        entities_module = ModuleModel(name="entities")
        accounts_module = ModuleModel(name="accounts")
        read = PermissionModel(name="read")
        create = PermissionModel(name="create")
        session.add_all([admin, viewer, entities_module, accounts_module, read, create])
        await session.flush()

        session.add_all([
            RoleModulePermissionModel(role_id=admin.id, module_id=entities_module.id, permission_id=read.id),
            RoleModulePermissionModel(role_id=admin.id, module_id=entities_module.id, permission_id=create.id),
            RoleModulePermissionModel(role_id=admin.id, module_id=entities_module.id, permission_id=read.id),
            RoleModulePermissionModel(role_id=admin.id, module_id=accounts_module.id, permission_id=read.id),
        ])

    return {"admin": admin.id, "viewer": viewer.id}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        ENVIRONMENT="test",
        DB_TYPE="sqlite",
        DB_STORAGE=str(tmp_path / "hub.sqlite"),
        DATABASE_URL=None,
        API_KEY="test-signing-key",
        BCRYPT_ROUNDS=4,
    )


@pytest_asyncio.fixture
async def db(settings):
    register_models()
    manager = DatabaseConnectionManager(settings)
    await manager.initialize()
    await manager.sync_schema()
    yield manager
    await manager.close()


@pytest.fixture
def sessions(db) -> DatabaseSessionManager:
    return DatabaseSessionManager(db)


@pytest.fixture
def security(settings) -> SecurityManager:
    return SecurityManager(settings)


@pytest.fixture
def entities_service(sessions) -> EntitiesService:
    return EntitiesService(sessions)


@pytest.fixture
def accounts_service(sessions, entities_service, security) -> AccountsService:
    return AccountsService(sessions, entities_service, security)


@pytest.fixture
def auth_service(sessions, security, settings) -> AuthService:
    return AuthService(sessions, security, settings)


@pytest_asyncio.fixture
async def roles(sessions) -> Dict[str, int]:
    return await seed_catalog(sessions)


@pytest_asyncio.fixture
async def account(accounts_service, roles):
    """Enabled admin account whose entity owns ``maria@example.com``."""
    return await accounts_service.create_account(
        AccountCreate(
            username="mperez",
            password=PASSWORD,
            role_id=roles["admin"],
            entity=make_entity(),
        )
    )


@pytest.fixture
def client(settings):
    app = create_application(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_roles(client) -> Dict[str, int]:
    return client.portal.call(seed_catalog, client.app.state.sessions)
