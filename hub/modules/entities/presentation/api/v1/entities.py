# 📄 File: hub/modules/entities/presentation/api/v1/entities.py
# 🧭 Purpose (Layman Explanation):
# This file contains the web endpoints for people and organizations: list them, look one up by id
# or by document number, create, replace and delete them.
#
# 🧪 Purpose (Technical Summary):
# FastAPI entity endpoints mapping HTTP verbs to EntitiesService calls and wrapping results in the
# {message, data} envelope. Conflicts surface as 409 through the shared exception handling.
#
# 🔗 Dependencies:
# - FastAPI router, status codes, Path parameters
# - hub.modules.entities.domain.services.entity_service
# - hub.modules.entities.presentation.api.schemas.entity_schemas
#
# 🔄 Connected Modules / Calls From:
# - hub.modules.entities.presentation.api (router inclusion)

"""
Entities API Endpoints

Endpoints:
- GET /: List all entities
- POST /: Create an entity with its emails and phones
- GET /dni/{dni}: Search entities by ``[nationality_type-]national_id``
- GET /{entity_id}: Get one entity
- PUT /{entity_id}: Replace an entity's fields and contact lists
- DELETE /{entity_id}: Delete an entity and its contacts
"""

from fastapi import APIRouter, Depends, Path, status

from hub.modules.entities.domain.services.entity_service import EntitiesService
from hub.modules.entities.presentation.api.schemas.entity_schemas import (
    EntityEnvelope,
    EntityListEnvelope,
    EntityRequest,
)
from hub.modules.entities.presentation.dependencies import get_entities_service
from hub.shared.core.exceptions import NotFoundError
from hub.shared.utils.responses import EmptyResponse, success_response

# Create router
entities_router = APIRouter()

_CONFLICT_RESPONSE = {409: {"description": "Document number, email or phone already in use"}}


def _entity_not_found(entity_id: int) -> NotFoundError:
    return NotFoundError(
        message=f"Entity '{entity_id}' not found!",
        resource_type="entity",
        resource_id=entity_id,
    )


@entities_router.get(
    "",
    response_model=EntityListEnvelope,
    summary="List entities",
    description="Get every entity with its emails and phones",
)
async def get_all_entities(
    entities_service: EntitiesService = Depends(get_entities_service),
):
    entities = await entities_service.get_all_entities()
    return success_response("Retrieved all entities!", entities)


@entities_router.post(
    "",
    response_model=EntityEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create entity",
    description="Create an entity together with its emails and phones",
    responses=_CONFLICT_RESPONSE,
)
async def create_entity(
    entity_data: EntityRequest,
    entities_service: EntitiesService = Depends(get_entities_service),
):
    """
    Create a new entity.

    Args:
        entity_data: Identity fields plus email and phone lists
        entities_service: Injected entity service

    Returns:
        EntityEnvelope: The created entity
    """
    entity = await entities_service.create_entity(entity_data)
    return success_response("Entity created!", entity)


@entities_router.get(
    "/dni/{dni}",
    response_model=EntityListEnvelope,
    summary="Search entities by document",
    description="Search by 'V-12345678', 'V12345678' or just '12345678'",
)
async def search_entities_by_dni(
    dni: str = Path(..., min_length=1, max_length=20),
    entities_service: EntitiesService = Depends(get_entities_service),
):
    entities = await entities_service.search_entities_by_dni(dni)
    noun = "entity" if len(entities) == 1 else "entities"
    return success_response(f"{len(entities)} {noun} found!", entities)


@entities_router.get(
    "/{entity_id}",
    response_model=EntityEnvelope,
    summary="Get entity",
    responses={404: {"description": "Entity not found"}},
)
async def get_entity(
    entity_id: int = Path(..., ge=1),
    entities_service: EntitiesService = Depends(get_entities_service),
):
    entity = await entities_service.get_entity(entity_id)
    if entity is None:
        raise _entity_not_found(entity_id)
    return success_response("Retrieved entity!", entity)


@entities_router.put(
    "/{entity_id}",
    response_model=EmptyResponse,
    summary="Replace entity",
    description="Replace the entity's fields; emails and phones are reconciled against the given lists",
    responses={404: {"description": "Entity not found"}, **_CONFLICT_RESPONSE},
)
async def update_entity(
    entity_data: EntityRequest,
    entity_id: int = Path(..., ge=1),
    entities_service: EntitiesService = Depends(get_entities_service),
):
    """
    Update an entity.

    An update that matches the stored data writes nothing and still
    succeeds; only an unknown id is reported as not found.
    """
    changed = await entities_service.update_entity(entity_id, entity_data)
    if changed:
        return success_response("Entity updated!")

    if await entities_service.get_entity(entity_id) is None:
        raise _entity_not_found(entity_id)
    return success_response("Entity unchanged!")


@entities_router.delete(
    "/{entity_id}",
    response_model=EmptyResponse,
    summary="Delete entity",
    responses={404: {"description": "Entity not found"}},
)
async def delete_entity(
    entity_id: int = Path(..., ge=1),
    entities_service: EntitiesService = Depends(get_entities_service),
):
    deleted = await entities_service.delete_entity(entity_id)
    if not deleted:
        raise _entity_not_found(entity_id)
    return success_response("Entity deleted!")
