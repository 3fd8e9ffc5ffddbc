# 📄 File: hub/modules/entities/presentation/api/schemas/entity_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes exactly what the entity endpoints accept and return, with examples for the API docs.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the entity endpoints, built on the domain value types
# so that validated requests can be handed to EntitiesService unchanged.
# 🔗 Dependencies:
# pydantic, hub.modules.entities.domain.models
# 🔄 Connected Modules / Calls From:
# hub.modules.entities.presentation.api.v1.entities

from typing import List

from pydantic import ConfigDict

from hub.modules.entities.domain.models import EntityData, EntityInfo
from hub.shared.utils.responses import ApiResponse

_ENTITY_EXAMPLE = {
    "name": "Maria",
    "lastname": "Perez",
    "birthdate": "1990-04-12",
    "national_id": "12345678",
    "nationality_type": "V",
    "emails": ["maria.perez@example.com"],
    "phones": ["+58-412-5550001"],
}


class EntityRequest(EntityData):
    """
    Entity create/replace request.

    On update the email and phone lists are the complete desired lists:
    anything missing from them is removed from the entity.
    """

    model_config = ConfigDict(json_schema_extra={"example": _ENTITY_EXAMPLE})


class EntityResponse(EntityInfo):
    """Entity with its contacts."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": {"id": 1, **_ENTITY_EXAMPLE}},
    )


EntityEnvelope = ApiResponse[EntityResponse]
EntityListEnvelope = ApiResponse[List[EntityResponse]]
