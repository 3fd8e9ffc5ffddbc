# 📄 File: hub/modules/entities/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the entity data shapes so other parts of the app can import them from one place
# 🧪 Purpose (Technical Summary):
# Package exports for entity payloads, projections, DNI parsing and reconciliation results
# 🔗 Dependencies:
# entity.py
# 🔄 Connected Modules / Calls From:
# Domain services, API schemas, accounts and auth modules

from .entity import (
    ENTITY_FIELDS,
    DniQuery,
    EntityConflict,
    EntityData,
    EntityInfo,
    EntityUpdatePlan,
    parse_dni,
)

__all__ = [
    "ENTITY_FIELDS",
    "DniQuery",
    "EntityConflict",
    "EntityData",
    "EntityInfo",
    "EntityUpdatePlan",
    "parse_dni",
]
