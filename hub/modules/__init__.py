# 📄 File: hub/modules/__init__.py
# 🧭 Purpose (Layman Explanation):
# Holds the three business areas of the back office: entities, accounts and sign-in.
# 🧪 Purpose (Technical Summary):
# Modules package. ``register_models`` imports every ORM model so that the shared declarative
# metadata knows all tables before the startup schema sync.
# 🔗 Dependencies:
# Module ORM models
# 🔄 Connected Modules / Calls From:
# hub.main (lifespan), tests


def register_models() -> None:
    """Import every module's ORM models into the shared metadata."""
    from hub.modules.entities.infrastructure.database import models as entity_models  # noqa: F401
    from hub.modules.accounts.infrastructure.database import models as account_models  # noqa: F401
    from hub.modules.auth.infrastructure.database import models as auth_models  # noqa: F401


__all__ = ["register_models"]
