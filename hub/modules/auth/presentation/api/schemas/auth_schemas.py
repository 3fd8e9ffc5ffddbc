# 📄 File: hub/modules/auth/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the sign-in endpoints accept and return.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the auth endpoints layered on the session domain types.
# 🔗 Dependencies:
# pydantic, hub.modules.auth.domain.models
# 🔄 Connected Modules / Calls From:
# hub.modules.auth.presentation.api.v1.auth

from pydantic import ConfigDict

from hub.modules.auth.domain.models import SessionInfo, SignInCredentials
from hub.shared.utils.responses import ApiResponse


class SignInRequest(SignInCredentials):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "maria.perez@example.com",
                "password": "s3cret-pass",
            }
        }
    )


class SessionResponse(SessionInfo):
    """Signed-in account with its entity and role permissions."""


SessionEnvelope = ApiResponse[SessionResponse]
