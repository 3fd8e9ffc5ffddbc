# 📄 File: hub/shared/utils/responses.py

# 🧭 Purpose (Layman Explanation):
# Gives every successful answer from the API the same shape: a short human message
# plus the actual data, so clients always know where to look.

# 🧪 Purpose (Technical Summary):
# Generic pydantic success envelope ``{message, data}`` used as response_model by
# all v1 endpoints, with a small constructor helper.

# 🔗 Dependencies:
# - pydantic: Generic response model

# 🔄 Connected Modules / Calls From:
# Used by: Entity, account and auth routers

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success envelope."""

    message: str = Field(..., description="Human readable outcome")
    data: Optional[T] = Field(None, description="Response payload")


def success_response(message: str, data: Optional[T] = None) -> ApiResponse[T]:
    return ApiResponse(message=message, data=data)


EmptyResponse = ApiResponse[None]
