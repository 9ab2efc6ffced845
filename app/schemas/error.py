"""
Error response schemas for the Certificados API.

Documents the body returned by the global exception handler.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InternalError(BaseModel):
    """
    500 body produced by `app.core.errors`.

    `error_type` and `path` are only present when DEBUG is on.
    """

    detail: str = Field("Internal Server Error", description="Error summary")
    message: str = Field(..., description="Human-readable error message")
    error_type: Optional[str] = Field(None, description="Exception class (DEBUG)")
    path: Optional[str] = Field(None, description="API path (DEBUG)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "Internal Server Error",
                "message": "An unexpected error occurred. Please try again later.",
            }
        }
    )


# Common error responses for OpenAPI documentation
ERROR_RESPONSES = {
    500: {"model": InternalError, "description": "Internal Server Error"},
}
