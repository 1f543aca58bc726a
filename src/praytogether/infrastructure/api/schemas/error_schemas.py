"""Pydantic schema for the error envelope, used in OpenAPI docs."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Body of every error response."""

    status: int = Field(..., description="HTTP status code")
    code: str = Field(..., description="Stable error code, e.g. AUTH-003")
    message: str = Field(..., description="Human-readable error message")
