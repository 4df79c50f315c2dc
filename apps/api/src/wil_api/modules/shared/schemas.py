"""Shared pydantic bases."""

from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """Request body base: unknown fields are rejected, strings are stripped."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class MessageResponse(BaseModel):
    """Generic success envelope."""

    success: bool = True
    message: str
    warning: str | None = None
