"""
Codes Schemas

Pydantic schemas for code issuance, validation and the signup blocklist.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from wil_api.modules.shared.schemas import MessageResponse, RequestModel


class CodeRequest(RequestModel):
    """Body for the validate-*-code endpoints."""

    code: str = Field(..., min_length=1, max_length=16)


class BlockEmailRequest(RequestModel):
    email: EmailStr


class StaffCodeCreate(RequestModel):
    """Request body for POST /staff_codes."""

    staff_name: str = Field(..., min_length=1, max_length=200)
    staff_email: EmailStr


class EventCodeCreate(RequestModel):
    """Request body for POST /create-event-code."""

    guest_name: str = Field(..., min_length=1, max_length=200)
    guest_email: EmailStr


class CodeCreatedResponse(MessageResponse):
    code: str


class CodeValidationResponse(BaseModel):
    success: bool
    message: str


class StaffCodeDetails(BaseModel):
    staff_name: str
    staff_email: str


class StaffCodeValidationResponse(CodeValidationResponse):
    data: StaffCodeDetails | None = None


class EventCodeDetails(BaseModel):
    guest_name: str
    guest_email: str
    created_at: datetime | None = None


class EventCodeValidationResponse(CodeValidationResponse):
    data: EventCodeDetails


class BlockEmailResponse(MessageResponse):
    created: bool
