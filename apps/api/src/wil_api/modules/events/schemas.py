"""
Events Schemas
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from wil_api.modules.events.models import RegisterStatus
from wil_api.modules.shared.schemas import MessageResponse, RequestModel


class GuestLectureCreate(RequestModel):
    """Request body for POST /guest-lectures."""

    event_code: str = Field(..., min_length=1, max_length=16)
    title: str = Field(..., min_length=1, max_length=200)
    event_type: str = Field(..., min_length=1, max_length=100)
    event_date: date
    register_status: RegisterStatus = RegisterStatus.ACTIVE
    document_path: str | None = Field(None, max_length=255)


class GuestLectureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    guest_name: str
    guest_email: str
    event_type: str
    event_date: date
    register_status: RegisterStatus
    document_path: str | None = None


class GuestLectureCreatedResponse(MessageResponse):
    data: GuestLectureResponse


class GuestLectureListResponse(BaseModel):
    success: bool = True
    message: str
    data: list[GuestLectureResponse]


class ToggleStatusResponse(MessageResponse):
    new_status: RegisterStatus


class RegistrationRequest(RequestModel):
    event_id: int = Field(..., gt=0)
    # Student number
    student_id: str = Field(..., min_length=1, max_length=20)


class AttendanceRequest(RegistrationRequest):
    attended: bool


class AttendanceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    student_id: int
    attended: bool
    signed_at: datetime | None = None


class AttendanceResponse(MessageResponse):
    data: AttendanceRecord
