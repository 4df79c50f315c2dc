"""
Students Schemas

Student status records, status-change responses and daily logsheets.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from wil_api.modules.accounts.models import StudentStatus
from wil_api.modules.shared.schemas import MessageResponse, RequestModel
from wil_api.modules.students.models import MAX_ACTIVITIES


class StudentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_name: str | None = Field(None, validation_alias="title")
    email: str
    student_number: str
    status: StudentStatus
    created_at: datetime | None = None


class StudentStatusResponse(MessageResponse):
    data: StudentRecord


class StudentActivityResponse(StudentStatusResponse):
    last_activity_date: date | None = None
    days_since_last_activity: int | None = None


class StudentRecomputeResponse(StudentActivityResponse):
    status_changed: bool


class StudentListResponse(BaseModel):
    success: bool = True
    data: list[StudentRecord]
    count: int


class SweepFailure(BaseModel):
    student_number: str
    error: str


class SweepResponse(BaseModel):
    success: bool
    message: str
    checked: int
    updated_students: list[str]
    failed_students: list[SweepFailure]


class LogActivity(RequestModel):
    activity: str = Field(..., min_length=1, max_length=500)
    hours: float | None = Field(None, ge=0, le=24)


class LogsheetCreate(RequestModel):
    """Request body for POST /submit-logsheet."""

    model_config = ConfigDict(populate_by_name=True)

    log_date: date
    student_number: str = Field(..., min_length=1, max_length=20)
    ehp_hi_number: str = Field(..., alias="EHP_HI_Number", min_length=1, max_length=50)
    activities: list[LogActivity] = Field(..., min_length=1, max_length=MAX_ACTIVITIES)

    description: str | None = None
    situation_description: str | None = None
    situation_evaluation: str | None = None
    situation_interpretation: str | None = None

    student_signature: str | None = Field(None, max_length=255)
    supervisor_signature: str | None = Field(None, max_length=255)
    date_stamp: str | None = Field(None, max_length=255)


class LogsheetSubmittedResponse(MessageResponse):
    id: int
    log_date: date
    student_number: str
    activities: list[dict]


class LogsheetExistsResponse(BaseModel):
    exists: bool


class LogsheetRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_number: str
    log_date: date
    ehp_hi_number: str
    activities: list[dict]
    description: str | None = None
    situation_description: str | None = None
    situation_evaluation: str | None = None
    situation_interpretation: str | None = None
    student_signature: str | None = None
    supervisor_signature: str | None = None
    date_stamp: str | None = None
    created_at: datetime | None = None


class StudentLogsheetsResponse(BaseModel):
    exists: bool
    logsheets: list[LogsheetRecord]
