"""
Declaration Letter Schemas
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from wil_api.modules.shared.schemas import MessageResponse, RequestModel


class DeclarationLetterCreate(RequestModel):
    """Request body for POST /submit-declaration-letter."""

    student_number: str = Field(..., min_length=1, max_length=20)
    student_name: str = Field(..., min_length=1, max_length=200)
    declaration_date: date | None = None

    supervisor_name: str = Field(..., min_length=1, max_length=200)
    employer_name: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=100)
    hi_number: str = Field(..., min_length=1, max_length=50)

    start_date: date
    end_date: date

    work_ethic: str = Field(..., min_length=1, max_length=50)
    timeliness: str = Field(..., min_length=1, max_length=50)
    attitude: str = Field(..., min_length=1, max_length=50)
    dress: str = Field(..., min_length=1, max_length=50)
    interaction: str = Field(..., min_length=1, max_length=50)
    responsibility: str = Field(..., min_length=1, max_length=50)
    report_writing: str = Field(..., min_length=1, max_length=50)
    general_comments: str | None = None

    supervisor_signature: str | None = Field(None, max_length=255)
    signature_date: date | None = None


class DeclarationLetterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_number: str
    student_name: str
    declaration_date: date | None = None
    supervisor_name: str
    employer_name: str
    position: str
    hi_number: str
    start_date: date
    end_date: date
    work_ethic: str
    timeliness: str
    attitude: str
    dress: str
    interaction: str
    responsibility: str
    report_writing: str
    general_comments: str | None = None
    supervisor_signature: str | None = None
    signature_date: date | None = None
    created_at: datetime | None = None


class DeclarationLetterCreatedResponse(MessageResponse):
    id: int
