"""
Application Schemas

Pydantic schemas for application intake, listing, field updates and status
changes.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from wil_api.modules.applications.models import ApplicationStatus
from wil_api.modules.shared.schemas import MessageResponse, RequestModel


class ApplicationCreate(RequestModel):
    """Request body for POST /applications."""

    province: str | None = Field(None, max_length=100)
    title: str | None = Field(None, max_length=20)
    initials: str | None = Field(None, max_length=10)
    surname: str = Field(..., min_length=1, max_length=100)
    first_names: str = Field(..., min_length=1, max_length=100)
    student_number: str = Field(..., min_length=1, max_length=20)
    level_of_study: str | None = Field(None, max_length=50)
    race: str | None = Field(None, max_length=50)
    gender: str | None = Field(None, max_length=10)
    email_address: EmailStr
    physical_address: str | None = None
    home_town: str | None = Field(None, max_length=100)
    cell_phone_number: str | None = Field(None, max_length=20)

    municipality_name: str | None = Field(None, max_length=100)
    town_situated: str | None = Field(None, max_length=100)
    contact_person: str | None = Field(None, max_length=100)
    contact_email: EmailStr | None = None
    telephone_number: str | None = Field(None, max_length=20)
    contact_cell_phone: str | None = Field(None, max_length=20)

    declaration_info_1: str | None = None
    declaration_info_2: str | None = None
    declaration_info_3: str | None = None

    signature_image: str | None = Field(None, max_length=255)
    id_document: str | None = Field(None, max_length=255)
    cv_document: str | None = Field(None, max_length=255)


class ApplicationPatch(RequestModel):
    """
    Partial update of an application's data fields.

    Only fields explicitly present in the request are written. Status is not
    patchable; it changes only through the status endpoint.
    """

    province: str | None = Field(None, max_length=100)
    title: str | None = Field(None, max_length=20)
    initials: str | None = Field(None, max_length=10)
    surname: str | None = Field(None, min_length=1, max_length=100)
    first_names: str | None = Field(None, min_length=1, max_length=100)
    level_of_study: str | None = Field(None, max_length=50)
    race: str | None = Field(None, max_length=50)
    gender: str | None = Field(None, max_length=10)
    email_address: EmailStr | None = None
    physical_address: str | None = None
    home_town: str | None = Field(None, max_length=100)
    cell_phone_number: str | None = Field(None, max_length=20)

    municipality_name: str | None = Field(None, max_length=100)
    town_situated: str | None = Field(None, max_length=100)
    contact_person: str | None = Field(None, max_length=100)
    contact_email: EmailStr | None = None
    telephone_number: str | None = Field(None, max_length=20)
    contact_cell_phone: str | None = Field(None, max_length=20)

    declaration_info_1: str | None = None
    declaration_info_2: str | None = None
    declaration_info_3: str | None = None

    signature_image: str | None = Field(None, max_length=255)
    id_document: str | None = Field(None, max_length=255)
    cv_document: str | None = Field(None, max_length=255)

    @field_validator("surname", "first_names", "email_address")
    @classmethod
    def required_fields_not_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    def changes(self) -> dict:
        """Field name to new value, for the fields the caller supplied."""
        return self.model_dump(exclude_unset=True)


class ApplicationStatusUpdate(RequestModel):
    """Request body for POST /signup-codes."""

    model_config = ConfigDict(populate_by_name=True)

    application_id: int = Field(..., alias="applicationId", gt=0)
    # Validated by the service so the error lists the allowed values
    status: str


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    province: str | None = None
    title: str | None = None
    initials: str | None = None
    surname: str
    first_names: str
    student_number: str
    level_of_study: str | None = None
    race: str | None = None
    gender: str | None = None
    email_address: str
    physical_address: str | None = None
    home_town: str | None = None
    cell_phone_number: str | None = None
    municipality_name: str | None = None
    town_situated: str | None = None
    contact_person: str | None = None
    contact_email: str | None = None
    telephone_number: str | None = None
    contact_cell_phone: str | None = None
    declaration_info_1: str | None = None
    declaration_info_2: str | None = None
    declaration_info_3: str | None = None
    signature_image: str | None = None
    id_document: str | None = None
    cv_document: str | None = None
    status: ApplicationStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ApplicationCreatedResponse(MessageResponse):
    id: int


class ApplicationStatusResponse(MessageResponse):
    application_id: int
    new_status: ApplicationStatus
    changed: bool
    code: str | None = None
