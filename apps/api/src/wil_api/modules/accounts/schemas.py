"""
Account Schemas

Signup request and response bodies shared by the student, staff and mentor
signup endpoints.
"""

from pydantic import BaseModel, EmailStr, Field

from wil_api.modules.shared.schemas import RequestModel


class SignupRequest(RequestModel):
    email: EmailStr
    title: str | None = Field(None, max_length=20)
    password: str = Field(..., min_length=8, max_length=128)
    code: str = Field(..., min_length=1, max_length=16)


class AccountData(BaseModel):
    email: str
    title: str | None = None
    student_number: str | None = None


class SignupResponse(BaseModel):
    success: bool = True
    message: str
    data: AccountData
