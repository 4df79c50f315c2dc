"""
Accounts Router

Signup endpoints. Each one redeems a one-time code:
- POST /student_signup - signup code (issued on application acceptance)
- POST /staff_signup - staff code
- POST /mentor_signup - staff code
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.database import get_db
from wil_api.core.errors import ServiceError, internal_error, to_http_exception
from wil_api.modules.accounts import service
from wil_api.modules.accounts.models import AccountKind
from wil_api.modules.accounts.schemas import SignupRequest, SignupResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["accounts"])

SIGNUP_RESPONSES = {
    400: {"description": "Invalid code, or code issued to a blocked email"},
    409: {"description": "An account with this email already exists"},
}


async def _signup(kind: AccountKind, data: SignupRequest, db: AsyncSession) -> SignupResponse:
    try:
        result = await service.redeem(db, kind, data)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, f"complete {kind.value} signup") from e
    return SignupResponse(**result)


@router.post(
    "/student_signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Student Signup",
    responses=SIGNUP_RESPONSES,
)
async def student_signup(
    data: SignupRequest,
    db: AsyncSession = Depends(get_db),
) -> SignupResponse:
    """Create student_users and users rows and consume the signup code."""
    return await _signup(AccountKind.STUDENT, data, db)


@router.post(
    "/staff_signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Staff Signup",
    responses=SIGNUP_RESPONSES,
)
async def staff_signup(
    data: SignupRequest,
    db: AsyncSession = Depends(get_db),
) -> SignupResponse:
    return await _signup(AccountKind.STAFF, data, db)


@router.post(
    "/mentor_signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Mentor Signup",
    responses=SIGNUP_RESPONSES,
)
async def mentor_signup(
    data: SignupRequest,
    db: AsyncSession = Depends(get_db),
) -> SignupResponse:
    return await _signup(AccountKind.MENTOR, data, db)
