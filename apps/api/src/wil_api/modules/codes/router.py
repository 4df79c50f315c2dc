"""
Codes Router

Endpoints:
- POST /staff_codes - Create a staff registration code and email it
- POST /validate-staff-code - Check a staff code
- POST /create-event-code - Create an event code and email it to the guest
- POST /validate-event-code - Check an event code
- POST /validate-signup-code - Check a student signup code
- POST /block-signup-email - Block an email from student signup

Validation endpoints are rate limited per client IP so codes cannot be
enumerated.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.config import settings
from wil_api.core.database import get_db
from wil_api.core.errors import ServiceError, internal_error, to_http_exception
from wil_api.core.rate_limit import rate_limit
from wil_api.modules.codes import service
from wil_api.modules.codes.schemas import (
    BlockEmailRequest,
    BlockEmailResponse,
    CodeCreatedResponse,
    CodeRequest,
    CodeValidationResponse,
    EventCodeCreate,
    EventCodeValidationResponse,
    StaffCodeCreate,
    StaffCodeValidationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["codes"])


def _validate_code_limit() -> int:
    return settings.validate_code_rate_limit


@router.post(
    "/staff_codes",
    response_model=CodeCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Staff Code",
)
async def create_staff_code(
    data: StaffCodeCreate,
    db: AsyncSession = Depends(get_db),
) -> CodeCreatedResponse:
    """Issue a staff code. The code is returned even when the email fails."""
    try:
        result = await service.create_staff_code(db, data.staff_name, data.staff_email)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "create staff code") from e

    return CodeCreatedResponse(
        message="Staff code created",
        code=result["code"],
        warning=result["warning"],
    )


@router.post(
    "/validate-staff-code",
    response_model=StaffCodeValidationResponse,
    summary="Validate Staff Code",
)
@rate_limit(limit=_validate_code_limit, window_seconds=60)
async def validate_staff_code(
    request: Request,
    data: CodeRequest,
    db: AsyncSession = Depends(get_db),
) -> StaffCodeValidationResponse:
    try:
        result = await service.validate_staff_code(db, data.code)
    except Exception as e:
        raise internal_error(e, "validate staff code") from e
    return StaffCodeValidationResponse(**result)


@router.post(
    "/create-event-code",
    response_model=CodeCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Event Code",
)
async def create_event_code(
    data: EventCodeCreate,
    db: AsyncSession = Depends(get_db),
) -> CodeCreatedResponse:
    """Issue an event code for a guest. The code is returned even when the email fails."""
    try:
        result = await service.create_event_code(db, data.guest_name, data.guest_email)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "create event code") from e

    return CodeCreatedResponse(
        message="Event code created and sent successfully",
        code=result["code"],
        warning=result["warning"],
    )


@router.post(
    "/validate-event-code",
    response_model=EventCodeValidationResponse,
    summary="Validate Event Code",
    responses={404: {"description": "Event code is not issued or already used"}},
)
@rate_limit(limit=_validate_code_limit, window_seconds=60)
async def validate_event_code(
    request: Request,
    data: CodeRequest,
    db: AsyncSession = Depends(get_db),
) -> EventCodeValidationResponse:
    try:
        result = await service.validate_event_code(db, data.code)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "validate event code") from e
    return EventCodeValidationResponse(**result)


@router.post(
    "/validate-signup-code",
    response_model=CodeValidationResponse,
    summary="Validate Signup Code",
    description="""
Check a student signup code without consuming it.

Returns `success: false` with message `Invalid code` when the code was never
issued or has already been redeemed, and `This email is blocked from signing up`
when the code was issued to a blocked address.
""",
)
@rate_limit(limit=_validate_code_limit, window_seconds=60)
async def validate_signup_code(
    request: Request,
    data: CodeRequest,
    db: AsyncSession = Depends(get_db),
) -> CodeValidationResponse:
    try:
        result = await service.validate_signup_code(db, data.code)
    except Exception as e:
        raise internal_error(e, "validate signup code") from e
    return CodeValidationResponse(**result)


@router.post(
    "/block-signup-email",
    response_model=BlockEmailResponse,
    summary="Block Signup Email",
)
async def block_signup_email(
    data: BlockEmailRequest,
    db: AsyncSession = Depends(get_db),
) -> BlockEmailResponse:
    try:
        result = await service.block_signup_email(db, data.email)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "block signup email") from e
    return BlockEmailResponse(**result)
