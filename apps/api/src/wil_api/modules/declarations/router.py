"""
Declarations Router

Endpoints:
- POST /submit-declaration-letter - Supervisor submits a declaration letter
- GET /declaration-letters - List all letters
- GET /letters/{student_number} - A student's most recent letter
- DELETE /del-declaration-letters/{letter_id}
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.database import get_db
from wil_api.core.errors import ServiceError, internal_error, to_http_exception
from wil_api.modules.declarations import service
from wil_api.modules.declarations.schemas import (
    DeclarationLetterCreate,
    DeclarationLetterCreatedResponse,
    DeclarationLetterResponse,
)
from wil_api.modules.shared.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["declarations"])


@router.post(
    "/submit-declaration-letter",
    response_model=DeclarationLetterCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Declaration Letter",
)
async def submit_declaration_letter(
    data: DeclarationLetterCreate,
    db: AsyncSession = Depends(get_db),
) -> DeclarationLetterCreatedResponse:
    try:
        letter = await service.submit_declaration_letter(db, data)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "submit declaration") from e

    return DeclarationLetterCreatedResponse(
        message="Declaration submitted successfully!",
        id=letter.id,
    )


@router.get(
    "/declaration-letters",
    response_model=list[DeclarationLetterResponse],
    summary="List Declaration Letters",
)
async def list_declaration_letters(
    db: AsyncSession = Depends(get_db),
) -> list[DeclarationLetterResponse]:
    try:
        letters = await service.list_declaration_letters(db)
    except Exception as e:
        raise internal_error(e, "retrieve declaration letters") from e
    return [DeclarationLetterResponse.model_validate(letter) for letter in letters]


@router.get(
    "/letters/{student_number}",
    response_model=DeclarationLetterResponse,
    summary="Get Student Declaration Letter",
)
async def get_declaration_letter(
    student_number: str,
    db: AsyncSession = Depends(get_db),
) -> DeclarationLetterResponse:
    try:
        letter = await service.get_declaration_letter(db, student_number)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise internal_error(e, "retrieve declaration letter") from e
    return DeclarationLetterResponse.model_validate(letter)


@router.delete(
    "/del-declaration-letters/{letter_id}",
    response_model=MessageResponse,
    summary="Delete Declaration Letter",
)
async def delete_declaration_letter(
    letter_id: int,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    try:
        await service.delete_declaration_letter(db, letter_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "delete declaration letter") from e
    return MessageResponse(message="Declaration letter deleted successfully")
