"""
Declarations Service

Supervisors submit one letter per placement period; a student may collect
several over the programme. Lookups by student return the most recent.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.database import transaction
from wil_api.core.errors import InvalidInputError, NotFoundError, TransactionFailureError
from wil_api.modules.declarations import repository
from wil_api.modules.declarations.models import DeclarationLetter
from wil_api.modules.declarations.schemas import DeclarationLetterCreate

logger = logging.getLogger(__name__)


async def submit_declaration_letter(
    db: AsyncSession, data: DeclarationLetterCreate
) -> DeclarationLetter:
    """
    Store a supervisor's declaration letter.

    Raises:
        InvalidInputError: If the placement period ends before it starts
    """
    if data.start_date > data.end_date:
        raise InvalidInputError("End date must be after start date.")

    try:
        async with transaction(db):
            letter = await repository.create(db, **data.model_dump())
    except SQLAlchemyError as e:
        logger.error(f"Database error submitting declaration letter: {e}", exc_info=True)
        raise TransactionFailureError("submit declaration letter", str(e)) from e

    logger.info(
        f"Declaration letter {letter.id} submitted for {data.student_number} "
        f"by {data.supervisor_name} ({data.employer_name})"
    )
    return letter


async def list_declaration_letters(db: AsyncSession) -> list[DeclarationLetter]:
    return await repository.list_all(db)


async def get_declaration_letter(db: AsyncSession, student_number: str) -> DeclarationLetter:
    """
    Raises:
        NotFoundError: If the student has no declaration letter
    """
    letter = await repository.get_latest_for_student(db, student_number)
    if letter is None:
        raise NotFoundError("Declaration letter", f"for student {student_number}")
    return letter


async def delete_declaration_letter(db: AsyncSession, letter_id: int) -> None:
    """
    Raises:
        NotFoundError: If no letter has this id
    """
    try:
        async with transaction(db):
            if await repository.delete_letter(db, letter_id) == 0:
                raise NotFoundError("Declaration letter", letter_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error deleting declaration letter {letter_id}: {e}", exc_info=True)
        raise TransactionFailureError("delete declaration letter", str(e)) from e

    logger.info(f"Declaration letter {letter_id} deleted")
