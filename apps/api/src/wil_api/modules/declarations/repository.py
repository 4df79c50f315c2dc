"""
Declarations Repository

Database operations for declaration letters. Flushes only.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import DeclarationLetter


async def create(db: AsyncSession, **fields) -> DeclarationLetter:
    letter = DeclarationLetter(**fields)
    db.add(letter)
    await db.flush()
    return letter


async def list_all(db: AsyncSession) -> list[DeclarationLetter]:
    """All letters, latest declaration date first."""
    result = await db.execute(
        select(DeclarationLetter).order_by(
            DeclarationLetter.declaration_date.desc(), DeclarationLetter.id.desc()
        )
    )
    return list(result.scalars().all())


async def get_latest_for_student(db: AsyncSession, student_number: str) -> DeclarationLetter | None:
    result = await db.execute(
        select(DeclarationLetter)
        .where(DeclarationLetter.student_number == student_number)
        .order_by(DeclarationLetter.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def delete_letter(db: AsyncSession, letter_id: int) -> int:
    result = await db.execute(delete(DeclarationLetter).where(DeclarationLetter.id == letter_id))
    return result.rowcount
