"""
Codes Repository

Database operations for one-time codes and the signup blocklist.
Functions only flush; the calling service owns the transaction.
"""

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import CODE_MODELS, BlockedSignup, CodeKind, SignupCode


async def code_exists(db: AsyncSession, kind: CodeKind, code: str) -> bool:
    """Check whether a code value is currently issued for this kind."""
    model = CODE_MODELS[kind]
    result = await db.execute(select(exists().where(model.code == code)))
    return bool(result.scalar())


async def insert_code(db: AsyncSession, kind: CodeKind, code: str, **owner):
    """Persist a freshly generated code with its owner metadata."""
    row = CODE_MODELS[kind](code=code, **owner)
    db.add(row)
    await db.flush()
    return row


async def get_code(db: AsyncSession, kind: CodeKind, code: str, *, for_update: bool = False):
    """
    Look up a code row by exact match.

    With for_update=True the row is locked until the transaction ends, so two
    concurrent redemptions of one code serialize on it.
    """
    model = CODE_MODELS[kind]
    stmt = select(model).where(model.code == code)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def delete_code(db: AsyncSession, kind: CodeKind, code: str) -> int:
    """Delete a code row. Returns the number of rows removed (0 or 1)."""
    model = CODE_MODELS[kind]
    result = await db.execute(delete(model).where(model.code == code))
    return result.rowcount


async def delete_signup_codes_for_application(db: AsyncSession, application_id: int) -> int:
    """Remove any unredeemed signup codes still bound to an application."""
    result = await db.execute(
        delete(SignupCode).where(SignupCode.application_id == application_id)
    )
    return result.rowcount


async def is_email_blocked(db: AsyncSession, email: str) -> bool:
    """Check the blocklist for an email address, ignoring case."""
    result = await db.execute(
        select(exists().where(func.lower(BlockedSignup.email) == email.lower()))
    )
    return bool(result.scalar())


async def block_email(db: AsyncSession, email: str) -> BlockedSignup:
    """Add an email to the blocklist."""
    row = BlockedSignup(email=email.lower())
    db.add(row)
    await db.flush()
    return row
