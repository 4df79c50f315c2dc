"""
Applications Repository

Database operations for WIL applications. Functions flush but never commit;
the service layer owns transactions.
"""

from sqlalchemy import delete as sa_delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Application, ApplicationStatus


async def create(db: AsyncSession, **fields) -> Application:
    """Insert a new application in Pending status."""
    application = Application(**fields, status=ApplicationStatus.PENDING)
    db.add(application)
    await db.flush()
    await db.refresh(application)
    return application


async def get_by_id(
    db: AsyncSession, application_id: int, *, for_update: bool = False
) -> Application | None:
    """Get application by ID, optionally locking the row."""
    stmt = select(Application).where(Application.id == application_id)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_all(db: AsyncSession) -> list[Application]:
    """All applications, newest first."""
    result = await db.execute(
        select(Application).order_by(Application.created_at.desc(), Application.id.desc())
    )
    return list(result.scalars().all())


async def update_status(
    db: AsyncSession, application_id: int, new_status: ApplicationStatus
) -> int:
    """Set status and touch updated_at. Returns affected row count."""
    result = await db.execute(
        update(Application)
        .where(Application.id == application_id)
        .values(status=new_status, updated_at=func.now())
    )
    return result.rowcount


async def apply_patch(db: AsyncSession, application_id: int, changes: dict) -> int:
    """
    Apply a validated field patch in one UPDATE statement.

    `changes` keys must be Application column names; ApplicationPatch
    guarantees this. Returns affected row count.
    """
    result = await db.execute(
        update(Application)
        .where(Application.id == application_id)
        .values(**changes, updated_at=func.now())
    )
    return result.rowcount


async def delete(db: AsyncSession, application_id: int) -> int:
    result = await db.execute(sa_delete(Application).where(Application.id == application_id))
    return result.rowcount


async def get_accepted_by_student_number(
    db: AsyncSession, student_number: str
) -> Application | None:
    """Most recent Accepted application for a student number."""
    result = await db.execute(
        select(Application)
        .where(
            Application.student_number == student_number,
            Application.status == ApplicationStatus.ACCEPTED,
        )
        .order_by(Application.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_latest_by_student_number(db: AsyncSession, student_number: str) -> Application | None:
    """Most recent application submitted under a student number."""
    result = await db.execute(
        select(Application)
        .where(Application.student_number == student_number)
        .order_by(Application.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def count_by_status(db: AsyncSession) -> dict[str, int]:
    """Application counts keyed by status value; every status is present."""
    result = await db.execute(
        select(Application.status, func.count()).group_by(Application.status)
    )
    counts = {status.value: 0 for status in ApplicationStatus}
    for status, count in result.all():
        counts[ApplicationStatus(status).value] = count
    return counts
