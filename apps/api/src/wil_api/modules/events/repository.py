"""
Events Repository

Database operations for guest lectures and attendance. Flushes only.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import EventAttendance, GuestLecture


async def create_lecture(db: AsyncSession, **fields) -> GuestLecture:
    lecture = GuestLecture(**fields)
    db.add(lecture)
    await db.flush()
    return lecture


async def get_lecture(
    db: AsyncSession, event_id: int, *, for_update: bool = False
) -> GuestLecture | None:
    stmt = select(GuestLecture).where(GuestLecture.id == event_id)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_lectures(db: AsyncSession) -> list[GuestLecture]:
    """All lectures, latest event date first."""
    result = await db.execute(
        select(GuestLecture).order_by(GuestLecture.event_date.desc(), GuestLecture.id.desc())
    )
    return list(result.scalars().all())


async def delete_lecture(db: AsyncSession, event_id: int) -> int:
    result = await db.execute(delete(GuestLecture).where(GuestLecture.id == event_id))
    return result.rowcount


async def count_registrations(db: AsyncSession, event_id: int, application_id: int) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(EventAttendance)
        .where(
            EventAttendance.event_id == event_id,
            EventAttendance.student_id == application_id,
        )
    )
    return result.scalar() or 0


async def create_registration(
    db: AsyncSession, event_id: int, application_id: int
) -> EventAttendance:
    registration = EventAttendance(event_id=event_id, student_id=application_id, attended=False)
    db.add(registration)
    await db.flush()
    return registration


async def get_latest_registration(
    db: AsyncSession, event_id: int, application_id: int
) -> EventAttendance | None:
    result = await db.execute(
        select(EventAttendance)
        .where(
            EventAttendance.event_id == event_id,
            EventAttendance.student_id == application_id,
        )
        .order_by(EventAttendance.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def delete_registrations_for_lecture(db: AsyncSession, event_id: int) -> int:
    result = await db.execute(delete(EventAttendance).where(EventAttendance.event_id == event_id))
    return result.rowcount


async def delete_registrations_for_application(db: AsyncSession, application_id: int) -> int:
    result = await db.execute(
        delete(EventAttendance).where(EventAttendance.student_id == application_id)
    )
    return result.rowcount
