"""
Events Service

Guest lectures and student registration/attendance.

Creating a lecture redeems the guest's event code with the same single-use
semantics as account signup: the code is locked, the lecture inserted and
the code deleted in one transaction.
"""

import logging
from datetime import UTC, date, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.config import settings
from wil_api.core.database import transaction
from wil_api.core.errors import (
    InvalidCodeError,
    NotFoundError,
    RegistrationRejectedError,
    TransactionFailureError,
)
from wil_api.modules.applications import repository as applications_repository
from wil_api.modules.codes import repository as codes_repository
from wil_api.modules.codes.generator import mask_code
from wil_api.modules.codes.models import CodeKind
from wil_api.modules.events import repository
from wil_api.modules.events.models import EventAttendance, GuestLecture, RegisterStatus
from wil_api.modules.events.schemas import GuestLectureCreate

logger = logging.getLogger(__name__)


# ============================================
# Lectures
# ============================================


async def create_guest_lecture(db: AsyncSession, data: GuestLectureCreate) -> GuestLecture:
    """
    Create a lecture by redeeming an event code.

    The guest's name and email come from the code, not the request.

    Raises:
        InvalidCodeError: If the event code is not issued or was used concurrently
    """
    masked = mask_code(data.event_code)

    try:
        # ============================================
        # ATOMIC TRANSACTION: lecture + code deletion
        # ============================================
        async with transaction(db):
            code_row = await codes_repository.get_code(
                db, CodeKind.EVENT, data.event_code, for_update=True
            )
            if code_row is None:
                logger.warning(f"Lecture creation rejected: invalid event code {masked}")
                raise InvalidCodeError("Invalid event code")

            lecture = await repository.create_lecture(
                db,
                title=data.title,
                guest_name=code_row.guest_name,
                guest_email=code_row.guest_email,
                event_type=data.event_type,
                event_date=data.event_date,
                register_status=data.register_status,
                document_path=data.document_path,
            )

            deleted = await codes_repository.delete_code(db, CodeKind.EVENT, data.event_code)
            if deleted != 1:
                logger.warning(f"Lecture creation lost the race for event code {masked}")
                raise InvalidCodeError("Invalid event code")
    except SQLAlchemyError as e:
        logger.error(f"Database error creating guest lecture: {e}", exc_info=True)
        raise TransactionFailureError("create guest lecture", str(e)) from e

    logger.info(f"Guest lecture {lecture.id} created by {lecture.guest_email} with code {masked}")
    return lecture


async def list_lectures(db: AsyncSession) -> list[GuestLecture]:
    return await repository.list_lectures(db)


async def toggle_register_status(db: AsyncSession, event_id: int) -> GuestLecture:
    """
    Flip a lecture's registration between active and inactive.

    Raises:
        NotFoundError: If the lecture doesn't exist
    """
    try:
        async with transaction(db):
            lecture = await repository.get_lecture(db, event_id, for_update=True)
            if lecture is None:
                raise NotFoundError("Lecture", event_id)

            lecture.register_status = (
                RegisterStatus.INACTIVE
                if lecture.register_status is RegisterStatus.ACTIVE
                else RegisterStatus.ACTIVE
            )
            await db.flush()
    except SQLAlchemyError as e:
        logger.error(f"Database error toggling lecture {event_id}: {e}", exc_info=True)
        raise TransactionFailureError("toggle lecture registration", str(e)) from e

    logger.info(f"Lecture {event_id} registration set to {lecture.register_status.value}")
    return lecture


async def delete_lecture(db: AsyncSession, event_id: int) -> None:
    """
    Delete a lecture together with its registrations.

    Raises:
        NotFoundError: If the lecture doesn't exist
    """
    try:
        async with transaction(db):
            if await repository.get_lecture(db, event_id, for_update=True) is None:
                raise NotFoundError("Event", event_id)

            registrations = await repository.delete_registrations_for_lecture(db, event_id)
            await repository.delete_lecture(db, event_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error deleting lecture {event_id}: {e}", exc_info=True)
        raise TransactionFailureError("delete guest lecture", str(e)) from e

    logger.info(f"Lecture {event_id} deleted with {registrations} registration(s)")


# ============================================
# Registration and attendance
# ============================================


async def register_student(
    db: AsyncSession,
    event_id: int,
    student_number: str,
    today: date | None = None,
) -> EventAttendance:
    """
    Register a student for a lecture.

    Requires the lecture to be open for registration and not in the past,
    the student to have an Accepted application, and fewer than
    `settings.event_registration_cap` existing registrations.

    Raises:
        NotFoundError: If the lecture doesn't exist
        RegistrationRejectedError: If any registration rule fails
    """
    today = today or date.today()
    cap = settings.event_registration_cap

    try:
        async with transaction(db):
            lecture = await repository.get_lecture(db, event_id)
            if lecture is None:
                raise NotFoundError("Event", event_id)

            if lecture.register_status is not RegisterStatus.ACTIVE:
                raise RegistrationRejectedError("Registration is not active for this event")

            if lecture.event_date < today:
                raise RegistrationRejectedError("Cannot register for past events")

            application = await applications_repository.get_accepted_by_student_number(
                db, student_number
            )
            if application is None:
                raise RegistrationRejectedError("You are not eligible to register for this event")

            # Lock the application row so concurrent registrations count consistently
            await applications_repository.get_by_id(db, application.id, for_update=True)
            existing = await repository.count_registrations(db, event_id, application.id)
            if existing >= cap:
                raise RegistrationRejectedError(
                    f"Maximum registrations ({cap}) reached for this event"
                )

            registration = await repository.create_registration(db, event_id, application.id)
    except RegistrationRejectedError as e:
        logger.warning(f"Registration of {student_number} for event {event_id} rejected: {e.message}")
        raise
    except SQLAlchemyError as e:
        logger.error(f"Database error registering for event {event_id}: {e}", exc_info=True)
        raise TransactionFailureError("register for event", str(e)) from e

    logger.info(f"Student {student_number} registered for event {event_id}")
    return registration


async def mark_attendance(
    db: AsyncSession,
    event_id: int,
    student_number: str,
    attended: bool,
) -> EventAttendance:
    """
    Record whether a student attended a lecture.

    Updates the student's latest registration, or creates one when they never
    registered. `signed_at` is set only when attended.

    Raises:
        NotFoundError: If the lecture or the student's application doesn't exist
    """
    try:
        async with transaction(db):
            if await repository.get_lecture(db, event_id) is None:
                raise NotFoundError("Event", event_id)

            application = await applications_repository.get_latest_by_student_number(
                db, student_number
            )
            if application is None:
                raise NotFoundError("Student", student_number)

            registration = await repository.get_latest_registration(db, event_id, application.id)
            if registration is None:
                registration = await repository.create_registration(db, event_id, application.id)

            registration.attended = attended
            registration.signed_at = datetime.now(UTC) if attended else None
            await db.flush()
    except SQLAlchemyError as e:
        logger.error(f"Database error marking attendance for event {event_id}: {e}", exc_info=True)
        raise TransactionFailureError("mark attendance", str(e)) from e

    logger.info(f"Attendance for {student_number} at event {event_id}: attended={attended}")
    return registration
