"""
Students Service

The student status engine and daily logsheets.

Activity rule: a student whose latest logsheet is at most
`settings.inactivity_threshold_days` calendar days old (default 10) is
active; older activity, or none at all, makes them inactive.

Manual transitions (suspend, unenroll, enroll) set the status directly.
Reactivation additionally requires recent activity. Every transition runs in
one transaction and notifies the student after commit.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import date
from typing import NamedTuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.config import settings
from wil_api.core.database import transaction
from wil_api.core.email import (
    dispatch_notification,
    send_student_enrolled,
    send_student_reactivated,
    send_student_suspended,
    send_student_unenrolled,
)
from wil_api.core.errors import (
    DuplicateRecordError,
    NotFoundError,
    StaleActivityError,
    TransactionFailureError,
)
from wil_api.modules.accounts.models import StudentStatus, StudentUser
from wil_api.modules.students import repository
from wil_api.modules.students.models import DailyLogsheet
from wil_api.modules.students.schemas import LogsheetCreate

logger = logging.getLogger(__name__)


class ActivityAssessment(NamedTuple):
    """Outcome of applying the activity rule to a student's latest logsheet."""

    status: StudentStatus
    last_activity_date: date | None
    days_since_last_activity: int | None


def evaluate_activity(
    last_log_date: date | None,
    today: date,
    threshold_days: int | None = None,
) -> ActivityAssessment:
    """
    Apply the activity rule.

    Days are whole calendar days between the two dates; time of day never
    matters. Exactly `threshold_days` days ago still counts as active.
    """
    threshold = settings.inactivity_threshold_days if threshold_days is None else threshold_days

    if last_log_date is None:
        return ActivityAssessment(StudentStatus.INACTIVE, None, None)

    days = (today - last_log_date).days
    status = StudentStatus.ACTIVE if days <= threshold else StudentStatus.INACTIVE
    return ActivityAssessment(status, last_log_date, days)


def _activity_message(assessment: ActivityAssessment, changed: bool) -> str:
    if assessment.last_activity_date is None:
        if changed:
            return "No activity records found - status set to inactive"
        return "No activity records found - student remains inactive"

    days = assessment.days_since_last_activity
    if assessment.status is StudentStatus.ACTIVE:
        if changed:
            return f"Student reactivated - last activity was {days} days ago"
        return f"Student status unchanged - last activity was {days} days ago"

    limit = settings.inactivity_threshold_days
    if changed:
        return f"Student set to inactive - last activity was {days} days ago ({limit} day limit)"
    return f"Student remains inactive - last activity was {days} days ago ({limit} day limit)"


async def _load_student(db: AsyncSession, student_number: str) -> StudentUser:
    student = await repository.get_student(db, student_number, for_update=True)
    if student is None:
        logger.warning(f"Student not found: {student_number}")
        raise NotFoundError("Student", student_number)
    return student


# ============================================
# Activity-driven status
# ============================================


async def recompute_student_status(
    db: AsyncSession,
    student_number: str,
    today: date | None = None,
) -> dict:
    """
    Re-derive a student's status from their logsheet activity.

    Idempotent: running it twice with the same data and date changes nothing
    the second time.

    Returns:
        Dict with student, status_changed, last_activity_date,
        days_since_last_activity and message

    Raises:
        NotFoundError: If no student account has this student number
    """
    today = today or date.today()

    try:
        async with transaction(db):
            student = await _load_student(db, student_number)
            last_log_date = await repository.get_latest_log_date(db, student_number)
            assessment = evaluate_activity(last_log_date, today)

            changed = student.status != assessment.status
            if changed:
                previous = student.status
                await repository.set_status(db, student, assessment.status)
                logger.info(
                    f"Student {student_number} status {previous.value} -> {assessment.status.value}"
                )
    except SQLAlchemyError as e:
        logger.error(f"Database error recomputing status for {student_number}: {e}", exc_info=True)
        raise TransactionFailureError("update student status", str(e)) from e

    return {
        "student": student,
        "status_changed": changed,
        "last_activity_date": assessment.last_activity_date,
        "days_since_last_activity": assessment.days_since_last_activity,
        "message": _activity_message(assessment, changed),
    }


# ============================================
# Manual transitions
# ============================================


async def _transition(
    db: AsyncSession,
    student_number: str,
    target: StudentStatus,
    notify: Callable[..., Awaitable[None]],
) -> dict:
    """Set a student's status in one transaction, then notify them."""
    try:
        async with transaction(db):
            student = await _load_student(db, student_number)
            await repository.set_status(db, student, target)
    except SQLAlchemyError as e:
        logger.error(f"Database error setting {student_number} to {target.value}: {e}", exc_info=True)
        raise TransactionFailureError(f"set student status to {target.value}", str(e)) from e

    logger.info(f"Student {student_number} set to {target.value}")
    warning = await dispatch_notification(notify, to_email=student.email)
    return {"student": student, "warning": warning}


async def suspend_student(db: AsyncSession, student_number: str) -> dict:
    """Suspend a student regardless of activity."""
    return await _transition(db, student_number, StudentStatus.SUSPENDED, send_student_suspended)


async def unenroll_student(db: AsyncSession, student_number: str) -> dict:
    """Unenroll a student regardless of activity."""
    return await _transition(db, student_number, StudentStatus.UNENROLLED, send_student_unenrolled)


async def enroll_student(db: AsyncSession, student_number: str) -> dict:
    """(Re-)enroll a student; they become active without an activity check."""
    return await _transition(db, student_number, StudentStatus.ACTIVE, send_student_enrolled)


async def reactivate_student(
    db: AsyncSession,
    student_number: str,
    today: date | None = None,
) -> dict:
    """
    Reactivate a student who has logged activity recently.

    Raises:
        NotFoundError: If the student doesn't exist
        StaleActivityError: If there is no logsheet, or the latest one is
            older than the inactivity threshold
    """
    today = today or date.today()
    limit = settings.inactivity_threshold_days

    try:
        async with transaction(db):
            student = await _load_student(db, student_number)
            last_log_date = await repository.get_latest_log_date(db, student_number)
            assessment = evaluate_activity(last_log_date, today)

            if last_log_date is None:
                logger.warning(f"Reactivation of {student_number} rejected: no activity records")
                raise StaleActivityError(
                    "Cannot reactivate - no activity records found for this student"
                )
            if assessment.status is not StudentStatus.ACTIVE:
                days = assessment.days_since_last_activity
                logger.warning(
                    f"Reactivation of {student_number} rejected: last activity {days} days ago"
                )
                raise StaleActivityError(
                    f"Cannot reactivate - last activity was {days} days ago "
                    f"(maximum {limit} days allowed)",
                    last_activity_date=last_log_date,
                    days_since_last_activity=days,
                )

            await repository.set_status(db, student, StudentStatus.ACTIVE)
    except SQLAlchemyError as e:
        logger.error(f"Database error reactivating {student_number}: {e}", exc_info=True)
        raise TransactionFailureError("reactivate student", str(e)) from e

    logger.info(f"Student {student_number} reactivated")
    warning = await dispatch_notification(send_student_reactivated, to_email=student.email)
    return {
        "student": student,
        "warning": warning,
        "last_activity_date": assessment.last_activity_date,
        "days_since_last_activity": assessment.days_since_last_activity,
    }


async def list_students(db: AsyncSession) -> list[StudentUser]:
    return await repository.list_students(db)


# ============================================
# Logsheets
# ============================================


async def submit_logsheet(db: AsyncSession, data: LogsheetCreate) -> DailyLogsheet:
    """
    Record one day of activity.

    Raises:
        DuplicateRecordError: If the student already has a logsheet for that date
    """
    duplicate = DuplicateRecordError("A logsheet already exists for this student and date")

    try:
        async with transaction(db):
            existing = await repository.get_logsheet(db, data.student_number, data.log_date)
            if existing is not None:
                logger.warning(
                    f"Duplicate logsheet for {data.student_number} on {data.log_date.isoformat()}"
                )
                raise duplicate

            logsheet = await repository.create_logsheet(
                db,
                **data.model_dump(exclude={"activities"}),
                activities=[activity.model_dump() for activity in data.activities],
            )
    except IntegrityError as e:
        # Concurrent submission for the same date
        raise duplicate from e
    except SQLAlchemyError as e:
        logger.error(f"Database error submitting logsheet: {e}", exc_info=True)
        raise TransactionFailureError("submit logsheet", str(e)) from e

    logger.info(
        f"Logsheet {logsheet.id} submitted for {data.student_number} "
        f"on {data.log_date.isoformat()} ({len(data.activities)} activities)"
    )
    return logsheet


async def logsheet_exists(db: AsyncSession, student_number: str, log_date: date) -> bool:
    return await repository.get_logsheet(db, student_number, log_date) is not None


async def get_logsheet(db: AsyncSession, student_number: str, log_date: date) -> DailyLogsheet:
    """
    Raises:
        NotFoundError: If the student has no logsheet for that date
    """
    logsheet = await repository.get_logsheet(db, student_number, log_date)
    if logsheet is None:
        raise NotFoundError("Logsheet", f"for {student_number} on {log_date.isoformat()}")
    return logsheet


async def list_logsheets(db: AsyncSession, student_number: str | None = None) -> list[DailyLogsheet]:
    return await repository.list_logsheets(db, student_number)


async def delete_logsheet(db: AsyncSession, logsheet_id: int) -> None:
    """
    Delete a logsheet. The student's status is not recomputed here; the next
    recompute or sweep sees the remaining activity.

    Raises:
        NotFoundError: If no logsheet has this id
    """
    try:
        async with transaction(db):
            deleted = await repository.delete_logsheet(db, logsheet_id)
            if deleted == 0:
                raise NotFoundError("Logsheet", logsheet_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error deleting logsheet {logsheet_id}: {e}", exc_info=True)
        raise TransactionFailureError("delete logsheet", str(e)) from e

    logger.info(f"Logsheet {logsheet_id} deleted")
