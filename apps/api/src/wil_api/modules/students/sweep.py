"""
Inactivity Sweep

Applies the activity rule to every active student and marks the ones without
recent logsheets inactive.

Each student is handled in its own session and transaction, so a failure or
an interruption never leaves a student half-updated and never stops the rest
of the sweep. Failures are collected and reported.

Triggered externally: by POST /update-status-for-inactive-students or by
scripts/run_inactivity_sweep.py from cron. There is no in-process scheduler.
"""

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wil_api.core.database import async_session_maker, transaction
from wil_api.modules.accounts.models import StudentStatus
from wil_api.modules.students import repository
from wil_api.modules.students.service import evaluate_activity

logger = logging.getLogger(__name__)


async def _sweep_one(db: AsyncSession, student_number: str, today: date) -> bool:
    """Deactivate one student if their activity is stale. Returns True if updated."""
    async with transaction(db):
        student = await repository.get_student(db, student_number, for_update=True)
        if student is None or student.status is not StudentStatus.ACTIVE:
            # Changed since the sweep listed it
            return False

        last_log_date = await repository.get_latest_log_date(db, student_number)
        assessment = evaluate_activity(last_log_date, today)
        if assessment.status is StudentStatus.ACTIVE:
            return False

        await repository.set_status(db, student, StudentStatus.INACTIVE)
        return True


async def sweep_inactive_students(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    today: date | None = None,
) -> dict:
    """
    Mark every active student without recent activity as inactive.

    Args:
        session_factory: Session factory to use (defaults to the app's)
        today: Date to measure activity against (defaults to today)

    Returns:
        Dict with checked, updated_students and failed_students
    """
    session_factory = session_factory or async_session_maker
    today = today or date.today()

    logger.info(f"Starting inactivity sweep for {today.isoformat()}")

    async with session_factory() as db:
        student_numbers = await repository.list_student_numbers_with_status(
            db, StudentStatus.ACTIVE
        )

    updated: list[str] = []
    failed: list[dict] = []

    for student_number in student_numbers:
        try:
            async with session_factory() as db:
                if await _sweep_one(db, student_number, today):
                    updated.append(student_number)
                    logger.info(f"Sweep: student {student_number} set to inactive")
        except Exception as e:
            logger.error(f"Sweep failed for student {student_number}: {e}", exc_info=True)
            failed.append({"student_number": student_number, "error": str(e)})

    logger.info(
        f"Inactivity sweep complete: checked={len(student_numbers)}, "
        f"updated={len(updated)}, failed={len(failed)}"
    )

    return {
        "checked": len(student_numbers),
        "updated_students": updated,
        "failed_students": failed,
    }
