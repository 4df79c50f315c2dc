"""
Dashboard Service

Aggregate counts for the admin dashboard. Read-only.
"""

import logging
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.modules.applications import repository as applications_repository
from wil_api.modules.students import repository as students_repository

logger = logging.getLogger(__name__)

RECENT_LOGSHEET_DAYS = 7


async def get_dashboard_stats(db: AsyncSession, today: date | None = None) -> dict:
    """
    Collect dashboard statistics.

    Returns:
        Dict with:
        - applications: count per application status (every status present)
        - students: count per student status (every status present)
        - logsheets_last_7_days: logsheets dated within the last 7 days, today included
    """
    today = today or date.today()
    since = today - timedelta(days=RECENT_LOGSHEET_DAYS - 1)

    applications = await applications_repository.count_by_status(db)
    students = await students_repository.count_students_by_status(db)
    recent_logsheets = await students_repository.count_logsheets_since(db, since)

    return {
        "applications": applications,
        "total_applications": sum(applications.values()),
        "students": students,
        "total_students": sum(students.values()),
        "logsheets_last_7_days": recent_logsheets,
    }
