"""
Tests for dashboard statistics.
"""

from datetime import date, timedelta

import pytest

from wil_api.modules.accounts.models import StudentStatus, StudentUser
from wil_api.modules.applications.models import ApplicationStatus
from wil_api.modules.dashboard.service import get_dashboard_stats
from wil_api.modules.students.models import DailyLogsheet

TODAY = date(2026, 3, 20)


@pytest.mark.asyncio
async def test_empty_database_reports_zeroes(session_factory):
    async with session_factory() as session:
        stats = await get_dashboard_stats(session, today=TODAY)

    assert stats["applications"] == {"Pending": 0, "Accepted": 0, "Rejected": 0}
    assert stats["students"] == {"active": 0, "inactive": 0, "suspended": 0, "unenrolled": 0}
    assert stats["total_applications"] == 0
    assert stats["logsheets_last_7_days"] == 0


@pytest.mark.asyncio
async def test_counts_by_status_and_recent_logsheets(session_factory, make_application):
    await make_application(student_number="1", status=ApplicationStatus.ACCEPTED)
    await make_application(student_number="2", status=ApplicationStatus.ACCEPTED)
    await make_application(student_number="3")

    async with session_factory() as session:
        session.add_all(
            [
                StudentUser(
                    email="a@students.mut.ac.za",
                    password_hash="x",
                    student_number="1",
                    status=StudentStatus.ACTIVE,
                ),
                StudentUser(
                    email="b@students.mut.ac.za",
                    password_hash="x",
                    student_number="2",
                    status=StudentStatus.SUSPENDED,
                ),
            ]
        )
        for days_ago in (0, 6, 7):
            session.add(
                DailyLogsheet(
                    student_number="1",
                    log_date=TODAY - timedelta(days=days_ago),
                    ehp_hi_number="EHP-001",
                    activities=[{"activity": "Inspection"}],
                )
            )
        await session.commit()

    async with session_factory() as session:
        stats = await get_dashboard_stats(session, today=TODAY)

    assert stats["applications"]["Accepted"] == 2
    assert stats["applications"]["Pending"] == 1
    assert stats["total_applications"] == 3
    assert stats["students"]["suspended"] == 1
    assert stats["total_students"] == 2
    assert stats["logsheets_last_7_days"] == 2


@pytest.mark.asyncio
async def test_dashboard_endpoint(client):
    response = await client.get("/api/dashboard/stats")

    assert response.status_code == 200
    assert response.json()["total_students"] == 0
