"""
Tests for the inactivity sweep.
"""

from datetime import timedelta

import pytest
from sqlalchemy import select

from wil_api.modules.accounts.models import StudentStatus, StudentUser
from wil_api.modules.students import sweep
from wil_api.modules.students.sweep import sweep_inactive_students


async def _statuses(session_factory) -> dict[str, StudentStatus]:
    async with session_factory() as session:
        result = await session.execute(select(StudentUser.student_number, StudentUser.status))
        return {number: StudentStatus(status) for number, status in result.all()}


@pytest.fixture
async def cohort(make_student, make_logsheet, today):
    """One recent, one stale, one silent and one suspended student."""
    await make_student("RECENT")
    await make_logsheet("RECENT", today - timedelta(days=2))
    await make_student("STALE")
    await make_logsheet("STALE", today - timedelta(days=15))
    await make_student("SILENT")
    await make_student("SUSPENDED", status=StudentStatus.SUSPENDED)
    await make_logsheet("SUSPENDED", today - timedelta(days=30))


@pytest.mark.asyncio
async def test_sweep_deactivates_only_stale_active_students(session_factory, cohort, today):
    result = await sweep_inactive_students(session_factory, today=today)

    assert result["checked"] == 3
    assert sorted(result["updated_students"]) == ["SILENT", "STALE"]
    assert result["failed_students"] == []
    assert await _statuses(session_factory) == {
        "RECENT": StudentStatus.ACTIVE,
        "STALE": StudentStatus.INACTIVE,
        "SILENT": StudentStatus.INACTIVE,
        "SUSPENDED": StudentStatus.SUSPENDED,
    }


@pytest.mark.asyncio
async def test_second_sweep_changes_nothing(session_factory, cohort, today):
    await sweep_inactive_students(session_factory, today=today)

    result = await sweep_inactive_students(session_factory, today=today)

    assert result["checked"] == 1
    assert result["updated_students"] == []


@pytest.mark.asyncio
async def test_one_failure_does_not_stop_the_sweep(session_factory, cohort, today, monkeypatch):
    original = sweep._sweep_one

    async def flaky(db, student_number, day):
        if student_number == "STALE":
            raise RuntimeError("connection reset")
        return await original(db, student_number, day)

    monkeypatch.setattr(sweep, "_sweep_one", flaky)

    result = await sweep_inactive_students(session_factory, today=today)

    assert result["updated_students"] == ["SILENT"]
    assert result["failed_students"] == [{"student_number": "STALE", "error": "connection reset"}]
    statuses = await _statuses(session_factory)
    assert statuses["STALE"] is StudentStatus.ACTIVE
    assert statuses["SILENT"] is StudentStatus.INACTIVE


@pytest.mark.asyncio
async def test_sweep_with_no_students(session_factory, today):
    result = await sweep_inactive_students(session_factory, today=today)

    assert result == {"checked": 0, "updated_students": [], "failed_students": []}
