"""
HTTP tests for the student endpoints.
"""

from datetime import date, timedelta

import pytest

from wil_api.modules.accounts.models import StudentStatus


@pytest.mark.asyncio
async def test_list_students(client, make_student):
    await make_student("S1")
    await make_student("S2", status=StudentStatus.SUSPENDED)

    response = await client.get("/api/students")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["data"][0]["student_name"] == "Student S1"
    assert body["data"][1]["status"] == "suspended"


@pytest.mark.asyncio
async def test_suspend_unknown_student_is_404(client):
    response = await client.post("/api/suspend-student/NOPE")

    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_reactivate_stale_student_reports_activity(client, make_student, make_logsheet):
    await make_student("S1", status=StudentStatus.INACTIVE)
    last = date.today() - timedelta(days=20)
    await make_logsheet("S1", last)

    response = await client.post("/api/reactivate-student/S1")

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "STALE_ACTIVITY"
    assert detail["days_since_last_activity"] == 20
    assert detail["last_activity_date"] == last.isoformat()


@pytest.mark.asyncio
async def test_update_student_status(client, make_student):
    await make_student("S1")

    response = await client.post("/api/update-student-status/S1")

    assert response.status_code == 200
    body = response.json()
    assert body["status_changed"] is True
    assert body["data"]["status"] == "inactive"


@pytest.mark.asyncio
async def test_sweep_endpoint(client, make_student, make_logsheet):
    await make_student("S1")
    await make_logsheet("S1", date.today())
    await make_student("S2")

    response = await client.post("/api/update-status-for-inactive-students")

    assert response.status_code == 200
    body = response.json()
    assert body["checked"] == 2
    assert body["updated_students"] == ["S2"]
    assert body["message"] == "Student statuses updated successfully"


@pytest.mark.asyncio
async def test_logsheet_submission_and_lookup(client):
    payload = {
        "log_date": "2026-03-18",
        "student_number": "S1",
        "EHP_HI_Number": "EHP-001",
        "activities": [{"activity": "Vector control survey", "hours": 5}],
    }

    created = await client.post("/api/submit-logsheet", json=payload)
    duplicate = await client.post("/api/submit-logsheet", json=payload)
    found = await client.get("/api/check-logsheet/S1/2026-03-18")
    missing = await client.get("/api/check-logsheet/S1/2026-03-19")

    assert created.status_code == 201
    assert created.json()["student_number"] == "S1"
    assert duplicate.status_code == 409
    assert found.json() == {"exists": True}
    assert missing.json() == {"exists": False}


@pytest.mark.asyncio
async def test_logsheet_without_activities_is_rejected(client):
    response = await client.post(
        "/api/submit-logsheet",
        json={
            "log_date": "2026-03-18",
            "student_number": "S1",
            "EHP_HI_Number": "EHP-001",
            "activities": [],
        },
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "INVALID_INPUT"
