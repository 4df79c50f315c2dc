"""
HTTP tests for reading and deleting daily logsheets.
"""

from datetime import date

import pytest

DAY_1 = date(2026, 3, 10)
DAY_2 = date(2026, 3, 12)


@pytest.mark.asyncio
async def test_get_logsheet_for_day(client, make_logsheet):
    await make_logsheet("S1", DAY_1)

    response = await client.get(f"/api/get-logsheet/S1/{DAY_1.isoformat()}")

    assert response.status_code == 200
    body = response.json()
    assert body["student_number"] == "S1"
    assert body["log_date"] == "2026-03-10"
    assert body["activities"] == [{"activity": "Food premises inspection", "hours": 4}]


@pytest.mark.asyncio
async def test_get_logsheet_for_missing_day_is_404(client, make_logsheet):
    await make_logsheet("S1", DAY_1)

    response = await client.get(f"/api/get-logsheet/S1/{DAY_2.isoformat()}")

    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_student_logsheets_newest_first(client, make_logsheet):
    await make_logsheet("S1", DAY_1)
    await make_logsheet("S1", DAY_2)
    await make_logsheet("S2", DAY_2)

    response = await client.get("/api/get-logsheet/S1")

    body = response.json()
    assert body["exists"] is True
    assert [sheet["log_date"] for sheet in body["logsheets"]] == ["2026-03-12", "2026-03-10"]


@pytest.mark.asyncio
async def test_student_without_logsheets(client):
    response = await client.get("/api/get-logsheet/S1")

    assert response.status_code == 200
    assert response.json() == {"exists": False, "logsheets": []}


@pytest.mark.asyncio
async def test_daily_logsheets_lists_every_student(client, make_logsheet):
    await make_logsheet("S1", DAY_1)
    await make_logsheet("S2", DAY_2)

    response = await client.get("/api/daily-logsheets")

    assert response.status_code == 200
    assert [sheet["student_number"] for sheet in response.json()] == ["S2", "S1"]


@pytest.mark.asyncio
async def test_delete_logsheet(client, make_logsheet):
    logsheet = await make_logsheet("S1", DAY_1)

    deleted = await client.delete(f"/api/delete-logsheets/{logsheet.id}")
    again = await client.delete(f"/api/delete-logsheets/{logsheet.id}")
    exists = await client.get(f"/api/check-logsheet/S1/{DAY_1.isoformat()}")

    assert deleted.status_code == 200
    assert again.status_code == 404
    assert exists.json() == {"exists": False}
