"""
Guest lectures, registration and attendance against a SQLite database.
"""

from datetime import date, timedelta

import pytest
from sqlalchemy import func, select

from wil_api.core.errors import InvalidCodeError, NotFoundError, RegistrationRejectedError
from wil_api.modules.applications.models import ApplicationStatus
from wil_api.modules.codes.models import EventCode
from wil_api.modules.events.models import EventAttendance, GuestLecture, RegisterStatus
from wil_api.modules.events.schemas import GuestLectureCreate
from wil_api.modules.events.service import (
    create_guest_lecture,
    mark_attendance,
    register_student,
    toggle_register_status,
)

TODAY = date(2026, 3, 20)

# ============================================
# Fixtures
# ============================================


@pytest.fixture
async def event_code(session_factory):
    async with session_factory() as session:
        session.add(EventCode(code="EVT001", guest_name="Prof Dlamini", guest_email="dlamini@ukzn.ac.za"))
        await session.commit()
    return "EVT001"


@pytest.fixture
def make_lecture(session_factory):
    async def _make(
        event_date: date = TODAY + timedelta(days=7),
        register_status: RegisterStatus = RegisterStatus.ACTIVE,
    ) -> GuestLecture:
        async with session_factory() as session:
            lecture = GuestLecture(
                title="Air Quality Monitoring",
                guest_name="Prof Dlamini",
                guest_email="dlamini@ukzn.ac.za",
                event_type="Guest Lecture",
                event_date=event_date,
                register_status=register_status,
            )
            session.add(lecture)
            await session.commit()
            return lecture

    return _make


def _lecture_request(code: str) -> GuestLectureCreate:
    return GuestLectureCreate(
        event_code=code,
        title="Air Quality Monitoring",
        event_type="Guest Lecture",
        event_date=TODAY + timedelta(days=7),
    )


async def _registrations(session_factory) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(EventAttendance))
        return result.scalar()


# ============================================
# Test create_guest_lecture
# ============================================


@pytest.mark.asyncio
async def test_lecture_takes_guest_from_code(session_factory, event_code):
    async with session_factory() as session:
        lecture = await create_guest_lecture(session, _lecture_request(event_code))

    assert lecture.guest_name == "Prof Dlamini"
    assert lecture.guest_email == "dlamini@ukzn.ac.za"
    assert lecture.register_status is RegisterStatus.ACTIVE

    async with session_factory() as session:
        remaining = await session.execute(select(func.count()).select_from(EventCode))
        assert remaining.scalar() == 0


@pytest.mark.asyncio
async def test_event_code_creates_one_lecture(session_factory, event_code):
    async with session_factory() as session:
        await create_guest_lecture(session, _lecture_request(event_code))

    async with session_factory() as session:
        with pytest.raises(InvalidCodeError) as exc_info:
            await create_guest_lecture(session, _lecture_request(event_code))

    assert exc_info.value.message == "Invalid event code"


@pytest.mark.asyncio
async def test_toggle_register_status(session_factory, make_lecture):
    lecture = await make_lecture()

    async with session_factory() as session:
        toggled = await toggle_register_status(session, lecture.id)
    assert toggled.register_status is RegisterStatus.INACTIVE

    async with session_factory() as session:
        toggled = await toggle_register_status(session, lecture.id)
    assert toggled.register_status is RegisterStatus.ACTIVE


@pytest.mark.asyncio
async def test_toggle_unknown_lecture(session_factory):
    async with session_factory() as session:
        with pytest.raises(NotFoundError):
            await toggle_register_status(session, 999)


# ============================================
# Test register_student
# ============================================


@pytest.mark.asyncio
async def test_accepted_student_registers_once(session_factory, make_lecture, make_application):
    lecture = await make_lecture()
    application = await make_application(status=ApplicationStatus.ACCEPTED)

    async with session_factory() as session:
        registration = await register_student(session, lecture.id, "22012345", today=TODAY)

    assert registration.student_id == application.id
    assert registration.attended is False

    async with session_factory() as session:
        with pytest.raises(RegistrationRejectedError) as exc_info:
            await register_student(session, lecture.id, "22012345", today=TODAY)

    assert exc_info.value.message == "Maximum registrations (1) reached for this event"
    assert exc_info.value.status_code == 403
    assert await _registrations(session_factory) == 1


@pytest.mark.asyncio
async def test_pending_applicant_cannot_register(session_factory, make_lecture, make_application):
    lecture = await make_lecture()
    await make_application(status=ApplicationStatus.PENDING)

    async with session_factory() as session:
        with pytest.raises(RegistrationRejectedError) as exc_info:
            await register_student(session, lecture.id, "22012345", today=TODAY)

    assert exc_info.value.message == "You are not eligible to register for this event"


@pytest.mark.asyncio
async def test_closed_registration(session_factory, make_lecture, make_application):
    lecture = await make_lecture(register_status=RegisterStatus.INACTIVE)
    await make_application(status=ApplicationStatus.ACCEPTED)

    async with session_factory() as session:
        with pytest.raises(RegistrationRejectedError) as exc_info:
            await register_student(session, lecture.id, "22012345", today=TODAY)

    assert exc_info.value.message == "Registration is not active for this event"


@pytest.mark.asyncio
async def test_past_event(session_factory, make_lecture, make_application):
    lecture = await make_lecture(event_date=TODAY - timedelta(days=1))
    await make_application(status=ApplicationStatus.ACCEPTED)

    async with session_factory() as session:
        with pytest.raises(RegistrationRejectedError) as exc_info:
            await register_student(session, lecture.id, "22012345", today=TODAY)

    assert exc_info.value.message == "Cannot register for past events"


@pytest.mark.asyncio
async def test_event_today_is_open(session_factory, make_lecture, make_application):
    lecture = await make_lecture(event_date=TODAY)
    await make_application(status=ApplicationStatus.ACCEPTED)

    async with session_factory() as session:
        await register_student(session, lecture.id, "22012345", today=TODAY)

    assert await _registrations(session_factory) == 1


@pytest.mark.asyncio
async def test_unknown_event(session_factory):
    async with session_factory() as session:
        with pytest.raises(NotFoundError):
            await register_student(session, 999, "22012345", today=TODAY)


# ============================================
# Test mark_attendance
# ============================================


@pytest.mark.asyncio
async def test_mark_attendance_updates_registration(session_factory, make_lecture, make_application):
    lecture = await make_lecture()
    await make_application(status=ApplicationStatus.ACCEPTED)
    async with session_factory() as session:
        await register_student(session, lecture.id, "22012345", today=TODAY)

    async with session_factory() as session:
        record = await mark_attendance(session, lecture.id, "22012345", attended=True)

    assert record.attended is True
    assert record.signed_at is not None
    assert await _registrations(session_factory) == 1


@pytest.mark.asyncio
async def test_mark_attendance_without_registration(session_factory, make_lecture, make_application):
    lecture = await make_lecture()
    await make_application()

    async with session_factory() as session:
        record = await mark_attendance(session, lecture.id, "22012345", attended=False)

    assert record.attended is False
    assert record.signed_at is None
    assert await _registrations(session_factory) == 1


@pytest.mark.asyncio
async def test_mark_attendance_unknown_student(session_factory, make_lecture):
    lecture = await make_lecture()

    async with session_factory() as session:
        with pytest.raises(NotFoundError):
            await mark_attendance(session, lecture.id, "NOPE", attended=True)
