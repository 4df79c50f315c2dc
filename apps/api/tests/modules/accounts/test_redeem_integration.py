"""
Code redemption against a real (SQLite) database: single use and atomicity.
"""

import pytest
from sqlalchemy import func, select

from wil_api.core.errors import DuplicateAccountError, EmailBlockedError, InvalidCodeError
from wil_api.core.security import verify_password
from wil_api.modules.accounts.models import AccountKind, StaffUser, StudentStatus, StudentUser, User
from wil_api.modules.accounts.schemas import SignupRequest
from wil_api.modules.accounts.service import redeem
from wil_api.modules.codes.models import SignupCode, StaffCode
from wil_api.modules.codes.service import block_signup_email, validate_signup_code

# ============================================
# Fixtures
# ============================================


@pytest.fixture
async def signup_code(session_factory, make_application):
    application = await make_application()
    async with session_factory() as session:
        session.add(
            SignupCode(
                code="ABCD1234",
                application_id=application.id,
                first_names="Thabo",
                surname="Mkhize",
                student_number="22012345",
                level_of_study="3rd Year",
                email="thabo@students.mut.ac.za",
            )
        )
        await session.commit()
    return "ABCD1234"


def _request(code: str, email: str = "thabo@students.mut.ac.za") -> SignupRequest:
    return SignupRequest(email=email, title="Thabo Mkhize", password="s3cure-pass", code=code)


async def _count(session_factory, model) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar()


# ============================================
# Tests
# ============================================


@pytest.mark.asyncio
async def test_student_signup_creates_both_rows_and_consumes_code(session_factory, signup_code):
    async with session_factory() as session:
        result = await redeem(session, AccountKind.STUDENT, _request(signup_code))

    assert result["data"]["student_number"] == "22012345"
    assert await _count(session_factory, StudentUser) == 1
    assert await _count(session_factory, User) == 1
    assert await _count(session_factory, SignupCode) == 0

    async with session_factory() as session:
        student = (await session.execute(select(StudentUser))).scalar_one()
    assert student.status is StudentStatus.ACTIVE
    assert student.password_hash != "s3cure-pass"
    assert verify_password("s3cure-pass", student.password_hash)


@pytest.mark.asyncio
async def test_code_redeems_only_once(session_factory, signup_code):
    async with session_factory() as session:
        await redeem(session, AccountKind.STUDENT, _request(signup_code))

    async with session_factory() as session:
        with pytest.raises(InvalidCodeError):
            await redeem(
                session,
                AccountKind.STUDENT,
                _request(signup_code, email="second@students.mut.ac.za"),
            )

    assert await _count(session_factory, StudentUser) == 1


@pytest.mark.asyncio
async def test_duplicate_email_keeps_code_redeemable(session_factory, signup_code):
    """A failed signup leaves no partial rows and the code still works."""
    async with session_factory() as session:
        session.add(User(email="thabo@students.mut.ac.za", title="Existing", password_hash="x"))
        await session.commit()

    async with session_factory() as session:
        with pytest.raises(DuplicateAccountError):
            await redeem(session, AccountKind.STUDENT, _request(signup_code))

    assert await _count(session_factory, StudentUser) == 0
    assert await _count(session_factory, SignupCode) == 1

    async with session_factory() as session:
        await redeem(
            session,
            AccountKind.STUDENT,
            _request(signup_code, email="thabo.m@students.mut.ac.za"),
        )
    assert await _count(session_factory, SignupCode) == 0


@pytest.mark.asyncio
async def test_staff_and_mentor_codes_share_a_namespace(session_factory):
    async with session_factory() as session:
        session.add(StaffCode(code="STAFF1", staff_name="Dr Zulu", staff_email="zulu@mut.ac.za"))
        await session.commit()

    async with session_factory() as session:
        await redeem(session, AccountKind.STAFF, _request("STAFF1", email="zulu@mut.ac.za"))

    async with session_factory() as session:
        with pytest.raises(InvalidCodeError):
            await redeem(session, AccountKind.MENTOR, _request("STAFF1", email="mentor@mut.ac.za"))

    assert await _count(session_factory, StaffUser) == 1
    assert await _count(session_factory, StaffCode) == 0


@pytest.mark.asyncio
async def test_blocklist_ignores_email_case(session_factory, signup_code):
    async with session_factory() as session:
        await block_signup_email(session, "Thabo@Students.MUT.ac.za")

    async with session_factory() as session:
        validation = await validate_signup_code(session, signup_code)
    async with session_factory() as session:
        with pytest.raises(EmailBlockedError):
            await redeem(session, AccountKind.STUDENT, _request(signup_code))

    assert validation["success"] is False
    assert await _count(session_factory, StudentUser) == 0
    assert await _count(session_factory, SignupCode) == 1
