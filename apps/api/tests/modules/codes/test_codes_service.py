"""
Unit tests for the codes service: issuance, validation and the blocklist.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from wil_api.core.config import settings
from wil_api.core.errors import CodeGenerationExhaustedError, NotFoundError, NotificationFailure
from wil_api.modules.codes.generator import GENERATORS
from wil_api.modules.codes.models import CodeKind, EventCode, SignupCode, StaffCode
from wil_api.modules.codes.service import (
    block_signup_email,
    create_staff_code,
    issue_code,
    validate_event_code,
    validate_signup_code,
    validate_staff_code,
)

# ============================================
# Fixtures
# ============================================


@pytest.fixture
def sample_signup_code():
    row = MagicMock(spec=SignupCode)
    row.code = "ABCD1234"
    row.application_id = 7
    row.student_number = "22012345"
    row.email = "thabo@students.mut.ac.za"
    return row


@pytest.fixture
def scripted_generator(monkeypatch):
    """Replace the staff generator with a fixed sequence of candidates."""

    def _install(*candidates):
        generate = MagicMock(side_effect=list(candidates))
        monkeypatch.setitem(GENERATORS, CodeKind.STAFF, generate)
        return generate

    return _install


# ============================================
# Test issue_code
# ============================================


@pytest.mark.asyncio
async def test_issue_code_retries_until_unused(mock_db, scripted_generator):
    """A candidate that is already issued is discarded and a new one drawn."""
    scripted_generator("TAKEN1", "FRESH1")

    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.code_exists = AsyncMock(side_effect=[True, False])
        mock_repo.insert_code = AsyncMock(return_value=MagicMock(code="FRESH1"))

        row = await issue_code(mock_db, CodeKind.STAFF, staff_name="Dr Zulu", staff_email="z@mut.ac.za")

        assert row.code == "FRESH1"
        assert mock_repo.code_exists.await_count == 2
        mock_repo.insert_code.assert_awaited_once_with(
            mock_db, CodeKind.STAFF, "FRESH1", staff_name="Dr Zulu", staff_email="z@mut.ac.za"
        )


@pytest.mark.asyncio
async def test_issue_code_gives_up_after_max_attempts(mock_db, monkeypatch):
    """Every candidate colliding ends in CodeGenerationExhaustedError."""
    monkeypatch.setitem(GENERATORS, CodeKind.STAFF, MagicMock(return_value="TAKEN1"))

    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.code_exists = AsyncMock(return_value=True)
        mock_repo.insert_code = AsyncMock()

        with pytest.raises(CodeGenerationExhaustedError) as exc_info:
            await issue_code(mock_db, CodeKind.STAFF, staff_name="Dr Zulu", staff_email="z@mut.ac.za")

        assert exc_info.value.status_code == 500
        assert mock_repo.code_exists.await_count == settings.code_max_attempts
        mock_repo.insert_code.assert_not_called()


@pytest.mark.asyncio
async def test_issue_signup_code_discards_earlier_codes(mock_db, monkeypatch):
    """Issuing a signup code drops unredeemed codes for the same application."""
    monkeypatch.setitem(GENERATORS, CodeKind.SIGNUP, MagicMock(return_value="ABCD1234"))

    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.delete_signup_codes_for_application = AsyncMock(return_value=1)
        mock_repo.code_exists = AsyncMock(return_value=False)
        mock_repo.insert_code = AsyncMock(return_value=MagicMock(code="ABCD1234"))

        await issue_code(
            mock_db,
            CodeKind.SIGNUP,
            application_id=7,
            first_names="Thabo",
            surname="Mkhize",
            student_number="22012345",
            level_of_study="3rd Year",
            email="thabo@students.mut.ac.za",
        )

        mock_repo.delete_signup_codes_for_application.assert_awaited_once_with(mock_db, 7)


@pytest.mark.asyncio
async def test_issue_staff_code_leaves_other_codes_alone(mock_db, scripted_generator):
    scripted_generator("FRESH1")

    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.delete_signup_codes_for_application = AsyncMock()
        mock_repo.code_exists = AsyncMock(return_value=False)
        mock_repo.insert_code = AsyncMock(return_value=MagicMock(code="FRESH1"))

        await issue_code(mock_db, CodeKind.STAFF, staff_name="Dr Zulu", staff_email="z@mut.ac.za")

        mock_repo.delete_signup_codes_for_application.assert_not_called()


# ============================================
# Test create_staff_code
# ============================================


@pytest.mark.asyncio
async def test_create_staff_code_commits_and_emails(mock_db, scripted_generator):
    scripted_generator("STAFF1")

    with (
        patch("wil_api.modules.codes.service.repository") as mock_repo,
        patch("wil_api.modules.codes.service.send_staff_code", new_callable=AsyncMock) as mock_email,
    ):
        mock_repo.code_exists = AsyncMock(return_value=False)
        mock_repo.insert_code = AsyncMock(return_value=MagicMock(code="STAFF1"))

        result = await create_staff_code(mock_db, "Dr Zulu", "z@mut.ac.za")

        assert result == {"code": "STAFF1", "warning": None}
        mock_db.commit.assert_awaited_once()
        mock_email.assert_awaited_once_with(code="STAFF1", to_email="z@mut.ac.za", staff_name="Dr Zulu")


@pytest.mark.asyncio
async def test_create_staff_code_email_failure_keeps_code(mock_db, scripted_generator):
    """A failed email is reported as a warning; the committed code stands."""
    scripted_generator("STAFF1")

    with (
        patch("wil_api.modules.codes.service.repository") as mock_repo,
        patch(
            "wil_api.core.email.send_email",
            new_callable=AsyncMock,
            side_effect=NotificationFailure("provider down"),
        ),
    ):
        mock_repo.code_exists = AsyncMock(return_value=False)
        mock_repo.insert_code = AsyncMock(return_value=MagicMock(code="STAFF1"))

        result = await create_staff_code(mock_db, "Dr Zulu", "z@mut.ac.za")

        assert result["code"] == "STAFF1"
        assert result["warning"] is not None
        mock_db.commit.assert_awaited_once()
        mock_db.rollback.assert_not_called()


# ============================================
# Test validation
# ============================================


@pytest.mark.asyncio
async def test_validate_signup_code_valid(mock_db, sample_signup_code):
    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.get_code = AsyncMock(return_value=sample_signup_code)
        mock_repo.is_email_blocked = AsyncMock(return_value=False)

        result = await validate_signup_code(mock_db, "ABCD1234")

        assert result == {"success": True, "message": "Valid code"}
        mock_repo.is_email_blocked.assert_awaited_once_with(mock_db, "thabo@students.mut.ac.za")


@pytest.mark.asyncio
async def test_validate_signup_code_unknown(mock_db):
    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.get_code = AsyncMock(return_value=None)

        result = await validate_signup_code(mock_db, "FFFF0000")

        assert result == {"success": False, "message": "Invalid code"}


@pytest.mark.asyncio
async def test_validate_signup_code_blocked_email(mock_db, sample_signup_code):
    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.get_code = AsyncMock(return_value=sample_signup_code)
        mock_repo.is_email_blocked = AsyncMock(return_value=True)

        result = await validate_signup_code(mock_db, "ABCD1234")

        assert result == {"success": False, "message": "This email is blocked from signing up"}


@pytest.mark.asyncio
async def test_validate_signup_code_never_consumes(mock_db, sample_signup_code):
    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.get_code = AsyncMock(return_value=sample_signup_code)
        mock_repo.is_email_blocked = AsyncMock(return_value=False)
        mock_repo.delete_code = AsyncMock()

        await validate_signup_code(mock_db, "ABCD1234")

        mock_repo.delete_code.assert_not_called()
        mock_db.commit.assert_not_called()


@pytest.mark.asyncio
async def test_validate_staff_code_returns_owner(mock_db):
    row = MagicMock(spec=StaffCode)
    row.staff_name = "Dr Zulu"
    row.staff_email = "z@mut.ac.za"

    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.get_code = AsyncMock(return_value=row)

        result = await validate_staff_code(mock_db, "STAFF1")

        assert result["success"] is True
        assert result["data"] == {"staff_name": "Dr Zulu", "staff_email": "z@mut.ac.za"}


@pytest.mark.asyncio
async def test_validate_staff_code_unknown(mock_db):
    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.get_code = AsyncMock(return_value=None)

        result = await validate_staff_code(mock_db, "NOPE00")

        assert result == {"success": False, "message": "Invalid staff code", "data": None}


@pytest.mark.asyncio
async def test_validate_event_code_returns_guest(mock_db):
    row = MagicMock(spec=EventCode)
    row.guest_name = "Prof Dlamini"
    row.guest_email = "dlamini@ukzn.ac.za"
    row.created_at = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)

    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.get_code = AsyncMock(return_value=row)

        result = await validate_event_code(mock_db, "EVT001")

        assert result["message"] == "Event code is valid"
        assert result["data"]["guest_email"] == "dlamini@ukzn.ac.za"


@pytest.mark.asyncio
async def test_validate_event_code_unknown_raises(mock_db):
    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.get_code = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError) as exc_info:
            await validate_event_code(mock_db, "NOPE00")

        assert exc_info.value.status_code == 404


# ============================================
# Test block_signup_email
# ============================================


@pytest.mark.asyncio
async def test_block_signup_email_new(mock_db):
    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.is_email_blocked = AsyncMock(return_value=False)
        mock_repo.block_email = AsyncMock()

        result = await block_signup_email(mock_db, "spam@example.com")

        assert result["created"] is True
        mock_repo.block_email.assert_awaited_once_with(mock_db, "spam@example.com")
        mock_db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_block_signup_email_already_blocked_is_noop(mock_db):
    with patch("wil_api.modules.codes.service.repository") as mock_repo:
        mock_repo.is_email_blocked = AsyncMock(return_value=True)
        mock_repo.block_email = AsyncMock()

        result = await block_signup_email(mock_db, "spam@example.com")

        assert result["success"] is True
        assert result["created"] is False
        mock_repo.block_email.assert_not_called()
        mock_db.commit.assert_not_called()
