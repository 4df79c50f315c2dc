"""
Codes Service

Issuance and validation of one-time codes.

Issuance:
- `issue_code` runs inside the caller's transaction. It draws candidates from
  the kind's generator until one is not already issued, up to
  `settings.code_max_attempts`.
- `create_staff_code` / `create_event_code` own their transaction and email
  the code after commit. A failed email never invalidates the code.

Validation never consumes a code; redemption lives in the accounts and
events modules.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.config import settings
from wil_api.core.database import transaction
from wil_api.core.email import dispatch_notification, send_event_code, send_staff_code
from wil_api.core.errors import (
    CodeGenerationExhaustedError,
    EmailBlockedError,
    InvalidCodeError,
    NotFoundError,
    TransactionFailureError,
)
from wil_api.modules.codes import repository
from wil_api.modules.codes.generator import GENERATORS, mask_code
from wil_api.modules.codes.models import CodeKind

logger = logging.getLogger(__name__)


# ============================================
# Issuance
# ============================================


async def issue_code(db: AsyncSession, kind: CodeKind, **owner):
    """
    Generate and persist a unique code of the given kind.

    Must be called inside an open transaction; only flushes.

    Args:
        db: Database session
        kind: Which code table to issue into
        **owner: Owner metadata columns for the code row. For SIGNUP codes
            this must include application_id.

    Returns:
        The persisted code row

    Raises:
        CodeGenerationExhaustedError: If every attempt collided with an issued code
    """
    if kind is CodeKind.SIGNUP:
        # An application holds at most one live signup code
        removed = await repository.delete_signup_codes_for_application(
            db, owner["application_id"]
        )
        if removed:
            logger.info(
                f"Discarded {removed} unredeemed signup code(s) for application "
                f"{owner['application_id']}"
            )

    generate = GENERATORS[kind]
    for _ in range(settings.code_max_attempts):
        candidate = generate()
        if not await repository.code_exists(db, kind, candidate):
            row = await repository.insert_code(db, kind, candidate, **owner)
            logger.info(f"Issued {kind.value} code {mask_code(candidate)}")
            return row

    logger.error(f"Exhausted {settings.code_max_attempts} attempts generating a {kind.value} code")
    raise CodeGenerationExhaustedError(kind.value, settings.code_max_attempts)


async def _create_emailed_code(
    db: AsyncSession,
    kind: CodeKind,
    owner: dict,
    send,
    recipient: dict,
) -> dict:
    """Issue a code in its own transaction, then email it."""
    try:
        async with transaction(db):
            row = await issue_code(db, kind, **owner)
            code = row.code
    except IntegrityError as e:
        # Lost a race with a concurrent issuance of the same value
        logger.error(f"Unique violation issuing {kind.value} code: {e}")
        raise TransactionFailureError(f"create {kind.value} code", str(e)) from e
    except SQLAlchemyError as e:
        logger.error(f"Database error issuing {kind.value} code: {e}", exc_info=True)
        raise TransactionFailureError(f"create {kind.value} code", str(e)) from e

    warning = await dispatch_notification(send, code=code, **recipient)
    return {"code": code, "warning": warning}


async def create_staff_code(db: AsyncSession, staff_name: str, staff_email: str) -> dict:
    """
    Create a staff registration code and email it to the staff member.

    Returns:
        Dict with code and an optional warning when the email failed
    """
    logger.info(f"Creating staff code for {staff_email}")
    return await _create_emailed_code(
        db,
        CodeKind.STAFF,
        owner={"staff_name": staff_name, "staff_email": staff_email},
        send=send_staff_code,
        recipient={"to_email": staff_email, "staff_name": staff_name},
    )


async def create_event_code(db: AsyncSession, guest_name: str, guest_email: str) -> dict:
    """
    Create an event code and email it to the guest.

    Returns:
        Dict with code and an optional warning when the email failed
    """
    logger.info(f"Creating event code for {guest_email}")
    return await _create_emailed_code(
        db,
        CodeKind.EVENT,
        owner={"guest_name": guest_name, "guest_email": guest_email},
        send=send_event_code,
        recipient={"to_email": guest_email, "guest_name": guest_name},
    )


# ============================================
# Validation (non-consuming)
# ============================================


async def validate_signup_code(db: AsyncSession, code: str) -> dict:
    """
    Check whether a signup code can be redeemed right now.

    The blocklist is checked against the email the code was issued to.

    Returns:
        {"success": bool, "message": str}
    """
    row = await repository.get_code(db, CodeKind.SIGNUP, code)
    if row is None:
        logger.warning(f"Signup code validation failed: {mask_code(code)} not found")
        return {"success": False, "message": InvalidCodeError().message}

    if await repository.is_email_blocked(db, row.email):
        logger.warning(f"Signup code {mask_code(code)} belongs to a blocked email")
        return {"success": False, "message": EmailBlockedError().message}

    return {"success": True, "message": "Valid code"}


async def validate_staff_code(db: AsyncSession, code: str) -> dict:
    """Check a staff code and return who it was issued to."""
    row = await repository.get_code(db, CodeKind.STAFF, code)
    if row is None:
        logger.warning(f"Staff code validation failed: {mask_code(code)} not found")
        return {"success": False, "message": "Invalid staff code", "data": None}

    return {
        "success": True,
        "message": "Valid staff code",
        "data": {"staff_name": row.staff_name, "staff_email": row.staff_email},
    }


async def validate_event_code(db: AsyncSession, code: str) -> dict:
    """
    Check an event code and return the guest it was issued to.

    Raises:
        NotFoundError: If the code is not issued
    """
    row = await repository.get_code(db, CodeKind.EVENT, code)
    if row is None:
        logger.warning(f"Event code validation failed: {mask_code(code)} not found")
        raise NotFoundError("Event code")

    return {
        "success": True,
        "message": "Event code is valid",
        "data": {
            "guest_name": row.guest_name,
            "guest_email": row.guest_email,
            "created_at": row.created_at,
        },
    }


# ============================================
# Blocklist
# ============================================


async def block_signup_email(db: AsyncSession, email: str) -> dict:
    """
    Block an email from redeeming signup codes.

    Blocking an address that is already blocked succeeds without change.
    """
    if await repository.is_email_blocked(db, email):
        logger.info(f"Email already blocked: {email}")
        return {"success": True, "message": "Email is already blocked", "created": False}

    try:
        async with transaction(db):
            await repository.block_email(db, email)
    except IntegrityError:
        # Blocked concurrently
        logger.info(f"Email blocked concurrently: {email}")
        return {"success": True, "message": "Email is already blocked", "created": False}
    except SQLAlchemyError as e:
        logger.error(f"Database error blocking {email}: {e}", exc_info=True)
        raise TransactionFailureError("block signup email", str(e)) from e

    logger.info(f"Blocked signup email: {email}")
    return {"success": True, "message": "Email blocked successfully", "created": True}
