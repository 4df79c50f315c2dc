"""
Accounts Service

Code redemption: turning a one-time code into an account.

Each redemption is one transaction:
1. Lock the code row (SELECT ... FOR UPDATE)
2. Reject unknown codes, and for student signups codes issued to a blocked email
3. Hash the password and insert the account row(s)
4. Delete the code, requiring exactly one row to go

Any failure rolls everything back, so the code stays redeemable. Concurrent
redemptions of one code serialize on the row lock; the loser either finds
no row or deletes nothing, and fails with InvalidCodeError.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.database import transaction
from wil_api.core.errors import (
    DuplicateAccountError,
    EmailBlockedError,
    InvalidCodeError,
    TransactionFailureError,
)
from wil_api.core.security import hash_password
from wil_api.modules.accounts.models import AccountKind
from wil_api.modules.accounts.repository import AccountRepository
from wil_api.modules.accounts.schemas import SignupRequest
from wil_api.modules.codes import repository as codes_repository
from wil_api.modules.codes.generator import mask_code
from wil_api.modules.codes.models import CodeKind

logger = logging.getLogger(__name__)

# Staff and mentors share the staff code namespace
CODE_KIND_FOR_ACCOUNT: dict[AccountKind, CodeKind] = {
    AccountKind.STUDENT: CodeKind.SIGNUP,
    AccountKind.STAFF: CodeKind.STAFF,
    AccountKind.MENTOR: CodeKind.STAFF,
}

SUCCESS_MESSAGES: dict[AccountKind, str] = {
    AccountKind.STUDENT: "User registered successfully in both systems",
    AccountKind.STAFF: "User registered successfully and code deleted",
    AccountKind.MENTOR: "Mentor registered successfully and code deleted",
}


async def redeem(db: AsyncSession, kind: AccountKind, data: SignupRequest) -> dict:
    """
    Redeem a code and create the matching account.

    Args:
        db: Database session
        kind: STUDENT, STAFF or MENTOR
        data: Email, title, password and code from the signup form

    Returns:
        Dict with message and the created account's public fields

    Raises:
        InvalidCodeError: If the code doesn't exist or was redeemed concurrently
        EmailBlockedError: If a student code was issued to a blocked email
        DuplicateAccountError: If an account with the email (or student number) exists
        TransactionFailureError: For any other database failure
    """
    code_kind = CODE_KIND_FOR_ACCOUNT[kind]
    masked = mask_code(data.code)
    student_number: str | None = None

    try:
        # ============================================
        # ATOMIC TRANSACTION: account rows + code deletion
        # ============================================
        async with transaction(db):
            code_row = await codes_repository.get_code(db, code_kind, data.code, for_update=True)
            if code_row is None:
                logger.warning(f"{kind.value} signup rejected: invalid code {masked}")
                raise InvalidCodeError()

            if kind is AccountKind.STUDENT and await codes_repository.is_email_blocked(
                db, code_row.email
            ):
                logger.warning(f"Student signup rejected: code {masked} issued to a blocked email")
                raise EmailBlockedError()

            password_hash = hash_password(data.password)

            if kind is AccountKind.STUDENT:
                student_number = code_row.student_number
                await AccountRepository.create_student(
                    db,
                    email=data.email,
                    title=data.title,
                    password_hash=password_hash,
                    student_number=student_number,
                )
            elif kind is AccountKind.STAFF:
                await AccountRepository.create_staff(
                    db, email=data.email, title=data.title, password_hash=password_hash
                )
            else:
                await AccountRepository.create_mentor(
                    db, email=data.email, title=data.title, password_hash=password_hash
                )

            deleted = await codes_repository.delete_code(db, code_kind, data.code)
            if deleted != 1:
                logger.warning(f"{kind.value} signup lost the race for code {masked}")
                raise InvalidCodeError()
    except IntegrityError as e:
        logger.warning(f"{kind.value} signup rejected: duplicate account for {data.email}")
        raise DuplicateAccountError() from e
    except SQLAlchemyError as e:
        logger.error(f"Database error during {kind.value} signup: {e}", exc_info=True)
        raise TransactionFailureError(f"{kind.value} signup", str(e)) from e

    logger.info(f"{kind.value} account created for {data.email} with code {masked}")

    account = {"email": data.email, "title": data.title}
    if student_number is not None:
        account["student_number"] = student_number
    return {"message": SUCCESS_MESSAGES[kind], "data": account}
