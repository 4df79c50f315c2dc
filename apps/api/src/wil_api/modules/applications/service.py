"""
Applications Service

Business logic for WIL applications:
- Intake (submit), listing and data-field patches
- The status engine: Pending / Accepted / Rejected

Status changes run in one transaction. Accepting an application issues a
signup code bound to the applicant's identity in that same transaction; the
acceptance or rejection email goes out only after commit.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.database import transaction
from wil_api.core.email import (
    dispatch_notification,
    send_application_accepted,
    send_application_rejected,
)
from wil_api.core.errors import (
    InvalidInputError,
    InvalidStatusError,
    NotFoundError,
    TransactionFailureError,
)
from wil_api.modules.applications import repository
from wil_api.modules.applications.models import Application, ApplicationStatus
from wil_api.modules.applications.schemas import ApplicationCreate, ApplicationPatch
from wil_api.modules.codes import repository as codes_repository
from wil_api.modules.codes.generator import mask_code
from wil_api.modules.codes.models import CodeKind
from wil_api.modules.codes.service import issue_code
from wil_api.modules.events import repository as events_repository

logger = logging.getLogger(__name__)


# ============================================
# Intake
# ============================================


async def submit_application(db: AsyncSession, data: ApplicationCreate) -> Application:
    """Persist a new application in Pending status."""
    try:
        async with transaction(db):
            application = await repository.create(db, **data.model_dump())
    except SQLAlchemyError as e:
        logger.error(f"Database error submitting application: {e}", exc_info=True)
        raise TransactionFailureError("submit application", str(e)) from e

    logger.info(
        f"Application submitted: id={application.id}, student_number={application.student_number}"
    )
    return application


async def list_applications(db: AsyncSession) -> list[Application]:
    return await repository.list_all(db)


async def update_application(
    db: AsyncSession, application_id: int, patch: ApplicationPatch
) -> Application:
    """
    Apply a partial update to an application's data fields.

    Raises:
        InvalidInputError: If the patch carries no fields
        NotFoundError: If the application doesn't exist
    """
    changes = patch.changes()
    if not changes:
        raise InvalidInputError("No fields to update")

    try:
        async with transaction(db):
            updated = await repository.apply_patch(db, application_id, changes)
            if updated == 0:
                raise NotFoundError("Application", application_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error updating application {application_id}: {e}", exc_info=True)
        raise TransactionFailureError("update application", str(e)) from e

    # Reload so the response reflects the stored row
    application = await repository.get_by_id(db, application_id)
    await db.refresh(application)
    logger.info(f"Application {application_id} updated: fields={sorted(changes)}")
    return application


async def delete_application(db: AsyncSession, application_id: int) -> None:
    """
    Delete an application with its unredeemed signup codes and lecture
    registrations.

    Raises:
        NotFoundError: If the application doesn't exist
    """
    try:
        async with transaction(db):
            if await repository.get_by_id(db, application_id, for_update=True) is None:
                raise NotFoundError("Application", application_id)

            await events_repository.delete_registrations_for_application(db, application_id)
            await codes_repository.delete_signup_codes_for_application(db, application_id)
            await repository.delete(db, application_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error deleting application {application_id}: {e}", exc_info=True)
        raise TransactionFailureError("delete application", str(e)) from e

    logger.info(f"Application {application_id} deleted")


# ============================================
# Status engine
# ============================================


def parse_status(value: str) -> ApplicationStatus:
    """
    Parse a status value.

    Raises:
        InvalidStatusError: If value is not one of Pending, Accepted, Rejected
    """
    try:
        return ApplicationStatus(value)
    except ValueError as e:
        raise InvalidStatusError(value, [s.value for s in ApplicationStatus]) from e


async def set_application_status(
    db: AsyncSession,
    application_id: int,
    new_status: str,
) -> dict:
    """
    Move an application to a new status.

    Setting the status an application already has is a no-op: no code is
    issued and no email is sent. Moving to Accepted issues a fresh signup
    code (discarding any unredeemed earlier one) in the same transaction. Moving
    away from Accepted revokes any unredeemed signup code.

    Args:
        db: Database session
        application_id: ID of the application
        new_status: "Pending", "Accepted" or "Rejected"

    Returns:
        Dict with application_id, new_status, changed, code and warning

    Raises:
        InvalidStatusError: If new_status is not an allowed value
        NotFoundError: If the application doesn't exist
        CodeGenerationExhaustedError: If no unique code could be generated
        TransactionFailureError: If the database rejects the transaction
    """
    target = parse_status(new_status)
    logger.info(f"Updating status for application {application_id} to {target.value}")

    code: str | None = None
    changed = False

    try:
        # ============================================
        # ATOMIC TRANSACTION: status + code issuance
        # ============================================
        async with transaction(db):
            application = await repository.get_by_id(db, application_id, for_update=True)
            if application is None:
                logger.warning(f"Application not found: {application_id}")
                raise NotFoundError("Application", application_id)

            previous = application.status
            if previous != target:
                changed = True
                await repository.update_status(db, application_id, target)

                if target is ApplicationStatus.ACCEPTED:
                    row = await issue_code(
                        db,
                        CodeKind.SIGNUP,
                        application_id=application.id,
                        first_names=application.first_names,
                        surname=application.surname,
                        student_number=application.student_number,
                        level_of_study=application.level_of_study,
                        email=application.email_address,
                    )
                    code = row.code
                elif previous is ApplicationStatus.ACCEPTED:
                    # A code issued on acceptance dies with it
                    revoked = await codes_repository.delete_signup_codes_for_application(
                        db, application_id
                    )
                    logger.info(
                        f"Revoked {revoked} signup code(s) for application {application_id}"
                    )

            recipient = {
                "to_email": application.email_address,
                "first_names": application.first_names,
            }
    except IntegrityError as e:
        logger.error(f"Unique violation updating application {application_id}: {e}")
        raise TransactionFailureError("update application status", str(e)) from e
    except SQLAlchemyError as e:
        logger.error(f"Database error updating application {application_id}: {e}", exc_info=True)
        raise TransactionFailureError("update application status", str(e)) from e

    if not changed:
        logger.info(f"Application {application_id} already {target.value}, nothing to do")
        return {
            "application_id": application_id,
            "new_status": target,
            "changed": False,
            "code": None,
            "warning": None,
        }

    # Notifications run after commit and never undo it
    warning = None
    if target is ApplicationStatus.ACCEPTED:
        logger.info(f"Application {application_id} accepted, code {mask_code(code)} issued")
        warning = await dispatch_notification(send_application_accepted, code=code, **recipient)
    elif target is ApplicationStatus.REJECTED:
        logger.info(f"Application {application_id} rejected")
        warning = await dispatch_notification(send_application_rejected, **recipient)
    else:
        logger.info(f"Application {application_id} moved back to Pending")

    return {
        "application_id": application_id,
        "new_status": target,
        "changed": True,
        "code": code,
        "warning": warning,
    }
