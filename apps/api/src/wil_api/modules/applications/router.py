"""
Applications Router

Endpoints:
- POST /applications - Submit a WIL application
- GET /get-applications - List all applications
- PUT /applications/{application_id} - Update application data fields
- POST /signup-codes - Change an application's status (issues a signup code on Accepted)
- PUT /update-status/{application_id} - Same status change, addressed by path
- DELETE /delete-application/{application_id} - Delete an application
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.database import get_db
from wil_api.core.errors import ServiceError, internal_error, to_http_exception
from wil_api.modules.applications import service
from wil_api.modules.applications.schemas import (
    ApplicationCreate,
    ApplicationCreatedResponse,
    ApplicationPatch,
    ApplicationResponse,
    ApplicationStatusResponse,
    ApplicationStatusUpdate,
)
from wil_api.modules.shared.schemas import MessageResponse, RequestModel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["applications"])


class StatusBody(RequestModel):
    status: str


def _status_response(result: dict) -> ApplicationStatusResponse:
    if not result["changed"]:
        message = f"Application is already {result['new_status'].value}"
    else:
        message = "Status updated successfully"
    return ApplicationStatusResponse(message=message, **result)


@router.post(
    "/applications",
    response_model=ApplicationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit WIL Application",
)
async def submit_application(
    data: ApplicationCreate,
    db: AsyncSession = Depends(get_db),
) -> ApplicationCreatedResponse:
    try:
        application = await service.submit_application(db, data)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "submit application") from e

    return ApplicationCreatedResponse(
        message="Application submitted successfully",
        id=application.id,
    )


@router.get(
    "/get-applications",
    response_model=list[ApplicationResponse],
    summary="List Applications",
)
async def list_applications(
    db: AsyncSession = Depends(get_db),
) -> list[ApplicationResponse]:
    try:
        applications = await service.list_applications(db)
    except Exception as e:
        raise internal_error(e, "fetch applications") from e
    return [ApplicationResponse.model_validate(app) for app in applications]


@router.put(
    "/applications/{application_id}",
    response_model=ApplicationResponse,
    summary="Update Application",
    description="""
Update an application's data fields.

Only the fields present in the body are changed. Unknown fields are rejected
with 400, and `status` cannot be changed here.
""",
)
async def update_application(
    application_id: int,
    patch: ApplicationPatch,
    db: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    try:
        application = await service.update_application(db, application_id, patch)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "update application") from e
    return ApplicationResponse.model_validate(application)


@router.delete(
    "/delete-application/{application_id}",
    response_model=MessageResponse,
    summary="Delete Application",
)
async def delete_application(
    application_id: int,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    try:
        await service.delete_application(db, application_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "delete application") from e
    return MessageResponse(message="Application deleted successfully")


@router.post(
    "/signup-codes",
    response_model=ApplicationStatusResponse,
    summary="Set Application Status",
    description="""
Set an application's status to Pending, Accepted or Rejected.

- **Accepted**: a signup code is issued, bound to the applicant, and emailed.
- **Rejected**: a rejection email is sent.
- Setting the current status again changes nothing (`changed: false`).

Email failures do not undo the change; they are reported in `warning`.
""",
)
async def set_status(
    data: ApplicationStatusUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApplicationStatusResponse:
    try:
        result = await service.set_application_status(db, data.application_id, data.status)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "update application status") from e
    return _status_response(result)


@router.put(
    "/update-status/{application_id}",
    response_model=ApplicationStatusResponse,
    summary="Set Application Status (by path)",
)
async def update_status(
    application_id: int,
    data: StatusBody,
    db: AsyncSession = Depends(get_db),
) -> ApplicationStatusResponse:
    try:
        result = await service.set_application_status(db, application_id, data.status)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "update application status") from e
    return _status_response(result)
