"""
Events Router

Endpoints:
- POST /guest-lectures - Create a lecture with a one-time event code
- GET /upcoming-events - List lectures
- PUT /guest-lecture/toggle-status/{event_id} - Open or close registration
- DELETE /delete-event/{event_id} - Delete a lecture and its registrations
- POST /lectures/register - Register a student for a lecture
- POST /event-attendance/mark - Record a student's attendance
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.database import get_db
from wil_api.core.errors import ServiceError, internal_error, to_http_exception
from wil_api.modules.events import service
from wil_api.modules.events.schemas import (
    AttendanceRecord,
    AttendanceRequest,
    AttendanceResponse,
    GuestLectureCreate,
    GuestLectureCreatedResponse,
    GuestLectureListResponse,
    GuestLectureResponse,
    RegistrationRequest,
    ToggleStatusResponse,
)
from wil_api.modules.shared.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


@router.post(
    "/guest-lectures",
    response_model=GuestLectureCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Guest Lecture",
    responses={400: {"description": "Invalid or already used event code"}},
)
async def create_guest_lecture(
    data: GuestLectureCreate,
    db: AsyncSession = Depends(get_db),
) -> GuestLectureCreatedResponse:
    try:
        lecture = await service.create_guest_lecture(db, data)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "create event") from e

    return GuestLectureCreatedResponse(
        message="Event created successfully",
        data=GuestLectureResponse.model_validate(lecture),
    )


@router.get(
    "/upcoming-events",
    response_model=GuestLectureListResponse,
    summary="List Guest Lectures",
)
async def list_lectures(db: AsyncSession = Depends(get_db)) -> GuestLectureListResponse:
    try:
        lectures = await service.list_lectures(db)
    except Exception as e:
        raise internal_error(e, "fetch guest lectures") from e
    return GuestLectureListResponse(
        message="Guest lectures retrieved successfully",
        data=[GuestLectureResponse.model_validate(lecture) for lecture in lectures],
    )


@router.put(
    "/guest-lecture/toggle-status/{event_id}",
    response_model=ToggleStatusResponse,
    summary="Toggle Lecture Registration",
)
async def toggle_status(
    event_id: int,
    db: AsyncSession = Depends(get_db),
) -> ToggleStatusResponse:
    try:
        lecture = await service.toggle_register_status(db, event_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "toggle lecture status") from e

    new_status = lecture.register_status
    return ToggleStatusResponse(
        message=f"Lecture status toggled to '{new_status.value}'",
        new_status=new_status,
    )


@router.delete(
    "/delete-event/{event_id}",
    response_model=MessageResponse,
    summary="Delete Guest Lecture",
)
async def delete_lecture(
    event_id: int,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    try:
        await service.delete_lecture(db, event_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "delete event") from e
    return MessageResponse(message="Event deleted successfully")


@router.post(
    "/lectures/register",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register For Lecture",
    responses={
        403: {"description": "Registration closed, past event, not eligible, or cap reached"},
        404: {"description": "Event not found"},
    },
)
async def register_for_lecture(
    data: RegistrationRequest,
    db: AsyncSession = Depends(get_db),
) -> AttendanceResponse:
    try:
        registration = await service.register_student(db, data.event_id, data.student_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "register for lecture") from e

    return AttendanceResponse(
        message="Successfully registered for the lecture",
        data=AttendanceRecord.model_validate(registration),
    )


@router.post(
    "/event-attendance/mark",
    response_model=AttendanceResponse,
    summary="Mark Attendance",
)
async def mark_attendance(
    data: AttendanceRequest,
    db: AsyncSession = Depends(get_db),
) -> AttendanceResponse:
    try:
        registration = await service.mark_attendance(
            db, data.event_id, data.student_id, data.attended
        )
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "mark attendance") from e

    return AttendanceResponse(
        message="Attendance updated successfully",
        data=AttendanceRecord.model_validate(registration),
    )
