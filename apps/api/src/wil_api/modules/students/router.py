"""
Students Router

Endpoints:
- GET /students - List student accounts
- POST /suspend-student/{student_number}
- POST /unenroll-student/{student_number}
- POST /enroll-student/{student_number}
- POST /reactivate-student/{student_number} - Requires activity within the threshold
- POST /update-student-status/{student_number} - Re-derive status from logsheets
- POST /update-status-for-inactive-students - Sweep all active students
- POST /submit-logsheet - Record one day of activity
- GET /check-logsheet/{student_number}/{log_date} - Does a logsheet exist for that day
- GET /get-logsheet/{student_number}/{log_date} - One day's logsheet
- GET /get-logsheet/{student_number} - A student's logsheets, newest first
- GET /daily-logsheets - All logsheets, newest first
- DELETE /delete-logsheets/{logsheet_id}
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wil_api.core.database import get_db, get_session_factory
from wil_api.core.errors import ServiceError, internal_error, to_http_exception
from wil_api.modules.shared.schemas import MessageResponse
from wil_api.modules.students import service
from wil_api.modules.students.schemas import (
    LogsheetCreate,
    LogsheetExistsResponse,
    LogsheetRecord,
    LogsheetSubmittedResponse,
    StudentActivityResponse,
    StudentListResponse,
    StudentLogsheetsResponse,
    StudentRecomputeResponse,
    StudentRecord,
    StudentStatusResponse,
    SweepResponse,
)
from wil_api.modules.students.sweep import sweep_inactive_students

logger = logging.getLogger(__name__)

router = APIRouter(tags=["students"])


async def _manual_transition(action, student_number: str, db: AsyncSession, verb: str, message: str):
    try:
        result = await action(db, student_number)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, f"{verb} student") from e

    return StudentStatusResponse(
        message=message,
        data=StudentRecord.model_validate(result["student"]),
        warning=result["warning"],
    )


@router.get("/students", response_model=StudentListResponse, summary="List Students")
async def list_students(db: AsyncSession = Depends(get_db)) -> StudentListResponse:
    try:
        students = await service.list_students(db)
    except Exception as e:
        raise internal_error(e, "fetch students") from e
    records = [StudentRecord.model_validate(student) for student in students]
    return StudentListResponse(data=records, count=len(records))


@router.post(
    "/suspend-student/{student_number}",
    response_model=StudentStatusResponse,
    summary="Suspend Student",
)
async def suspend_student(
    student_number: str,
    db: AsyncSession = Depends(get_db),
) -> StudentStatusResponse:
    return await _manual_transition(
        service.suspend_student, student_number, db, "suspend", "Student suspended successfully"
    )


@router.post(
    "/unenroll-student/{student_number}",
    response_model=StudentStatusResponse,
    summary="Unenroll Student",
)
async def unenroll_student(
    student_number: str,
    db: AsyncSession = Depends(get_db),
) -> StudentStatusResponse:
    return await _manual_transition(
        service.unenroll_student, student_number, db, "unenroll", "Student unenrolled successfully"
    )


@router.post(
    "/enroll-student/{student_number}",
    response_model=StudentStatusResponse,
    summary="Enroll Student",
)
async def enroll_student(
    student_number: str,
    db: AsyncSession = Depends(get_db),
) -> StudentStatusResponse:
    return await _manual_transition(
        service.enroll_student, student_number, db, "enroll", "Student enrolled successfully"
    )


@router.post(
    "/reactivate-student/{student_number}",
    response_model=StudentActivityResponse,
    summary="Reactivate Student",
    description="""
Set a student back to active.

Rejected with 400 when the student has no logsheets, or when the latest one
is older than the inactivity threshold (10 days by default). The rejection
carries `last_activity_date` and `days_since_last_activity` when known.
""",
)
async def reactivate_student(
    student_number: str,
    db: AsyncSession = Depends(get_db),
) -> StudentActivityResponse:
    try:
        result = await service.reactivate_student(db, student_number)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "reactivate student") from e

    return StudentActivityResponse(
        message="Student reactivated successfully",
        data=StudentRecord.model_validate(result["student"]),
        warning=result["warning"],
        last_activity_date=result["last_activity_date"],
        days_since_last_activity=result["days_since_last_activity"],
    )


@router.post(
    "/update-student-status/{student_number}",
    response_model=StudentRecomputeResponse,
    summary="Recompute Student Status",
)
async def update_student_status(
    student_number: str,
    db: AsyncSession = Depends(get_db),
) -> StudentRecomputeResponse:
    try:
        result = await service.recompute_student_status(db, student_number)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "update student status") from e

    return StudentRecomputeResponse(
        message=result["message"],
        data=StudentRecord.model_validate(result["student"]),
        status_changed=result["status_changed"],
        last_activity_date=result["last_activity_date"],
        days_since_last_activity=result["days_since_last_activity"],
    )


@router.post(
    "/update-status-for-inactive-students",
    response_model=SweepResponse,
    summary="Run Inactivity Sweep",
)
async def update_status_for_inactive_students(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SweepResponse:
    """Each student is processed in its own session from the factory."""
    try:
        result = await sweep_inactive_students(session_factory)
    except Exception as e:
        raise internal_error(e, "update student statuses") from e

    if result["checked"] == 0:
        message = "No active students found"
    elif result["failed_students"]:
        message = "Student statuses updated with some failures"
    else:
        message = "Student statuses updated successfully"
    return SweepResponse(success=True, message=message, **result)


@router.post(
    "/submit-logsheet",
    response_model=LogsheetSubmittedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Daily Logsheet",
    responses={409: {"description": "A logsheet already exists for this student and date"}},
)
async def submit_logsheet(
    data: LogsheetCreate,
    db: AsyncSession = Depends(get_db),
) -> LogsheetSubmittedResponse:
    try:
        logsheet = await service.submit_logsheet(db, data)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "submit log sheet") from e

    return LogsheetSubmittedResponse(
        message="Log sheet submitted successfully",
        id=logsheet.id,
        log_date=logsheet.log_date,
        student_number=logsheet.student_number,
        activities=logsheet.activities,
    )


@router.get(
    "/check-logsheet/{student_number}/{log_date}",
    response_model=LogsheetExistsResponse,
    summary="Check Logsheet Exists",
)
async def check_logsheet(
    student_number: str,
    log_date: date,
    db: AsyncSession = Depends(get_db),
) -> LogsheetExistsResponse:
    try:
        exists = await service.logsheet_exists(db, student_number, log_date)
    except Exception as e:
        raise internal_error(e, "check logsheet") from e
    return LogsheetExistsResponse(exists=exists)


@router.get(
    "/get-logsheet/{student_number}/{log_date}",
    response_model=LogsheetRecord,
    summary="Get Logsheet",
)
async def get_logsheet(
    student_number: str,
    log_date: date,
    db: AsyncSession = Depends(get_db),
) -> LogsheetRecord:
    try:
        logsheet = await service.get_logsheet(db, student_number, log_date)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        raise internal_error(e, "fetch logsheet") from e
    return LogsheetRecord.model_validate(logsheet)


@router.get(
    "/get-logsheet/{student_number}",
    response_model=StudentLogsheetsResponse,
    summary="List Student Logsheets",
)
async def list_student_logsheets(
    student_number: str,
    db: AsyncSession = Depends(get_db),
) -> StudentLogsheetsResponse:
    try:
        logsheets = await service.list_logsheets(db, student_number)
    except Exception as e:
        raise internal_error(e, "fetch logsheets") from e
    records = [LogsheetRecord.model_validate(logsheet) for logsheet in logsheets]
    return StudentLogsheetsResponse(exists=bool(records), logsheets=records)


@router.get(
    "/daily-logsheets",
    response_model=list[LogsheetRecord],
    summary="List All Logsheets",
)
async def list_daily_logsheets(db: AsyncSession = Depends(get_db)) -> list[LogsheetRecord]:
    try:
        logsheets = await service.list_logsheets(db)
    except Exception as e:
        raise internal_error(e, "retrieve daily log sheets") from e
    return [LogsheetRecord.model_validate(logsheet) for logsheet in logsheets]


@router.delete(
    "/delete-logsheets/{logsheet_id}",
    response_model=MessageResponse,
    summary="Delete Logsheet",
)
async def delete_logsheet(
    logsheet_id: int,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    try:
        await service.delete_logsheet(db, logsheet_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "delete logsheet") from e
    return MessageResponse(message="Logsheet deleted successfully")
