from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from pymongo.client_session import ClientSession as MongoSession
from pymongo.database import Database

from src.attendances.service import list_by_session
from src.database.mongo.core import get_mongo, make_mongo_session
from src.sessions.schemas import (
    ActiveSessionResponse,
    SessionAttendancesResponse,
    SessionCloseResponse,
    SessionCreateRequest,
    SessionCreateResponse,
)
from src.sessions.service import close_session, create_session, get_active_session

router = APIRouter()

@router.post(
    "/create",
    description="Opens the attendance session of a course for a day and seeds one record per student.",
    response_description="Created a new attendance session",
    status_code=status.HTTP_200_OK,
    response_model=SessionCreateResponse,
    responses={
        404: {
            "description": "Unknown course code",
            "content": {
                "application/json": { "example": { "success": False, "error": "Course not found" }}
            }
        },
    },
)
def create_attendance_session(
    session_create: SessionCreateRequest,
    db: Database = Depends(get_mongo),
    mongo_session: Optional[MongoSession] = Depends(make_mongo_session),
):
    # a session already open for the day comes back as 200 with success false (see ConflictError)
    result = create_session(db=db, session_create=session_create, mongo_session=mongo_session)
    return SessionCreateResponse(
        message="Attendance session created",
        session_id=result.session_id,
        total_students=result.total_students,
    )

@router.get(
    "/active",
    description="Finds the most recently created active session, optionally for a course and day.",
    response_description="Active session, if any",
    status_code=status.HTTP_200_OK,
    response_model=ActiveSessionResponse,
    response_model_exclude_none=True,
)
def get_active_attendance_session(
    course_code: Optional[str] = Query(default=None, alias="courseCode"),
    date: Optional[str] = None,
    db: Database = Depends(get_mongo),
):
    session = get_active_session(db=db, course_code=course_code, date=date)
    if session is None:
        return ActiveSessionResponse(success=False, message="No active session found")
    return ActiveSessionResponse(success=True, session=session)

@router.get(
    "/{session_id}/attendances",
    description="Lists the attendance records of a session ordered by student name, with status counts.",
    response_description="Session records and statistics",
    status_code=status.HTTP_200_OK,
    response_model=SessionAttendancesResponse,
)
def get_session_attendances(
    session_id: str,
    db: Database = Depends(get_mongo),
):
    attendances, stats = list_by_session(db=db, session_id=session_id)
    return SessionAttendancesResponse(attendances=attendances, stats=stats)

@router.put(
    "/{session_id}/close",
    description="Closes a session, every record still 'Belum Absen' becomes 'Alpha'.",
    response_description="Closed the attendance session",
    status_code=status.HTTP_200_OK,
    response_model=SessionCloseResponse,
)
def close_attendance_session(
    session_id: str,
    db: Database = Depends(get_mongo),
    mongo_session: Optional[MongoSession] = Depends(make_mongo_session),
):
    result = close_session(db=db, session_id=session_id, mongo_session=mongo_session)
    return SessionCloseResponse(
        message="Session closed, Belum Absen changed to Alpha",
        alpha_count=result.alpha_count,
    )
