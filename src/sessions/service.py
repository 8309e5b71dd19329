import logging
from datetime import datetime
from typing import List, Optional
from pymongo import DESCENDING
from pymongo.client_session import ClientSession as MongoSession
from pymongo.collection import Collection
from pymongo.database import Database

from src.attendances.models import AttendanceStatus
from src.config import ATTENDANCES_COLLECTION, SESSIONS_COLLECTION, STUDENTS_COLLECTION
from src.courses.service import find_course
from src.database.mongo.core import session_kwargs, write_scope
from src.models import parse_object_id, utcnow
from src.sessions.models import AttendanceSessionModel, SessionStatus
from src.sessions.schemas import SessionCloseResult, SessionCreateRequest, SessionCreateResult
from src.utils.exceptions import ConflictError, InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

def normalize_session_date(value: Optional[str], now: Optional[datetime] = None) -> datetime:
    """
    Reduces a session date to midnight of its calendar day.

    Accepts `YYYY-MM-DD` or a full ISO-8601 datetime (a trailing `Z` is allowed). The day is
    taken as written by the caller, an offset is dropped rather than converted. No value means today.
    """
    if value is None or not value.strip():
        day = now or utcnow()
    else:
        try:
            day = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise InvalidArgumentError(f"Invalid session date: {value!r}")
    return datetime(day.year, day.month, day.day)

def find_session(sessions_collection: Collection, course_code: str, session_date: datetime) -> Optional[dict]:
    """Existing session for the course on that day, if any"""
    return sessions_collection.find_one({"courseCode": course_code, "date": session_date})

def create_session(
    *,
    db: Database,
    session_create: SessionCreateRequest,
    mongo_session: Optional[MongoSession] = None,
    now: Optional[datetime] = None,
) -> SessionCreateResult:
    """
    Opens the attendance session of a course for one day and seeds a 'Belum Absen' record for every
    student in the roster.

    The existence check and the inserts are separate calls: two concurrent creations for the same
    course and day can both pass the check and produce duplicate sessions. Without ATOMIC_WRITES,
    a failure between the session insert and the record inserts leaves a session with no records.
    """
    now = now or utcnow()
    course = find_course(db=db, course_code=session_create.course_code)
    if course is None:
        raise NotFoundError("Course not found")

    students: List[dict] = list(db.get_collection(STUDENTS_COLLECTION).find({}))

    session_date = normalize_session_date(session_create.date, now)
    sessions_collection = db.get_collection(SESSIONS_COLLECTION)
    existing = find_session(sessions_collection, course.course_code, session_date)
    if existing is not None:
        raise ConflictError("Session already exists for this date", session_id=str(existing["_id"]))

    session_doc = {
        "courseCode": course.course_code,
        "courseName": course.course_name,
        "lecturerName": course.lecturer_name,
        "date": session_date,
        "createdAt": now,
        "status": SessionStatus.ACTIVE.value,
    }

    with write_scope(mongo_session):
        session_result = sessions_collection.insert_one(session_doc, **session_kwargs(mongo_session))
        session_id = session_result.inserted_id

        attendance_docs = [
            {
                "sessionId": session_id,
                "courseCode": course.course_code,
                "courseName": course.course_name,
                "npm": student["npm"],
                "studentName": student.get("name"),
                "status": AttendanceStatus.BELUM_ABSEN.value,
                "checkInTime": None,
                "confidence": None,
                "recognitionMethod": None,
                "notes": None,
                "attachmentPath": None,
                "createdAt": now,
                "updatedAt": now,
            }
            for student in students
        ]
        # insert_many rejects an empty batch
        if attendance_docs:
            db.get_collection(ATTENDANCES_COLLECTION).insert_many(attendance_docs, **session_kwargs(mongo_session))

    logger.info(
        "Created session %s for %s on %s with %d students",
        session_id, course.course_code, session_date.date().isoformat(), len(attendance_docs),
    )
    return SessionCreateResult(session_id=str(session_id), total_students=len(attendance_docs))

def get_active_session(
    *,
    db: Database,
    course_code: Optional[str] = None,
    date: Optional[str] = None,
) -> Optional[AttendanceSessionModel]:
    """
    Most recently created active session matching the optional filters.

    An unparseable date can match no session, so it is reported as "not found" like any other miss.
    """
    query: dict = {"status": SessionStatus.ACTIVE.value}
    if course_code:
        query["courseCode"] = course_code
    if date:
        try:
            query["date"] = normalize_session_date(date)
        except InvalidArgumentError:
            return None

    cursor = db.get_collection(SESSIONS_COLLECTION).find(query).sort("createdAt", DESCENDING).limit(1)
    session_doc = next(iter(cursor), None)
    if session_doc is None:
        return None
    return AttendanceSessionModel.model_validate(session_doc)

def close_session(
    *,
    db: Database,
    session_id: str,
    mongo_session: Optional[MongoSession] = None,
    now: Optional[datetime] = None,
) -> SessionCloseResult:
    """
    Turns every record still 'Belum Absen' into 'Alpha', then marks the session closed.

    Closing an already closed session is allowed: no record is left to convert, only closedAt moves.
    """
    now = now or utcnow()
    session_oid = parse_object_id(session_id, "Session")
    sessions_collection = db.get_collection(SESSIONS_COLLECTION)
    if sessions_collection.find_one({"_id": session_oid}) is None:
        raise NotFoundError("Session not found")

    with write_scope(mongo_session):
        update_result = db.get_collection(ATTENDANCES_COLLECTION).update_many(
            {"sessionId": session_oid, "status": AttendanceStatus.BELUM_ABSEN.value},
            {"$set": {"status": AttendanceStatus.ALPHA.value, "updatedAt": now}},
            **session_kwargs(mongo_session),
        )
        sessions_collection.update_one(
            {"_id": session_oid},
            {"$set": {"status": SessionStatus.CLOSED.value, "closedAt": now}},
            **session_kwargs(mongo_session),
        )

    logger.info("Closed session %s, %d records set to Alpha", session_id, update_result.modified_count)
    return SessionCloseResult(session_id=session_id, alpha_count=update_result.modified_count)
