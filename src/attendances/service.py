import logging
from datetime import datetime
from typing import List, Optional, Tuple
from fastapi import UploadFile
from pymongo import ASCENDING
from pymongo.database import Database

from src.attendances.models import ATTACHMENT_STATUSES, RECOGNITION_METHOD, AttendanceModel, AttendanceStatus
from src.attendances.uploads import store_permission_letter, validate_permission_letter
from src.config import ATTENDANCES_COLLECTION
from src.models import parse_object_id, utcnow
from src.stats.schemas import SessionStats
from src.stats.service import session_stats
from src.utils.exceptions import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

def list_by_session(*, db: Database, session_id: str) -> Tuple[List[AttendanceModel], SessionStats]:
    """Records of a session ordered by student name, with their status tallies"""
    session_oid = parse_object_id(session_id, "Session")
    cursor = db.get_collection(ATTENDANCES_COLLECTION).find({"sessionId": session_oid}).sort("studentName", ASCENDING)
    attendances = [AttendanceModel.model_validate(doc) for doc in cursor]
    return attendances, session_stats(attendances)

def mark_present_by_recognition(
    *,
    db: Database,
    session_id: str,
    npm: str,
    confidence: Optional[float],
    now: Optional[datetime] = None,
) -> AttendanceModel:
    """
    Marks a student 'Hadir' on behalf of the face recognition client.

    Marking an already present student again is allowed and moves checkInTime forward.
    """
    now = now or utcnow()
    session_oid = parse_object_id(session_id, "Attendance record")
    attendance_collection = db.get_collection(ATTENDANCES_COLLECTION)
    record_filter = {"sessionId": session_oid, "npm": npm}

    update_result = attendance_collection.update_one(record_filter, {"$set": {
        "status": AttendanceStatus.HADIR.value,
        "checkInTime": now,
        "confidence": confidence,
        "recognitionMethod": RECOGNITION_METHOD,
        "updatedAt": now,
    }})
    if update_result.matched_count == 0:
        raise NotFoundError("Attendance record not found")

    logger.info("Marked %s present in session %s (confidence=%s)", npm, session_id, confidence)
    return AttendanceModel.model_validate(attendance_collection.find_one(record_filter))

def parse_status(status: str) -> AttendanceStatus:
    try:
        return AttendanceStatus(status)
    except ValueError:
        raise InvalidArgumentError("Invalid status")

def update_status_manually(
    *,
    db: Database,
    record_id: str,
    status: str,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AttendanceModel:
    """
    Overrides the status of a record, as done by the lecturer.

    A permission letter is only kept while the record is 'Izin' or 'Sakit', any other status clears it.
    """
    new_status = parse_status(status)
    now = now or utcnow()
    record_oid = parse_object_id(record_id, "Attendance")

    update_data = {
        "status": new_status.value,
        "updatedAt": now,
    }
    if notes:
        update_data["notes"] = notes
    if new_status not in ATTACHMENT_STATUSES:
        update_data["attachmentPath"] = None

    attendance_collection = db.get_collection(ATTENDANCES_COLLECTION)
    update_result = attendance_collection.update_one({"_id": record_oid}, {"$set": update_data})
    if update_result.matched_count == 0:
        raise NotFoundError("Attendance not found")

    logger.info("Attendance %s manually set to %s", record_id, new_status.value)
    return AttendanceModel.model_validate(attendance_collection.find_one({"_id": record_oid}))

def attach_file(
    *,
    db: Database,
    record_id: str,
    upload: Optional[UploadFile],
    now: Optional[datetime] = None,
) -> str:
    """
    Stores a permission letter and links it to the record, whatever its current status.

    Returns the public path of the stored file.
    """
    upload = validate_permission_letter(upload)
    now = now or utcnow()
    record_oid = parse_object_id(record_id, "Attendance")

    attendance_collection = db.get_collection(ATTENDANCES_COLLECTION)
    if attendance_collection.find_one({"_id": record_oid}) is None:
        raise NotFoundError("Attendance not found")

    file_path = store_permission_letter(upload)
    attendance_collection.update_one(
        {"_id": record_oid},
        {"$set": {"attachmentPath": file_path, "updatedAt": now}},
    )
    logger.info("Attached %s to attendance %s", file_path, record_id)
    return file_path
