from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile, status
from pymongo.database import Database

from src.attendances.schemas import AttendanceResponse, MarkPresentRequest, StatusUpdateRequest, UploadResponse
from src.attendances.service import attach_file, mark_present_by_recognition, update_status_manually
from src.database.mongo.core import get_mongo

router = APIRouter()

@router.post(
    "/mark-present",
    description="Marks a student present in a session, called by the face recognition client.",
    response_description="Updated attendance record",
    status_code=status.HTTP_200_OK,
    response_model=AttendanceResponse,
    responses={
        404: {
            "description": "No record for this student in the session",
            "content": {
                "application/json": { "example": { "success": False, "error": "Attendance record not found" }}
            }
        },
    },
)
def mark_present(
    mark_request: MarkPresentRequest,
    db: Database = Depends(get_mongo),
):
    attendance = mark_present_by_recognition(
        db=db,
        session_id=mark_request.session_id,
        npm=mark_request.npm,
        confidence=mark_request.confidence,
    )
    return AttendanceResponse(message="Attendance marked as Hadir", attendance=attendance)

@router.put(
    "/{attendance_id}/status",
    description="Manually overrides the status of an attendance record.",
    response_description="Updated attendance record",
    status_code=status.HTTP_200_OK,
    response_model=AttendanceResponse,
    responses={
        400: {
            "description": "Status is not one of Hadir, Izin, Sakit, Alpha, Belum Absen",
            "content": {
                "application/json": { "example": { "success": False, "error": "Invalid status" }}
            }
        },
    },
)
def update_status(
    attendance_id: str,
    status_update: StatusUpdateRequest,
    db: Database = Depends(get_mongo),
):
    attendance = update_status_manually(
        db=db,
        record_id=attendance_id,
        status=status_update.status,
        notes=status_update.notes,
    )
    return AttendanceResponse(message="Status updated", attendance=attendance)

@router.post(
    "/{attendance_id}/upload",
    description="Uploads a permission letter (PDF, 5MB max) for an attendance record.",
    response_description="Public path of the stored file",
    status_code=status.HTTP_200_OK,
    response_model=UploadResponse,
)
def upload_permission_letter(
    attendance_id: str,
    file: Optional[UploadFile] = File(default=None),
    db: Database = Depends(get_mongo),
):
    file_path = attach_file(db=db, record_id=attendance_id, upload=file)
    return UploadResponse(message="File uploaded successfully", file_path=file_path)
