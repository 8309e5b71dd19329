from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.attendances.models import AttendanceModel

class MarkPresentRequest(BaseModel):
    session_id: str
    npm: str
    confidence: Optional[float] = Field(default=None, description="Score reported by the face recognition client")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class StatusUpdateRequest(BaseModel):
    # checked against AttendanceStatus by the service so an unknown value is a 400, not a 422
    status: str
    notes: Optional[str] = None

class AttendanceResponse(BaseModel):
    success: bool = True
    message: str
    attendance: AttendanceModel

class UploadResponse(BaseModel):
    success: bool = True
    message: str
    file_path: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
