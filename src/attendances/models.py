from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models import PyObjectId

class AttendanceStatus(str, Enum):
    BELUM_ABSEN = "Belum Absen" # not yet marked
    HADIR = "Hadir" # present
    IZIN = "Izin" # excused, permission
    SAKIT = "Sakit" # excused, sick
    ALPHA = "Alpha" # absent

# permission letters only make sense for these statuses
ATTACHMENT_STATUSES = {AttendanceStatus.IZIN, AttendanceStatus.SAKIT}

RECOGNITION_METHOD = "Face Recognition"

# mongo models...
class AttendanceBase(BaseModel):
    session_id: PyObjectId = Field(description="Id of the owning attendance session")
    course_code: str
    course_name: Optional[str] = None
    npm: str = Field(description="NPM of the student the record is for")
    student_name: Optional[str] = None
    status: AttendanceStatus = Field(default=AttendanceStatus.BELUM_ABSEN)
    check_in_time: Optional[datetime] = Field(default=None, description="Time of the last recognition check-in")
    confidence: Optional[float] = Field(default=None, description="Score supplied by the face recognition client, not validated")
    recognition_method: Optional[str] = None
    notes: Optional[str] = None
    attachment_path: Optional[str] = Field(default=None, description="Public path of the uploaded permission letter")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(extra="allow", alias_generator=to_camel, populate_by_name=True)

class AttendanceModel(AttendanceBase):
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
