from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.attendances.models import AttendanceModel
from src.sessions.models import AttendanceSessionModel
from src.stats.schemas import SessionStats

class SessionCreateRequest(BaseModel):
    course_code: str = Field(description="Code of the course the session is opened for")
    date: Optional[str] = Field(default=None, description="ISO-8601 date or datetime of the session, defaults to today")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class SessionCreateResult(BaseModel):
    session_id: str
    total_students: int

class SessionCreateResponse(BaseModel):
    success: bool = True
    message: str
    session_id: str
    total_students: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ActiveSessionResponse(BaseModel):
    success: bool
    session: Optional[AttendanceSessionModel] = None
    message: Optional[str] = None

class SessionAttendancesResponse(BaseModel):
    success: bool = True
    attendances: List[AttendanceModel]
    stats: SessionStats

class SessionCloseResult(BaseModel):
    session_id: str
    alpha_count: int

class SessionCloseResponse(BaseModel):
    success: bool = True
    message: str
    alpha_count: int = Field(description="Records moved from 'Belum Absen' to 'Alpha' by this call")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
