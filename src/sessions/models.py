from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models import PyObjectId

class SessionStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"

# mongo models...
class AttendanceSessionBase(BaseModel):
    course_code: str
    course_name: Optional[str] = None
    lecturer_name: Optional[str] = None
    date: datetime = Field(description="Session day, stored as midnight UTC")
    created_at: datetime
    status: SessionStatus = Field(default=SessionStatus.ACTIVE)
    closed_at: Optional[datetime] = None

    model_config = ConfigDict(extra="allow", alias_generator=to_camel, populate_by_name=True)

class AttendanceSessionModel(AttendanceSessionBase):
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
