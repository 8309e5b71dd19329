from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from src.models import PyObjectId

# mongo models...
class StudentBase(BaseModel):
    npm: str = Field(description="Student identifier (roll number), unique across the roster")
    name: str = Field(description="Full name of the student")

    model_config = ConfigDict(extra="allow")

class StudentModel(StudentBase):
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
