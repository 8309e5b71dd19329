from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models import PyObjectId

# mongo models...
class CourseBase(BaseModel):
    course_code: str = Field(description="Unique code of the course")
    course_name: str = Field(description="Title of the course")
    lecturer_name: Optional[str] = Field(default=None, description="Lecturer teaching the course")

    model_config = ConfigDict(extra="allow", alias_generator=to_camel, populate_by_name=True)

class CourseModel(CourseBase):
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
