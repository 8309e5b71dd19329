from typing import List
from pydantic import BaseModel

from src.courses.models import CourseModel

class CourseListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[CourseModel]
