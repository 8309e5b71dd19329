from typing import List
from pydantic import BaseModel

from src.students.models import StudentModel

class StudentListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[StudentModel]
