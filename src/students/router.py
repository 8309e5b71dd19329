from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from src.database.mongo.core import get_mongo
from src.students.schemas import StudentListResponse
from src.students.service import list_students

router = APIRouter()

@router.get(
    "",
    description="Lists every student in the roster, ordered by name.",
    response_description="Student roster",
    status_code=status.HTTP_200_OK,
    response_model=StudentListResponse,
)
def get_students(db: Database = Depends(get_mongo)):
    students = list_students(db=db)
    return StudentListResponse(count=len(students), data=students)
