from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from src.courses.schemas import CourseListResponse
from src.courses.service import list_courses
from src.database.mongo.core import get_mongo

router = APIRouter()

@router.get(
    "",
    description="Lists every course, ordered by course code.",
    response_description="Course catalogue",
    status_code=status.HTTP_200_OK,
    response_model=CourseListResponse,
)
def get_courses(db: Database = Depends(get_mongo)):
    courses = list_courses(db=db)
    return CourseListResponse(count=len(courses), data=courses)
