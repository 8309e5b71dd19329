from typing import List, Optional
from pymongo import ASCENDING
from pymongo.database import Database

from src.config import COURSES_COLLECTION
from src.courses.models import CourseModel

def list_courses(*, db: Database) -> List[CourseModel]:
    cursor = db.get_collection(COURSES_COLLECTION).find({}).sort("courseCode", ASCENDING)
    return [CourseModel.model_validate(doc) for doc in cursor]

def find_course(*, db: Database, course_code: str) -> Optional[CourseModel]:
    doc = db.get_collection(COURSES_COLLECTION).find_one({"courseCode": course_code})
    if doc is None:
        return None
    return CourseModel.model_validate(doc)

def count_courses(*, db: Database) -> int:
    return db.get_collection(COURSES_COLLECTION).count_documents({})
