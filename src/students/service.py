from typing import List
from pymongo import ASCENDING
from pymongo.database import Database

from src.config import STUDENTS_COLLECTION
from src.students.models import StudentModel

def list_students(*, db: Database) -> List[StudentModel]:
    """Returns the whole roster sorted by name"""
    cursor = db.get_collection(STUDENTS_COLLECTION).find({}).sort("name", ASCENDING)
    return [StudentModel.model_validate(doc) for doc in cursor]

def count_students(*, db: Database) -> int:
    return db.get_collection(STUDENTS_COLLECTION).count_documents({})
