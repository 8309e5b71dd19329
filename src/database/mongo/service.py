from typing import Any, Dict, Sequence
from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.database import Database

from src.attendances.models import AttendanceStatus
from src.config import ATTENDANCES_COLLECTION, COURSES_COLLECTION, SESSIONS_COLLECTION, STUDENTS_COLLECTION

ATTENDANCE_STATUSES = [status.value for status in AttendanceStatus]

class CollectionProps:
    def __init__(self, schema: Dict[str, Any], indexes: Sequence[IndexModel]):
        # schema as it will be stored and validated internally on MongoDB
        self.schema = schema
        # indexes for the collection
        self.indexes = indexes

collections: dict[str, CollectionProps] = {
    STUDENTS_COLLECTION: CollectionProps(
        schema={
            "bsonType": "object",
            "title": "Student Object Validation",
            "required": ["npm", "name"],
            "properties": {
                "npm": {
                    "bsonType": "string",
                    "description": "Must provide the student's NPM (roll number) as a string value",
                    "minLength": 1
                },
                "name": {
                    "bsonType": "string",
                    "description": "Must provide the student's full name",
                    "minLength": 1
                },
            },
            "additionalProperties": True
        },
        indexes=[
            IndexModel("npm", unique=True)
        ]
    ),
    COURSES_COLLECTION: CollectionProps(
        schema={
            "bsonType": "object",
            "title": "Course Object Validation",
            "required": ["courseCode", "courseName"],
            "properties": {
                "courseCode": {
                    "bsonType": "string",
                    "description": "Must provide the unique course code as a string value"
                },
                "courseName": {
                    "bsonType": "string",
                    "description": "Must provide the course name as a string value"
                },
                "lecturerName": {
                    "bsonType": ["string", "null"],
                    "description": "Name of the lecturer teaching the course"
                },
            },
            "additionalProperties": True
        },
        indexes=[
            IndexModel("courseCode", unique=True)
        ]
    ),
    SESSIONS_COLLECTION: CollectionProps(
        schema={
            "bsonType": "object",
            "title": "Attendance Session Object Validation",
            "required": ["courseCode", "date", "createdAt", "status"],
            "properties": {
                "courseCode": {
                    "bsonType": "string",
                    "description": "Must include the code of the course the session belongs to"
                },
                "date": {
                    "bsonType": "date",
                    "description": "Must include the session day as a UTC datetime at midnight"
                },
                "createdAt": {
                    "bsonType": "date",
                    "description": "Must include the time the session was opened as UTC datetime"
                },
                "status": {
                    "enum": ["active", "closed"],
                    "description": "Must be either 'active' or 'closed'"
                },
                "closedAt": {
                    "bsonType": ["date", "null"],
                    "description": "Time the session was closed as UTC datetime"
                },
            },
            "additionalProperties": True
        },
        # not unique: duplicates are only prevented by the existence check on creation
        indexes=[
            IndexModel([("courseCode", ASCENDING), ("date", ASCENDING)]),
            IndexModel([("status", ASCENDING), ("createdAt", DESCENDING)]),
        ]
    ),
    ATTENDANCES_COLLECTION: CollectionProps(
        schema={
            "bsonType": "object",
            "title": "Attendance Record Object Validation",
            "required": ["sessionId", "courseCode", "npm", "status", "createdAt", "updatedAt"],
            "properties": {
                "sessionId": {
                    "bsonType": "objectId",
                    "description": "Must include the ObjectId of the owning attendance session"
                },
                "npm": {
                    "bsonType": "string",
                    "description": "Must include the NPM of the student the record is for"
                },
                "status": {
                    "enum": ATTENDANCE_STATUSES,
                    "description": "Must be one of the attendance statuses"
                },
                "checkInTime": {
                    "bsonType": ["date", "null"],
                    "description": "Time of the recognition check-in as UTC datetime"
                },
                "confidence": {
                    "bsonType": ["double", "int", "null"],
                    "description": "Confidence score supplied by the face recognition client"
                },
                "attachmentPath": {
                    "bsonType": ["string", "null"],
                    "description": "Public path of the uploaded permission letter"
                },
            },
            "additionalProperties": True
        },
        indexes=[
            IndexModel([("sessionId", ASCENDING), ("npm", ASCENDING)]),
            IndexModel([("status", ASCENDING), ("checkInTime", ASCENDING)]),
        ]
    ),
}

def init_collections(mongo: Database, with_validators=True):
    """Initializes collections and their indexes"""
    existing_collections = set(mongo.list_collection_names())

    # if the collection exists, update with db.command; else create the collection
    for collection_name, collection_props in collections.items():
        if collection_name not in existing_collections:
            # create the schema with the above defined JSON schema given with_validators option
            if with_validators:
                mongo.create_collection(
                    collection_name,
                    validator={"$jsonSchema": collection_props.schema},
                    validationLevel="moderate" # validates on writes
                )
            else:
                mongo.create_collection(collection_name)

            # if the collection requires indexes, include them upon creation
            if len(collection_props.indexes) > 0:
                mongo.get_collection(collection_name).create_indexes(collection_props.indexes)
        elif with_validators:
            mongo.command({
                "collMod": collection_name,
                "validator": {"$jsonSchema": collection_props.schema},
                "validationLevel": "moderate"
            })
