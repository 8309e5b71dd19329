from datetime import datetime, timezone
from typing import Annotated
from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BeforeValidator

from src.utils.exceptions import NotFoundError

# https://www.mongodb.com/developer/languages/python/python-quickstart-fastapi/#database-models
# required to properly encode bson ObjectId to str on Mongo documents
PyObjectId = Annotated[str, BeforeValidator(str)]

def parse_object_id(value: str, entity: str) -> ObjectId:
    """
    Converts a path/body id into an ObjectId.

    A malformed id can never match a document, so it is reported the same way as an unknown id.
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFoundError(f"{entity} not found")

def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form MongoDB hands back on reads"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
