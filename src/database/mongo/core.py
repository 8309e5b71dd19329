import logging
from contextlib import contextmanager
from typing import Iterator, Optional
from fastapi import Depends, FastAPI, Request
from pymongo.client_session import ClientSession
from pymongo.database import Database
from pymongo.errors import ConnectionFailure
from pymongo.mongo_client import MongoClient

from src.config import settings
from src.database.mongo.service import init_collections

logger = logging.getLogger(__name__)

def ping_mongo(client: MongoClient):
    client.admin.command('ping')

def init_mongo(app: FastAPI, url: Optional[str] = None) -> Database:
    """
    Opens the MongoDB client and keeps it on the application state.

    Routes reach the database only through the `get_mongo` dependency, so tests can swap it out.
    """
    client = MongoClient(url or settings.mongodb_uri)
    db = client[settings.mongodb_database]
    init_collections(db)
    app.state.mongo_client = client
    app.state.mongo_db = db
    logger.info("Connected to MongoDB database '%s'", settings.mongodb_database)
    return db

def close_mongo(app: FastAPI) -> None:
    client: Optional[MongoClient] = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        logger.info("MongoDB connection closed")
    app.state.mongo_client = None
    app.state.mongo_db = None

def is_connected(app: FastAPI) -> bool:
    return getattr(app.state, "mongo_db", None) is not None

def get_mongo(request: Request) -> Database:
    db: Optional[Database] = getattr(request.app.state, "mongo_db", None)
    if db is None:
        raise ConnectionFailure("MongoDB client is not connected")
    return db

def make_mongo_session(db: Database = Depends(get_mongo)) -> Iterator[Optional[ClientSession]]:
    """
    Dependency yields a MongoDB ClientSession when ATOMIC_WRITES is enabled, otherwise None.

    The session is started from the client of the injected database, so it follows any override of `get_mongo`.
    Services open their transaction through `write_scope`, writes outside of one are best-effort.
    """
    if not settings.atomic_writes:
        yield None
        return

    client_session = db.client.start_session()
    try:
        yield client_session
    finally:
        client_session.end_session()

@contextmanager
def write_scope(mongo_session: Optional[ClientSession]):
    """Runs the enclosed writes in a transaction when a session is given"""
    if mongo_session is None:
        yield
        return
    with mongo_session.start_transaction():
        yield

def session_kwargs(mongo_session: Optional[ClientSession]) -> dict:
    """
    Keyword arguments passing the session to a collection call only when one exists.

    Work around for MongoMock's lack of session support in testing.
    """
    if mongo_session:
        return {"session": mongo_session}
    return {}
