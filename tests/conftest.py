from mongomock import MongoClient as MockClient
from pymongo import MongoClient
import pytest
from fastapi.testclient import TestClient

from src.config import COURSES_COLLECTION, STUDENTS_COLLECTION, settings
from src.database.mongo.core import get_mongo
from src.database.mongo.service import init_collections
from src.main import app

# Fixtures for tests
@pytest.fixture(scope="session")
def client():
    """Shared FastAPI test client"""
    return TestClient(app)

@pytest.fixture(scope="function")
def mock_mongo_db():
    """Injection for MongoDB dependency intended for fast, in-memory unit testing"""
    mock_client = MockClient()
    db = mock_client[settings.mongodb_database]

    # Apply indexes (json schema validators cannot be enforced in mongomock)
    init_collections(db, with_validators=False)

    # Override FastAPI's database dependency
    app.dependency_overrides[get_mongo] = lambda: db

    yield db # Provide the mock DB instance

    app.dependency_overrides.pop(get_mongo) # Clean up override(s) after test
    mock_client.close()

@pytest.fixture(scope="function")
def real_mongo_db():
    """Injection for MongoDB dependency intended for wide scope, accurate integration testing"""
    client = MongoClient(settings.mongodb_uri)
    test_db_name = "test_" + settings.mongodb_database
    db = client[test_db_name]
    init_collections(db, with_validators=True)

    app.dependency_overrides[get_mongo] = lambda: db

    yield db

    app.dependency_overrides.pop(get_mongo)
    client.drop_database(db)
    client.close()

@pytest.fixture(scope="function")
def upload_dir(tmp_path, monkeypatch):
    """Redirects permission letter uploads to a temporary directory"""
    target = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(target))
    return target

@pytest.fixture(scope="function")
def roster(mock_mongo_db):
    """Three students and the CS101 course"""
    mock_mongo_db.get_collection(STUDENTS_COLLECTION).insert_many([
        {"npm": "A", "name": "Andi"},
        {"npm": "B", "name": "Budi"},
        {"npm": "C", "name": "Citra"},
    ])
    mock_mongo_db.get_collection(COURSES_COLLECTION).insert_one({
        "courseCode": "CS101",
        "courseName": "Introduction to Programming",
        "lecturerName": "Dr. Sari",
    })
    return mock_mongo_db

@pytest.fixture(scope="function")
def open_session(client, roster) -> str:
    """Creates the CS101 session of 2024-01-10 through the API and returns its id"""
    response = client.post("/api/sessions/create", json={"courseCode": "CS101", "date": "2024-01-10"})
    assert response.status_code == 200
    return response.json()["sessionId"]
