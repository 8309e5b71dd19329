from datetime import datetime
from unittest.mock import MagicMock
from bson import ObjectId
from mongomock.database import Database as MockMongoDatabase
import pytest

from src.config import ATTENDANCES_COLLECTION, COURSES_COLLECTION, SESSIONS_COLLECTION, STUDENTS_COLLECTION, settings
from src.database.mongo.core import make_mongo_session, session_kwargs, write_scope
from src.sessions.schemas import SessionCreateRequest
from src.sessions.service import close_session, create_session, get_active_session, normalize_session_date
from src.utils.exceptions import ConflictError, InvalidArgumentError, NotFoundError

class TestNormalizeSessionDate:
    @pytest.mark.parametrize("value", [
        "2024-01-10",
        "2024-01-10T00:00:00",
        "2024-01-10T23:59:59.999",
        "2024-01-10T08:15:00Z",
        "2024-01-10T23:30:00+07:00", # calendar day as written, not shifted to UTC
    ])
    def test_strips_time_of_day(self, value):
        assert normalize_session_date(value) == datetime(2024, 1, 10)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_defaults_to_today(self, value):
        assert normalize_session_date(value, now=datetime(2024, 3, 5, 17, 42)) == datetime(2024, 3, 5)

    @pytest.mark.parametrize("value", ["01/10/2024", "tomorrow", "2024-13-01"])
    def test_rejects_unparseable_dates(self, value):
        with pytest.raises(InvalidArgumentError):
            normalize_session_date(value)

class TestCreateSessionService:
    def test_unknown_course_raises(self, roster: MockMongoDatabase):
        with pytest.raises(NotFoundError, match="Course not found"):
            create_session(db=roster, session_create=SessionCreateRequest(course_code="NOPE", date="2024-01-10"))

    def test_conflict_carries_existing_session_id(self, roster: MockMongoDatabase):
        request = SessionCreateRequest(course_code="CS101", date="2024-01-10")
        first = create_session(db=roster, session_create=request)

        with pytest.raises(ConflictError) as exc_info:
            create_session(db=roster, session_create=request)

        assert exc_info.value.session_id == first.session_id

    def test_concurrent_creation_can_duplicate_sessions(self, roster: MockMongoDatabase, monkeypatch):
        """
        Known limitation: the existence check is not a uniqueness constraint.

        Two requests that both run their check before either insert lands each create a session.
        Simulated by making the check miss, as it would for the second of two interleaved requests.
        """
        monkeypatch.setattr("src.sessions.service.find_session", lambda *args, **kwargs: None)
        request = SessionCreateRequest(course_code="CS101", date="2024-01-10")

        first = create_session(db=roster, session_create=request)
        second = create_session(db=roster, session_create=request)

        assert first.session_id != second.session_id
        assert roster.get_collection(SESSIONS_COLLECTION).count_documents({"courseCode": "CS101", "date": datetime(2024, 1, 10)}) == 2
        assert roster.get_collection(ATTENDANCES_COLLECTION).count_documents({}) == 6

    def test_records_written_without_transaction_by_default(self, roster: MockMongoDatabase):
        result = create_session(
            db=roster,
            session_create=SessionCreateRequest(course_code="CS101", date="2024-01-10"),
            now=datetime(2024, 1, 10, 7, 30),
        )

        session = roster.get_collection(SESSIONS_COLLECTION).find_one({})
        assert str(session["_id"]) == result.session_id
        assert session["createdAt"] == datetime(2024, 1, 10, 7, 30)
        assert result.total_students == 3

class TestWriteScope:
    def test_no_session_runs_without_transaction(self):
        with write_scope(None):
            pass
        assert session_kwargs(None) == {}

    def test_session_wraps_writes_in_transaction(self):
        mongo_session = MagicMock()

        with write_scope(mongo_session):
            mongo_session.start_transaction.assert_called_once()

        mongo_session.start_transaction.return_value.__exit__.assert_called_once()
        assert session_kwargs(mongo_session) == {"session": mongo_session}

def mock_store() -> MagicMock:
    """MagicMock database handing out one mock per collection, seeded with the CS101 course and two students"""
    collections = {
        COURSES_COLLECTION: MagicMock(),
        STUDENTS_COLLECTION: MagicMock(),
        SESSIONS_COLLECTION: MagicMock(),
        ATTENDANCES_COLLECTION: MagicMock(),
    }
    collections[COURSES_COLLECTION].find_one.return_value = {
        "courseCode": "CS101", "courseName": "Introduction to Programming", "lecturerName": "Dr. Sari"
    }
    collections[STUDENTS_COLLECTION].find.return_value = [{"npm": "A", "name": "Andi"}, {"npm": "B", "name": "Budi"}]
    collections[SESSIONS_COLLECTION].find_one.return_value = None
    collections[SESSIONS_COLLECTION].insert_one.return_value.inserted_id = ObjectId()
    collections[ATTENDANCES_COLLECTION].update_many.return_value.modified_count = 2

    db = MagicMock()
    db.get_collection.side_effect = lambda name: collections[name]
    return db

class TestAtomicWrites:
    def test_create_passes_session_to_every_write(self):
        db = mock_store()
        mongo_session = MagicMock()

        create_session(
            db=db,
            session_create=SessionCreateRequest(course_code="CS101", date="2024-01-10"),
            mongo_session=mongo_session,
        )

        mongo_session.start_transaction.assert_called_once()
        assert db.get_collection(SESSIONS_COLLECTION).insert_one.call_args.kwargs["session"] is mongo_session
        insert_many = db.get_collection(ATTENDANCES_COLLECTION).insert_many
        assert insert_many.call_args.kwargs["session"] is mongo_session
        assert len(insert_many.call_args.args[0]) == 2

    def test_close_passes_session_to_every_write(self):
        db = mock_store()
        db.get_collection(SESSIONS_COLLECTION).find_one.return_value = {"_id": ObjectId(), "status": "active"}
        mongo_session = MagicMock()

        result = close_session(db=db, session_id=str(ObjectId()), mongo_session=mongo_session)

        mongo_session.start_transaction.assert_called_once()
        assert db.get_collection(ATTENDANCES_COLLECTION).update_many.call_args.kwargs["session"] is mongo_session
        assert db.get_collection(SESSIONS_COLLECTION).update_one.call_args.kwargs["session"] is mongo_session
        assert result.alpha_count == 2

    def test_best_effort_writes_carry_no_session(self):
        db = mock_store()

        create_session(db=db, session_create=SessionCreateRequest(course_code="CS101", date="2024-01-10"))

        assert "session" not in db.get_collection(SESSIONS_COLLECTION).insert_one.call_args.kwargs
        assert "session" not in db.get_collection(ATTENDANCES_COLLECTION).insert_many.call_args.kwargs

class TestMakeMongoSession:
    def test_yields_none_when_atomic_writes_disabled(self, monkeypatch):
        monkeypatch.setattr(settings, "atomic_writes", False)
        db = MagicMock()

        assert list(make_mongo_session(db=db)) == [None]
        db.client.start_session.assert_not_called()

    def test_session_comes_from_injected_database_client(self, monkeypatch):
        monkeypatch.setattr(settings, "atomic_writes", True)
        db = MagicMock()

        dependency = make_mongo_session(db=db)
        assert next(dependency) is db.client.start_session.return_value
        with pytest.raises(StopIteration):
            next(dependency)

        db.client.start_session.return_value.end_session.assert_called_once()

class TestActiveSessionService:
    def test_unparseable_date_is_not_found(self, roster: MockMongoDatabase):
        create_session(db=roster, session_create=SessionCreateRequest(course_code="CS101", date="2024-01-10"))

        assert get_active_session(db=roster, date="garbage") is None
        assert get_active_session(db=roster, date="2024-01-10") is not None
