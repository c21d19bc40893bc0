"""
GymTrack Database Module
Workout repository: MongoDB storage through PyMongo, plus an in-memory
store with the same interface for tests and local runs.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from pydantic import ValidationError
from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.collection import Collection

from config import settings
from models import User, WorkoutSession

logger = logging.getLogger(__name__)

# ============================================================
# Database Connection
# ============================================================

_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def get_client() -> MongoClient:
    """Get MongoDB client (singleton)."""
    global _client
    if _client is None:
        _client = MongoClient(settings.MONGODB_URI)
    return _client


def get_database() -> Database:
    """Get the GymTrack database."""
    global _db
    if _db is None:
        _db = get_client().get_database(settings.MONGODB_DB_NAME)
    return _db


def close_connection():
    """Close MongoDB connection."""
    global _client, _db
    if _client:
        _client.close()
        _client = None
        _db = None


def workouts_collection() -> Collection:
    return get_database().get_collection("workouts")


# ============================================================
# Repository Interface
# ============================================================

class WorkoutRepository(ABC):
    """Where workout sessions live. Analytics only ever read snapshots from it."""

    @abstractmethod
    def list_sessions(self, user: User) -> list[WorkoutSession]:
        """All sessions of a user in insertion order (not date order)."""

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[WorkoutSession]:
        ...

    @abstractmethod
    def save(self, session: WorkoutSession) -> str:
        """Insert or replace a session by id. Returns the id."""

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        ...

    @abstractmethod
    def clear(self, user: User) -> int:
        """Delete every session of a user. Returns how many were removed."""


class InMemoryWorkoutRepository(WorkoutRepository):
    def __init__(self, sessions: Optional[list[WorkoutSession]] = None):
        self._sessions: dict[str, WorkoutSession] = {}
        for session in sessions or []:
            self.save(session)

    def list_sessions(self, user: User) -> list[WorkoutSession]:
        return [s.model_copy(deep=True) for s in self._sessions.values() if s.user == user]

    def get_session(self, session_id: str) -> Optional[WorkoutSession]:
        session = self._sessions.get(session_id)
        return session.model_copy(deep=True) if session else None

    def save(self, session: WorkoutSession) -> str:
        self._sessions[session.id] = session.model_copy(deep=True)
        return session.id

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def clear(self, user: User) -> int:
        doomed = [sid for sid, s in self._sessions.items() if s.user == user]
        for sid in doomed:
            del self._sessions[sid]
        return len(doomed)


class MongoWorkoutRepository(WorkoutRepository):
    """One document per session in the `workouts` collection, `_id` = session id."""

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = workouts_collection()
        return self._collection

    @staticmethod
    def _to_document(session: WorkoutSession) -> dict:
        doc = session.model_dump(mode="json", by_alias=True)
        doc.pop("id")
        return doc

    @staticmethod
    def _from_document(doc: dict) -> Optional[WorkoutSession]:
        doc = dict(doc)
        doc["id"] = str(doc.pop("_id"))
        doc.pop("created_at", None)
        doc.pop("updated_at", None)
        try:
            return WorkoutSession(**doc)
        except ValidationError as e:
            logger.error(f"Skipping malformed workout document {doc['id']}: {e}")
            return None

    def list_sessions(self, user: User) -> list[WorkoutSession]:
        cursor = self.collection.find({"user": User(user).value}).sort("created_at", ASCENDING)
        sessions = []
        for doc in cursor:
            session = self._from_document(doc)
            if session:
                sessions.append(session)
        return sessions

    def get_session(self, session_id: str) -> Optional[WorkoutSession]:
        doc = self.collection.find_one({"_id": session_id})
        return self._from_document(doc) if doc else None

    def save(self, session: WorkoutSession) -> str:
        now = datetime.utcnow()
        self.collection.update_one(
            {"_id": session.id},
            {
                "$set": {**self._to_document(session), "updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )
        return session.id

    def delete(self, session_id: str) -> bool:
        result = self.collection.delete_one({"_id": session_id})
        return result.deleted_count > 0

    def clear(self, user: User) -> int:
        result = self.collection.delete_many({"user": User(user).value})
        return result.deleted_count


# ============================================================
# Repository Factory
# ============================================================

_repository: Optional[WorkoutRepository] = None


def get_repository() -> WorkoutRepository:
    """Get the configured repository (singleton)."""
    global _repository
    if _repository is None:
        if settings.STORAGE_BACKEND == "memory":
            _repository = InMemoryWorkoutRepository()
        else:
            _repository = MongoWorkoutRepository()
    return _repository


# ============================================================
# Database Initialization
# ============================================================

def init_database():
    """Initialize database with indexes."""
    if settings.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory workout storage")
        return

    db = get_database()
    db.workouts.create_index([("user", ASCENDING), ("date", DESCENDING)])
    db.workouts.create_index([("user", ASCENDING), ("created_at", ASCENDING)])
    logger.info("Database indexes created successfully")


# ============================================================
# Example Usage
# ============================================================
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        client = get_client()
        client.admin.command('ping')
        logger.info("Successfully connected to MongoDB!")
        init_database()
    except Exception as e:
        logger.error(f"Connection failed: {e}")
    finally:
        close_connection()
