"""Pytest configuration and fixtures for files-manager tests."""

import base64
import os

os.environ.setdefault("DEBUG", "1")
os.environ.setdefault("DEBUG_DATABASE_URL", "sqlite://")

import pytest
import redis
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.jobs.dispatcher import JobDispatcher, get_job_dispatcher
from app.main import app
from app.models.models import User
from app.services.file_tree import FileTreeManager
from app.services.gateway import AccessGateway
from app.storage.blob import LocalBlobStore, get_blob_store
from app.utils.encrypt import hash_password
from app.utils.redis_client import get_redis
from app.utils.sessions import SessionStore


class InMemoryRedis:
    """Just enough of redis.Redis for sessions and the job queue, with a fake clock."""

    def __init__(self):
        self.now = 0.0
        self.values = {}
        self.expires = {}
        self.lists = {}
        self.down = False

    def _check(self):
        if self.down:
            raise redis.exceptions.ConnectionError("Connection refused")

    def _expire_stale(self, key):
        expires_at = self.expires.get(key)
        if expires_at is not None and expires_at <= self.now:
            self.values.pop(key, None)
            self.expires.pop(key, None)

    def advance(self, seconds):
        self.now += seconds

    def ping(self):
        self._check()
        return True

    def setex(self, key, ttl, value):
        self._check()
        self.values[key] = str(value)
        self.expires[key] = self.now + ttl
        return True

    def get(self, key):
        self._check()
        self._expire_stale(key)
        return self.values.get(key)

    def ttl(self, key):
        self._check()
        self._expire_stale(key)
        if key not in self.values:
            return -2
        return int(self.expires[key] - self.now)

    def delete(self, *keys):
        self._check()
        deleted = 0
        for key in keys:
            self._expire_stale(key)
            if key in self.values:
                del self.values[key]
                self.expires.pop(key, None)
                deleted += 1
        return deleted

    def rpush(self, name, *values):
        self._check()
        self.lists.setdefault(name, []).extend(values)
        return len(self.lists[name])

    def lrange(self, name, start, end):
        self._check()
        items = self.lists.get(name, [])
        return items[start:] if end == -1 else items[start:end + 1]


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blob_store(tmp_path):
    return LocalBlobStore(str(tmp_path / "files_manager"))


@pytest.fixture
def dispatcher(fake_redis):
    return JobDispatcher(fake_redis, queue_name="fileQueue")


@pytest.fixture
def session_store(fake_redis):
    return SessionStore(fake_redis, key_prefix="auth_", ttl_seconds=86400)


@pytest.fixture
def file_tree(db, blob_store, dispatcher):
    return FileTreeManager(db, blob_store, dispatcher)


@pytest.fixture
def gateway(session_store, file_tree):
    return AccessGateway(session_store, file_tree)


@pytest.fixture
def make_user(db):
    def _make_user(email="bob@dylan.com", password="toto1234!"):
        user = User(email=email, hashed_password=hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def client(session_factory, fake_redis, blob_store, dispatcher):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_job_dispatcher] = lambda: dispatcher
    yield TestClient(app)
    app.dependency_overrides.clear()


def basic_auth(email, password):
    encoded = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {encoded}"}


@pytest.fixture
def auth_token(client, make_user):
    """Register a user and open a session for it; returns (user, token)."""
    user = make_user()
    response = client.get("/connect", headers=basic_auth("bob@dylan.com", "toto1234!"))
    assert response.status_code == 200
    return user, response.json()["token"]
