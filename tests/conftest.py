"""
CoE tracker - test configuration and fixtures
"""
import os
from datetime import datetime
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Set testing environment before the settings are read
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['DIRECTOR_EMAILS'] = 'director@example.com'
os.environ['ENVIRONMENT'] = 'testing'

from coe_tracker.main import app  # noqa: E402
from coe_tracker.db.session import Base, SessionLocal, engine, get_db  # noqa: E402
import coe_tracker.models  # noqa: E402,F401
from coe_tracker.models.owner import OwnerRef  # noqa: E402
from coe_tracker.models.user import User  # noqa: E402
from coe_tracker.api.auth import token_for  # noqa: E402
from coe_tracker.services.access import Caller  # noqa: E402
from coe_tracker.services.category_registry import get_category  # noqa: E402
from coe_tracker.services.record_repository import RecordRepository  # noqa: E402


@pytest.fixture(scope='function')
def db() -> Generator[Session, None, None]:
    """Fresh schema and session for each test"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Test client sharing the test session"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db: Session):
    def _make(email: str, role: str = 'Researcher/Dev', first_name: str = 'Test', last_name: str = 'User') -> User:
        user = User(email=email, first_name=first_name, last_name=last_name, role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def director(make_user) -> User:
    return make_user('director@example.com', role='director', first_name='Dana', last_name='Director')


@pytest.fixture
def alice(make_user) -> User:
    return make_user('alice@example.com', first_name='Alice', last_name='Khan')


@pytest.fixture
def bob(make_user) -> User:
    return make_user('bob@example.com', first_name='Bob', last_name='Raza')


@pytest.fixture
def make_record(db: Session):
    """Insert a record through the repository, owned by ``owner`` (a User) when given"""
    def _make(category_key: str, owner: User = None, **values):
        repo = RecordRepository(db, get_category(category_key))
        return repo.create(values, owner=OwnerRef.from_user(owner) if owner else None)
    return _make


@pytest.fixture
def set_created_at(db: Session):
    """Pin a record's created_at to control ordering"""
    def _set(record, when: datetime):
        record.created_at = when
        db.commit()
        return record
    return _set


@pytest.fixture
def auth_headers():
    """Bearer headers for a user"""
    def _headers(user: User) -> dict:
        return {'Authorization': f'Bearer {token_for(user)}'}
    return _headers


@pytest.fixture
def caller_of():
    return Caller.from_user
