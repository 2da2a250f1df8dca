"""Shared fixtures: a SQLite database per test, members, and an API client."""

import itertools

import pytest
from fastapi.testclient import TestClient

from common_sense.application import create_app
from common_sense.core.config import Settings
from common_sense.core.database import Database
from common_sense.core.security import create_access_token
from common_sense.models.member_db.member_db import Member
from common_sense.models.orientation_db.orientation_crud import submit_responses
from common_sense.models.orientation_db.seed_questions import seed_opinion_questions

TEST_SECRET = "test-secret-key-with-more-than-32-characters"
QUESTION_ID = "economy-markets"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'common_sense.db'}",
        JWT_SECRET_KEY=TEST_SECRET,
    )


@pytest.fixture
def database(settings):
    database = Database.from_settings(settings)
    database.create_tables()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    seed_opinion_questions(session)
    yield session
    session.close()


@pytest.fixture
def make_member(db):
    """Create a member directly in storage, skipping password hashing."""
    counter = itertools.count(1)

    def _make(username: str = None) -> Member:
        username = username or f"member{next(counter)}"
        member = Member(
            email=f"{username}@example.com",
            username=username,
            hashed_password="unused",
        )
        db.add(member)
        db.commit()
        db.refresh(member)
        return member

    return _make


@pytest.fixture
def scored_member(db, make_member):
    """Create a member whose orientation score is exactly ``score``."""

    def _make(score: float, username: str = None) -> Member:
        member = make_member(username)
        submit_responses(db, member.id, [(QUESTION_ID, score)])
        return member

    return _make


@pytest.fixture
def client(settings, database):
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(settings):
    def _headers(member: Member) -> dict:
        return {"Authorization": f"Bearer {create_access_token(member.id, settings)}"}

    return _headers
