"""
Pytest fixtures for issue tracker tests.

Each test gets a fresh in-memory SQLite database built from the ORM models.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tracker.db import Base, enable_sqlite_foreign_keys
from tracker.enums import WorkflowCategory
from tracker.models import Issue, Team, User, Workflow, Workspace
from tracker.queues import IssuesQueue, NotificationsQueue


def _sqlite_engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    return engine


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh test database for each test using ORM."""
    engine = _sqlite_engine()
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    yield TestingSessionLocal, engine

    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def init_test_db():
    """Point the global db manager at an in-memory database (for worker tasks)."""
    from tracker.db import db

    db.reset()
    db.initialize("sqlite://")
    db.create_all_tables()
    yield db
    db.reset()


def _create_team(session, workspace, name, identifier):
    team = Team(name=name, identifier=identifier, workspace_id=workspace.id)
    session.add(team)
    session.flush()
    return team


def _create_states(session, team, categories):
    states = {}
    for position, (name, category) in enumerate(categories):
        state = Workflow(name=name, category=category, position=position, team_id=team.id)
        session.add(state)
        states[name] = state
    session.flush()
    return states


DEFAULT_STATES = [
    ("Triage", WorkflowCategory.TRIAGE),
    ("Backlog", WorkflowCategory.BACKLOG),
    ("Todo", WorkflowCategory.UNSTARTED),
    ("In Progress", WorkflowCategory.STARTED),
    ("Done", WorkflowCategory.COMPLETED),
]


def seed_workspace(session):
    """Workspace with one team, its default states and two users."""
    workspace = Workspace(name="Acme", slug="acme")
    session.add(workspace)
    session.flush()

    team = _create_team(session, workspace, "Engineering", "ENG")
    states = _create_states(session, team, DEFAULT_STATES)

    alice = User(username="alice", email="alice@example.com")
    bob = User(username="bob", email="bob@example.com")
    session.add_all([alice, bob])
    session.flush()

    return {"workspace": workspace, "team": team, "states": states, "alice": alice, "bob": bob}


@pytest.fixture
def seeded(test_session):
    """Seeded workspace data in the per-test session."""
    data = seed_workspace(test_session)
    test_session.commit()
    return data


@pytest.fixture
def make_team(test_session):
    """Factory for extra teams in the seeded workspace."""

    def _make(workspace, name, identifier, states=DEFAULT_STATES):
        team = _create_team(test_session, workspace, name, identifier)
        team_states = _create_states(test_session, team, states)
        test_session.commit()
        return team, team_states

    return _make


@pytest.fixture
def make_issue(test_session):
    """Factory for persisted issues."""

    def _make(team, state, number, **fields):
        issue = Issue(
            team_id=team.id,
            state_id=state.id,
            number=number,
            title=fields.pop("title", f"Issue {number}"),
            **fields,
        )
        test_session.add(issue)
        test_session.commit()
        return issue

    return _make


@pytest.fixture
def notifications_queue():
    return MagicMock(spec=NotificationsQueue)


@pytest.fixture
def issues_queue():
    return MagicMock(spec=IssuesQueue)


@pytest.fixture
def now():
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def seeded_db(init_test_db):
    """Seeded workspace data committed through the global db manager."""
    with init_test_db.session() as session:
        data = seed_workspace(session)
    return data
