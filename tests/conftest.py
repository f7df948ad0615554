"""
Pytest configuration and shared fixtures for Taskflow tests.

This file provides:
- An in-memory SQLite database per test
- A workspace factory for owners, teams, members, projects and tasks
- A FastAPI test client bound to the test database
"""

import os

# Must be set before settings.database / constants.auth are imported
os.environ.setdefault("TASKFLOW_DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "taskflow-test-secret")
os.environ.pop("TASKFLOW_DB_HOST", None)
os.environ.pop("DATADOG_API_KEY", None)
os.environ.pop("OTEL_EXPORTER_OTLP_ENDPOINT", None)

import pytest
from typing import Generator, List, Optional, Tuple
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from settings.database import Base
from models.taskflow import (
    Activity, Project, Task, TaskPriority, TaskStatus, Team, TeamMember, User
)


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine():
    """Fresh in-memory database; StaticPool keeps one shared connection."""
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
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# ============================================================================
# Workspace Factory
# ============================================================================

class WorkspaceFactory:
    """Creates committed rows so the code under test reads real state."""

    def __init__(self, db: Session):
        self.db = db
        self._owner_seq = 0

    def owner(self, name: str = None) -> User:
        self._owner_seq += 1
        user = User(
            email=f"owner{self._owner_seq}@taskflow.dev",
            name=name or f"Owner {self._owner_seq}",
        )
        return self._save(user)

    def team(self, owner: User, members: List[Tuple[str, int]], name: str = "Core") -> Tuple[Team, List[TeamMember]]:
        team = self._save(Team(name=name, created_by_id=owner.id, is_active=True))
        created = [
            self.member(owner, team, member_name, capacity)
            for member_name, capacity in members
        ]
        return team, created

    def member(self, owner: User, team: Team, name: str, capacity: int, is_active: bool = True) -> TeamMember:
        return self._save(TeamMember(
            name=name,
            capacity=capacity,
            is_active=is_active,
            team_id=team.id,
            created_by_id=owner.id,
        ))

    def project(self, owner: User, team: Optional[Team], name: str = "Project") -> Project:
        return self._save(Project(
            name=name,
            team_id=team.id if team else None,
            created_by_id=owner.id,
        ))

    def task(
        self,
        project: Project,
        assignee: Optional[TeamMember],
        priority: TaskPriority = TaskPriority.MEDIUM,
        status: TaskStatus = TaskStatus.PENDING,
        name: str = None,
    ) -> Task:
        return self._save(Task(
            name=name or f"Task {priority.value.lower()}",
            priority=priority,
            status=status,
            project_id=project.id,
            assignee_id=assignee.id if assignee else None,
            user_id=project.created_by_id,
        ))

    def tasks(self, project: Project, assignee: TeamMember, *priorities: TaskPriority) -> List[Task]:
        return [
            self.task(project, assignee, priority, name=f"{assignee.name} #{i}")
            for i, priority in enumerate(priorities, start=1)
        ]

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj


@pytest.fixture
def workspace(db) -> WorkspaceFactory:
    return WorkspaceFactory(db)


# ============================================================================
# Read helpers
# ============================================================================

def assignments(db: Session) -> dict:
    """task id -> assignee id, read fresh from the database."""
    db.expire_all()
    return {task_id: assignee_id for task_id, assignee_id in db.query(Task.id, Task.assignee_id).all()}


def activity_count(db: Session) -> int:
    db.expire_all()
    return db.query(Activity).count()


def active_load(db: Session, member: TeamMember) -> int:
    db.expire_all()
    return db.query(Task).filter(
        Task.assignee_id == member.id,
        Task.status != TaskStatus.DONE
    ).count()


# ============================================================================
# API Client Fixtures
# ============================================================================

@pytest.fixture
def client(session_factory):
    """FastAPI test client whose get_db dependency uses the test database."""
    from fastapi.testclient import TestClient
    from settings.database import get_db
    from settings.server import taskflow_app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    taskflow_app.dependency_overrides[get_db] = override_get_db
    with TestClient(taskflow_app) as test_client:
        yield test_client
    taskflow_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    from services.auth import create_jwt_token

    def _headers(owner: User) -> dict:
        token = create_jwt_token({"user_id": owner.id, "email": owner.email})
        return {"Authorization": f"Bearer {token}"}

    return _headers
