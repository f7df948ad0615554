import enum
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Boolean,
    ForeignKey, Index, Enum, CheckConstraint
)
from sqlalchemy.orm import relationship
from models.base_models import BaseModel


class TaskPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TaskStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class ActivityType(str, enum.Enum):
    TASK_CREATED = "TASK_CREATED"
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_UNASSIGNED = "TASK_UNASSIGNED"
    TASK_REASSIGNED = "TASK_REASSIGNED"
    TASK_STATUS_UPDATED = "TASK_STATUS_UPDATED"
    TASK_PRIORITY_UPDATED = "TASK_PRIORITY_UPDATED"
    TASK_DUE_DATE_UPDATED = "TASK_DUE_DATE_UPDATED"


class User(BaseModel):
    __tablename__ = 'taskflow_users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(200), nullable=False)

    teams = relationship('Team', back_populates='created_by')
    projects = relationship('Project', back_populates='created_by')


class Team(BaseModel):
    __tablename__ = 'taskflow_teams'
    __table_args__ = (
        Index('idx_taskflow_teams_created_by_id', 'created_by_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_by_id = Column(Integer, ForeignKey('taskflow_users.id'), nullable=False)

    created_by = relationship('User', back_populates='teams')
    members = relationship(
        'TeamMember', back_populates='team',
        cascade='all, delete-orphan', order_by='TeamMember.id'
    )
    projects = relationship('Project', back_populates='team')


class TeamMember(BaseModel):
    __tablename__ = 'taskflow_team_members'
    __table_args__ = (
        CheckConstraint('capacity >= 0', name='ck_taskflow_team_members_capacity'),
        Index('idx_taskflow_team_members_team_id', 'team_id'),
        Index('idx_taskflow_team_members_created_by_id', 'created_by_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    role = Column(String(200), nullable=True)
    capacity = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    team_id = Column(Integer, ForeignKey('taskflow_teams.id', ondelete='CASCADE'), nullable=False)
    created_by_id = Column(Integer, ForeignKey('taskflow_users.id'), nullable=False)

    team = relationship('Team', back_populates='members')
    tasks = relationship('Task', back_populates='assignee')


class Project(BaseModel):
    __tablename__ = 'taskflow_projects'
    __table_args__ = (
        Index('idx_taskflow_projects_created_by_id', 'created_by_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    team_id = Column(Integer, ForeignKey('taskflow_teams.id', ondelete='SET NULL'), nullable=True)
    created_by_id = Column(Integer, ForeignKey('taskflow_users.id'), nullable=False)

    created_by = relationship('User', back_populates='projects')
    team = relationship('Team', back_populates='projects')
    tasks = relationship('Task', back_populates='project', cascade='all, delete-orphan')


class Task(BaseModel):
    __tablename__ = 'taskflow_tasks'
    __table_args__ = (
        Index('idx_taskflow_tasks_project_status', 'project_id', 'status'),
        Index('idx_taskflow_tasks_assignee_status', 'assignee_id', 'status'),
        Index('idx_taskflow_tasks_user_id', 'user_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(Enum(TaskPriority, name='task_priority'), nullable=False, default=TaskPriority.MEDIUM)
    status = Column(Enum(TaskStatus, name='task_status'), nullable=False, default=TaskStatus.PENDING)
    due_date = Column(DateTime, nullable=True)
    project_id = Column(Integer, ForeignKey('taskflow_projects.id', ondelete='CASCADE'), nullable=False)
    assignee_id = Column(Integer, ForeignKey('taskflow_team_members.id', ondelete='SET NULL'), nullable=True)
    user_id = Column(Integer, ForeignKey('taskflow_users.id'), nullable=False)

    project = relationship('Project', back_populates='tasks')
    assignee = relationship('TeamMember', back_populates='tasks')
    activities = relationship('Activity', back_populates='task', cascade='all, delete-orphan')


class Activity(BaseModel):
    __tablename__ = 'taskflow_activities'
    __table_args__ = (
        Index('idx_taskflow_activities_task_id', 'task_id'),
        Index('idx_taskflow_activities_user_type', 'user_id', 'activity_type'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey('taskflow_tasks.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('taskflow_users.id'), nullable=False)
    assignee_from_id = Column(Integer, ForeignKey('taskflow_team_members.id', ondelete='SET NULL'), nullable=True)
    assignee_to_id = Column(Integer, ForeignKey('taskflow_team_members.id', ondelete='SET NULL'), nullable=True)
    from_value = Column(String(255), nullable=True)
    to_value = Column(String(255), nullable=True)
    activity_type = Column(Enum(ActivityType, name='activity_type'), nullable=False)

    task = relationship('Task', back_populates='activities')
    assignee_from = relationship('TeamMember', foreign_keys=[assignee_from_id])
    assignee_to = relationship('TeamMember', foreign_keys=[assignee_to_id])
