"""create taskflow tables

Revision ID: a1f3c9d2e7b4
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1f3c9d2e7b4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

task_priority = sa.Enum('LOW', 'MEDIUM', 'HIGH', name='task_priority')
task_status = sa.Enum('PENDING', 'IN_PROGRESS', 'DONE', name='task_status')
activity_type = sa.Enum(
    'TASK_CREATED', 'TASK_ASSIGNED', 'TASK_UNASSIGNED', 'TASK_REASSIGNED',
    'TASK_STATUS_UPDATED', 'TASK_PRIORITY_UPDATED', 'TASK_DUE_DATE_UPDATED',
    name='activity_type'
)


def _audit_columns():
    return [
        sa.Column('created_on', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('modified_on', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('taskflow_users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_table('taskflow_teams',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by_id', sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['created_by_id'], ['taskflow_users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_taskflow_teams_created_by_id', 'taskflow_teams', ['created_by_id'])

    op.create_table('taskflow_team_members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('role', sa.String(length=200), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('created_by_id', sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.CheckConstraint('capacity >= 0', name='ck_taskflow_team_members_capacity'),
        sa.ForeignKeyConstraint(['team_id'], ['taskflow_teams.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by_id'], ['taskflow_users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_taskflow_team_members_team_id', 'taskflow_team_members', ['team_id'])
    op.create_index('idx_taskflow_team_members_created_by_id', 'taskflow_team_members', ['created_by_id'])

    op.create_table('taskflow_projects',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('team_id', sa.Integer(), nullable=True),
        sa.Column('created_by_id', sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['team_id'], ['taskflow_teams.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by_id'], ['taskflow_users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_taskflow_projects_created_by_id', 'taskflow_projects', ['created_by_id'])

    op.create_table('taskflow_tasks',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('priority', task_priority, nullable=False),
        sa.Column('status', task_status, nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('assignee_id', sa.Integer(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['project_id'], ['taskflow_projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['assignee_id'], ['taskflow_team_members.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['user_id'], ['taskflow_users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_taskflow_tasks_project_status', 'taskflow_tasks', ['project_id', 'status'])
    op.create_index('idx_taskflow_tasks_assignee_status', 'taskflow_tasks', ['assignee_id', 'status'])
    op.create_index('idx_taskflow_tasks_user_id', 'taskflow_tasks', ['user_id'])

    op.create_table('taskflow_activities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('task_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('assignee_from_id', sa.Integer(), nullable=True),
        sa.Column('assignee_to_id', sa.Integer(), nullable=True),
        sa.Column('from_value', sa.String(length=255), nullable=True),
        sa.Column('to_value', sa.String(length=255), nullable=True),
        sa.Column('activity_type', activity_type, nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['task_id'], ['taskflow_tasks.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['taskflow_users.id']),
        sa.ForeignKeyConstraint(['assignee_from_id'], ['taskflow_team_members.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['assignee_to_id'], ['taskflow_team_members.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_taskflow_activities_task_id', 'taskflow_activities', ['task_id'])
    op.create_index('idx_taskflow_activities_user_type', 'taskflow_activities', ['user_id', 'activity_type'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_taskflow_activities_user_type', table_name='taskflow_activities')
    op.drop_index('idx_taskflow_activities_task_id', table_name='taskflow_activities')
    op.drop_table('taskflow_activities')

    op.drop_index('idx_taskflow_tasks_user_id', table_name='taskflow_tasks')
    op.drop_index('idx_taskflow_tasks_assignee_status', table_name='taskflow_tasks')
    op.drop_index('idx_taskflow_tasks_project_status', table_name='taskflow_tasks')
    op.drop_table('taskflow_tasks')

    op.drop_index('idx_taskflow_projects_created_by_id', table_name='taskflow_projects')
    op.drop_table('taskflow_projects')

    op.drop_index('idx_taskflow_team_members_created_by_id', table_name='taskflow_team_members')
    op.drop_index('idx_taskflow_team_members_team_id', table_name='taskflow_team_members')
    op.drop_table('taskflow_team_members')

    op.drop_index('idx_taskflow_teams_created_by_id', table_name='taskflow_teams')
    op.drop_table('taskflow_teams')

    op.drop_table('taskflow_users')

    bind = op.get_bind()
    activity_type.drop(bind, checkfirst=True)
    task_status.drop(bind, checkfirst=True)
    task_priority.drop(bind, checkfirst=True)
