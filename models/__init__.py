from models.taskflow import (
    User, Team, TeamMember, Project, Task, Activity,
    TaskPriority, TaskStatus, ActivityType
)

__all__ = [
    'User', 'Team', 'TeamMember', 'Project', 'Task', 'Activity',
    'TaskPriority', 'TaskStatus', 'ActivityType'
]
