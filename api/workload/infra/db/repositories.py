from typing import Dict, Iterable, List, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session, joinedload

from models.taskflow import (
    Activity, ActivityType, Project, Task, TaskStatus, TeamMember
)


class ProjectRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_for_owner(self, project_id: int, owner_id: int) -> Optional[Project]:
        return self.db.query(Project).options(joinedload(Project.team)).filter(
            and_(
                Project.id == project_id,
                Project.created_by_id == owner_id
            )
        ).first()

    def list_for_owner(self, owner_id: int) -> List[Project]:
        return self.db.query(Project).options(joinedload(Project.team)).filter(
            Project.created_by_id == owner_id
        ).order_by(Project.id).all()


class TeamMemberRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_by_team(self, team_id: int) -> List[TeamMember]:
        return self.db.query(TeamMember).filter(
            TeamMember.team_id == team_id
        ).order_by(TeamMember.id).all()

    def list_by_owner(self, owner_id: int) -> List[TeamMember]:
        return self.db.query(TeamMember).filter(
            TeamMember.created_by_id == owner_id
        ).order_by(TeamMember.id).all()


class TaskRepository:
    def __init__(self, db: Session):
        self.db = db

    def count_active_by_assignee(self, member_ids: Iterable[int]) -> Dict[int, int]:
        """Non-DONE task count per member, across every project."""
        member_ids = list(member_ids)
        if not member_ids:
            return {}

        rows = self.db.query(Task.assignee_id, func.count(Task.id)).filter(
            and_(
                Task.assignee_id.in_(member_ids),
                Task.status != TaskStatus.DONE
            )
        ).group_by(Task.assignee_id).all()

        return {assignee_id: count for assignee_id, count in rows}

    def list_movable(self, project_id: int) -> List[Task]:
        return self.db.query(Task).filter(
            and_(
                Task.project_id == project_id,
                Task.status != TaskStatus.DONE,
                Task.assignee_id.isnot(None)
            )
        ).order_by(Task.created_on, Task.id).all()

    def reassign(self, task_ids: List[int], assignee_id: int) -> int:
        updated = self.db.query(Task).filter(
            Task.id.in_(task_ids)
        ).update({Task.assignee_id: assignee_id}, synchronize_session=False)
        self.db.flush()
        return updated


class ActivityRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_many(self, activities: List[Activity]) -> List[Activity]:
        self.db.add_all(activities)
        self.db.flush()
        return activities

    def list_recent_reassignments(self, owner_id: int, limit: int = 10) -> List[Activity]:
        return self._with_names(self.db.query(Activity)).filter(
            and_(
                Activity.user_id == owner_id,
                Activity.activity_type == ActivityType.TASK_REASSIGNED,
                Activity.assignee_from_id.isnot(None),
                Activity.assignee_to_id.isnot(None)
            )
        ).order_by(Activity.created_on.desc(), Activity.id.desc()).limit(limit).all()

    def query_for_owner(self, owner_id: int, search: Optional[str] = None):
        query = self._with_names(self.db.query(Activity)).filter(Activity.user_id == owner_id)

        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Activity.task.has(Task.name.ilike(pattern)),
                    Activity.task.has(Task.project.has(Project.name.ilike(pattern))),
                    Activity.task.has(Task.assignee.has(TeamMember.name.ilike(pattern))),
                    Activity.assignee_from.has(TeamMember.name.ilike(pattern)),
                    Activity.assignee_to.has(TeamMember.name.ilike(pattern))
                )
            )

        return query.order_by(Activity.created_on.desc(), Activity.id.desc())

    @staticmethod
    def _with_names(query):
        return query.options(
            joinedload(Activity.task),
            joinedload(Activity.assignee_from),
            joinedload(Activity.assignee_to)
        )
