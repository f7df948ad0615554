from typing import List

from api.workload.config import Constants
from api.workload.domain.workload import CandidateTask, OverloadedMember
from models.taskflow import Project


class ScopePolicy:
    @staticmethod
    def can_rebalance_project(project: Project, owner_id: int) -> bool:
        if project.created_by_id != owner_id:
            return False

        if project.team is None:
            return False

        return True


class MigrationPolicy:
    @staticmethod
    def is_movable(task: CandidateTask) -> bool:
        return task.priority not in Constants.PINNED_PRIORITIES

    @staticmethod
    def select_movable(tasks: List[CandidateTask]) -> List[CandidateTask]:
        """LOW before MEDIUM; sorted() is stable so ties keep input order."""
        movable = [t for t in tasks if MigrationPolicy.is_movable(t)]
        return sorted(movable, key=lambda t: Constants.MIGRATION_RANK[t.priority])

    @staticmethod
    def tasks_to_migrate(member: OverloadedMember) -> List[CandidateTask]:
        movable = MigrationPolicy.select_movable(member.tasks)
        return movable[:min(member.excess_tasks, len(movable))]
