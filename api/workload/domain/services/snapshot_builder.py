import logging
from typing import List

from api.workload.domain.policies import ScopePolicy
from api.workload.domain.workload import (
    CandidateTask, MemberLoad, WorkloadLedger, WorkloadSnapshot
)
from api.workload.exceptions import ScopeNotFoundError
from api.workload.infra.db.uow import UnitOfWork
from models.taskflow import Project

logger = logging.getLogger(__name__)


class SnapshotBuilder:
    """
    Reads the stored assignments for one project scope.

    Candidate tasks are limited to the project, but every member's load is
    counted across all projects so a member saturated elsewhere is never
    handed more work.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def resolve_project(self, owner_id: int, project_id: int) -> Project:
        project = self.uow.projects.get_for_owner(project_id, owner_id)
        if not project or not ScopePolicy.can_rebalance_project(project, owner_id):
            logger.info(f"Rebalance scope not found: project_id={project_id}, owner_id={owner_id}")
            raise ScopeNotFoundError(project_id)
        return project

    def build(self, project: Project, ledger: WorkloadLedger) -> WorkloadSnapshot:
        members = self.uow.members.list_by_team(project.team_id)
        member_ids = [m.id for m in members]

        counts = self.uow.tasks.count_active_by_assignee(member_ids)
        ledger.seed(counts, member_ids)

        member_loads: List[MemberLoad] = [
            MemberLoad(
                member_id=m.id,
                name=m.name,
                capacity=m.capacity,
                is_active=m.is_active,
                current_tasks=ledger.load(m.id),
            )
            for m in members
        ]

        team_member_ids = set(member_ids)
        tasks: List[CandidateTask] = [
            CandidateTask(
                task_id=t.id,
                name=t.name,
                priority=t.priority,
                assignee_id=t.assignee_id,
                project_id=t.project_id,
            )
            for t in self.uow.tasks.list_movable(project.id)
            if t.assignee_id in team_member_ids
        ]

        logger.info(
            f"Workload snapshot built: project_id={project.id}, "
            f"members={len(member_loads)}, candidate_tasks={len(tasks)}"
        )

        return WorkloadSnapshot(
            project_id=project.id,
            project_name=project.name,
            members=member_loads,
            tasks=tasks,
        )
