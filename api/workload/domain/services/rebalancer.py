import logging
from dataclasses import dataclass
from typing import Dict, List

from api.workload.config import Constants
from api.workload.domain.allocator import GreedyAllocator
from api.workload.domain.services.reassignment_applier import ReassignmentApplier
from api.workload.domain.services.snapshot_builder import SnapshotBuilder
from api.workload.domain.workload import (
    Classification, OverloadedMember, Reassignment, ResidualOverload,
    WorkloadLedger, WorkloadSnapshot, classify
)
from api.workload.infra.db.uow import UnitOfWork
from api.workload.schemas.rebalance import (
    GlobalRebalanceResponse, ProjectRebalanceResponse, ReassignmentResponse,
    RebalanceOutcome, ResidualOverloadResponse
)
from models.taskflow import Project

logger = logging.getLogger(__name__)


@dataclass
class ProjectPlan:
    snapshot: WorkloadSnapshot
    classification: Classification
    moves: List[Reassignment]


class WorkloadRebalancer:
    """
    Moves LOW/MEDIUM tasks off members whose load exceeds their capacity.

    Runs snapshot -> classify -> select -> allocate in memory and hands the
    resulting moves to the applier, which commits them in one transaction.
    A global run plans every project of the owner against one shared ledger
    and commits once at the end.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.snapshots = SnapshotBuilder(uow)
        self.applier = ReassignmentApplier(uow)

    def rebalance_project(self, owner_id: int, project_id: int) -> ProjectRebalanceResponse:
        project = self.snapshots.resolve_project(owner_id, project_id)
        ledger = WorkloadLedger()
        plan = self._plan_project(project, ledger)
        overloaded = plan.classification.overloaded

        if not overloaded:
            logger.info(f"No overloaded members: project_id={project_id}, owner_id={owner_id}")
            return ProjectRebalanceResponse(
                outcome=RebalanceOutcome.NO_OVERLOAD,
                message=Constants.MESSAGE_NO_OVERLOAD,
                project_id=project_id,
            )

        self.applier.apply(plan.moves, owner_id)
        unresolved = self._residuals(overloaded, ledger)

        logger.info(
            f"Project rebalanced: project_id={project_id}, owner_id={owner_id}, "
            f"overloaded={len(overloaded)}, moved={len(plan.moves)}, unresolved={len(unresolved)}"
        )

        return ProjectRebalanceResponse(
            outcome=self._outcome(plan.moves),
            message=(
                f"Successfully reassigned {len(plan.moves)} task(s)"
                if plan.moves else Constants.MESSAGE_NOT_REBALANCED
            ),
            project_id=project_id,
            moved_count=len(plan.moves),
            overloaded_member_count=len(overloaded),
            moves=[ReassignmentResponse.model_validate(m) for m in plan.moves],
            unresolved=unresolved,
        )

    def rebalance_all_projects(self, owner_id: int) -> GlobalRebalanceResponse:
        projects = self.uow.projects.list_for_owner(owner_id)
        if not projects:
            return GlobalRebalanceResponse(
                outcome=RebalanceOutcome.NO_OVERLOAD,
                message=Constants.MESSAGE_NO_PROJECTS,
            )

        ledger = WorkloadLedger()
        overloaded: Dict[int, OverloadedMember] = {}
        moves: List[Reassignment] = []

        for project in projects:
            if project.team is None:
                continue

            plan = self._plan_project(project, ledger)
            for member in plan.classification.overloaded:
                overloaded.setdefault(member.member_id, member)
            moves.extend(plan.moves)

        if not overloaded:
            logger.info(f"No overloaded members in any project: owner_id={owner_id}, projects={len(projects)}")
            return GlobalRebalanceResponse(
                outcome=RebalanceOutcome.NO_OVERLOAD,
                message=Constants.MESSAGE_NO_OVERLOAD_GLOBAL,
                projects_processed=len(projects),
            )

        self.applier.apply(moves, owner_id)
        unresolved = self._residuals(list(overloaded.values()), ledger)

        logger.info(
            f"All projects rebalanced: owner_id={owner_id}, projects={len(projects)}, "
            f"overloaded={len(overloaded)}, moved={len(moves)}, unresolved={len(unresolved)}"
        )

        return GlobalRebalanceResponse(
            outcome=self._outcome(moves),
            message=(
                f"Successfully reassigned {len(moves)} task(s) across {len(projects)} project(s) "
                f"(HIGH priority tasks kept with current assignee)"
                if moves else Constants.MESSAGE_NOT_REBALANCED
            ),
            projects_processed=len(projects),
            overloaded_member_count=len(overloaded),
            moved_count=len(moves),
            moves=[ReassignmentResponse.model_validate(m) for m in moves],
            unresolved=unresolved,
        )

    def count_overloaded_members(self, owner_id: int) -> int:
        members = self.uow.members.list_by_owner(owner_id)
        counts = self.uow.tasks.count_active_by_assignee(m.id for m in members)
        return sum(1 for m in members if counts.get(m.id, 0) > m.capacity)

    def _plan_project(self, project: Project, ledger: WorkloadLedger) -> ProjectPlan:
        snapshot = self.snapshots.build(project, ledger)
        classification = classify(snapshot, ledger)

        moves: List[Reassignment] = []
        if classification.overloaded:
            moves = GreedyAllocator(ledger).allocate(classification, project.id, project.name)

        return ProjectPlan(snapshot=snapshot, classification=classification, moves=moves)

    @staticmethod
    def _residuals(overloaded: List[OverloadedMember], ledger: WorkloadLedger) -> List[ResidualOverloadResponse]:
        residuals = []
        for member in overloaded:
            current = ledger.load(member.member_id)
            if current > member.capacity:
                residuals.append(ResidualOverloadResponse.model_validate(ResidualOverload(
                    member_id=member.member_id,
                    name=member.name,
                    capacity=member.capacity,
                    current_tasks=current,
                    remaining_excess=current - member.capacity,
                )))
        return residuals

    @staticmethod
    def _outcome(moves: List[Reassignment]) -> RebalanceOutcome:
        return RebalanceOutcome.REBALANCED if moves else RebalanceOutcome.NOT_REBALANCED
