import logging
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError

from api.workload.domain.workload import Reassignment
from api.workload.exceptions import ReassignmentCommitError
from api.workload.infra.db.uow import UnitOfWork
from models.taskflow import Activity, ActivityType

logger = logging.getLogger(__name__)


class ReassignmentApplier:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def apply(self, moves: List[Reassignment], owner_id: int) -> None:
        """
        Persist every move and its TASK_REASSIGNED activity in one commit.

        Either all assignee updates and all activities are committed or the
        session is rolled back and ReassignmentCommitError is raised.
        """
        if not moves:
            return

        task_ids_by_target: Dict[int, List[int]] = {}
        for move in moves:
            task_ids_by_target.setdefault(move.to_member_id, []).append(move.task_id)

        try:
            for assignee_id, task_ids in task_ids_by_target.items():
                updated = self.uow.tasks.reassign(task_ids, assignee_id)
                if updated != len(task_ids):
                    raise ReassignmentCommitError(
                        f"Expected to reassign {len(task_ids)} task(s) to member {assignee_id}, "
                        f"updated {updated}",
                        move_count=len(moves)
                    )

            self.uow.activities.create_many([
                Activity(
                    task_id=move.task_id,
                    user_id=owner_id,
                    assignee_from_id=move.from_member_id,
                    assignee_to_id=move.to_member_id,
                    from_value=str(move.from_member_id),
                    to_value=str(move.to_member_id),
                    activity_type=ActivityType.TASK_REASSIGNED,
                )
                for move in moves
            ])

            self.uow.commit()
        except ReassignmentCommitError:
            self.uow.rollback()
            logger.error(f"Reassignment commit aborted: owner_id={owner_id}, moves={len(moves)}")
            raise
        except SQLAlchemyError as e:
            self.uow.rollback()
            logger.error(
                f"Reassignment commit failed: owner_id={owner_id}, moves={len(moves)}: {str(e)}",
                exc_info=True
            )
            raise ReassignmentCommitError(
                f"Failed to commit {len(moves)} reassignment(s)",
                move_count=len(moves)
            ) from e

        logger.info(
            f"Reassignments committed: owner_id={owner_id}, moves={len(moves)}, "
            f"targets={len(task_ids_by_target)}"
        )
