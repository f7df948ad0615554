import heapq
import logging
from typing import List, Optional, Tuple

from api.workload.domain.policies import MigrationPolicy
from api.workload.domain.workload import (
    AvailableMember, Classification, Reassignment, WorkloadLedger
)

logger = logging.getLogger(__name__)


class AvailablePool:
    """
    Members with spare capacity, ordered by free capacity (largest first).

    Ties keep the current list order: members start in the classifier's
    order, and a member that just took a task stays ahead of every member
    already at its new free capacity.
    """

    def __init__(self, members: List[AvailableMember]):
        self._heap: List[Tuple[int, int, AvailableMember]] = [
            (-m.free_capacity, seq, m) for seq, m in enumerate(members) if m.free_capacity > 0
        ]
        heapq.heapify(self._heap)
        # Decreasing, so a re-inserted member sorts before existing equals
        self._next_seq = -1

    def __len__(self) -> int:
        return len(self._heap)

    def peek(self) -> Optional[AvailableMember]:
        return self._heap[0][2] if self._heap else None

    def take_slot(self) -> Optional[AvailableMember]:
        """Consume one unit of capacity from the head member."""
        if not self._heap:
            return None
        _, _, member = heapq.heappop(self._heap)
        member.free_capacity -= 1
        member.current_tasks += 1
        if member.free_capacity > 0:
            heapq.heappush(self._heap, (-member.free_capacity, self._next_seq, member))
            self._next_seq -= 1
        return member


class GreedyAllocator:
    def __init__(self, ledger: WorkloadLedger):
        self.ledger = ledger

    def allocate(
        self,
        classification: Classification,
        project_id: int,
        project_name: str
    ) -> List[Reassignment]:
        pool = AvailablePool(classification.available)
        moves: List[Reassignment] = []

        for member in classification.overloaded:
            for task in MigrationPolicy.tasks_to_migrate(member):
                target = pool.take_slot()
                if target is None:
                    logger.info(
                        f"Free capacity exhausted: project_id={project_id}, "
                        f"moves={len(moves)}"
                    )
                    return moves

                moves.append(Reassignment(
                    task_id=task.task_id,
                    task_name=task.name,
                    priority=task.priority,
                    from_member_id=member.member_id,
                    from_member_name=member.name,
                    to_member_id=target.member_id,
                    to_member_name=target.name,
                    project_id=project_id,
                    project_name=project_name,
                ))
                self.ledger.move(member.member_id, target.member_id)

        return moves
