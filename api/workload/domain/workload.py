"""
In-memory workload model used by the rebalancing engine.

Everything here is rebuilt on each run from stored task assignments; nothing
is persisted. Loads are always cross-project counts of non-DONE tasks.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from models.taskflow import TaskPriority


@dataclass(frozen=True)
class CandidateTask:
    task_id: int
    name: str
    priority: TaskPriority
    assignee_id: int
    project_id: int


@dataclass(frozen=True)
class MemberLoad:
    member_id: int
    name: str
    capacity: int
    is_active: bool
    current_tasks: int


@dataclass
class WorkloadSnapshot:
    project_id: int
    project_name: str
    members: List[MemberLoad]
    tasks: List[CandidateTask]


@dataclass
class OverloadedMember:
    member_id: int
    name: str
    capacity: int
    current_tasks: int
    excess_tasks: int
    tasks: List[CandidateTask] = field(default_factory=list)


@dataclass
class AvailableMember:
    member_id: int
    name: str
    capacity: int
    current_tasks: int
    free_capacity: int


@dataclass
class Classification:
    overloaded: List[OverloadedMember]
    available: List[AvailableMember]


@dataclass(frozen=True)
class Reassignment:
    task_id: int
    task_name: str
    priority: TaskPriority
    from_member_id: int
    from_member_name: str
    to_member_id: int
    to_member_name: str
    project_id: int
    project_name: str


@dataclass(frozen=True)
class ResidualOverload:
    member_id: int
    name: str
    capacity: int
    current_tasks: int
    remaining_excess: int


class WorkloadLedger:
    """
    Current load per member for the duration of one rebalancing run.

    Seeded from stored counts the first time a member is seen; later seeds
    never overwrite a member already tracked, so moves planned for one project
    stay visible while the next project of the same run is classified.
    """

    def __init__(self):
        self._loads: Dict[int, int] = {}

    def seed(self, counts: Dict[int, int], member_ids: Iterable[int]) -> None:
        for member_id in member_ids:
            if member_id not in self._loads:
                self._loads[member_id] = counts.get(member_id, 0)

    def load(self, member_id: int) -> int:
        return self._loads.get(member_id, 0)

    def move(self, from_member_id: int, to_member_id: int) -> None:
        self._loads[from_member_id] = self.load(from_member_id) - 1
        self._loads[to_member_id] = self.load(to_member_id) + 1

    def __contains__(self, member_id: int) -> bool:
        return member_id in self._loads


def classify(snapshot: WorkloadSnapshot, ledger: Optional[WorkloadLedger] = None) -> Classification:
    """
    Partition the snapshot's members into overloaded and available lists.

    Overloaded members keep the snapshot's member order and carry the
    in-scope tasks currently assigned to them. Available members are limited
    to active members and sorted by free capacity, largest first, ties in
    member order. A member whose load equals capacity is in neither list.
    """
    tasks_by_member: Dict[int, List[CandidateTask]] = {m.member_id: [] for m in snapshot.members}
    for task in snapshot.tasks:
        if task.assignee_id in tasks_by_member:
            tasks_by_member[task.assignee_id].append(task)

    overloaded: List[OverloadedMember] = []
    available: List[AvailableMember] = []

    for member in snapshot.members:
        current = ledger.load(member.member_id) if ledger is not None else member.current_tasks
        if current > member.capacity:
            overloaded.append(OverloadedMember(
                member_id=member.member_id,
                name=member.name,
                capacity=member.capacity,
                current_tasks=current,
                excess_tasks=current - member.capacity,
                tasks=tasks_by_member[member.member_id],
            ))
        elif current < member.capacity and member.is_active:
            available.append(AvailableMember(
                member_id=member.member_id,
                name=member.name,
                capacity=member.capacity,
                current_tasks=current,
                free_capacity=member.capacity - current,
            ))

    # sort() is stable, so equal free capacity keeps member order
    available.sort(key=lambda m: -m.free_capacity)
    return Classification(overloaded=overloaded, available=available)
