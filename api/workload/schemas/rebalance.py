import enum
from typing import List

from pydantic import BaseModel

from models.taskflow import TaskPriority


class RebalanceOutcome(str, enum.Enum):
    NO_OVERLOAD = "no_overload"
    REBALANCED = "rebalanced"
    NOT_REBALANCED = "not_rebalanced"


class ReassignmentResponse(BaseModel):
    task_id: int
    task_name: str
    priority: TaskPriority
    project_id: int
    project_name: str
    from_member_id: int
    from_member_name: str
    to_member_id: int
    to_member_name: str

    class Config:
        from_attributes = True


class ResidualOverloadResponse(BaseModel):
    member_id: int
    name: str
    capacity: int
    current_tasks: int
    remaining_excess: int

    class Config:
        from_attributes = True


class ProjectRebalanceResponse(BaseModel):
    outcome: RebalanceOutcome
    message: str
    project_id: int
    moved_count: int = 0
    overloaded_member_count: int = 0
    moves: List[ReassignmentResponse] = []
    unresolved: List[ResidualOverloadResponse] = []


class GlobalRebalanceResponse(BaseModel):
    outcome: RebalanceOutcome
    message: str
    projects_processed: int = 0
    overloaded_member_count: int = 0
    moved_count: int = 0
    moves: List[ReassignmentResponse] = []
    unresolved: List[ResidualOverloadResponse] = []


class OverloadedMemberCountResponse(BaseModel):
    count: int
