from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from models.taskflow import ActivityType


class ActivityMemberRef(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ActivityTaskRef(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ActivityResponse(BaseModel):
    id: int
    activity_type: ActivityType
    task: ActivityTaskRef
    assignee_from: Optional[ActivityMemberRef] = None
    assignee_to: Optional[ActivityMemberRef] = None
    from_value: Optional[str] = None
    to_value: Optional[str] = None
    created_on: datetime

    class Config:
        from_attributes = True


class PaginatedActivityResponse(BaseModel):
    activities: List[ActivityResponse]
    total_count: int
    page: int
    size: int
    total_pages: int
