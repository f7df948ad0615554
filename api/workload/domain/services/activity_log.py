from typing import List, Optional

from api.workload.config import Constants
from api.workload.infra.db.uow import UnitOfWork
from api.workload.schemas.activity import ActivityResponse, PaginatedActivityResponse
from common.pagination import paginate


class ActivityLog:
    """Read side of the audit trail written by the reassignment applier."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def recent_reassignments(
        self,
        owner_id: int,
        limit: int = Constants.ACTIVITY_LOG_RECENT_LIMIT
    ) -> List[ActivityResponse]:
        activities = self.uow.activities.list_recent_reassignments(owner_id, limit=limit)
        return [ActivityResponse.model_validate(a) for a in activities]

    def list_activities(
        self,
        owner_id: int,
        page: int = 1,
        page_size: int = 10,
        search: Optional[str] = None
    ) -> PaginatedActivityResponse:
        query = self.uow.activities.query_for_owner(owner_id, search=search)
        result = paginate(
            query,
            page=page,
            page_size=page_size,
            max_page_size=Constants.ACTIVITY_LOG_MAX_PAGE_SIZE
        )

        return PaginatedActivityResponse(
            activities=[ActivityResponse.model_validate(a) for a in result.items],
            total_count=result.total,
            page=result.page,
            size=result.page_size,
            total_pages=result.total_pages,
        )
