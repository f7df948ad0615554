from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
import logging

from api.workload.config import Constants
from api.workload.dependencies import get_auth_context, get_uow, AuthContext
from api.workload.infra.db.uow import UnitOfWork
from api.workload.domain.services.activity_log import ActivityLog
from api.workload.schemas.activity import ActivityResponse, PaginatedActivityResponse

logger = logging.getLogger(__name__)

activity_router = APIRouter(tags=["Task Activity"])


@activity_router.get("/activity-log", response_model=List[ActivityResponse])
async def get_task_activity_log(
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_uow)
):
    """Latest task reassignments made on behalf of the caller."""
    return ActivityLog(uow).recent_reassignments(auth.owner_id)


@activity_router.get("/activities", response_model=PaginatedActivityResponse)
async def list_task_activities(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=Constants.ACTIVITY_LOG_MAX_PAGE_SIZE),
    search: Optional[str] = Query(None, description="Match task, project or member names"),
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_uow)
):
    try:
        return ActivityLog(uow).list_activities(
            auth.owner_id,
            page=page,
            page_size=page_size,
            search=search
        )
    except ValueError as e:
        logger.error(f"Error listing activities: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
