from fastapi import APIRouter, Depends, HTTPException, status
import logging

from api.workload.dependencies import get_auth_context, get_uow, AuthContext
from api.workload.infra.db.uow import UnitOfWork
from api.workload.domain.services.rebalancer import WorkloadRebalancer
from api.workload.exceptions import ScopeNotFoundError, ReassignmentCommitError
from api.workload.schemas.rebalance import (
    ProjectRebalanceResponse,
    GlobalRebalanceResponse,
    OverloadedMemberCountResponse
)

logger = logging.getLogger(__name__)

rebalance_router = APIRouter(tags=["Workload Rebalancing"])


@rebalance_router.post("/reassign-all", response_model=GlobalRebalanceResponse, status_code=status.HTTP_200_OK)
async def reassign_all_overloaded_tasks(
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Rebalance every project owned by the caller.

    Member load is counted across all projects. HIGH priority tasks always
    stay with their current assignee. All moves are committed together.
    """
    try:
        response = WorkloadRebalancer(uow).rebalance_all_projects(auth.owner_id)

        logger.info(
            f"Global rebalance finished: owner_id={auth.owner_id}, "
            f"projects={response.projects_processed}, moved={response.moved_count}"
        )

        return response

    except ReassignmentCommitError as e:
        logger.error(f"Global rebalance commit failed: owner_id={auth.owner_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to commit task reassignments"
        )


@rebalance_router.post("/reassign/{project_id}", response_model=ProjectRebalanceResponse, status_code=status.HTTP_200_OK)
async def reassign_project_tasks(
    project_id: int,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Rebalance a single project.

    - **project_id**: Project owned by the caller; its team's overloaded
      members hand LOW, then MEDIUM, tasks to members with free capacity.
    """
    try:
        response = WorkloadRebalancer(uow).rebalance_project(auth.owner_id, project_id)

        logger.info(
            f"Project rebalance finished: project_id={project_id}, "
            f"owner_id={auth.owner_id}, moved={response.moved_count}"
        )

        return response

    except ScopeNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except ReassignmentCommitError as e:
        logger.error(
            f"Project rebalance commit failed: project_id={project_id}, "
            f"owner_id={auth.owner_id}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to commit task reassignments"
        )


@rebalance_router.get("/overloaded-member-count", response_model=OverloadedMemberCountResponse)
async def get_overloaded_member_count(
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_uow)
):
    """Number of the caller's team members currently above capacity."""
    count = WorkloadRebalancer(uow).count_overloaded_members(auth.owner_id)
    return OverloadedMemberCountResponse(count=count)
