"""
Main router for the workload API.

Combines the rebalancing and activity routes under /tasks so the router can
be included in the main FastAPI application.
"""
from fastapi import APIRouter

from api.workload.api.routes_rebalance import rebalance_router
from api.workload.api.routes_activity import activity_router

workload_router = APIRouter(prefix="/tasks")

workload_router.include_router(rebalance_router)
workload_router.include_router(activity_router)

__all__ = ["workload_router", "rebalance_router", "activity_router"]
