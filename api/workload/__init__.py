"""
Workload Rebalancing Module

Detects team members whose active task count exceeds their capacity and
moves their LOW/MEDIUM priority tasks to teammates with free capacity,
recording one TASK_REASSIGNED activity per move.

Endpoints:
- POST /tasks/reassign/{project_id} - Rebalance one project
- POST /tasks/reassign-all - Rebalance every project of the caller
- GET /tasks/overloaded-member-count - Count members above capacity
- GET /tasks/activity-log - Latest reassignments
- GET /tasks/activities - Paginated activity log with search
"""

from api.workload.router import workload_router

__all__ = ["workload_router"]
