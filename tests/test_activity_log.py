"""
Tests for the reassignment activity log read side.
"""

import pytest

from api.workload.domain.services.activity_log import ActivityLog
from api.workload.domain.services.rebalancer import WorkloadRebalancer
from api.workload.infra.db.uow import UnitOfWork
from models.taskflow import Activity, ActivityType, TaskPriority

LOW = TaskPriority.LOW


@pytest.fixture
def rebalanced(db, workspace):
    """Two LOW tasks moved from Alice to Bob in project Apollo."""
    owner = workspace.owner()
    team, (alice, bob) = workspace.team(owner, [("Alice", 1), ("Bob", 5)])
    project = workspace.project(owner, team, name="Apollo")
    workspace.tasks(project, alice, LOW, LOW, LOW)
    WorkloadRebalancer(UnitOfWork(db)).rebalance_project(owner.id, project.id)
    return owner, alice, bob


class TestRecentReassignments:
    """Tests for ActivityLog.recent_reassignments()."""

    def test_lists_reassignments_newest_first(self, db, rebalanced):
        owner, alice, bob = rebalanced

        activities = ActivityLog(UnitOfWork(db)).recent_reassignments(owner.id)

        assert len(activities) == 2
        assert activities[0].id > activities[1].id
        assert all(a.activity_type == ActivityType.TASK_REASSIGNED for a in activities)
        assert activities[0].assignee_from.name == "Alice"
        assert activities[0].assignee_to.name == "Bob"

    def test_respects_limit(self, db, rebalanced):
        owner, _, _ = rebalanced

        assert len(ActivityLog(UnitOfWork(db)).recent_reassignments(owner.id, limit=1)) == 1

    def test_skips_other_activity_types(self, db, rebalanced):
        owner, alice, _ = rebalanced
        task_id = db.query(Activity.task_id).first()[0]
        db.add(Activity(
            task_id=task_id,
            user_id=owner.id,
            assignee_to_id=alice.id,
            activity_type=ActivityType.TASK_ASSIGNED,
        ))
        db.commit()

        activities = ActivityLog(UnitOfWork(db)).recent_reassignments(owner.id)

        assert len(activities) == 2

    def test_other_owners_see_nothing(self, db, workspace, rebalanced):
        stranger = workspace.owner()

        assert ActivityLog(UnitOfWork(db)).recent_reassignments(stranger.id) == []


class TestListActivities:
    """Tests for ActivityLog.list_activities()."""

    def test_paginates(self, db, rebalanced):
        owner, _, _ = rebalanced

        page = ActivityLog(UnitOfWork(db)).list_activities(owner.id, page=2, page_size=1)

        assert page.total_count == 2
        assert page.total_pages == 2
        assert page.page == 2
        assert len(page.activities) == 1

    @pytest.mark.parametrize("search, expected", [
        ("apollo", 2),
        ("BOB", 2),
        ("alice #1", 1),
        ("nobody", 0),
    ])
    def test_search_matches_task_project_and_member_names(self, db, rebalanced, search, expected):
        owner, _, _ = rebalanced

        page = ActivityLog(UnitOfWork(db)).list_activities(owner.id, search=search)

        assert page.total_count == expected

    def test_rejects_oversized_page(self, db, rebalanced):
        owner, _, _ = rebalanced

        with pytest.raises(ValueError):
            ActivityLog(UnitOfWork(db)).list_activities(owner.id, page_size=1000)
