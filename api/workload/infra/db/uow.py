from sqlalchemy.orm import Session

from api.workload.infra.db.repositories import (
    ProjectRepository,
    TeamMemberRepository,
    TaskRepository,
    ActivityRepository
)


class UnitOfWork:
    def __init__(self, db: Session):
        self.db = db
        self.projects = ProjectRepository(db)
        self.members = TeamMemberRepository(db)
        self.tasks = TaskRepository(db)
        self.activities = ActivityRepository(db)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
