class RebalancingError(Exception):
    """Base class for failures surfaced by the rebalancing engine."""


class ScopeNotFoundError(RebalancingError):
    def __init__(self, project_id: int):
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found")


class ReassignmentCommitError(RebalancingError):
    def __init__(self, message: str, move_count: int = 0):
        self.move_count = move_count
        super().__init__(message)
