from models.taskflow import TaskPriority


class Constants:
    ACTIVITY_LOG_RECENT_LIMIT = 10
    ACTIVITY_LOG_MAX_PAGE_SIZE = 100

    # Lower rank moves first; HIGH never moves
    MIGRATION_RANK = {
        TaskPriority.LOW: 1,
        TaskPriority.MEDIUM: 2,
    }
    PINNED_PRIORITIES = frozenset({TaskPriority.HIGH})

    MESSAGE_NO_OVERLOAD = "No overloaded members found. All tasks are within capacity."
    MESSAGE_NO_OVERLOAD_GLOBAL = "No overloaded tasks found across all projects. All tasks are within capacity."
    MESSAGE_NO_PROJECTS = "No projects found for this user."
    MESSAGE_NOT_REBALANCED = (
        "Overloaded members found, but no task could be moved "
        "(no free capacity or only HIGH priority tasks)."
    )
