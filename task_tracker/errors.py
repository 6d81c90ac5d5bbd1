class TaskTrackerError(Exception):
    """Base class for task tracker domain errors."""


class TaskNotFoundError(TaskTrackerError, LookupError):
    """Raised when no task matches the requested id."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")
