from .task import PRIORITY_ORDER, Priority, Task, TaskStatus, utcnow

# Export all models for easy importing
__all__ = ["Task", "TaskStatus", "Priority", "PRIORITY_ORDER", "utcnow"]
