from .task import PRIORITY_RANK, Priority, Task, as_utc, utcnow

# Export all models for easy importing
__all__ = ["Task", "Priority", "PRIORITY_RANK", "as_utc", "utcnow"]
