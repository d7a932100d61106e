from todotask.core.models import TaskRecord
from todotask.core.store import DeserializationError, StoreError, TaskStore, ValidationError

__all__ = [
    "DeserializationError",
    "StoreError",
    "TaskRecord",
    "TaskStore",
    "ValidationError",
]
