"""Task list state and persistence.

Provides the Task model and the TaskStore that owns the ordered task
list, persists it after every change and notifies subscribers.

Example:
    >>> store = TaskStore.from_settings(settings)
    >>> task = store.add_task("Buy milk")
    >>> store.toggle_task(task.id)
    True
"""

from tasklist.tasks.models import Task
from tasklist.tasks.store import TaskStore, decode_tasks, encode_tasks

__all__ = ["Task", "TaskStore", "decode_tasks", "encode_tasks"]
