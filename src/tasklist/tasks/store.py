"""Persistent, observable task list.

The TaskStore owns the ordered list of tasks. Every mutation rewrites the
whole list under one key of a key-value store and then notifies
subscribers, which is how the presentation layer learns to re-render.

Storage failures never reach the caller: an unreadable or corrupt value
loads as an empty list, and a failed write leaves the previously persisted
value in place. Both are logged.
"""

import json
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Any

from tasklist.config import TaskListSettings
from tasklist.constants import STORAGE_FORMAT_VERSION, TASKS_KEY
from tasklist.logging import Loggers
from tasklist.persistence.defaults import FileDefaults, KeyValueStore
from tasklist.tasks.models import Task

logger = Loggers.store()

TaskListener = Callable[[list[Task]], None]


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks into the versioned envelope.

    Raises:
        TypeError, ValueError: a task holds a value JSON cannot encode.
    """
    return json.dumps(
        {
            "version": STORAGE_FORMAT_VERSION,
            "tasks": [task.to_dict() for task in tasks],
        },
        ensure_ascii=False,
    )


def decode_tasks(raw: str) -> list[Task]:
    """Deserialize a persisted task list.

    Accepts the versioned envelope ``{"version": 1, "tasks": [...]}`` and
    the bare ``[...]`` list written before versioning existed.

    Raises:
        ValueError: malformed JSON, unsupported version or duplicate ids.
        KeyError, TypeError: malformed task records.
    """
    data = json.loads(raw)
    if isinstance(data, dict):
        version = data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            raise ValueError("missing or invalid storage version")
        if version > STORAGE_FORMAT_VERSION:
            raise ValueError(f"unsupported storage version {version}")
        records = data["tasks"]
    else:
        records = data
    if not isinstance(records, list):
        raise TypeError(f"task list must be an array, got {type(records).__name__}")

    tasks = [Task.from_dict(record) for record in records]
    seen: set[str] = set()
    for task in tasks:
        if task.id in seen:
            raise ValueError(f"duplicate task id {task.id}")
        seen.add(task.id)
    return tasks


class TaskStore:
    """Single source of truth for the task list and its persistence.

    The store hydrates itself from storage on construction. Positions are
    indexes into the current list order. Invalid positions reject the whole
    call with ``IndexError`` before anything changes.

    Example:
        >>> store = TaskStore(MemoryDefaults())
        >>> task = store.add_task("Buy milk")
        >>> store.toggle_completed(0)
        >>> store.tasks[0].is_completed
        True
    """

    def __init__(self, defaults: KeyValueStore, key: str = TASKS_KEY) -> None:
        self._defaults = defaults
        self._key = key
        self._tasks: list[Task] = []
        self._listeners: list[TaskListener] = []
        self.load()

    @classmethod
    def from_settings(cls, settings: TaskListSettings) -> "TaskStore":
        """Create a store over the file-backed defaults named by settings."""
        return cls(FileDefaults(settings.defaults_path), key=settings.tasks_key)

    # ---- persistence ----

    def load(self) -> None:
        """Replace the in-memory list with the persisted one.

        Missing, unreadable or undecodable data yields an empty list.
        """
        self._tasks = self._read()
        logger.debug("tasks_loaded", key=self._key, count=len(self._tasks))
        self._notify()

    def _read(self) -> list[Task]:
        try:
            raw = self._defaults.get(self._key)
        except OSError as e:
            logger.warning("tasks_read_failed", key=self._key, error=str(e))
            return []
        if raw is None:
            return []
        try:
            return decode_tasks(raw)
        except (ValueError, KeyError, TypeError, RecursionError) as e:
            logger.warning("tasks_decode_failed", key=self._key, error=repr(e))
            return []

    def save(self) -> None:
        """Persist the whole current list.

        Serialization or write failures skip the write; whatever was
        persisted before stays as it was.
        """
        try:
            payload = encode_tasks(self._tasks)
            # Lone surrogates survive json.dumps but not a UTF-8 write.
            payload.encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.warning("tasks_encode_failed", key=self._key, error=str(e))
            return
        try:
            self._defaults.set(self._key, payload)
        except (OSError, ValueError) as e:
            logger.warning("tasks_write_failed", key=self._key, error=str(e))
            return
        logger.debug("tasks_saved", key=self._key, count=len(self._tasks))

    # ---- observation ----

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every change.

        Returns:
            A function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.tasks)

    def _commit(self) -> None:
        self.save()
        self._notify()

    # ---- positional mutations ----

    def _check_position(self, position: Any) -> int:
        if isinstance(position, bool) or not isinstance(position, int):
            raise IndexError(f"task position must be an integer, got {position!r}")
        if not 0 <= position < len(self._tasks):
            raise IndexError(
                f"task position {position} out of range for {len(self._tasks)} tasks"
            )
        return position

    def add_task(self, title: str) -> Task:
        """Append a new open task. The title is stored as given."""
        task = Task.create(title)
        self._tasks.append(task)
        logger.info("task_added", task_id=task.id, count=len(self._tasks))
        self._commit()
        return task

    def delete_tasks(self, positions: Iterable[int]) -> None:
        """Remove the tasks at ``positions`` in one batch.

        Raises:
            IndexError: any position is invalid. Nothing is removed.
        """
        doomed = {self._check_position(p) for p in positions}
        if not doomed:
            return
        removed = [self._tasks[p].id for p in sorted(doomed)]
        self._tasks = [t for i, t in enumerate(self._tasks) if i not in doomed]
        logger.info("tasks_deleted", task_ids=removed, count=len(self._tasks))
        self._commit()

    def toggle_completed(self, position: int) -> None:
        """Flip the completion flag of the task at ``position``.

        Raises:
            IndexError: the position is invalid.
        """
        task = self._tasks[self._check_position(position)]
        task.is_completed = not task.is_completed
        logger.info("task_toggled", task_id=task.id, is_completed=task.is_completed)
        self._commit()

    # ---- id-keyed access ----

    def get(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        index = self.index_of(task_id)
        return None if index is None else self._tasks[index]

    def index_of(self, task_id: str) -> int | None:
        """Current position of the task with ``task_id``, if held."""
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def toggle_task(self, task_id: str) -> bool:
        """Toggle a task by ID.

        Returns:
            True if toggled, False if the task was not found.
        """
        index = self.index_of(task_id)
        if index is None:
            return False
        self.toggle_completed(index)
        return True

    def delete_task(self, task_id: str) -> bool:
        """Delete a task by ID.

        Returns:
            True if deleted, False if the task was not found.
        """
        index = self.index_of(task_id)
        if index is None:
            return False
        self.delete_tasks([index])
        return True

    # ---- read access ----

    @property
    def tasks(self) -> list[Task]:
        """Snapshot of the tasks in display order.

        The snapshot holds copies, so later mutations do not show up in it.
        """
        return [replace(task) for task in self._tasks]

    def is_empty(self) -> bool:
        """Check if the store holds no tasks."""
        return not self._tasks

    def __len__(self) -> int:
        return len(self._tasks)
