"""Task data model and its serialized record form."""

import uuid
from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class Task:
    """A single to-do item.

    Identity is the ``id`` alone: two tasks with the same id are equal
    whatever their title or completion flag, and hash alike.
    """

    id: str
    title: str
    is_completed: bool = False

    @classmethod
    def create(cls, title: str) -> "Task":
        """Build a new open task with a fresh identifier."""
        return cls(id=str(uuid.uuid4()), title=title)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Decode one persisted record.

        All three fields are required. The id must be a UUID in text form;
        its original spelling is kept so it round-trips unchanged.

        Raises:
            KeyError: a field is missing.
            TypeError: the record or a field has the wrong type.
            ValueError: the id is not a UUID.
        """
        if not isinstance(data, dict):
            raise TypeError(f"task record must be an object, got {type(data).__name__}")
        task_id = data["id"]
        title = data["title"]
        is_completed = data["isCompleted"]
        if not isinstance(task_id, str):
            raise TypeError("task id must be a string")
        uuid.UUID(task_id)
        if not isinstance(title, str):
            raise TypeError("task title must be a string")
        if not isinstance(is_completed, bool):
            raise TypeError("task isCompleted must be a boolean")
        return cls(id=task_id, title=title, is_completed=is_completed)
