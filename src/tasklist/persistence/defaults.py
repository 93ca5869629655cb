"""Local key-value storage for small pieces of application state.

Plays the role of a platform "user defaults" database: a flat mapping of
string keys to string values that survives restarts. ``FileDefaults`` keeps
the mapping in a single JSON file; ``MemoryDefaults`` keeps it in a dict.

Example:
    >>> defaults = FileDefaults(settings.defaults_path)
    >>> defaults.set("tasks", "[]")
    >>> defaults.get("tasks")
    '[]'
"""

import json
from pathlib import Path
from typing import Protocol

from tasklist.logging import Loggers
from tasklist.persistence._utils import atomic_write_json

logger = Loggers.persistence()


class KeyValueStore(Protocol):
    """Minimal key-value storage interface used by the task store."""

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...


class MemoryDefaults:
    """In-process key-value store. Contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._values


class FileDefaults:
    """Key-value store backed by one JSON object file.

    Reads never raise: a missing file, an unreadable file or a file that
    does not hold a JSON object all read as an empty mapping. Writes go
    through a temporary file and a rename, so the previous contents survive
    a failed write. Write errors (``OSError``, or ``UnicodeEncodeError`` for
    text that is not valid UTF-8) propagate.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("defaults_read_failed", path=str(self._path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning(
                "defaults_not_a_mapping",
                path=str(self._path),
                found=type(data).__name__,
            )
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._read_all()
        values[key] = value
        atomic_write_json(self._path, values)
        logger.debug("defaults_written", path=str(self._path), key=key, size=len(value))

    def remove(self, key: str) -> None:
        values = self._read_all()
        if key not in values:
            return
        del values[key]
        atomic_write_json(self._path, values)

    def __contains__(self, key: str) -> bool:
        return key in self._read_all()
