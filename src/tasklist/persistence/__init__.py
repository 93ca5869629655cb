"""Persistence module for tasklist."""

from tasklist.persistence.defaults import FileDefaults, KeyValueStore, MemoryDefaults

__all__ = [
    "FileDefaults",
    "KeyValueStore",
    "MemoryDefaults",
]
