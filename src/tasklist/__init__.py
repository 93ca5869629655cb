"""tasklist - a small to-do list with local persistence.

Tasks are kept in an ordered, observable TaskStore that rewrites the whole
list to a local key-value store after every change. A prompt_toolkit/rich
terminal app sits on top as the presentation layer.
"""

from tasklist.config import (
    SettingsContext,
    TaskListSettings,
    get_context_settings,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from tasklist.persistence import FileDefaults, KeyValueStore, MemoryDefaults
from tasklist.tasks import Task, TaskStore

__all__ = [
    # Tasks
    "Task",
    "TaskStore",
    # Storage
    "FileDefaults",
    "KeyValueStore",
    "MemoryDefaults",
    # Settings
    "TaskListSettings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "reload_settings",
]
