"""Shared test fixtures and utilities for tasklist tests.

Provides:
- MockContext for isolating tests from global settings and environment
- Temporary workspace fixtures
- In-memory storage and store fixtures
"""

import io
import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from rich.console import Console

from tasklist.config import (
    TaskListSettings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from tasklist.persistence import MemoryDefaults
from tasklist.tasks import TaskStore


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Clearing TASKLIST_* environment variables
    - Providing a temporary workspace directory
    - Resetting the global settings singleton afterwards

    Usage:
        with MockContext() as ctx:
            store = TaskStore.from_settings(ctx.settings)
    """

    def __init__(self, **settings_kwargs) -> None:
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: TaskListSettings | None = None
        self._original_env: dict[str, str] = {}

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        workspace_dir = Path(self._temp_dir.name)

        for var in [k for k in os.environ if k.startswith("TASKLIST_")]:
            self._original_env[var] = os.environ.pop(var)

        self._settings = TaskListSettings(
            workspace_dir=workspace_dir,
            **self._settings_kwargs,
        )
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_context_settings(None)
        os.environ.update(self._original_env)
        reload_settings()
        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> TaskListSettings:
        """Get the test settings instance."""
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def workspace_dir(self) -> Path:
        """Get the temporary workspace directory."""
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated test context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Fixture providing a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def defaults() -> MemoryDefaults:
    """Fixture providing empty in-memory key-value storage."""
    return MemoryDefaults()


@pytest.fixture
def store(defaults: MemoryDefaults) -> TaskStore:
    """Fixture providing an empty store over in-memory storage."""
    return TaskStore(defaults)


@pytest.fixture
def console() -> Console:
    """Fixture providing a rich console that records into a buffer."""
    return Console(file=io.StringIO(), width=100, color_system=None)
