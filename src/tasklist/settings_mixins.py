"""Settings mixins for application identity, storage and CLI configuration.

AppSettingsMixin: Application identity and disk layout (app_name, workspace, storage).
CLISettingsMixin: CLI/UI-specific settings (logging).

These live outside cli/ so that config.py can compose TaskListSettings
without importing the cli package.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator

from tasklist.constants import DEFAULTS_FILENAME, TASKS_KEY


class AppSettingsMixin:
    """Settings for application identity and disk layout.

    Should be composed with BaseSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="tasklist",
        title="App Name",
        description="Application name, also used for config directories",
    )

    workspace_dir: Path = Field(
        default_factory=lambda: Path.home() / ".tasklist",
        title="Workspace Directory",
        description="Directory holding the persisted key-value store",
    )

    defaults_filename: str = Field(
        default=DEFAULTS_FILENAME,
        title="Defaults File",
        description="Name of the key-value store file inside the workspace",
    )

    # Changing this orphans previously saved tasks.
    tasks_key: str = Field(
        default=TASKS_KEY,
        title="Tasks Key",
        description="Key under which the task list is persisted",
    )

    @field_validator("workspace_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    def ensure_workspace_exists(self) -> None:
        """Create workspace directory if it doesn't exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)

    @property
    def defaults_path(self) -> Path:
        """Path of the key-value store file."""
        return self.workspace_dir / self.defaults_filename


class CLISettingsMixin:
    """Settings for CLI/UI configuration.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )
