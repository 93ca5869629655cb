"""Tests for configuration module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from tasklist.config import (
    SettingsContext,
    TaskListSettings,
    get_context_settings,
    get_settings,
    reload_settings,
    set_settings,
)


class TestTaskListSettings:
    """Tests for TaskListSettings class."""

    def test_default_values(self, temp_workspace: Path):
        with patch.dict(os.environ, {}, clear=True):
            settings = TaskListSettings(workspace_dir=temp_workspace)

        assert settings.app_name == "tasklist"
        assert settings.tasks_key == "tasks"
        assert settings.defaults_filename == "defaults.json"
        assert settings.log_level == "warning"
        assert settings.log_format == "console"

    def test_default_workspace_under_home(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = TaskListSettings()
            expected = Path.home() / ".tasklist"
        assert settings.workspace_dir == expected

    def test_workspace_path_expansion(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = TaskListSettings(workspace_dir="~/test_tasks")
            expected = Path.home() / "test_tasks"

        assert not str(settings.workspace_dir).startswith("~")
        assert settings.workspace_dir == expected

    def test_defaults_path(self, temp_workspace: Path):
        settings = TaskListSettings(workspace_dir=temp_workspace, defaults_filename="kv.json")
        assert settings.defaults_path == temp_workspace / "kv.json"

    def test_env_overrides(self, temp_workspace: Path):
        env = {
            "TASKLIST_WORKSPACE_DIR": str(temp_workspace),
            "TASKLIST_TASKS_KEY": "todo",
            "TASKLIST_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = TaskListSettings()

        assert settings.workspace_dir == temp_workspace
        assert settings.tasks_key == "todo"
        assert settings.log_level == "debug"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            TaskListSettings(log_level="loud")

    def test_project_json_config(self, tmp_path: Path, monkeypatch):
        config_dir = tmp_path / ".tasklist"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text(json.dumps({"tasks_key": "from_json"}))
        monkeypatch.chdir(tmp_path)

        with patch.dict(os.environ, {}, clear=True):
            settings = TaskListSettings()

        assert settings.tasks_key == "from_json"

    def test_env_beats_json(self, tmp_path: Path, monkeypatch):
        config_dir = tmp_path / ".tasklist"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text(json.dumps({"tasks_key": "from_json"}))
        monkeypatch.chdir(tmp_path)

        with patch.dict(os.environ, {"TASKLIST_TASKS_KEY": "from_env"}, clear=True):
            settings = TaskListSettings()

        assert settings.tasks_key == "from_env"

    def test_ensure_workspace_exists(self, tmp_path: Path):
        settings = TaskListSettings(workspace_dir=tmp_path / "new" / "dir")
        settings.ensure_workspace_exists()
        assert settings.workspace_dir.is_dir()


class TestSettingsAccessors:
    """Tests for the global and context settings accessors."""

    def test_set_and_get(self, mock_context):
        assert get_settings() is mock_context.settings

    def test_context_takes_precedence(self, mock_context, temp_workspace):
        other = TaskListSettings(workspace_dir=temp_workspace)
        with SettingsContext(other) as s:
            assert s is other
            assert get_settings() is other
            assert get_context_settings() is other
        assert get_settings() is mock_context.settings
        assert get_context_settings() is None

    def test_reload_creates_fresh_instance(self, temp_workspace):
        custom = TaskListSettings(workspace_dir=temp_workspace)
        set_settings(custom)
        try:
            with patch.dict(os.environ, {}, clear=True):
                fresh = reload_settings()
            assert fresh is not custom
        finally:
            reload_settings()
