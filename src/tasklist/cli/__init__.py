"""Terminal front end for the to-do list."""

from tasklist.cli.app import TaskListApp
from tasklist.cli.commands import Command, CommandRegistry

__all__ = ["TaskListApp", "Command", "CommandRegistry"]
