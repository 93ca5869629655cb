"""Slash command registry and base command class.

Example of creating a custom command:

    from tasklist.cli.commands import Command

    class ClearDoneCommand(Command):
        '''Delete every completed task.'''

        def __init__(self):
            super().__init__(
                name="cleardone",
                description="Delete every completed task",
                usage="/cleardone",
            )

        async def execute(self, args: str, app: Any) -> None:
            positions = [i for i, t in enumerate(app.store.tasks) if t.is_completed]
            app.store.delete_tasks(positions)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any
import re


@dataclass
class ParsedArgs:
    """Parsed command arguments."""

    positional: str
    """Positional arguments joined by single spaces."""

    tokens: list[str] = field(default_factory=list)
    """Positional arguments as separate tokens."""


class Command(ABC):
    """Base class for slash commands.

    Subclass this to create custom commands. Override execute() to
    implement command behavior.
    """

    def __init__(
        self,
        name: str,
        description: str,
        aliases: list[str] | None = None,
        usage: str | None = None,
        examples: list[str] | None = None,
    ) -> None:
        """Initialize the command.

        Args:
            name: Command name (used as /name)
            description: Short description of what the command does
            aliases: Alternative names for the command
            usage: Usage string showing syntax (e.g., "/cmd <arg>")
            examples: List of example usages
        """
        self.name = name
        self.description = description
        self.aliases = aliases or []
        self.usage = usage or f"/{name}"
        self.examples = examples or []

    @abstractmethod
    async def execute(self, args: str, app: Any) -> None:
        """Execute the command with given arguments.

        Args:
            args: Command arguments string (everything after the command name)
            app: The CLI application instance
        """
        pass

    def parse_args(self, args: str) -> ParsedArgs:
        """Split arguments into tokens, honoring single and double quotes."""
        tokens = self._tokenize(args)
        return ParsedArgs(positional=" ".join(tokens), tokens=tokens)

    def _tokenize(self, args: str) -> list[str]:
        """Tokenize argument string respecting quotes."""
        pattern = r'"[^"]*"|\'[^\']*\'|\S+'
        tokens = re.findall(pattern, args)

        def strip_quotes(token: str) -> str:
            if len(token) >= 2 and token[0] in "\"'" and token[0] == token[-1]:
                return token[1:-1]
            return token

        return [strip_quotes(token) for token in tokens]

    def get_help(self) -> str:
        """Get detailed help text for this command."""
        lines = [
            f"/{self.name}",
            f"  {self.description}",
            "",
            f"Usage: {self.usage}",
        ]

        if self.aliases:
            lines.append(f"Aliases: {', '.join(f'/{a}' for a in self.aliases)}")

        if self.examples:
            lines.append("")
            lines.append("Examples:")
            for example in self.examples:
                lines.append(f"  {example}")

        return "\n".join(lines)


class CommandRegistry:
    """Registry for managing slash commands."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """Register a command and its aliases."""
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

    def get(self, name: str) -> Command | None:
        """Get a command by name or alias."""
        return self._commands.get(name)

    def all_commands(self) -> list[Command]:
        """Get all unique commands (excluding aliases)."""
        seen: set[str] = set()
        commands: list[Command] = []
        for cmd in self._commands.values():
            if cmd.name not in seen:
                seen.add(cmd.name)
                commands.append(cmd)
        return commands

    def get_completions(self) -> list[str]:
        """Get all command names and aliases for auto-completion."""
        return list(self._commands.keys())
