"""Interactive to-do list application.

This module provides the terminal front end that:
1. Reads input with prompt_toolkit (history, slash command completion)
2. Routes slash commands through the CommandRegistry
3. Re-renders the list with rich whenever the TaskStore reports a change
"""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tasklist.cli.commands import CommandRegistry
from tasklist.config import TaskListSettings, get_settings
from tasklist.constants import COMPLETED_GLYPH, OPEN_GLYPH
from tasklist.logging import Loggers, bind_context, configure_logging
from tasklist.tasks import Task, TaskStore

logger = Loggers.cli()


# === Slash Command Completer ===


class SlashCommandCompleter(Completer):
    """Completer that only triggers for slash commands."""

    def __init__(self, commands: list[str]) -> None:
        """Initialize with a list of command names (without leading slash).

        Args:
            commands: List of command names, e.g., ["add", "done", "rm"]
        """
        self.commands = sorted(commands)

    def get_completions(self, document: Document, complete_event):
        """Yield completions only when text starts with /."""
        text = document.text_before_cursor

        if not text.startswith("/") or " " in text:
            return

        partial = text[1:].lower()

        for cmd in self.commands:
            if cmd.lower().startswith(partial):
                yield Completion(
                    text=f"/{cmd}",
                    start_position=-len(text),
                    display=f"/{cmd}",
                )


# === Rendering ===


def build_task_table(tasks: list[Task]) -> Table:
    """Lay out tasks as numbered rows with a completion glyph."""
    table = Table(show_header=False, box=None, padding=(0, 1, 0, 0))
    table.add_column("Row", style="dim", justify="right", no_wrap=True)
    table.add_column("Done", no_wrap=True)
    table.add_column("Title")

    for row, task in enumerate(tasks, start=1):
        if task.is_completed:
            glyph = Text(COMPLETED_GLYPH, style="green")
            title = Text(task.title, style="strike dim")
        else:
            glyph = Text(OPEN_GLYPH)
            title = Text(task.title)
        table.add_row(str(row), glyph, title)

    return table


# === Application ===


class TaskListApp:
    """Terminal to-do list.

    The app never mutates tasks itself: commands call the TaskStore and the
    store's change notification triggers a re-render.
    """

    def __init__(
        self,
        settings: TaskListSettings | None = None,
        store: TaskStore | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize the application.

        Args:
            settings: Optional settings override
            store: Optional pre-built store (defaults to the file-backed one)
            console: Optional rich console (defaults to stdout)
        """
        self._settings = settings or get_settings()
        self._settings.ensure_workspace_exists()
        configure_logging(self._settings)
        bind_context(app=self._settings.app_name)

        self.console = console or Console()
        self.store = store or TaskStore.from_settings(self._settings)

        self.command_registry = CommandRegistry()
        self._register_builtin_commands()

        self._unsubscribe = self.store.subscribe(self._on_tasks_changed)
        self.should_exit = False

        logger.info(
            "app_initialized",
            storage=str(self._settings.defaults_path),
            count=len(self.store),
        )

    def _register_builtin_commands(self) -> None:
        from tasklist.cli.builtin_commands import (
            AddCommand,
            DeleteCommand,
            ExitCommand,
            HelpCommand,
            ListCommand,
            ToggleCommand,
        )

        for command in (
            AddCommand(),
            ToggleCommand(),
            DeleteCommand(),
            ListCommand(),
            HelpCommand(),
            ExitCommand(),
        ):
            self.command_registry.register(command)

    # === Output ===

    def _on_tasks_changed(self, tasks: list[Task]) -> None:
        self.render(tasks)

    def render(self, tasks: list[Task] | None = None) -> None:
        """Draw the task list."""
        if tasks is None:
            tasks = self.store.tasks
        if tasks:
            body = build_task_table(tasks)
        else:
            body = Text("No tasks yet. Type a title to add one.", style="dim italic")
        self.console.print(Panel(body, title="[bold]To-Do List[/bold]", border_style="cyan"))

    def show_message(self, message: str) -> None:
        self.console.print(Text(message, style="dim"))

    def show_error(self, message: str) -> None:
        self.console.print(Text(message, style="bold red"))

    # === Input ===

    def stop(self) -> None:
        """Stop the application."""
        self.should_exit = True

    async def process_input(self, user_input: str) -> None:
        """Process one line of user input.

        Slash commands are dispatched to the registry; other text is
        added as a new task.
        """
        user_input = user_input.strip()

        if not user_input:
            return

        if user_input.startswith("/"):
            await self._handle_command(user_input)
        else:
            await self._handle_command(f"/add {user_input}")

    async def _handle_command(self, user_input: str) -> None:
        parts = user_input[1:].split(maxsplit=1)
        command_name = parts[0] if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        command = self.command_registry.get(command_name)
        if command is None:
            self.show_error(f"Unknown command: /{command_name}")
            self.show_message("Type /help to see available commands")
            return

        logger.debug("executing_command", command=command.name, args=args)
        try:
            await command.execute(args, self)
        except Exception as e:
            logger.error("command_failed", command=command.name, error=str(e))
            self.show_error(f"Error executing command: {e}")

    async def run(self) -> None:
        """Run the main application loop."""
        logger.info("repl_starting")
        session: PromptSession[str] = PromptSession(
            history=InMemoryHistory(),
            completer=SlashCommandCompleter(self.command_registry.get_completions()),
            complete_while_typing=True,
        )

        self.render()
        self.show_message("Ctrl+D: exit | /help: commands")

        while not self.should_exit:
            try:
                text = await session.prompt_async("> ")
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            await self.process_input(text)

        self._unsubscribe()
        logger.info("app_ending")
        self.show_message("Goodbye!")
