"""Built-in slash commands for the to-do list."""

from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tasklist.cli.commands import Command


def rows_to_positions(tokens: list[str]) -> list[int]:
    """Convert 1-based row numbers typed by the user into list positions.

    Raises:
        ValueError: a token is not an integer.
    """
    positions = []
    for token in tokens:
        try:
            positions.append(int(token) - 1)
        except ValueError:
            raise ValueError(f"Not a row number: {token}") from None
    return positions


class AddCommand(Command):
    """Add a task to the end of the list."""

    def __init__(self) -> None:
        super().__init__(
            name="add",
            description="Add a new task",
            aliases=["a"],
            usage="/add <title>",
            examples=["/add Buy milk", "Buy milk"],
        )

    async def execute(self, args: str, app: Any) -> None:
        title = args.strip()
        if not title:
            app.show_error("Enter a task title.")
            return
        app.store.add_task(title)


class ToggleCommand(Command):
    """Mark a task completed, or open again."""

    def __init__(self) -> None:
        super().__init__(
            name="done",
            description="Toggle completion of a task",
            aliases=["toggle", "t"],
            usage="/done <row>",
            examples=["/done 1"],
        )

    async def execute(self, args: str, app: Any) -> None:
        parsed = self.parse_args(args)
        if len(parsed.tokens) != 1:
            app.show_error(f"Usage: {self.usage}")
            return
        try:
            (position,) = rows_to_positions(parsed.tokens)
            app.store.toggle_completed(position)
        except ValueError as e:
            app.show_error(str(e))
        except IndexError:
            app.show_error(f"No task at row {parsed.tokens[0]}.")


class DeleteCommand(Command):
    """Delete one or more tasks in a single batch."""

    def __init__(self) -> None:
        super().__init__(
            name="rm",
            description="Delete tasks by row number",
            aliases=["delete", "del"],
            usage="/rm <row> [<row> ...]",
            examples=["/rm 2", "/rm 1 3"],
        )

    async def execute(self, args: str, app: Any) -> None:
        parsed = self.parse_args(args)
        if not parsed.tokens:
            app.show_error(f"Usage: {self.usage}")
            return
        try:
            app.store.delete_tasks(rows_to_positions(parsed.tokens))
        except ValueError as e:
            app.show_error(str(e))
        except IndexError:
            app.show_error(f"No task at row(s) {parsed.positional}; nothing deleted.")


class ListCommand(Command):
    """Show the task list."""

    def __init__(self) -> None:
        super().__init__(
            name="list",
            description="Show the task list",
            aliases=["ls"],
        )

    async def execute(self, args: str, app: Any) -> None:
        app.render()


class HelpCommand(Command):
    """Display help information about available commands."""

    def __init__(self) -> None:
        super().__init__(
            name="help",
            description="Show available commands",
            usage="/help [command]",
            examples=["/help", "/help rm"],
        )

    async def execute(self, args: str, app: Any) -> None:
        name = args.strip().lstrip("/")
        if name:
            command = app.command_registry.get(name)
            if command is None:
                app.show_error(f"Unknown command: /{name}")
            else:
                app.show_message(command.get_help())
            return

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Command", style="bold cyan", no_wrap=True)
        table.add_column("Aliases", style="dim", no_wrap=True)
        table.add_column("Description")

        for cmd in sorted(app.command_registry.all_commands(), key=lambda c: c.name):
            aliases = ", ".join(f"/{a}" for a in cmd.aliases) if cmd.aliases else ""
            table.add_row(Text(cmd.usage), aliases, cmd.description)

        app.console.print(
            Panel(table, title="[bold]Available Commands[/bold]", border_style="cyan")
        )
        app.show_message("Text without a leading / is added as a new task.")


class ExitCommand(Command):
    """Exit the application."""

    def __init__(self) -> None:
        super().__init__(
            name="exit",
            description="Exit the application",
            aliases=["quit"],
        )

    async def execute(self, args: str, app: Any) -> None:
        app.stop()
