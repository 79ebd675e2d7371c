"""Output formatting utilities with rich support."""

import json
from typing import Any, Optional

from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text

BUSY_LABEL = "Creating Prompt..."


class OutputFormatter:
    """Formats command output with rich."""

    def __init__(self, color: Optional[bool] = None):
        """
        Initialize formatter.

        Args:
            color: Force colors on (True) or off (False); None auto-detects
        """
        self.console = Console(force_terminal=color, no_color=True if color is False else None)
        self.err_console = Console(stderr=True, force_terminal=color, no_color=True if color is False else None)

    def status(self, message: str = BUSY_LABEL) -> Status:
        """Spinner shown while a request is outstanding."""
        return self.console.status(message)

    def print_result(self, text: str, success: bool = True) -> None:
        """Print the generated prompt in a panel."""
        self.console.print(
            Panel(
                Text(text),
                title="Generated Prompt" if success else "Generation Failed",
                border_style="green" if success else "red",
                expand=False,
            )
        )

    def print_messages(self, messages: list[dict[str, str]]) -> None:
        """Print chat messages, one panel per message."""
        for message in messages:
            self.console.print(
                Panel(Text(message["content"]), title=message["role"].title(), expand=False)
            )

    def print_json(self, data: Any, indent: int = 2) -> None:
        """Print JSON with syntax highlighting."""
        self.console.print(JSON(json.dumps(data, indent=indent, ensure_ascii=False)), soft_wrap=True)

    def print_stats(self, stats: dict[str, Any]) -> None:
        """Print statistics in a formatted table."""
        table = Table(title="Generation Statistics", show_header=True, header_style="bold magenta")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")

        for key, value in stats.items():
            table.add_row(key.replace("_", " ").title(), str(value))

        self.console.print(table)

    def print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.err_console.print(f"[red]✗[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")
