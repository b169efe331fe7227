import json
import logging
from typing import Any, Optional

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from alumlink.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console."""
        self._console = console or Console()

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    def display_output(self, output: Any, **kwargs: Any) -> None:
        """Displays an API payload as highlighted JSON inside a panel.

        Args:
            output: Decoded JSON payload. Strings are shown as plain text.
            **kwargs: Additional arguments including:
                - title: Panel title (default: "Response")
        """
        title = kwargs.get("title", "Response")
        if isinstance(output, str):
            body: Any = Text(output)
        else:
            body = JSON(json.dumps(output, default=str))
        self.console.print(Panel(body, title=f"[bold green]{title}[/bold green]", border_style="green", box=ROUNDED))

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
        """
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        panel = Panel(
            Text(info_message, style="white"),
            title="[bold blue]Info[/bold blue]",
            border_style="blue",
            box=SIMPLE,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        panel = Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_status(self, status: dict, **kwargs: Any) -> None:
        """Renders the client status as a two-column table.

        Args:
            status: Mapping of status field names to values.
        """
        table = Table(title=kwargs.get("title", "API Client Status"), box=ROUNDED)
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        for key, value in status.items():
            if isinstance(value, bool):
                rendered = "[green]yes[/green]" if value else "[red]no[/red]"
            else:
                rendered = str(value)
            table.add_row(key, rendered)
        self.console.print(table)
