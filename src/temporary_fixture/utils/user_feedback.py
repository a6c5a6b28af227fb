"""User feedback utilities for the command line."""

import logging
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Optional, Iterator, Any, Dict

from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.tree import Tree

from temporary_fixture.models.fixture import Fixture, FixtureType, raw_to_type

logger = logging.getLogger(__name__)


class StatusIcon:
    """Status icons for CLI display."""

    SUCCESS = "[bold green]✓[/bold green]"
    ERROR = "[bold red]✗[/bold red]"
    WARNING = "[bold yellow]⚠[/bold yellow]"
    INFO = "[bold blue]●[/bold blue]"
    DEBUG = "[dim]◦[/dim]"
    LOADING = "[bold cyan]◐[/bold cyan]"

    FILE = "[blue]▰[/blue]"
    FOLDER = "[yellow]▣[/yellow]"
    LINK = "[magenta]⇉[/magenta]"
    SYMLINK = "[cyan]↪[/cyan]"


class UserFeedback:
    """Console output for the temporary-fixture CLI."""

    def __init__(self, verbose: bool = False, quiet: bool = False):
        self.verbose = verbose
        self.quiet = quiet
        self.console = Console(stderr=False)
        self.error_console = Console(stderr=True)

    def success(self, message: str, details: Optional[str] = None):
        """Display success message with checkmark icon."""
        if not self.quiet:
            self.console.print(f"{StatusIcon.SUCCESS} {message}")
            if details and self.verbose:
                self._print_details(details, "green")

    def error(self, message: str, suggestion: Optional[str] = None, details: Optional[str] = None):
        """Display error message with error icon and optional suggestion."""
        # Always show errors, even in quiet mode
        self.error_console.print(f"{StatusIcon.ERROR} [bold red]Error:[/bold red] {escape(message)}")

        if suggestion:
            self.error_console.print(f"  [yellow]Suggestion:[/yellow] {escape(suggestion)}")

        if details and self.verbose:
            self._print_details(details, "red", console=self.error_console)

    def warning(self, message: str, suggestion: Optional[str] = None):
        if not self.quiet:
            self.console.print(f"{StatusIcon.WARNING} [bold yellow]Warning:[/bold yellow] {message}")
            if suggestion:
                self.console.print(f"  [yellow]{suggestion}[/yellow]")

    def info(self, message: str):
        if not self.quiet:
            self.console.print(f"{StatusIcon.INFO} {message}")

    def debug(self, message: str):
        if self.verbose and not self.quiet:
            self.console.print(f"{StatusIcon.DEBUG} [dim]{message}[/dim]")

    def result(self, message: str):
        """Display important results - always shown even in quiet mode."""
        self.console.print(message, highlight=False)

    def summary_panel(self, title: str, items: Dict[str, Any], style: str = "green"):
        """Display a summary panel with key-value pairs."""
        if not self.quiet:
            content = [f"[bold]{key}:[/bold] {escape(str(value))}" for key, value in items.items()]
            panel = Panel(
                "\n".join(content),
                title=title,
                border_style=style,
                padding=(1, 2)
            )
            self.console.print(panel)

    @contextmanager
    def status_spinner(self, message: str, spinner_style: str = "dots") -> Iterator[None]:
        """Display a status spinner for long operations."""
        if not self.quiet:
            with self.console.status(f"{StatusIcon.LOADING} {message}", spinner=spinner_style) as status:
                yield status
        else:
            yield None

    def fixture_tree(self, title: str, fixture: Fixture):
        """Display a fixture description as a tree."""
        if not self.quiet:
            self.console.print(build_fixture_tree(title, fixture))

    def _print_details(self, details: str, style: str, console: Optional[Console] = None):
        """Print details with proper indentation and styling."""
        target_console = console or self.console
        for line in details.split('\n'):
            if line.strip():
                target_console.print(f"  [dim]│[/dim] [{style}]{escape(line)}[/{style}]")


def build_fixture_tree(title: str, fixture: Fixture) -> Tree:
    """Build a rich Tree mirroring a directory fixture."""
    tree = Tree(f"{StatusIcon.FOLDER} [bold blue]{escape(title)}[/bold blue]")
    _add_entries(tree, fixture.content if fixture.type is FixtureType.DIR else {})
    return tree


def _add_entries(node: Tree, entries: Mapping):
    for name, entry in entries.items():
        kind = raw_to_type(entry)
        content = entry.content if isinstance(entry, Fixture) else entry
        label = escape(name)

        if kind is FixtureType.DIR:
            branch = node.add(f"{StatusIcon.FOLDER} [yellow]{label}[/yellow]")
            _add_entries(branch, content)
        elif kind is FixtureType.FILE:
            node.add(f"{StatusIcon.FILE} {label} [dim]({len(content)} {'chars' if isinstance(content, str) else 'bytes'})[/dim]")
        elif kind is FixtureType.LINK:
            node.add(f"{StatusIcon.LINK} {label} [dim]=> {escape(content)}[/dim]")
        else:
            node.add(f"{StatusIcon.SYMLINK} {label} [dim]-> {escape(content)}[/dim]")
