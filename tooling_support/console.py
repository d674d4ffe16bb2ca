"""Rich console utilities for tooling-support.

This module provides a shared Rich Console instance and helper functions
for CLI output, aware of GitHub Actions annotations.
"""

import os
from typing import Any, Iterable, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from ._extraction.models import SquareDependency

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "target.maven": "blue",
        "target.project": "magenta",
        "tag": "yellow",
    }
)

# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


def gha_error(message: str, title: Optional[str] = None) -> None:
    """
    Emit an error that appears in GitHub Actions job summary.

    Args:
        message: Error message
        title: Optional title for the error
    """
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::error title={title}::{message}")
        else:
            print(f"::error::{message}")
    else:
        if title:
            console.print(f"[error]Error ({escape(title)}):[/error] {escape(message)}")
        else:
            console.print(f"[error]Error:[/error] {escape(message)}")


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show the table if all values are 0/empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=escape(title), show_header=True, header_style="bold")
    table.add_column("Configuration", style="cyan")
    table.add_column("Dependencies", justify="right")

    for label, value in data:
        table.add_row(escape(label), str(value))

    console.print(table)


def print_dependency_table(title: str, dependencies: Iterable[SquareDependency]) -> None:
    """
    Print SquareDependency records as a table.

    Args:
        title: Table title, usually the project path and configuration name
        dependencies: Records to print, in the given order
    """
    table = Table(title=escape(title), show_header=True, header_style="bold")
    table.add_column("Target")
    table.add_column("Tags")

    rows = 0
    for dependency in dependencies:
        style = "target.maven" if dependency.is_external else "target.project"
        tags = ", ".join(sorted(dependency.tags))
        table.add_row(f"[{style}]{escape(dependency.target)}[/{style}]", f"[tag]{escape(tags)}[/tag]")
        rows += 1

    if rows == 0:
        console.print(f"[info]{escape(title)}: no dependencies[/info]")
        return

    console.print(table)


def print_dependency_lines(dependencies: Iterable[SquareDependency]) -> None:
    """Print one ``target [tags]`` line per record, without markup."""
    for dependency in dependencies:
        console.print(str(dependency), markup=False, highlight=False)
