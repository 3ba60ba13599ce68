"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table

from .console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_single_item(data)
    else:
        format_pretty(data)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(_format_key(key), _format_value(value))

    console.print(table)


def format_pretty(data: Any) -> None:
    """Format a mapping as `Key: value` lines."""
    if not isinstance(data, dict):
        console.print(data)
        return
    for key, value in data.items():
        console.print(f"[cyan]{_format_key(key)}:[/cyan] {_format_value(value)}")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def _format_key(key: str) -> str:
    return key.replace("_", " ").title()


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, float):
        return f"{value:.0%}"
    if value is None:
        return "-"
    return str(value)
