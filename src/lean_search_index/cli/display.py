# src/lean_search_index/cli/display.py

"""Display and formatting utilities for CLI output."""

import textwrap

from rich.console import Console
from rich.panel import Panel

from lean_search_index.index.store import Entry

console = Console()


def _wrap_line(line: str, width: int) -> list[str]:
    """Wraps one line and pads every segment to ``width``."""
    if not line.strip():
        return [" " * width]

    segments = textwrap.wrap(
        line,
        width=width,
        replace_whitespace=True,
        drop_whitespace=True,
        break_long_words=True,
        break_on_hyphens=True,
    )
    return [segment.ljust(width) for segment in segments] or [" " * width]


def _format_text_for_panel(text_content: str | None, width: int = 80) -> str:
    """Wraps text and pads lines to ensure fixed content width for a Panel.

    Args:
        text_content: The text to format.
        width: The target width for wrapped text.

    Returns:
        Formatted text with proper line wrapping and padding.
    """
    if not text_content or not text_content.strip():
        return " " * width

    output_lines = []
    for line in text_content.splitlines():
        output_lines.extend(_wrap_line(line, width))
    return "\n".join(output_lines)


def display_lookup_results(
    prefix: str,
    entries: list[Entry],
    shard: int,
    display_limit: int = 5,
) -> None:
    """Displays the names matching a prefix and their declarations.

    Args:
        prefix: The queried name prefix.
        entries: Matching ``(name, results)`` pairs.
        shard: Shard id the prefix resolves to.
        display_limit: Maximum number of names to show.
    """
    console.print(
        Panel(
            f"[bold cyan]Prefix:[/bold cyan] {prefix}  "
            f"[bold cyan]Shard:[/bold cyan] {shard}",
            expand=False,
            border_style="dim",
        )
    )

    num_names_to_show = min(len(entries), display_limit)
    console.print(f"Showing {num_names_to_show} of {len(entries)} names.")

    if not entries:
        console.print("[yellow]No declarations found.[/yellow]")
        return

    for name, results in entries[:display_limit]:
        console.rule(f"[bold]{name}[/bold]", style="dim")
        for result in results:
            console.print(
                f"[bold cyan]{result.kind}[/bold cyan] "
                f"[green]{result.module}[/green]"
            )
            if result.signature:
                console.print(
                    Panel(
                        _format_text_for_panel(result.signature),
                        title="[bold green]Signature[/bold green]",
                        border_style="green",
                        expand=False,
                        padding=(0, 1),
                    )
                )
            if result.doc:
                console.print(
                    Panel(
                        _format_text_for_panel(result.doc),
                        title="[bold blue]Docstring[/bold blue]",
                        border_style="blue",
                        expand=False,
                        padding=(0, 1),
                    )
                )

    console.rule(style="dim")
    if len(entries) > num_names_to_show:
        console.print(
            f"...and {len(entries) - num_names_to_show} more names "
            "not shown due to limit."
        )
