"""Command-Line Interface for lean-search-index.

Provides commands to build the static search index, inspect the name-prefix
index locally, and show how a signature is normalized into a type shape.
"""

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from lean_search_index.build.__main__ import run_pipeline
from lean_search_index.build.descriptors import (
    default_descriptor_patterns,
    expand_patterns,
    load_descriptors,
)
from lean_search_index.cli.display import display_lookup_results
from lean_search_index.config import Config
from lean_search_index.exceptions import IndexBuildError
from lean_search_index.index import merge_descriptors, shard_id, type_shape
from lean_search_index.index.sharder import name_prefix
from lean_search_index.index.shapes import shape_file_key
from lean_search_index.util import setup_logging

# Initialize Typer app and Rich console
app = typer.Typer(
    name="lean-search-index",
    help="Build a static search index for doc-gen4 documentation sites.",
    add_completion=False,
    rich_markup_mode="markdown",
)

console = Console()
error_console = Console(stderr=True)


@app.command("build")
def build_command(
    patterns: list[str] = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Glob pattern matching doc-gen4 descriptor files. "
        "Default: <output-root>/doc-data/**/*.bmp",
    ),
    output_root: Path = typer.Option(
        Config.OUTPUT_ROOT, "--output-root", help="Build directory of the docs."
    ),
    asset: Path = typer.Option(
        Config.ASSET_PATH, "--asset", help="Client script to copy into the docs."
    ),
    shard_count: int = typer.Option(
        Config.SHARD_COUNT, "--shard-count", min=1, help="Number of prefix shards."
    ),
    module_prefixes: list[str] = typer.Option(
        None, "--module-prefix", help="Only index modules under this prefix."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging."),
):
    """Build the shard files and patch the generated HTML pages."""
    setup_logging(verbose)
    try:
        summary = asyncio.run(
            run_pipeline(
                patterns=patterns or default_descriptor_patterns(output_root),
                output_root=output_root,
                asset_path=asset,
                shard_count=shard_count,
                module_prefixes=module_prefixes or None,
            )
        )
    except IndexBuildError as e:
        error_console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1)

    console.print(
        f"[green]Indexed {summary.names} names into "
        f"{summary.declaration_shards} shards and {summary.type_shards} "
        f"type shapes; patched {summary.html_patched} pages.[/green]"
    )


@app.command("lookup")
def lookup_command(
    prefix: str = typer.Argument(..., help="Leading characters of a name."),
    patterns: list[str] = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Glob pattern matching doc-gen4 descriptor files. "
        "Default: <output-root>/doc-data/**/*.bmp",
    ),
    output_root: Path = typer.Option(
        Config.OUTPUT_ROOT, "--output-root", help="Build directory of the docs."
    ),
    shard_count: int = typer.Option(
        Config.SHARD_COUNT, "--shard-count", min=1, help="Number of prefix shards."
    ),
    limit: int = typer.Option(
        5, "--limit", "-n", help="Number of names to display."
    ),
):
    """List declarations whose name starts with a prefix."""
    paths = expand_patterns(patterns or default_descriptor_patterns(output_root))
    if not paths:
        error_console.print(
            "[bold red]No descriptor files matched. "
            "Generate the documentation first.[/bold red]"
        )
        raise typer.Exit(code=1)

    descriptors, _ = load_descriptors(paths)
    store = merge_descriptors(descriptors)
    display_lookup_results(
        prefix,
        store.prefix_query(prefix),
        shard=shard_id(name_prefix(prefix), shard_count),
        display_limit=limit,
    )


@app.command("shape")
def shape_command(
    signature: str = typer.Argument(..., help="Signature, e.g. '(n m : Nat) : Nat'."),
):
    """Show the type shape and shard file key of a signature."""
    shape = type_shape(signature)
    if shape is None:
        error_console.print("[bold red]Signature has no type shape.[/bold red]")
        raise typer.Exit(code=1)

    console.print(f"[bold cyan]Shape:[/bold cyan] {shape}")
    console.print(f"[bold cyan]File key:[/bold cyan] {shape_file_key(shape)}")


if __name__ == "__main__":
    app()
