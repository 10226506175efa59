"""Pipeline orchestration for building the static search index.

This module coordinates the complete build:
1. Check that the documentation tree and the client script exist
2. Decode the doc-gen4 descriptor files
3. Merge declarations, partition them into prefix shards and group them by
   type shape
4. Write the shard files, patch the HTML pages and copy the client script
   concurrently
"""

import asyncio
import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

import click

from lean_search_index.build.descriptors import (
    default_descriptor_patterns,
    expand_patterns,
    load_descriptors,
)
from lean_search_index.build.writers import (
    copy_asset,
    patch_html_files,
    write_declaration_shards,
    write_type_shards,
)
from lean_search_index.config import Config
from lean_search_index.exceptions import IndexBuildError
from lean_search_index.index import build_type_index, merge_descriptors, shard_store
from lean_search_index.util import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class OutputLayout:
    """Locations inside the documentation tree written by the build."""

    output_root: Path
    html_directory: Path
    index_directory: Path
    declarations_directory: Path
    types_directory: Path
    asset_destination: Path

    @classmethod
    def from_root(cls, output_root: Path) -> "OutputLayout":
        """Derive every output location from the build directory."""
        html_directory = output_root / Config.HTML_SUBDIRECTORY
        index_directory = html_directory / Config.INDEX_DIRECTORY
        return cls(
            output_root=output_root,
            html_directory=html_directory,
            index_directory=index_directory,
            declarations_directory=index_directory / Config.DECLARATIONS_DIRECTORY,
            types_directory=index_directory / Config.TYPES_DIRECTORY,
            asset_destination=html_directory / Config.ASSET_FILENAME,
        )


@dataclass
class BuildSummary:
    """Counts reported at the end of a build."""

    descriptor_files: int
    decoded: int
    skipped: int
    names: int
    declaration_shards: int
    type_shards: int
    html_patched: int


def _fail(message: str) -> IndexBuildError:
    logger.error(message)
    return IndexBuildError(message)


def check_output_tree(output_root: Path) -> OutputLayout:
    """Verify that doc-gen4 has already generated the documentation.

    Raises:
        IndexBuildError: If the build directory or its HTML directory is
            missing.
    """
    layout = OutputLayout.from_root(output_root)
    if not layout.output_root.is_dir():
        raise _fail(
            f"Output directory {layout.output_root} not found. "
            "Generate the documentation first (lake build <Library>:docs)."
        )
    if not layout.html_directory.is_dir():
        raise _fail(
            f"HTML directory {layout.html_directory} not found. "
            "Generate the documentation first (lake build <Library>:docs)."
        )
    return layout


def prepare_directories(layout: OutputLayout) -> None:
    """Create empty shard directories under the index directory.

    Shards left over from a previous build are removed, so names and shapes
    that no longer exist cannot be served.
    """
    for directory in (layout.declarations_directory, layout.types_directory):
        if directory.exists():
            shutil.rmtree(directory)
            logger.debug(f"Removed previous shards in {directory}")
    for directory in (
        layout.index_directory,
        layout.declarations_directory,
        layout.types_directory,
    ):
        directory.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Index directories ready under {layout.index_directory}")


async def run_pipeline(
    patterns: list[str],
    output_root: Path,
    asset_path: Path,
    shard_count: int = Config.SHARD_COUNT,
    module_prefixes: list[str] | None = None,
) -> BuildSummary:
    """Build the static search index for a generated documentation site.

    All preconditions are checked before anything is written.

    Args:
        patterns: Glob patterns matching doc-gen4 descriptor files.
        output_root: Build directory containing the HTML directory.
        asset_path: Client script to copy next to the HTML pages.
        shard_count: Number of name-prefix shards.
        module_prefixes: If given, only index modules under these prefixes.

    Returns:
        Counts describing the build.

    Raises:
        IndexBuildError: If a precondition fails.
    """
    logger.info("Starting search index build")
    logger.info(f"Output root: {output_root}")

    layout = check_output_tree(output_root)

    if not asset_path.is_file():
        raise _fail(
            f"Client asset {asset_path} not found. "
            "Build the search client first or pass --asset."
        )

    paths = expand_patterns(patterns)
    if not paths:
        raise _fail(
            f"No descriptor files matched {', '.join(patterns)}. "
            "Generate the documentation first (lake build <Library>:docs)."
        )

    descriptors, failures = load_descriptors(paths)
    if not descriptors:
        raise _fail(
            f"None of the {len(paths)} descriptor files could be decoded. "
            "Regenerate the documentation with a compatible doc-gen4."
        )

    store = merge_descriptors(descriptors, module_prefixes)
    shards = shard_store(store, shard_count)
    type_index = build_type_index(store)

    prepare_directories(layout)

    declaration_shards, type_shards, html_patched, _ = await asyncio.gather(
        write_declaration_shards(shards, layout.declarations_directory),
        write_type_shards(type_index, layout.types_directory),
        patch_html_files(layout.html_directory),
        copy_asset(asset_path, layout.asset_destination),
    )

    summary = BuildSummary(
        descriptor_files=len(paths),
        decoded=len(descriptors),
        skipped=len(failures),
        names=len(store),
        declaration_shards=declaration_shards,
        type_shards=type_shards,
        html_patched=html_patched,
    )
    logger.info(f"Search index build complete: {summary}")
    return summary


@click.command()
@click.option(
    "--pattern",
    "-p",
    "patterns",
    multiple=True,
    help=(
        "Glob pattern matching doc-gen4 descriptor files (repeatable). "
        "Default: <output-root>/doc-data/**/*.bmp"
    ),
)
@click.option(
    "--output-root",
    type=click.Path(path_type=Path),
    default=Config.OUTPUT_ROOT,
    show_default=True,
    help="Build directory holding the generated documentation",
)
@click.option(
    "--asset",
    type=click.Path(path_type=Path),
    default=Config.ASSET_PATH,
    show_default=True,
    help="Client script to copy into the documentation",
)
@click.option(
    "--shard-count",
    type=click.IntRange(min=1),
    default=Config.SHARD_COUNT,
    show_default=True,
    help="Number of name-prefix shards",
)
@click.option(
    "--module-prefix",
    "module_prefixes",
    multiple=True,
    help="Only index modules under this prefix (repeatable)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging")
def main(
    patterns: tuple[str, ...],
    output_root: Path,
    asset: Path,
    shard_count: int,
    module_prefixes: tuple[str, ...],
    verbose: bool,
) -> None:
    """Build the static search index for a doc-gen4 documentation site."""
    setup_logging(verbose)
    try:
        asyncio.run(
            run_pipeline(
                patterns=list(patterns) or default_descriptor_patterns(output_root),
                output_root=output_root,
                asset_path=asset,
                shard_count=shard_count,
                module_prefixes=list(module_prefixes) or None,
            )
        )
    except IndexBuildError:
        sys.exit(1)


if __name__ == "__main__":
    main()
