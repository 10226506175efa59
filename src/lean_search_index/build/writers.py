"""Writers for the static search index and the patched site.

Each writer touches a disjoint set of files, so the pipeline runs them
concurrently. Blocking file I/O is pushed to worker threads.
"""

import asyncio
import json
import logging
import shutil
from pathlib import Path

from lean_search_index import __version__
from lean_search_index.config import Config
from lean_search_index.index.shapes import shape_file_key
from lean_search_index.index.store import Entry
from lean_search_index.models import SearchResult
from lean_search_index.site.patcher import LOADER_SNIPPET, patch_html

logger = logging.getLogger(__name__)


def _to_json(value) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _header() -> str:
    return f"// Generated by {Config.GENERATOR} {__version__}\n"


def render_declaration_shard(shard_id: int, entries: list[Entry]) -> str:
    """Render a name-prefix shard as a registry assignment.

    Args:
        shard_id: Id of the shard.
        entries: The shard's ``(name, results)`` pairs.

    Returns:
        JavaScript source assigning the entry list to the shard's slot.
    """
    payload = [
        [name, [result.to_json_dict() for result in results]]
        for name, results in entries
    ]
    return (
        _header()
        + f"{Config.DECLARATION_REGISTRY}[{_to_json(str(shard_id))}] = "
        + f"{_to_json(payload)};\n"
    )


def render_type_shard(shape: str, results: list[SearchResult]) -> str:
    """Render a type-shape shard as a registry assignment keyed by the shape."""
    payload = [result.to_json_dict() for result in results]
    return (
        _header()
        + f"{Config.TYPE_REGISTRY}[{_to_json(shape)}] = {_to_json(payload)};\n"
    )


def _write_text(path: Path, text: str) -> None:
    path.write_bytes(text.encode("utf-8"))


async def write_declaration_shards(
    shards: dict[int, list[Entry]], directory: Path
) -> int:
    """Write one file per shard id.

    Returns:
        Number of files written.
    """
    for shard_id, entries in sorted(shards.items()):
        path = directory / f"{shard_id}.{Config.SHARD_EXTENSION}"
        await asyncio.to_thread(
            _write_text, path, render_declaration_shard(shard_id, entries)
        )
    logger.info(f"Wrote {len(shards)} declaration shards to {directory}")
    return len(shards)


async def write_type_shards(
    type_index: dict[str, list[SearchResult]], directory: Path
) -> int:
    """Write one file per type shape.

    Returns:
        Number of files written.
    """
    for shape, results in sorted(type_index.items()):
        path = directory / f"{shape_file_key(shape)}.{Config.SHARD_EXTENSION}"
        await asyncio.to_thread(_write_text, path, render_type_shard(shape, results))
    logger.info(f"Wrote {len(type_index)} type shards to {directory}")
    return len(type_index)


def _patch_file(path: Path) -> bool:
    """Patch one HTML file in place, returning whether it changed."""
    # bytes round-trip keeps line endings untouched
    html = path.read_bytes().decode("utf-8")
    changed, patched = patch_html(html)
    if changed:
        _write_text(path, patched)
    elif LOADER_SNIPPET not in html:
        logger.warning(f"No closing body tag in {path}, left unpatched")
    return changed


async def patch_html_files(html_directory: Path) -> int:
    """Inject the loader snippet into every HTML page under a directory.

    Non-regular files (directories named ``*.html``, broken links) are
    skipped.

    Returns:
        Number of files that were changed.
    """
    paths = sorted(html_directory.rglob("*.html"))
    patched = 0
    for path in paths:
        if not path.is_file():
            logger.debug(f"Skipping non-regular file {path}")
            continue
        if await asyncio.to_thread(_patch_file, path):
            patched += 1
    logger.info(f"Patched {patched} of {len(paths)} HTML files")
    return patched


async def copy_asset(asset_path: Path, destination: Path) -> Path:
    """Copy the client script into the documentation tree."""
    await asyncio.to_thread(shutil.copyfile, asset_path, destination)
    logger.info(f"Copied {asset_path} to {destination}")
    return destination
