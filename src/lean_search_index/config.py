# src/lean_search_index/config.py

"""Centralized configuration for lean_search_index.

This module provides all configuration settings including paths, output
layout constants, and the client-side registry names shared with the search
front-end.
"""

import os
import pathlib


class Config:
    """Application-wide configuration settings."""

    OUTPUT_ROOT: pathlib.Path = pathlib.Path(
        os.getenv(
            "LEAN_SEARCH_INDEX_OUTPUT_ROOT",
            pathlib.Path("lean") / ".lake" / "build",
        )
    )
    """Build directory that doc-gen4 writes its output into.

    Can be overridden with LEAN_SEARCH_INDEX_OUTPUT_ROOT environment variable.
    Default: lean/.lake/build
    """

    HTML_SUBDIRECTORY: str = "doc"
    """Subdirectory of the output root holding the generated HTML pages."""

    DESCRIPTOR_GLOB: str = "doc-data/**/*.bmp"
    """Glob, relative to the output root, matching the per-module descriptor files."""

    ASSET_PATH: pathlib.Path = pathlib.Path(
        os.getenv(
            "LEAN_SEARCH_INDEX_ASSET",
            pathlib.Path("client") / "dist" / "lean-search.js",
        )
    )
    """Prebuilt client script copied next to the HTML pages.

    Can be overridden with LEAN_SEARCH_INDEX_ASSET environment variable.
    """

    ASSET_FILENAME: str = "lean-search.js"
    """Name of the copied client script inside the HTML directory."""

    SHARD_COUNT: int = int(os.getenv("LEAN_SEARCH_INDEX_SHARD_COUNT", "64"))
    """Number of buckets the name-prefix index is folded into."""

    INDEX_DIRECTORY: str = "index"
    """Directory (inside the HTML directory) that holds all shard files."""

    DECLARATIONS_DIRECTORY: str = "declarations"
    """Subdirectory of the index directory for name-prefix shards."""

    TYPES_DIRECTORY: str = "types"
    """Subdirectory of the index directory for type-shape shards."""

    SHARD_EXTENSION: str = "js"
    """File extension of every shard file."""

    DECLARATION_REGISTRY: str = "window.leanDeclarationIndex"
    """Browser global populated by the name-prefix shard files."""

    TYPE_REGISTRY: str = "window.leanTypeIndex"
    """Browser global populated by the type-shape shard files."""

    GENERATOR: str = "lean-search-index"
    """Generator name written into every shard file header."""
