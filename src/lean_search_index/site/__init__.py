"""Patching of the generated documentation site."""

from lean_search_index.site.patcher import LOADER_SNIPPET, patch_html

__all__ = ["LOADER_SNIPPET", "patch_html"]
