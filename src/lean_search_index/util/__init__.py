"""Shared utilities for lean_search_index."""

from lean_search_index.util.logging import setup_logging

__all__ = ["setup_logging"]
