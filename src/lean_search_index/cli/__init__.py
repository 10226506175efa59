"""Command-line interface for lean_search_index."""
