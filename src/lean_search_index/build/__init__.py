"""Build pipeline for the static search index.

This package discovers and decodes descriptor files, writes the shard files,
patches the generated HTML pages and copies the client script.
"""
