"""Static search index builder for doc-gen4 documentation sites."""

__version__ = "0.1.0"
