"""Index construction for lean_search_index.

This package contains the declaration store, the prefix sharder and the
type-shape index.
"""

from lean_search_index.index.shapes import build_type_index, type_shape
from lean_search_index.index.sharder import shard_id, shard_store
from lean_search_index.index.store import DeclarationStore, merge_descriptors

__all__ = [
    "DeclarationStore",
    "build_type_index",
    "merge_descriptors",
    "shard_id",
    "shard_store",
    "type_shape",
]
