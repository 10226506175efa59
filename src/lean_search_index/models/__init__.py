"""Data models for lean_search_index."""

from lean_search_index.models.descriptor import (
    DeclarationInfo,
    DescriptorDeclaration,
    ModuleDescriptor,
)
from lean_search_index.models.search_types import SearchResult

__all__ = [
    "DeclarationInfo",
    "DescriptorDeclaration",
    "ModuleDescriptor",
    "SearchResult",
]
