"""In-memory declaration store built from decoded module descriptors.

The store maps a declaration's fully qualified name to every search result
sharing that exact name. Keys are kept in a lazily sorted list so prefix
queries reduce to a binary-search range scan.
"""

import bisect
import logging
from collections.abc import Iterable

from lean_search_index.index.shapes import signature_from_header
from lean_search_index.models import ModuleDescriptor, SearchResult

logger = logging.getLogger(__name__)

Entry = tuple[str, list[SearchResult]]


class DeclarationStore:
    """Prefix-queryable mapping from declaration name to its result set."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._results: dict[str, list[SearchResult]] = {}
        self._sorted_keys: list[str] | None = None

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, key: object) -> bool:
        return key in self._results

    def insert(self, key: str, result: SearchResult) -> None:
        """Append a result to the result set bound to ``key``."""
        if key not in self._results:
            self._results[key] = []
            self._sorted_keys = None
        self._results[key].append(result)

    def get(self, key: str) -> list[SearchResult] | None:
        """Return the result set for an exact key, or None if absent."""
        return self._results.get(key)

    def _ordered_keys(self) -> list[str]:
        if self._sorted_keys is None:
            self._sorted_keys = sorted(self._results)
        return self._sorted_keys

    def keys(self) -> list[str]:
        """Return a copy of all keys in lexicographic order."""
        return list(self._ordered_keys())

    def prefix_query(self, prefix: str) -> list[Entry]:
        """Return every entry whose key starts with ``prefix``.

        The exact-match entry is included when present. Entries come back in
        lexicographic key order.

        Args:
            prefix: Leading characters to match.

        Returns:
            List of ``(key, results)`` pairs.
        """
        keys = self._ordered_keys()
        matches = []
        position = bisect.bisect_left(keys, prefix)
        while position < len(keys) and keys[position].startswith(prefix):
            key = keys[position]
            matches.append((key, self._results[key]))
            position += 1
        return matches

    def entries(self) -> list[Entry]:
        """Return every stored ``(key, results)`` pair."""
        return list(self._results.items())


def _include_module(module_name: str, module_prefixes: Iterable[str]) -> bool:
    """Check if a module equals or is nested under one of the prefixes.

    Uses exact match or prefix + "." so "Lean" does not match "LeanSearchClient".
    """
    return any(
        module_name == prefix or module_name.startswith(prefix + ".")
        for prefix in module_prefixes
    )


def search_results_from_descriptor(
    descriptor: ModuleDescriptor,
) -> list[SearchResult]:
    """Convert every declaration of a descriptor into a search result."""
    results = []
    for declaration in descriptor.declarations:
        information = declaration.info
        results.append(
            SearchResult(
                name=information.name,
                module=descriptor.name,
                kind=information.kind,
                doc=information.doc,
                doc_link=information.doc_link,
                source_link=information.source_link,
                signature=signature_from_header(declaration.header, information.name),
            )
        )
    return results


def merge_descriptors(
    descriptors: Iterable[ModuleDescriptor],
    module_prefixes: Iterable[str] | None = None,
) -> DeclarationStore:
    """Merge the declarations of all descriptors into one store.

    Args:
        descriptors: Decoded module descriptors, in any order.
        module_prefixes: If given, only modules equal to or nested under one
            of these prefixes are indexed.

    Returns:
        A store holding every declaration keyed by its fully qualified name.
    """
    prefixes = list(module_prefixes) if module_prefixes else None
    store = DeclarationStore()
    skipped_modules = 0

    for descriptor in descriptors:
        if prefixes is not None and not _include_module(descriptor.name, prefixes):
            skipped_modules += 1
            continue
        for result in search_results_from_descriptor(descriptor):
            store.insert(result.name, result)

    if skipped_modules:
        logger.info(f"Skipped {skipped_modules} modules outside {prefixes}")
    logger.info(f"Declaration store holds {len(store)} distinct names")
    return store
