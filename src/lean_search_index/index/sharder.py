"""Partitioning of the declaration store into prefix shards.

Every key is assigned to the group of its first two characters, and each
group is folded into one of a bounded number of shards. A client looking up a
query prefix computes the same shard id and fetches a single file.
"""

import logging
import zlib

from lean_search_index.index.store import DeclarationStore, Entry

logger = logging.getLogger(__name__)

PREFIX_LENGTH = 2


def name_prefix(key: str) -> str:
    """Return the first two characters of a key (shorter keys unchanged)."""
    return key[:PREFIX_LENGTH]


def shard_id(prefix: str, shard_count: int) -> int:
    """Map a name prefix to its shard id.

    Args:
        prefix: One or two leading characters of a declaration name.
        shard_count: Number of shards; ids fall in ``range(shard_count)``.

    Returns:
        CRC-32 of the UTF-8 encoded prefix, modulo ``shard_count``.

    Raises:
        ValueError: If ``shard_count`` is not positive.
    """
    if shard_count < 1:
        raise ValueError(f"shard_count must be positive, got {shard_count}")
    return zlib.crc32(prefix.encode("utf-8")) % shard_count


def _entries_for_prefix(store: DeclarationStore, prefix: str) -> list[Entry]:
    """Collect the entries belonging to one prefix group.

    A full-length prefix owns every key starting with it. A shorter prefix
    only exists because of keys that short, so it owns exactly those; longer
    keys starting with it belong to their own two-character group.
    """
    matches = store.prefix_query(prefix)
    if len(prefix) < PREFIX_LENGTH:
        matches = [(key, results) for key, results in matches if key == prefix]
    return matches


def shard_store(store: DeclarationStore, shard_count: int) -> dict[int, list[Entry]]:
    """Partition a declaration store into shards.

    Entry lists of prefixes sharing a shard id are concatenated, never merged
    by key.

    Args:
        store: The merged declaration store.
        shard_count: Upper bound on the number of shards.

    Returns:
        Dictionary mapping shard id to its list of ``(name, results)`` pairs.
    """
    prefixes = sorted({name_prefix(key) for key in store.keys()})

    shards: dict[int, list[Entry]] = {}
    for prefix in prefixes:
        entries = _entries_for_prefix(store, prefix)
        shards.setdefault(shard_id(prefix, shard_count), []).extend(entries)

    logger.info(
        f"Partitioned {len(store)} names from {len(prefixes)} prefixes "
        f"into {len(shards)} shards"
    )
    return shards
