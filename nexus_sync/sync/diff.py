"""
Snapshot comparison.

Items are keyed by path and compared by their strong hash (SHA-1). The mirror
is one-directional: items only present at the destination are ignored.
"""

from typing import Dict, Mapping, Optional

from ..models.nexus_api import RepositoryItem


def needs_transfer(source_item: RepositoryItem, destination_item: Optional[RepositoryItem]) -> bool:
    """Check whether a source item is missing or changed at the destination."""
    if destination_item is None:
        return True
    return source_item.strong_hash != destination_item.strong_hash


def compute_diff(
    source: Mapping[str, RepositoryItem], destination: Mapping[str, RepositoryItem]
) -> Dict[str, RepositoryItem]:
    """
    Compute the source items that have to be transferred.

    Args:
        source: Source snapshot keyed by path
        destination: Destination snapshot keyed by path

    Returns:
        Subset of ``source`` with every item absent from ``destination`` or
        whose strong hash differs from the destination item at the same path

    Example:
        >>> compute_diff({}, {})
        {}
    """
    return {path: item for path, item in source.items() if needs_transfer(item, destination.get(path))}


__all__ = ["compute_diff", "needs_transfer"]
