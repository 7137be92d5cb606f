"""
Filtering module for property and prospect lists.

Applies the broker's list filters (size band, clear height, rail
access, free-text search) and sort orders before display.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .prospect import Prospect, ProspectStatus
from .warehouse import Property


class SizeRange(Enum):
    """Square footage band."""

    ALL = "all"
    SMALL = "small"  # Under 50K SF
    MEDIUM = "medium"  # 50K - 200K SF
    LARGE = "large"  # 200K - 500K SF
    XLARGE = "xlarge"  # Over 500K SF


class ClearHeightRange(Enum):
    """Clear height band."""

    ALL = "all"
    LOW = "low"  # Under 24'
    MEDIUM = "medium"  # 24' - 32'
    HIGH = "high"  # Over 32'


class PropertySort(Enum):
    """Sort order for property lists."""

    DATE_ADDED = "date_added"  # Newest first
    SIZE = "size"  # Largest first
    PRICE = "price"  # Cheapest asking rate first
    LOCATION = "location"  # City A-Z


# Minimum search length before prospect text search applies
MIN_SEARCH_LENGTH = 2


@dataclass
class PropertyFilters:
    """Active property list filters."""

    search_text: str = ""
    size: SizeRange = SizeRange.ALL
    clear_height: ClearHeightRange = ClearHeightRange.ALL
    rail_access_only: bool = False
    sort_by: PropertySort = PropertySort.DATE_ADDED

    def reset(self) -> None:
        """Clear all filters back to defaults."""
        self.search_text = ""
        self.size = SizeRange.ALL
        self.clear_height = ClearHeightRange.ALL
        self.rail_access_only = False
        self.sort_by = PropertySort.DATE_ADDED


def filter_by_search(prop: Property, text: str) -> bool:
    """Case-insensitive match on address, city or state."""
    if not text:
        return True
    needle = text.lower()
    return any(needle in value.lower() for value in (prop.address, prop.city, prop.state))


def filter_by_size(prop: Property, size: SizeRange) -> bool:
    """Filter by square footage band."""
    sf = prop.square_footage

    if size == SizeRange.SMALL:
        return sf < 50_000
    if size == SizeRange.MEDIUM:
        return 50_000 <= sf < 200_000
    if size == SizeRange.LARGE:
        return 200_000 <= sf < 500_000
    if size == SizeRange.XLARGE:
        return sf >= 500_000
    return True


def filter_by_clear_height(prop: Property, height: ClearHeightRange) -> bool:
    """Filter by clear height band."""
    clear = prop.clear_height

    if height == ClearHeightRange.LOW:
        return clear < 24.0
    if height == ClearHeightRange.MEDIUM:
        return 24.0 <= clear <= 32.0
    if height == ClearHeightRange.HIGH:
        return clear > 32.0
    return True


_SORT_KEYS: dict[PropertySort, tuple[Callable[[Property], object], bool]] = {
    PropertySort.DATE_ADDED: (lambda p: p.date_added, True),
    PropertySort.SIZE: (lambda p: p.square_footage, True),
    PropertySort.PRICE: (lambda p: p.asking_rate, False),
    PropertySort.LOCATION: (lambda p: p.city, False),
}


def sort_properties(properties: list[Property], sort_by: PropertySort) -> list[Property]:
    """Return properties in the requested order."""
    key, reverse = _SORT_KEYS[sort_by]
    return sorted(properties, key=key, reverse=reverse)


def filter_properties(
    properties: list[Property],
    filters: Optional[PropertyFilters] = None
) -> list[Property]:
    """
    Apply list filters and sort order to properties.

    Args:
        properties: Property inventory
        filters: Active filters (defaults show everything, newest first)

    Returns:
        New list of matching properties, sorted
    """
    filters = filters or PropertyFilters()
    search = filters.search_text.strip()

    results = [
        p for p in properties
        if filter_by_search(p, search)
        and filter_by_size(p, filters.size)
        and filter_by_clear_height(p, filters.clear_height)
        and (p.rail_access or not filters.rail_access_only)
    ]

    return sort_properties(results, filters.sort_by)


def _prospect_matches_search(prospect: Prospect, text: str) -> bool:
    needle = text.lower()
    haystack = (
        prospect.full_name,
        prospect.email,
        prospect.phone,
        prospect.business_type.value.replace("_", " "),
    )
    return any(needle in value.lower() for value in haystack)


def filter_prospects(
    prospects: list[Prospect],
    status: Optional[ProspectStatus] = None,
    search_text: str = ""
) -> list[Prospect]:
    """
    Filter prospects by status and free-text search.

    Search only applies once the trimmed text has at least
    MIN_SEARCH_LENGTH characters. Results are newest first.
    """
    results = list(prospects)

    if status is not None:
        results = [p for p in results if p.status == status]

    trimmed = search_text.strip()
    if len(trimmed) >= MIN_SEARCH_LENGTH:
        results = [p for p in results if _prospect_matches_search(p, trimmed)]

    results.sort(key=lambda p: p.date_created, reverse=True)

    return results


def status_counts(prospects: list[Prospect]) -> dict[ProspectStatus, int]:
    """Count prospects per status (statuses with no prospects are omitted)."""
    counts: dict[ProspectStatus, int] = {}
    for prospect in prospects:
        counts[prospect.status] = counts.get(prospect.status, 0) + 1
    return counts
