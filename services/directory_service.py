"""Creator directory filtering and ranking.

This module implements the discovery page logic:
- matching a single creator against the visitor's filter criteria,
- ordering creators by the selected sort mode,
- composing both into the directory query,
- deriving the category list and the home page's top creators.

Everything here is pure and synchronous. Inputs are never mutated and every
function returns a new list, so callers may pass the store's own sequence.
"""
from typing import Iterable, List, Sequence

from models import Creator, FilterCriteria, SortOption

ALL = "All"


def _haystack(creator: Creator) -> str:
    """Lowercased text that free-text search runs against."""
    return " ".join(
        [
            creator.shop_name,
            creator.owner_name,
            creator.short_description,
            creator.bio,
            " ".join(creator.tags),
        ]
    ).lower()


def matches(creator: Creator, criteria: FilterCriteria) -> bool:
    """Return whether a creator passes every filter in ``criteria``.

    Category and vetting match exactly unless set to "All"; the rating floor
    is inclusive; search is a case-insensitive substring test over names,
    descriptions and tags. Criteria are never validated here, so impossible
    thresholds simply match nothing.
    """
    if criteria.category != ALL and creator.primary_category != criteria.category:
        return False

    if creator.rating < criteria.min_rating:
        return False

    if criteria.vetting != ALL and creator.vetting_status != criteria.vetting:
        return False

    query = criteria.search.strip().lower()
    if query and query not in _haystack(creator):
        return False

    return True


def _sort_key(sort_by: SortOption):
    if sort_by == SortOption.RATING:
        return lambda c: c.rating
    # RECENT has no date to rank on and uses sales as a proxy
    return lambda c: c.sales


def sort_creators(creators: Iterable[Creator], sort_by: SortOption) -> List[Creator]:
    """Return creators ordered high-to-low by the chosen sort mode.

    ``sorted`` is stable even with ``reverse=True``, so creators with equal
    keys keep their store order and repeated renders stay identical.
    """
    return sorted(creators, key=_sort_key(sort_by), reverse=True)


def query(all_creators: Sequence[Creator], criteria: FilterCriteria) -> List[Creator]:
    """Filter the full creator list with ``criteria`` and sort the survivors."""
    survivors = [c for c in all_creators if matches(c, criteria)]
    return sort_creators(survivors, criteria.sort_by)


def distinct_categories(all_creators: Iterable[Creator]) -> List[str]:
    """Unique primary categories, sorted ascending for the category selector."""
    return sorted({c.primary_category for c in all_creators})


def top_creators(all_creators: Sequence[Creator], limit: int) -> List[Creator]:
    """Return the ``limit`` best-selling creators."""
    if limit <= 0:
        return []
    return sort_creators(all_creators, SortOption.SALES)[:limit]
