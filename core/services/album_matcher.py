"""Album filtering and ranking for the album picker.

Filtering is a case-insensitive substring match on the album name. Results are
ordered by asset count ascending; albums with equal counts keep their input
order.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.models import Album


def match_albums(query: str, albums: Iterable[Album]) -> tuple[Album, ...]:
    """Return albums whose name contains `query`, smallest albums first.

    An empty query keeps every album. The query is matched literally, so
    characters such as "(" or "*" have no special meaning.
    """
    if query:
        needle = query.casefold()
        candidates = [a for a in albums if needle in a.name.casefold()]
    else:
        candidates = list(albums)
    # list.sort is stable, which keeps ties in their original order
    candidates.sort(key=lambda a: a.asset_count)
    return tuple(candidates)
