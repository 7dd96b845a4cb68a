"""Track predicates, one per filter slot of FilterRules.

Each predicate is a pure function `(config, track) -> bool`. A `None` config
means the slot is not configured and the predicate matches every track.
"""

from typing import Callable, Iterable, Optional, Tuple

from playlist_router.core import FilterRules, RangeFilter, SetFilter, TrackInfo

ARTIST_NAMES_SEPARATOR = " "


def matches_range(filter_: Optional[RangeFilter], value: Optional[float]) -> bool:
    """Inclusive range check. An unknown value never satisfies a configured range."""
    if filter_ is None:
        return True
    if value is None:
        return False

    if filter_.min is not None and value < filter_.min:
        return False
    if filter_.max is not None and value > filter_.max:
        return False
    return True


def matches_bool(expected: Optional[bool], value: bool) -> bool:
    if expected is None:
        return True
    return expected == value


def matches_set_values(filter_: Optional[SetFilter], values: Iterable[str]) -> bool:
    """Exact, case-insensitive membership of include/exclude terms in `values`."""
    if filter_ is None:
        return True

    normalized = {v.lower() for v in values}

    if any(term.lower() in normalized for term in filter_.exclude):
        return False
    if filter_.include:
        return any(term.lower() in normalized for term in filter_.include)
    return True


def matches_set_text(filter_: Optional[SetFilter], text: str) -> bool:
    """Substring, case-insensitive search of include/exclude terms in `text`."""
    if filter_ is None:
        return True

    text = text.lower()

    if any(term.lower() in text for term in filter_.exclude):
        return False
    if filter_.include:
        return any(term.lower() in text for term in filter_.include)
    return True


# ---------- Predicates ----------


def duration_filter(rules: FilterRules, track: TrackInfo) -> bool:
    return matches_range(rules.duration_ms, track.duration_ms)


def popularity_filter(rules: FilterRules, track: TrackInfo) -> bool:
    return matches_range(rules.popularity, track.popularity)


def explicit_filter(rules: FilterRules, track: TrackInfo) -> bool:
    return matches_bool(rules.explicit, track.explicit)


def genres_filter(rules: FilterRules, track: TrackInfo) -> bool:
    return matches_set_values(rules.genres, track.all_genres)


def release_year_filter(rules: FilterRules, track: TrackInfo) -> bool:
    return matches_range(rules.release_year, track.release_year)


def artist_popularity_filter(rules: FilterRules, track: TrackInfo) -> bool:
    return matches_range(rules.artist_popularity, track.max_artist_popularity)


def track_keywords_filter(rules: FilterRules, track: TrackInfo) -> bool:
    return matches_set_text(rules.track_keywords, track.name)


def artist_keywords_filter(rules: FilterRules, track: TrackInfo) -> bool:
    return matches_set_text(
        rules.artist_keywords, ARTIST_NAMES_SEPARATOR.join(track.artist_names)
    )


Predicate = Callable[[FilterRules, TrackInfo], bool]

# Evaluation order used by FilterEngine.
PREDICATES: Tuple[Tuple[str, Predicate], ...] = (
    ("duration_ms", duration_filter),
    ("popularity", popularity_filter),
    ("explicit", explicit_filter),
    ("genres", genres_filter),
    ("release_year", release_year_filter),
    ("artist_popularity", artist_popularity_filter),
    ("track_keywords", track_keywords_filter),
    ("artist_keywords", artist_keywords_filter),
)
