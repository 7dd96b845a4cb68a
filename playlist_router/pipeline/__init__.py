"""Public façade for the playlist_router.pipeline package.

Track predicates, the per-child filter engine, the Spotify aggregator and the
track router. Other packages should import pipeline behaviour from here.
"""

from .aggregator import (
    TrackAggregator,
    parse_release_year,
    with_derived_fields,
)
from .errors import (
    STAGE_BASE_PLAYLIST,
    STAGE_PLAYLIST_ARTISTS,
    STAGE_PLAYLIST_TRACKS,
    AggregationError,
)
from .filter_engine import FilterEngine
from .filters import (
    PREDICATES,
    artist_keywords_filter,
    artist_popularity_filter,
    duration_filter,
    explicit_filter,
    genres_filter,
    matches_bool,
    matches_range,
    matches_set_text,
    matches_set_values,
    popularity_filter,
    release_year_filter,
    track_keywords_filter,
)
from .router import TrackRouter, build_filter_engines, route_tracks

__all__ = [
    "TrackAggregator",
    "parse_release_year",
    "with_derived_fields",
    "AggregationError",
    "STAGE_BASE_PLAYLIST",
    "STAGE_PLAYLIST_TRACKS",
    "STAGE_PLAYLIST_ARTISTS",
    "FilterEngine",
    "PREDICATES",
    "matches_range",
    "matches_bool",
    "matches_set_values",
    "matches_set_text",
    "duration_filter",
    "popularity_filter",
    "explicit_filter",
    "genres_filter",
    "release_year_filter",
    "artist_popularity_filter",
    "track_keywords_filter",
    "artist_keywords_filter",
    "TrackRouter",
    "build_filter_engines",
    "route_tracks",
]
