"""Public façade for the playlist_router.spotify package.

Token loading, the read-only Web API client and the JSON-to-model mappers.
Callers import these from here instead of the internal modules.
"""

from .auth import (
    SpotifyAuthError,
    SpotifyTokenMissing,
    load_spotify_token,
    spotify_headers,
)
from .client import (
    MAX_ARTISTS_PER_REQUEST,
    PlaylistTracksPage,
    SpotifyAPIError,
    SpotifyClient,
)
from .mappers import (
    parse_album,
    parse_artist,
    parse_playlist_track,
    parse_playlist_tracks,
)

__all__ = [
    "SpotifyAuthError",
    "SpotifyTokenMissing",
    "load_spotify_token",
    "spotify_headers",
    "MAX_ARTISTS_PER_REQUEST",
    "PlaylistTracksPage",
    "SpotifyAPIError",
    "SpotifyClient",
    "parse_album",
    "parse_artist",
    "parse_playlist_track",
    "parse_playlist_tracks",
]
