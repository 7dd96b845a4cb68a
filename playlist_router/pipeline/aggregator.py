"""Aggregation of a base playlist's tracks and artist metadata.

TrackAggregator.aggregate() pages through the playlist on Spotify, resolves
every referenced artist once (in batches), and returns a PlaylistTracksInfo
whose tracks carry the derived fields the filters work on.

Collaborators:
  - spotify_client : get_playlist_tracks(playlist_id, limit, offset) returning
                     a page with `.items`, `.next` and `.total`, and
                     get_several_artists(ids) returning raw artist dicts
  - base_playlists : get_by_id(base_playlist_id, user_id) returning an object
                     with `spotify_playlist_id`

Any collaborator failure aborts the run with an AggregationError; no partial
result is returned and nothing is retried.
"""

from dataclasses import replace
from typing import Dict, List, Sequence, Tuple

from playlist_router import config
from playlist_router.core import (
    ArtistInfo,
    PlaylistTracksInfo,
    TrackInfo,
    log_error,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
)
from playlist_router.spotify import parse_artist, parse_playlist_tracks

from .errors import (
    STAGE_BASE_PLAYLIST,
    STAGE_PLAYLIST_ARTISTS,
    STAGE_PLAYLIST_TRACKS,
    stage_error,
)


def parse_release_year(release_date: str | None) -> int:
    """
    Year part of a Spotify release date ("1999", "1999-10" or "1999-10-12").

    Returns 0 when the date is missing or does not start with a 4-digit year.
    """
    if not release_date or len(release_date) < 4:
        return 0
    year = release_date[:4]
    return int(year) if year.isdigit() else 0


def with_derived_fields(track: TrackInfo, artists: Dict[str, ArtistInfo]) -> TrackInfo:
    """
    Return a copy of `track` with release_year, all_genres,
    max_artist_popularity and artist_names filled in from `artists`.

    Artist ids missing from `artists` are ignored. When none of the track's
    artists resolved, max_artist_popularity stays None.
    """
    genres: Dict[str, None] = {}
    max_popularity = None
    names: List[str] = []

    for artist_id in track.artists:
        artist = artists.get(artist_id)
        if artist is None:
            continue
        for genre in artist.genres:
            genres.setdefault(genre.lower(), None)
        if max_popularity is None or artist.popularity > max_popularity:
            max_popularity = artist.popularity
        names.append(artist.name)

    release_date = track.album.release_date if track.album else None
    return replace(
        track,
        release_year=parse_release_year(release_date),
        all_genres=tuple(genres),
        max_artist_popularity=max_popularity,
        artist_names=tuple(names),
    )


class TrackAggregator:
    def __init__(
        self,
        spotify_client,
        base_playlists,
        page_size: int = config.TRACKS_PAGE_SIZE,
        artists_batch_size: int = config.ARTISTS_BATCH_SIZE,
    ):
        if page_size <= 0 or artists_batch_size <= 0:
            raise ValueError("page_size and artists_batch_size must be positive")
        self.spotify_client = spotify_client
        self.base_playlists = base_playlists
        self.page_size = page_size
        self.artists_batch_size = artists_batch_size

    def aggregate(self, user_id: str, base_playlist_id: str) -> PlaylistTracksInfo:
        log_section(f"Aggregating base playlist {base_playlist_id}")

        try:
            base_playlist = self.base_playlists.get_by_id(base_playlist_id, user_id)
        except Exception as e:
            log_error(f"Failed to fetch base playlist {base_playlist_id}", e)
            raise stage_error(STAGE_BASE_PLAYLIST, e) from e

        raw_tracks, track_calls = self._fetch_all_tracks(
            base_playlist.spotify_playlist_id
        )
        log_info(f"{len(raw_tracks)} tracks fetched in {track_calls} page(s).")

        playlist = PlaylistTracksInfo(
            playlist_id=base_playlist_id,
            user_id=user_id,
            tracks=raw_tracks,
            api_call_count=track_calls,
        )

        artists, artist_calls = self._fetch_artists(playlist.unique_artist_ids())
        playlist.artists = artists
        playlist.api_call_count += artist_calls
        playlist.tracks = [with_derived_fields(t, artists) for t in raw_tracks]

        log_success(
            f"Aggregated {len(playlist.tracks)} tracks and {len(artists)} artists "
            f"({playlist.api_call_count} API calls)."
        )
        return playlist

    def _fetch_all_tracks(self, spotify_playlist_id: str) -> Tuple[List[TrackInfo], int]:
        """Page through the playlist until Spotify reports no `next` page."""
        log_step(f"Fetching tracks of Spotify playlist {spotify_playlist_id}...")
        tracks: List[TrackInfo] = []
        api_calls = 0
        offset = 0

        while True:
            try:
                page = self.spotify_client.get_playlist_tracks(
                    spotify_playlist_id, self.page_size, offset
                )
                tracks.extend(parse_playlist_tracks(page.items))
            except Exception as e:
                log_error(f"Failed to fetch playlist tracks at offset {offset}", e)
                raise stage_error(STAGE_PLAYLIST_TRACKS, e) from e

            api_calls += 1
            if page.total:
                estimated_pages = (page.total + self.page_size - 1) // self.page_size
                log_progress(api_calls, estimated_pages, prefix="  Playlist pages")

            if page.next is None:
                return tracks, api_calls
            offset += self.page_size

    def _fetch_artists(
        self, artist_ids: Sequence[str]
    ) -> Tuple[Dict[str, ArtistInfo], int]:
        """Resolve each id once, `artists_batch_size` ids per request."""
        artists: Dict[str, ArtistInfo] = {}
        if not artist_ids:
            log_info("No artists referenced; skipping artist lookup.")
            return artists, 0

        log_step(f"Fetching {len(artist_ids)} artists...")
        total_batches = -(-len(artist_ids) // self.artists_batch_size)
        api_calls = 0

        for start in range(0, len(artist_ids), self.artists_batch_size):
            batch = list(artist_ids[start : start + self.artists_batch_size])
            try:
                resolved = [
                    parse_artist(raw)
                    for raw in self.spotify_client.get_several_artists(batch)
                ]
            except Exception as e:
                log_error(f"Failed to fetch artist batch {api_calls + 1}", e)
                raise stage_error(STAGE_PLAYLIST_ARTISTS, e) from e

            api_calls += 1
            for artist in resolved:
                artists[artist.id] = artist
            log_progress(api_calls, total_batches, prefix="  Artist batches")

        return artists, api_calls
