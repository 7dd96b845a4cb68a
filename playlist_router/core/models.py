from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class AlbumInfo:
    id: str
    name: str
    release_date: Optional[str] = None
    uri: str = ""


@dataclass(frozen=True)
class ArtistInfo:
    """Artist details resolved from the Spotify /artists endpoint."""

    id: str
    name: str
    genres: Tuple[str, ...] = ()
    popularity: int = 0
    uri: str = ""


@dataclass(frozen=True)
class TrackInfo:
    """
    One playlist entry with everything the filters need.

    The first block comes straight from the playlist listing. The second block
    is derived from the track's resolved artists by the aggregator, which sets
    it once when it builds the final record:

    - release_year          : year of album.release_date, 0 when unknown
    - all_genres            : lower-cased union of the artists' genres
    - max_artist_popularity : highest popularity among resolved artists,
                              None when no artist resolved
    - artist_names          : resolved artist names, in track order
    """

    id: str
    name: str
    uri: str
    duration_ms: int = 0
    popularity: int = 0
    explicit: bool = False
    artists: Tuple[str, ...] = ()
    album: Optional[AlbumInfo] = None

    release_year: int = 0
    all_genres: Tuple[str, ...] = ()
    max_artist_popularity: Optional[int] = None
    artist_names: Tuple[str, ...] = ()


@dataclass
class PlaylistTracksInfo:
    """Aggregated tracks and artists of one base playlist, for one sync run."""

    playlist_id: str
    user_id: str
    tracks: List[TrackInfo] = field(default_factory=list)
    artists: Dict[str, ArtistInfo] = field(default_factory=dict)
    api_call_count: int = 0

    def unique_artist_ids(self) -> List[str]:
        """Artist ids referenced by the tracks, deduplicated, first-seen order."""
        seen: Dict[str, None] = {}
        for track in self.tracks:
            for artist_id in track.artists:
                if artist_id:
                    seen.setdefault(artist_id, None)
        return list(seen)
