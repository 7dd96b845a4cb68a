from typing import Dict, List, Optional

from pydantic import BaseModel

from playlist_router.core import ChildPlaylist, TrackInfo


class TrackPayload(BaseModel):
    """A track with its derived fields already computed."""

    id: str
    name: str = ""
    uri: str
    duration_ms: int = 0
    popularity: int = 0
    explicit: bool = False
    artists: List[str] = []
    release_year: int = 0
    all_genres: List[str] = []
    max_artist_popularity: Optional[int] = None
    artist_names: List[str] = []

    def to_track_info(self) -> TrackInfo:
        return TrackInfo(
            id=self.id,
            name=self.name,
            uri=self.uri,
            duration_ms=self.duration_ms,
            popularity=self.popularity,
            explicit=self.explicit,
            artists=tuple(self.artists),
            release_year=self.release_year,
            all_genres=tuple(self.all_genres),
            max_artist_popularity=self.max_artist_popularity,
            artist_names=tuple(self.artist_names),
        )


class RoutingPreviewRequest(BaseModel):
    tracks: List[TrackPayload] = []
    child_playlists: List[ChildPlaylist] = []


class RoutingPreviewResponse(BaseModel):
    routing: Dict[str, List[str]]
    total_routed: int


class BasePlaylistRoutingResponse(BaseModel):
    base_playlist_id: str
    tracks_processed: int
    api_call_count: int
    routing: Dict[str, List[str]]
    total_routed: int
