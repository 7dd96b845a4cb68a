from typing import Dict, List

from fastapi import APIRouter, HTTPException

from playlist_router.core import PlaylistTracksInfo, log_info
from playlist_router.data import (
    BasePlaylistRepository,
    ChildPlaylistRepository,
    PlaylistNotFoundError,
)
from playlist_router.pipeline import (
    STAGE_BASE_PLAYLIST,
    AggregationError,
    TrackAggregator,
    TrackRouter,
)
from playlist_router.spotify import (
    SpotifyClient,
    SpotifyTokenMissing,
    load_spotify_token,
)

from .schemas import (
    BasePlaylistRoutingResponse,
    RoutingPreviewRequest,
    RoutingPreviewResponse,
)

router = APIRouter()

base_playlist_repository = BasePlaylistRepository()
child_playlist_repository = ChildPlaylistRepository()
track_router = TrackRouter()


def build_aggregator() -> TrackAggregator:
    """Aggregator wired to the live Spotify API and the JSON playlist store."""
    token_info = load_spotify_token()
    return TrackAggregator(SpotifyClient(token_info), base_playlist_repository)


def _total(routing: Dict[str, List[str]]) -> int:
    return sum(len(uris) for uris in routing.values())


@router.post("/preview", response_model=RoutingPreviewResponse)
def preview_routing(body: RoutingPreviewRequest) -> RoutingPreviewResponse:
    """
    Route an in-memory list of tracks through the given child playlists.

    No Spotify call, no persistent state touched.
    """
    tracks = PlaylistTracksInfo(
        playlist_id="preview",
        user_id="",
        tracks=[t.to_track_info() for t in body.tracks],
    )
    routing = track_router.route(tracks, body.child_playlists)
    return RoutingPreviewResponse(routing=routing, total_routed=_total(routing))


@router.get("/{base_playlist_id}", response_model=BasePlaylistRoutingResponse)
def route_base_playlist(base_playlist_id: str, user_id: str) -> BasePlaylistRoutingResponse:
    """
    Aggregate a stored base playlist from Spotify and route it through its
    stored child playlists. Nothing is written to Spotify.
    """
    try:
        aggregator = build_aggregator()
    except SpotifyTokenMissing as e:
        raise HTTPException(
            status_code=401,
            detail={
                "status": "unauthenticated",
                "message": str(e) or "Spotify authorization required.",
            },
        )

    try:
        tracks = aggregator.aggregate(user_id, base_playlist_id)
    except AggregationError as e:
        if e.stage == STAGE_BASE_PLAYLIST and isinstance(
            e.__cause__, PlaylistNotFoundError
        ):
            raise HTTPException(status_code=404, detail=str(e))
        raise HTTPException(status_code=502, detail=str(e))

    children = child_playlist_repository.list_for_base(base_playlist_id, user_id)
    routing = track_router.route(tracks, children)

    log_info(
        f"Routed base playlist {base_playlist_id}: "
        f"{len(tracks.tracks)} tracks, {len(children)} child playlists."
    )

    return BasePlaylistRoutingResponse(
        base_playlist_id=base_playlist_id,
        tracks_processed=len(tracks.tracks),
        api_call_count=tracks.api_call_count,
        routing=routing,
        total_routed=_total(routing),
    )
