"""Routing of aggregated tracks into child playlists.

Pure and side-effect free apart from logging: no Spotify I/O, no storage.
"""

from typing import Dict, Iterable, List, Optional

from playlist_router.core import (
    ChildPlaylist,
    PlaylistTracksInfo,
    TrackInfo,
    log_info,
    log_step,
    log_success,
)

from .filter_engine import FilterEngine


def build_filter_engines(
    child_playlists: Optional[Iterable[ChildPlaylist]],
) -> Dict[str, FilterEngine]:
    """
    One engine per Spotify playlist id of an active child, in input order.

    When several active children share a Spotify playlist id, the last one wins.
    """
    engines: Dict[str, FilterEngine] = {}
    for child in child_playlists or []:
        if not child.is_active:
            continue
        engines[child.spotify_playlist_id] = FilterEngine.for_child(child)
    return engines


def route_tracks(
    tracks: Optional[Iterable[TrackInfo]],
    child_playlists: Optional[Iterable[ChildPlaylist]],
) -> Dict[str, List[str]]:
    """
    Map each active child's Spotify playlist id to the URIs of matching tracks.

    - inactive children never appear in the result
    - children with no match have no key
    - a track can be routed to any number of children
    - URIs keep the order of `tracks`
    """
    engines = build_filter_engines(child_playlists)
    routing: Dict[str, List[str]] = {}

    for track in tracks or []:
        for child_id, engine in engines.items():
            if engine.match_track(track):
                routing.setdefault(child_id, []).append(track.uri)

    return routing


class TrackRouter:
    def route(
        self,
        tracks: Optional[PlaylistTracksInfo],
        child_playlists: Optional[List[ChildPlaylist]],
    ) -> Dict[str, List[str]]:
        track_list = tracks.tracks if tracks is not None else []
        children = child_playlists or []

        log_step(
            f"Routing {len(track_list)} tracks into {len(children)} child playlists"
            + (f" (base playlist {tracks.playlist_id})" if tracks is not None else "")
        )

        routing = route_tracks(track_list, children)

        total_routed = 0
        for child_id, uris in routing.items():
            total_routed += len(uris)
            log_info(f"  {child_id}: {len(uris)} matched tracks")

        log_success(
            f"Routing completed: {total_routed} tracks routed, "
            f"{len(routing)} child playlists with matches."
        )
        return routing
