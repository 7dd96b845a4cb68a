"""Conversion of raw Spotify JSON objects into core models."""

from typing import Any, Dict, Iterable, List, Optional

from playlist_router.core import AlbumInfo, ArtistInfo, TrackInfo


def parse_album(album: Optional[Dict[str, Any]]) -> AlbumInfo:
    album = album or {}
    return AlbumInfo(
        id=album.get("id") or "",
        name=album.get("name") or "",
        release_date=album.get("release_date"),
        uri=album.get("uri") or "",
    )


def parse_playlist_track(item: Dict[str, Any]) -> Optional[TrackInfo]:
    """
    Convert one playlist item ({"added_at": ..., "track": {...}}) to TrackInfo.

    Returns None for entries without a usable track (removed or unavailable
    tracks come back with "track": null, local files have no id). Derived
    fields are left at their defaults.
    """
    track = item.get("track")
    if not track or not track.get("id"):
        return None

    return TrackInfo(
        id=track["id"],
        name=track.get("name") or "",
        uri=track.get("uri") or "",
        duration_ms=int(track.get("duration_ms") or 0),
        popularity=int(track.get("popularity") or 0),
        explicit=bool(track.get("explicit")),
        artists=tuple(
            a["id"] for a in track.get("artists") or [] if a and a.get("id")
        ),
        album=parse_album(track.get("album")),
    )


def parse_playlist_tracks(items: Iterable[Dict[str, Any]]) -> List[TrackInfo]:
    tracks: List[TrackInfo] = []
    for item in items or []:
        parsed = parse_playlist_track(item)
        if parsed is not None:
            tracks.append(parsed)
    return tracks


def parse_artist(artist: Dict[str, Any]) -> ArtistInfo:
    return ArtistInfo(
        id=artist["id"],
        name=artist.get("name") or "",
        genres=tuple(artist.get("genres") or ()),
        popularity=int(artist.get("popularity") or 0),
        uri=artist.get("uri") or "",
    )
