"""Thin Spotify Web API client used by the track aggregator.

Only the two read endpoints the aggregator needs are wrapped. Each method does
exactly one HTTP request; pagination and batching are the caller's job.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import requests

from playlist_router import config
from playlist_router.core import log_debug

from .auth import spotify_headers

MAX_ARTISTS_PER_REQUEST = 50


class SpotifyAPIError(Exception):
    """Non-200 answer from the Spotify Web API."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(f"{message} (status {status_code}): {body}")
        self.status_code = status_code
        self.body = body


@dataclass
class PlaylistTracksPage:
    """One page of GET /playlists/{id}/tracks."""

    items: List[Dict[str, Any]] = field(default_factory=list)
    next: Optional[str] = None
    total: int = 0


class SpotifyClient:
    def __init__(
        self,
        token_info: Dict,
        session: Optional[requests.Session] = None,
        api_base: str = config.SPOTIFY_API_BASE,
        timeout: float = config.REQUEST_TIMEOUT,
    ):
        self.token_info = token_info
        self.session = session or requests.Session()
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, params: Dict[str, Any], what: str) -> Dict[str, Any]:
        r = self.session.get(
            f"{self.api_base}/{path}",
            headers=spotify_headers(self.token_info),
            params=params,
            timeout=self.timeout,
        )
        if r.status_code != 200:
            raise SpotifyAPIError(f"spotify {what} fetch failed", r.status_code, r.text)
        return r.json()

    def get_playlist_tracks(
        self, playlist_id: str, limit: int, offset: int
    ) -> PlaylistTracksPage:
        log_debug(
            f"Fetching playlist tracks {playlist_id} (limit={limit}, offset={offset})"
        )
        data = self._get(
            f"playlists/{playlist_id}/tracks",
            {"limit": limit, "offset": offset},
            "playlist tracks",
        )
        return PlaylistTracksPage(
            items=data.get("items") or [],
            next=data.get("next"),
            total=data.get("total") or 0,
        )

    def get_several_artists(self, artist_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Return artist objects for one batch of ids (at most 50).

        Unknown ids come back as null from Spotify and are dropped.
        """
        if not artist_ids:
            return []
        if len(artist_ids) > MAX_ARTISTS_PER_REQUEST:
            raise ValueError(
                f"at most {MAX_ARTISTS_PER_REQUEST} artist ids per request, "
                f"got {len(artist_ids)}"
            )

        log_debug(f"Fetching {len(artist_ids)} artists")
        data = self._get("artists", {"ids": ",".join(artist_ids)}, "artists")
        return [a for a in data.get("artists") or [] if a]
