from typing import List

from playlist_router.core import BasePlaylist, ChildPlaylist

from .store import load_playlists, save_playlists


class PlaylistNotFoundError(LookupError):
    """No playlist with this id belongs to the given user."""


class BasePlaylistRepository:
    """Lookup and persistence of base playlists in the JSON store."""

    def get_by_id(self, base_playlist_id: str, user_id: str) -> BasePlaylist:
        bases, _ = load_playlists()
        for playlist in bases:
            if playlist.id == base_playlist_id and playlist.user_id == user_id:
                return playlist
        raise PlaylistNotFoundError(
            f"base playlist {base_playlist_id} not found for user {user_id}"
        )

    def list_for_user(self, user_id: str) -> List[BasePlaylist]:
        bases, _ = load_playlists()
        return [p for p in bases if p.user_id == user_id]

    def save(self, playlist: BasePlaylist) -> None:
        """Insert or replace (by id) a base playlist."""
        bases, children = load_playlists()
        bases = [p for p in bases if p.id != playlist.id]
        bases.append(playlist)
        save_playlists(bases, children)


class ChildPlaylistRepository:
    """Lookup and persistence of child playlists in the JSON store."""

    def list_for_base(self, base_playlist_id: str, user_id: str) -> List[ChildPlaylist]:
        """Children of a base playlist, in stored order (active or not)."""
        _, children = load_playlists()
        return [
            p
            for p in children
            if p.base_playlist_id == base_playlist_id and p.user_id == user_id
        ]

    def save(self, playlist: ChildPlaylist) -> None:
        """Insert or replace (by id) a child playlist."""
        bases, children = load_playlists()
        children = [p for p in children if p.id != playlist.id]
        children.append(playlist)
        save_playlists(bases, children)
