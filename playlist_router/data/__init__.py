"""Public façade for the playlist_router.data package.

JSON-backed storage of base and child playlists. Callers should use this
façade instead of importing from the store or repositories modules.
"""

from .repositories import (
    BasePlaylistRepository,
    ChildPlaylistRepository,
    PlaylistNotFoundError,
)
from .store import load_playlists, save_playlists

__all__ = [
    "load_playlists",
    "save_playlists",
    "BasePlaylistRepository",
    "ChildPlaylistRepository",
    "PlaylistNotFoundError",
]
