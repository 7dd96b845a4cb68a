"""Public façade for the playlist_router.core package.

Logging helpers, filesystem utilities and the shared models (tracks, artists,
playlists, filter rules). Other packages import these from here rather than
from the submodules.
"""

from .fs_utils import read_json, write_json
from .logging_config import configure_logging
from .logging_utils import (
    log_debug,
    log_error,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from .models import AlbumInfo, ArtistInfo, PlaylistTracksInfo, TrackInfo
from .playlists import (
    BasePlaylist,
    ChildPlaylist,
    FilterRules,
    RangeFilter,
    SetFilter,
)

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_debug",
    "log_progress",
    "write_json",
    "read_json",
    "AlbumInfo",
    "ArtistInfo",
    "TrackInfo",
    "PlaylistTracksInfo",
    "RangeFilter",
    "SetFilter",
    "FilterRules",
    "BasePlaylist",
    "ChildPlaylist",
]
