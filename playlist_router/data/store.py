from typing import Any, Dict, List, Tuple

from playlist_router import config
from playlist_router.core import (
    BasePlaylist,
    ChildPlaylist,
    log_warning,
    read_json,
    write_json,
)

PLAYLISTS_FILE = config.PLAYLISTS_FILE


def _parse_entries(raw: Any, model, label: str) -> List:
    if not isinstance(raw, list):
        return []

    parsed = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            parsed.append(model(**item))
        except ValueError as e:
            # pydantic.ValidationError is a ValueError subclass
            log_warning(f"Skipping malformed {label} entry: {e}")
    return parsed


def load_playlists() -> Tuple[List[BasePlaylist], List[ChildPlaylist]]:
    """
    Load base and child playlists from the JSON store.

    The file holds {"base_playlists": [...], "child_playlists": [...]}.
    Malformed entries are skipped; a missing or corrupted file yields two
    empty lists.
    """

    def _on_error(e: Exception) -> None:
        log_warning("Playlists file is corrupted; ignoring it.")

    data = read_json(PLAYLISTS_FILE, default={}, on_error=_on_error)
    if not isinstance(data, dict):
        log_warning("Playlists file has invalid structure; using empty store.")
        return [], []

    bases = _parse_entries(data.get("base_playlists"), BasePlaylist, "base playlist")
    children = _parse_entries(
        data.get("child_playlists"), ChildPlaylist, "child playlist"
    )
    return bases, children


def save_playlists(
    base_playlists: List[BasePlaylist],
    child_playlists: List[ChildPlaylist],
) -> None:
    payload: Dict[str, List[Dict[str, Any]]] = {
        "base_playlists": [p.model_dump(mode="json") for p in base_playlists],
        "child_playlists": [
            p.model_dump(mode="json", exclude_none=True) for p in child_playlists
        ],
    }
    write_json(PLAYLISTS_FILE, payload)
