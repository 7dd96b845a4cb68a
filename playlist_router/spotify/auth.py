"""Access-token loading for the Spotify Web API.

The OAuth login flow and token refresh live outside this project: they write
the token JSON to SPOTIFY_TOKEN_FILE. This module only reads it back.
"""

from typing import Dict, Optional

from playlist_router import config
from playlist_router.core import log_warning, read_json


class SpotifyAuthError(Exception):
    """Base class for Spotify authentication problems."""


class SpotifyTokenMissing(SpotifyAuthError):
    """No usable access token is available."""


def load_spotify_token(token_file: Optional[str] = None) -> Dict:
    """
    Return the current token info (at least an 'access_token' key).

    Lookup order:
      - SPOTIFY_ACCESS_TOKEN environment variable
      - token JSON file (SPOTIFY_TOKEN_FILE, or `token_file` when given)

    Raises SpotifyTokenMissing when neither provides an access token.
    """
    if config.SPOTIFY_ACCESS_TOKEN:
        return {"access_token": config.SPOTIFY_ACCESS_TOKEN}

    path = token_file or config.SPOTIFY_TOKEN_FILE

    def _on_error(e: Exception) -> None:
        log_warning(f"Spotify token file {path} is corrupted; ignoring it.")

    token_info = read_json(path, default=None, on_error=_on_error)
    if not isinstance(token_info, dict) or not token_info.get("access_token"):
        raise SpotifyTokenMissing("Spotify authorization required.")
    return token_info


def spotify_headers(token_info: Dict) -> Dict:
    return {"Authorization": f"Bearer {token_info['access_token']}"}
