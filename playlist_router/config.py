from dotenv import load_dotenv
import os

load_dotenv()

# Base & data directories
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.getenv("PLAYLIST_ROUTER_DATA_DIR", os.path.join(BASE_DIR, "data_store"))

# Persisted files
PLAYLISTS_FILE = os.path.join(DATA_DIR, "playlists.json")
SPOTIFY_TOKEN_FILE = os.getenv(
    "SPOTIFY_TOKEN_FILE", os.path.join(DATA_DIR, "spotify_token.json")
)

# Optional static token (takes precedence over the token file)
SPOTIFY_ACCESS_TOKEN = os.getenv("SPOTIFY_ACCESS_TOKEN")

# Spotify API constants
SPOTIFY_API_BASE = os.getenv("SPOTIFY_API_BASE", "https://api.spotify.com/v1")
REQUEST_TIMEOUT = float(os.getenv("SPOTIFY_REQUEST_TIMEOUT", "30"))

# Spotify caps: 50 items per playlist page, 50 ids per /artists call
TRACKS_PAGE_SIZE = int(os.getenv("TRACKS_PAGE_SIZE", "50"))
ARTISTS_BATCH_SIZE = int(os.getenv("ARTISTS_BATCH_SIZE", "50"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
