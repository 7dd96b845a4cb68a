"""Base/child playlist routing for Spotify."""

__version__ = "0.1.0"
