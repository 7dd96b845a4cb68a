from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class RangeFilter(BaseModel):
    """Inclusive numeric range; each bound is optional and applied on its own."""

    min: Optional[float] = None
    max: Optional[float] = None


class SetFilter(BaseModel):
    """Case-insensitive include/exclude terms. Exclude always wins."""

    include: List[str] = []
    exclude: List[str] = []


class FilterRules(BaseModel):
    """
    Per-child filter configuration.

    Every slot is optional and an absent slot matches every track. `None` and
    a zero/False value are different configurations: `explicit=False` keeps
    clean tracks only, `explicit=None` keeps both.
    """

    duration_ms: Optional[RangeFilter] = None
    popularity: Optional[RangeFilter] = None
    explicit: Optional[bool] = None
    genres: Optional[SetFilter] = None
    release_year: Optional[RangeFilter] = None
    artist_popularity: Optional[RangeFilter] = None
    track_keywords: Optional[SetFilter] = None
    artist_keywords: Optional[SetFilter] = None


class BasePlaylist(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    name: str
    spotify_playlist_id: str
    is_active: bool = True


class ChildPlaylist(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    base_playlist_id: str = ""
    user_id: str = ""
    name: str = ""
    description: Optional[str] = None
    spotify_playlist_id: str
    filter_rules: Optional[FilterRules] = None
    is_active: bool = True
