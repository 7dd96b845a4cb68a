from typing import Dict, List, Optional

import pytest

from playlist_router.core import AlbumInfo, ArtistInfo, BasePlaylist, TrackInfo
from playlist_router.data import PlaylistNotFoundError
from playlist_router.pipeline import (
    STAGE_BASE_PLAYLIST,
    STAGE_PLAYLIST_ARTISTS,
    STAGE_PLAYLIST_TRACKS,
    AggregationError,
    TrackAggregator,
    parse_release_year,
    with_derived_fields,
)
from playlist_router.spotify import PlaylistTracksPage


def _track_item(
    track_id: str,
    artists: List[str],
    release_date: Optional[str] = "2001-05-01",
    duration_ms: int = 180000,
) -> Dict:
    return {
        "added_at": "2024-01-01T00:00:00Z",
        "track": {
            "id": track_id,
            "name": f"Track {track_id}",
            "uri": f"spotify:track:{track_id}",
            "duration_ms": duration_ms,
            "popularity": 50,
            "explicit": False,
            "artists": [{"id": a, "name": a.upper()} for a in artists],
            "album": {
                "id": f"album_{track_id}",
                "name": f"Album {track_id}",
                "release_date": release_date,
                "uri": f"spotify:album:album_{track_id}",
            },
        },
    }


def _artist(artist_id: str, genres: List[str], popularity: int) -> Dict:
    return {
        "id": artist_id,
        "name": f"Artist {artist_id}",
        "genres": genres,
        "popularity": popularity,
        "uri": f"spotify:artist:{artist_id}",
    }


class FakeSpotifyClient:
    """Serves fixed pages and a fixed artist catalogue, recording every call."""

    def __init__(
        self,
        pages: List[List[Dict]],
        artists: Optional[Dict[str, Dict]] = None,
        fail_tracks_at: Optional[int] = None,
        fail_artists: bool = False,
    ):
        self.pages = pages
        self.artists = artists or {}
        self.fail_tracks_at = fail_tracks_at
        self.fail_artists = fail_artists
        self.track_calls: List[tuple] = []
        self.artist_calls: List[List[str]] = []

    def get_playlist_tracks(self, playlist_id: str, limit: int, offset: int):
        self.track_calls.append((playlist_id, limit, offset))
        index = offset // limit
        if self.fail_tracks_at is not None and index == self.fail_tracks_at:
            raise RuntimeError("network down")

        items = self.pages[index] if index < len(self.pages) else []
        has_next = index + 1 < len(self.pages)
        return PlaylistTracksPage(
            items=items,
            next=f"next-{index + 1}" if has_next else None,
            total=sum(len(p) for p in self.pages),
        )

    def get_several_artists(self, artist_ids: List[str]) -> List[Dict]:
        self.artist_calls.append(list(artist_ids))
        if self.fail_artists:
            raise RuntimeError("artists endpoint unavailable")
        return [self.artists[a] for a in artist_ids if a in self.artists]


class FakeBasePlaylists:
    def __init__(self, playlists: Optional[List[BasePlaylist]] = None):
        self.playlists = playlists or [
            BasePlaylist(
                id="base456",
                user_id="user123",
                name="Test Playlist",
                spotify_playlist_id="spotify789",
            )
        ]

    def get_by_id(self, base_playlist_id: str, user_id: str) -> BasePlaylist:
        for p in self.playlists:
            if p.id == base_playlist_id and p.user_id == user_id:
                return p
        raise PlaylistNotFoundError(base_playlist_id)


ARTISTS = {
    "artist1": _artist("artist1", ["Rock", "pop"], 80),
    "artist2": _artist("artist2", ["jazz", "rock"], 70),
    "artist3": _artist("artist3", [], 60),
}


def test_single_page_two_tracks_with_shared_artist():
    client = FakeSpotifyClient(
        pages=[
            [
                _track_item("track1", ["artist1", "artist2"]),
                _track_item("track2", ["artist2", "artist3"]),
            ]
        ],
        artists=ARTISTS,
    )
    aggregator = TrackAggregator(client, FakeBasePlaylists())

    result = aggregator.aggregate("user123", "base456")

    assert result.playlist_id == "base456"
    assert result.user_id == "user123"
    assert [t.id for t in result.tracks] == ["track1", "track2"]
    assert set(result.artists) == {"artist1", "artist2", "artist3"}
    assert result.api_call_count == 2
    assert client.track_calls == [("spotify789", 50, 0)]
    assert client.artist_calls == [["artist1", "artist2", "artist3"]]

    track1 = result.tracks[0]
    assert track1.release_year == 2001
    assert track1.all_genres == ("rock", "pop", "jazz")
    assert track1.max_artist_popularity == 80
    assert track1.artist_names == ("Artist artist1", "Artist artist2")

    track2 = result.tracks[1]
    assert track2.all_genres == ("jazz", "rock")
    assert track2.max_artist_popularity == 70


def test_pagination_follows_next_cursor():
    pages = [
        [_track_item(f"p{page}_{i}", ["artist1"]) for i in range(2)]
        for page in range(3)
    ]
    client = FakeSpotifyClient(pages=pages, artists=ARTISTS)
    aggregator = TrackAggregator(client, FakeBasePlaylists(), page_size=2)

    result = aggregator.aggregate("user123", "base456")

    assert [offset for _, _, offset in client.track_calls] == [0, 2, 4]
    assert [t.id for t in result.tracks] == [
        "p0_0",
        "p0_1",
        "p1_0",
        "p1_1",
        "p2_0",
        "p2_1",
    ]
    # 3 pages + 1 artist batch
    assert result.api_call_count == 4


def test_artist_ids_are_fetched_once_in_batches():
    artist_ids = [f"a{i}" for i in range(7)]
    catalogue = {a: _artist(a, ["pop"], 10) for a in artist_ids}
    items = [
        _track_item("t1", artist_ids[:4]),
        _track_item("t2", artist_ids[2:]),
        _track_item("t3", artist_ids),
    ]
    client = FakeSpotifyClient(pages=[items], artists=catalogue)
    aggregator = TrackAggregator(client, FakeBasePlaylists(), artists_batch_size=3)

    result = aggregator.aggregate("user123", "base456")

    assert client.artist_calls == [["a0", "a1", "a2"], ["a3", "a4", "a5"], ["a6"]]
    requested = [a for batch in client.artist_calls for a in batch]
    assert len(requested) == len(set(requested))
    assert list(result.artists) == artist_ids
    assert result.api_call_count == 1 + 3


def test_empty_playlist_makes_no_artist_call():
    client = FakeSpotifyClient(pages=[[]], artists=ARTISTS)
    aggregator = TrackAggregator(client, FakeBasePlaylists())

    result = aggregator.aggregate("user123", "base456")

    assert result.tracks == []
    assert result.artists == {}
    assert client.artist_calls == []
    assert result.api_call_count == 1


def test_unavailable_entries_are_skipped():
    items = [
        {"added_at": None, "track": None},
        {"added_at": None, "track": {"id": None, "name": "local file"}},
        _track_item("track1", ["artist1"]),
    ]
    client = FakeSpotifyClient(pages=[items], artists=ARTISTS)

    result = TrackAggregator(client, FakeBasePlaylists()).aggregate("user123", "base456")

    assert [t.id for t in result.tracks] == ["track1"]


def test_unresolved_artist_leaves_track_without_artist_data():
    client = FakeSpotifyClient(
        pages=[[_track_item("track1", ["ghost"], release_date=None)]],
        artists=ARTISTS,
    )

    result = TrackAggregator(client, FakeBasePlaylists()).aggregate("user123", "base456")

    track = result.tracks[0]
    assert track.all_genres == ()
    assert track.artist_names == ()
    assert track.max_artist_popularity is None
    assert track.release_year == 0
    assert result.artists == {}


def test_aggregate_twice_is_identical():
    pages = [
        [_track_item("track1", ["artist1", "artist2"])],
        [_track_item("track2", ["artist3", "artist1"])],
    ]
    aggregator = TrackAggregator(
        FakeSpotifyClient(pages=pages, artists=ARTISTS),
        FakeBasePlaylists(),
        page_size=1,
    )

    first = aggregator.aggregate("user123", "base456")
    second = aggregator.aggregate("user123", "base456")

    assert first == second
    assert first.artists is not second.artists


def test_base_playlist_lookup_failure():
    client = FakeSpotifyClient(pages=[[]])
    aggregator = TrackAggregator(client, FakeBasePlaylists())

    with pytest.raises(AggregationError) as exc_info:
        aggregator.aggregate("user123", "unknown")

    err = exc_info.value
    assert err.stage == STAGE_BASE_PLAYLIST
    assert str(err).startswith("failed to fetch base playlist")
    assert isinstance(err.__cause__, PlaylistNotFoundError)
    assert client.track_calls == []


def test_track_page_failure_aborts_without_artist_fetch():
    pages = [[_track_item("t1", ["artist1"])], [_track_item("t2", ["artist2"])]]
    client = FakeSpotifyClient(pages=pages, artists=ARTISTS, fail_tracks_at=1)
    aggregator = TrackAggregator(client, FakeBasePlaylists(), page_size=1)

    with pytest.raises(AggregationError) as exc_info:
        aggregator.aggregate("user123", "base456")

    assert exc_info.value.stage == STAGE_PLAYLIST_TRACKS
    assert str(exc_info.value).startswith("failed to fetch playlist tracks")
    assert client.artist_calls == []


def test_artist_batch_failure():
    client = FakeSpotifyClient(
        pages=[[_track_item("t1", ["artist1"])]], artists=ARTISTS, fail_artists=True
    )
    aggregator = TrackAggregator(client, FakeBasePlaylists())

    with pytest.raises(AggregationError) as exc_info:
        aggregator.aggregate("user123", "base456")

    assert exc_info.value.stage == STAGE_PLAYLIST_ARTISTS
    assert str(exc_info.value).startswith("failed to fetch playlist artists")
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_malformed_track_page_is_a_track_stage_error():
    bad_item = {"track": {"id": "t1", "duration_ms": "three minutes"}}
    client = FakeSpotifyClient(pages=[[bad_item]], artists=ARTISTS)
    aggregator = TrackAggregator(client, FakeBasePlaylists())

    with pytest.raises(AggregationError) as exc_info:
        aggregator.aggregate("user123", "base456")

    assert exc_info.value.stage == STAGE_PLAYLIST_TRACKS
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert client.artist_calls == []


def test_malformed_artist_is_an_artist_stage_error():
    client = FakeSpotifyClient(
        pages=[[_track_item("t1", ["artist1"])]],
        artists={"artist1": {"name": "No id", "genres": ["rock"]}},
    )
    aggregator = TrackAggregator(client, FakeBasePlaylists())

    with pytest.raises(AggregationError) as exc_info:
        aggregator.aggregate("user123", "base456")

    assert exc_info.value.stage == STAGE_PLAYLIST_ARTISTS
    assert isinstance(exc_info.value.__cause__, KeyError)


def test_page_progress_uses_reported_total(monkeypatch):
    progress = []
    monkeypatch.setattr(
        "playlist_router.pipeline.aggregator.log_progress",
        lambda current, total, prefix="": progress.append(
            (prefix.strip(), current, total)
        ),
    )
    pages = [[_track_item(f"t{i}", ["artist1"]) for i in range(2)] for _ in range(2)]
    pages.append([_track_item("last", ["artist1"])])
    client = FakeSpotifyClient(pages=pages, artists=ARTISTS)

    TrackAggregator(client, FakeBasePlaylists(), page_size=2).aggregate(
        "user123", "base456"
    )

    # 5 tracks at 2 per page -> 3 pages
    assert [p for p in progress if p[0] == "Playlist pages"] == [
        ("Playlist pages", 1, 3),
        ("Playlist pages", 2, 3),
        ("Playlist pages", 3, 3),
    ]
    assert [p for p in progress if p[0] == "Artist batches"] == [
        ("Artist batches", 1, 1)
    ]


def test_invalid_batch_sizes_rejected():
    with pytest.raises(ValueError):
        TrackAggregator(FakeSpotifyClient(pages=[]), FakeBasePlaylists(), page_size=0)


@pytest.mark.parametrize(
    "release_date, expected",
    [
        ("1999-10-12", 1999),
        ("1987-03", 1987),
        ("2020", 2020),
        ("", 0),
        (None, 0),
        ("abcd-01-01", 0),
        ("99", 0),
    ],
)
def test_parse_release_year(release_date, expected):
    assert parse_release_year(release_date) == expected


def test_with_derived_fields_returns_new_frozen_track():
    track = TrackInfo(
        id="t1",
        name="Song",
        uri="spotify:track:t1",
        artists=("a1", "a2"),
        album=AlbumInfo(id="al1", name="Album", release_date="2010-01-01"),
    )
    artists = {
        "a1": ArtistInfo(id="a1", name="First", genres=("Pop",), popularity=40),
        "a2": ArtistInfo(id="a2", name="Second", genres=("pop", "House"), popularity=90),
    }

    derived = with_derived_fields(track, artists)

    assert derived is not track
    assert track.all_genres == ()
    assert derived.all_genres == ("pop", "house")
    assert derived.max_artist_popularity == 90
    assert derived.artist_names == ("First", "Second")
    assert derived.release_year == 2010
    with pytest.raises(AttributeError):
        derived.release_year = 1990
    with pytest.raises(AttributeError):
        derived.all_genres.append("rock")
    with pytest.raises(AttributeError):
        derived.artist_names.append("Third")
    with pytest.raises(AttributeError):
        derived.artists.append("a3")
    with pytest.raises(AttributeError):
        artists["a1"].genres.append("rock")
