class AggregationError(Exception):
    """
    A playlist aggregation stage failed.

    `stage` is one of STAGE_BASE_PLAYLIST, STAGE_PLAYLIST_TRACKS or
    STAGE_PLAYLIST_ARTISTS. The upstream exception is chained as __cause__.
    """

    def __init__(self, stage: str, message: str):
        super().__init__(message)
        self.stage = stage


STAGE_BASE_PLAYLIST = "base_playlist"
STAGE_PLAYLIST_TRACKS = "playlist_tracks"
STAGE_PLAYLIST_ARTISTS = "playlist_artists"

STAGE_MESSAGES = {
    STAGE_BASE_PLAYLIST: "failed to fetch base playlist",
    STAGE_PLAYLIST_TRACKS: "failed to fetch playlist tracks",
    STAGE_PLAYLIST_ARTISTS: "failed to fetch playlist artists",
}


def stage_error(stage: str, err: Exception) -> AggregationError:
    return AggregationError(stage, f"{STAGE_MESSAGES[stage]}: {err}")
