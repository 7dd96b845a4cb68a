from fastapi import FastAPI

from playlist_router import __version__, config
from playlist_router.api.routing.routes import router as routing_router
from playlist_router.core import configure_logging

configure_logging(config.LOG_LEVEL)

app = FastAPI(
    title="Playlist Router API",
    version=__version__,
    description="Preview how base playlist tracks are routed into child playlists.",
)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


app.include_router(routing_router, prefix="/routing", tags=["routing"])
