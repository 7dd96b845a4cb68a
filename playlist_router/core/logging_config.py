import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# HTTP libraries log every request at DEBUG/INFO; keep them at WARNING
QUIET_LOGGERS = ("urllib3", "httpx")


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Send logs to stdout. `level` is a logging constant or its name
    ("DEBUG", "info", ...); unknown names fall back to INFO.

    Calling it again only changes the level.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)
