"""Console logging for the API server and the CLI."""
from __future__ import annotations

import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def resolve_level(level: int | str | None) -> int:
    """Turn a ``LOG_LEVEL`` value ("debug", "WARNING", 10, ...) into a level number.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_console_logging(level: int | str | None = logging.INFO) -> None:
    """Attach a stream handler to the root logger once.

    Later calls only adjust the level, so pytest and uvicorn handlers are
    left alone.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)
