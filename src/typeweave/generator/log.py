"""
Render log sinks.

A generator reports what it skipped or tolerated to the ``RenderLog`` it was
given. Nothing is process-wide: each generator owns its sink.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, TextIO, runtime_checkable

logger = logging.getLogger("typeweave.render")


@runtime_checkable
class RenderLog(Protocol):
    """Receives one message per call."""

    def __call__(self, message: str) -> None: ...


class LoggerRenderLog:
    """Forwards messages to the ``typeweave.render`` logger at DEBUG."""

    def __init__(self, target: logging.Logger | None = None):
        self.target = target or logger

    def __call__(self, message: str) -> None:
        if message:
            self.target.debug(message)


class FileRenderLog:
    """
    Writes messages to a file, one per line.

    The file is opened on the first message and flushed after each write.
    Use as a context manager, or call ``close()`` when done.
    """

    def __init__(self, path: Path):
        self.path = path
        self._stream: TextIO | None = None

    def __call__(self, message: str) -> None:
        if not message:
            return
        if self._stream is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = self.path.open("w", encoding="utf-8")
        self._stream.write(message + "\n")
        self._stream.flush()

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> FileRenderLog:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
