"""Line-at-a-time reading from a stream through a fixed-size buffer."""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO, AnyStr, Generic

DEFAULT_BUFFER_SIZE = 8


class LineReader(Generic[AnyStr]):
    """Read lines from ``stream`` in chunks of ``buffer_size``.

    Each reader keeps its own pending data, so several streams can be
    read in turn without interfering.
    """

    def __init__(self, stream: IO[AnyStr], buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self._buffer_size = buffer_size
        self._pending: AnyStr | None = None
        self._eof = False

    def _fill(self) -> None:
        newline = None
        while not self._eof:
            chunk = self._stream.read(self._buffer_size)
            if self._pending is None:
                self._pending = chunk
            else:
                self._pending += chunk
            if not chunk:
                self._eof = True
                break
            if newline is None:
                newline = b"\n" if isinstance(chunk, bytes) else "\n"
            if newline in self._pending:
                break

    def readline(self) -> AnyStr | None:
        """Return the next line with its newline, or None at end of input."""
        pending = self._pending
        newline_present = pending is not None and (
            (b"\n" if isinstance(pending, bytes) else "\n") in pending
        )
        if not newline_present:
            self._fill()
            pending = self._pending
        if not pending:
            return None
        newline = b"\n" if isinstance(pending, bytes) else "\n"
        index = pending.find(newline)
        if index < 0:
            self._pending = pending[:0]
            return pending
        self._pending = pending[index + 1:]
        return pending[: index + 1]

    def __iter__(self) -> Iterator[AnyStr]:
        while (line := self.readline()) is not None:
            yield line


def read_lines(
    stream: IO[AnyStr], buffer_size: int = DEFAULT_BUFFER_SIZE
) -> Iterator[AnyStr]:
    """Yield every line of ``stream``, newlines kept."""
    yield from LineReader(stream, buffer_size)