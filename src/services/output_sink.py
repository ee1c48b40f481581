"""Console sink for formatted envelope output."""

import sys
from typing import Iterable, TextIO


class ConsoleSink:
    """Writes formatted lines to a text stream, flushing once per call."""

    def __init__(self, stream: TextIO | None = None):
        """Initialize sink. Defaults to the current sys.stdout."""
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write_lines(self, lines: Iterable[str]) -> None:
        """Write lines and flush. I/O errors propagate to the caller."""
        stream = self.stream
        for line in lines:
            stream.write(line + "\n")
        stream.flush()
