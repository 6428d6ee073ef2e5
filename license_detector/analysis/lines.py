"""Line iteration over a body of text without splitting it up front.

Block scans usually stop after a handful of lines, so the walkers are
generators that produce one :class:`LineRange` at a time.
"""

from __future__ import annotations

from typing import Iterator, Optional

from license_detector.exceptions import ShapeError
from license_detector.models.match import LineRange


def walk_lines_backwards(body: str, start: int) -> Iterator[LineRange]:
    """Yield the complete lines before offset start, nearest first.

    The (possibly partial) line containing start itself is not yielded.
    """
    end: Optional[int] = None
    while start > 0:
        start -= 1
        if body[start] == "\n":
            if end is not None:
                yield LineRange(start + 1, end, body)
            end = start
    if end is not None:
        yield LineRange(start, end, body)


def walk_lines_forwards(
    body: str, start: int = 0, end: Optional[int] = None
) -> Iterator[LineRange]:
    """Yield the lines between start and end, in order.

    A partial line at start is skipped; the last line is cut at end.
    """
    if end is None:
        end = len(body)
    line_start: Optional[int] = start if start == 0 or body[start - 1] == "\n" else None
    index = start
    while index < end:
        if body[index] == "\n":
            if line_start is not None:
                yield LineRange(line_start, index, body)
            line_start = index + 1
        index += 1
    if line_start is not None:
        yield LineRange(line_start, index, body)


class LineCursor:
    """Explicit forward cursor over the lines of a body.

    ``advance()`` moves to the next line and reports whether there was
    one; ``current`` is None before the first and after the last line.
    """

    def __init__(self, body: str, start: int = 0, end: Optional[int] = None) -> None:
        self._lines = walk_lines_forwards(body, start, end)
        self.current: Optional[LineRange] = None

    def advance(self) -> bool:
        self.current = next(self._lines, None)
        return self.current is not None

    @property
    def value(self) -> str:
        if self.current is None:
            raise ShapeError("no current line")
        return self.current.value
