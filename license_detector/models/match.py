"""Transient results produced while matching a single file."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, NamedTuple, Optional

from license_detector.patterns import AUTHORS_PATTERN

if TYPE_CHECKING:
    from license_detector.models.license import License


class LineRange(NamedTuple):
    """A line of text, identified by its offsets into a larger body.

    The line's text is only sliced out of the body when asked for.
    """

    start: int
    end: int
    body: str

    @property
    def value(self) -> str:
        return self.body[self.start : self.end]


class SplitLicense(NamedTuple):
    """A license body split into leading copyright and trailing conditions.

    ``split`` is 0, the length of the body, or the offset of a newline.
    """

    body: str
    split: int

    @property
    def copyright(self) -> str:
        return self.body[: self.split]

    @property
    def conditions(self) -> str:
        if self.split >= len(self.body):
            return ""
        return self.body[self.split if self.split == 0 else self.split + 1 :]


class PartialLicenseMatch(NamedTuple):
    """A pattern match grown to the full comment block around it.

    ``start``..``split`` holds the copyright statements, ``split + 1``..``end``
    the license text. When no copyright was found ``split == start``.
    """

    body: str
    start: int
    split: int
    end: int
    match: re.Match[str]

    def group(self, name: str) -> Optional[str]:
        return self.match.group(name)

    def get_authors(self) -> Optional[str]:
        """Authors named by a 'Copyright ... The X Authors.' statement, if any."""
        found = AUTHORS_PATTERN.search(self.get_copyrights())
        if found is not None:
            return found.group(1)
        return None

    def get_copyrights(self) -> str:
        return self.body[self.start : self.split]

    def get_conditions(self) -> str:
        return self.body[self.split + 1 : self.end]

    def get_entire_license(self) -> str:
        return self.body[self.start : self.end]


class LicenseMatch(NamedTuple):
    """A license explaining the text between start and end of a file.

    Attributes:
        license: The resolved license.
        start: Offset of the first explained character.
        end: Offset after the last explained character.
        debug: Tag naming the strategy that produced the match.
        is_duplicate: Whether the match intentionally overlaps another one
            (e.g. the same text licensed under several licenses).
    """

    license: License
    start: int
    end: int
    debug: str = ""
    is_duplicate: bool = False

    def describe(self) -> str:
        """One-line summary used in diagnostics."""
        first_line = self.license.body.split("\n", 1)[0]
        return f"license match: {self.start}..{self.end}, {self.debug}, first line: {first_line}"
