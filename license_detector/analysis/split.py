"""Separate leading copyright statements from license conditions."""

from __future__ import annotations

from license_detector.analysis.lines import LineCursor
from license_detector.exceptions import ShapeError
from license_detector.models.match import SplitLicense
from license_detector.patterns import (
    COPYRIGHT_MARKER,
    COPYRIGHT_STATEMENT_PATTERNS,
    HALF_COPYRIGHT,
    TRAILING_COMMA,
)

# Lines after which exactly one line names the author
_AUTHOR_MARKERS = frozenset(
    {
        "Author:",
        "This code is derived from software contributed to Berkeley by",
        "The Initial Developer of the Original Code is",
    }
)


def split_license(body: str, verify_results: bool = True) -> SplitLicense:
    """Split a normalized license body after its copyright statements.

    Lines are consumed from the top for as long as they look like part of
    a copyright statement: author markers and the line following them,
    indented author lists, copyrights continued over comma-terminated
    lines, and the generic copyright statement patterns.

    Args:
        body: Normalized license text.
        verify_results: Fail if the conditions still hold a copyright.

    Returns:
        The body with its split point.

    Raises:
        ShapeError: On an empty body, a malformed author list or
            copyright, or (when verifying) a copyright in the conditions.
    """
    if not body:
        raise ShapeError("tried to split empty license")
    lines = LineCursor(body)
    lines.advance()
    end = 0
    while True:
        line = lines.value
        if line in _AUTHOR_MARKERS:
            if not lines.advance():
                raise ShapeError(
                    "unexpected end of block instead of author when looking for copyright",
                    excerpt=body,
                )
            if lines.value.strip() == "":
                raise ShapeError(
                    "unexpectedly blank line instead of author when looking for copyright",
                    excerpt=body,
                )
            end = lines.current.end
            if not lines.advance():
                break
        elif line.startswith("Authors:") or line == "Other contributors:":
            if line != "Authors:":
                # the marker line names an author too
                end = lines.current.end
            if not lines.advance():
                raise ShapeError(
                    "unexpected end of license when reading list of authors "
                    "while looking for copyright",
                    excerpt=body,
                )
            first_author = lines.value
            indent = len(first_author) - len(first_author.lstrip(" \t"))
            if indent == 0:
                raise ShapeError(
                    "unexpected blank line instead of authors found when looking for copyright",
                    excerpt=body,
                )
            end = lines.current.end
            prefix = first_author[:indent]
            while lines.advance() and lines.value.startswith(prefix):
                next_author = lines.value[len(prefix) :]
                if next_author == "" or next_author[0] in " \t":
                    raise ShapeError(
                        "unexpectedly ragged author list when looking for copyright",
                        excerpt=body,
                    )
                end = lines.current.end
            if lines.current is None:
                break
        elif HALF_COPYRIGHT.search(line):
            while True:
                if not lines.advance():
                    raise ShapeError(
                        "unexpected end of block instead of copyright holder "
                        "when looking for copyright",
                        excerpt=body,
                    )
                if lines.value.strip() == "":
                    raise ShapeError(
                        "unexpectedly blank line instead of copyright holder "
                        "when looking for copyright",
                        excerpt=body,
                    )
                end = lines.current.end
                if not TRAILING_COMMA.search(lines.value):
                    break
            if not lines.advance():
                break
        elif not any(pattern.search(line) for pattern in COPYRIGHT_STATEMENT_PATTERNS):
            break
        else:
            end = lines.current.end
            if not lines.advance():
                break

    if verify_results and COPYRIGHT_MARKER.search(body, end):
        raise ShapeError("the license seems to contain a copyright", excerpt=body)
    return SplitLicense(body, end)
