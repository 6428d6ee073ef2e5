"""Grow pattern matches into the full comment block around them.

A license pattern usually only matches the license conditions. The
copyright statements above it belong to the same block when they carry
the same comment prefix, so for every match the block is scanned
backwards to its start and then forwards to the first copyright line.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from license_detector.analysis.lines import walk_lines_backwards, walk_lines_forwards
from license_detector.analysis.normalize import normalize, strip_decorations
from license_detector.analysis.split import split_license
from license_detector.exceptions import ShapeError
from license_detector.models.match import PartialLicenseMatch
from license_detector.patterns import (
    COPYRIGHT_MENTION,
    COPYRIGHT_STATEMENT_LEADING_PATTERNS,
    LICENSE_FRAGMENTS,
)


def _find_block_start(
    body: str, start: int, full_prefix: str, needs_copyright: bool
) -> tuple[int, bool]:
    """Walk back from start to the first line of its block.

    Returns:
        The block start, and whether that first line opens a comment
        (so its decoration differs from the other lines).
    """
    last_was_blank = False
    found_non_blank = False
    for line_range in walk_lines_backwards(body, start):
        line = line_range.value
        is_block_comment_line = len(line) > 3 and line.endswith("*/")
        if is_block_comment_line:
            line = line[:-2].rstrip(" ")
        if not line or full_prefix.startswith(line):
            if last_was_blank and (found_non_blank or not needs_copyright):
                break
            last_was_blank = True
        elif (
            (not is_block_comment_line and line.startswith("/*"))
            or line.startswith("<!--")
            or (line_range.start == 0 and line.startswith("  " + full_prefix))
        ):
            return line_range.start, True
        elif full_prefix and not line.startswith(full_prefix):
            break
        elif any(fragment.search(line) for fragment in LICENSE_FRAGMENTS):
            # another license, must not be absorbed
            break
        else:
            last_was_blank = False
            found_non_blank = True
        start = line_range.start
    return start, False


def _find_copyright_start(
    body: str, start: int, end: int, full_prefix: str, first_line_special: bool
) -> Optional[int]:
    """First line between start and end that opens a copyright statement."""
    for line_range in walk_lines_forwards(body, start, end):
        line = line_range.value
        if first_line_special or line.startswith(full_prefix):
            if first_line_special:
                data = strip_decorations(line)[1]
            else:
                data = line[len(full_prefix) :]
            if any(pattern.search(data) for pattern in COPYRIGHT_STATEMENT_LEADING_PATTERNS):
                return line_range.start
        first_line_special = False
    return None


def find_license_blocks(
    body: str,
    pattern: re.Pattern[str],
    prefix_group: str = "prefix",
    indent_group: str = "indent",
    needs_copyright: bool = True,
) -> Iterator[PartialLicenseMatch]:
    """Yield one :class:`PartialLicenseMatch` per match of pattern in body.

    Args:
        body: File text with normalized newlines.
        pattern: Block pattern; must define prefix_group and indent_group.
        prefix_group: Group holding the comment decoration.
        indent_group: Group holding the indentation after the decoration.
        needs_copyright: Whether a copyright must precede the match.

    Raises:
        ShapeError: If a required copyright is missing, or the copyright
            span holds license text or no copyright mention.
    """
    for match in pattern.finditer(body):
        full_prefix = f"{match.group(prefix_group) or ''}{match.group(indent_group) or ''}"
        block_start, first_line_special = _find_block_start(
            body, match.start(), full_prefix, needs_copyright
        )
        start = _find_copyright_start(
            body, block_start, match.start(), full_prefix, first_line_special
        )
        if start is None:
            if needs_copyright:
                raise ShapeError(
                    "could not find copyright before license", excerpt=match.group(0)
                )
            start = match.start()
            split = match.start()
        else:
            copyrights = body[start : match.start()]
            undecorated = normalize(copyrights)
            conditions = split_license(undecorated, verify_results=False).conditions
            if conditions:
                raise ShapeError(
                    "potential license text caught in block extraction dragnet",
                    excerpt=conditions,
                )
            if not COPYRIGHT_MENTION.search(copyrights):
                raise ShapeError(
                    "could not find copyright before license block",
                    excerpt=body[start : match.end()],
                )
            split = match.start() - 1
        yield PartialLicenseMatch(body, start, split, match.end(), match)
