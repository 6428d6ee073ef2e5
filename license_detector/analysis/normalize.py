"""Canonical form of license and copyright text.

Comment decorations are removed, indentation is made relative to the
least-indented line, and runs of blank lines are collapsed. The result
is the identity key of a License, so normalize() must be idempotent.
"""

from __future__ import annotations

from typing import Optional

from license_detector.exceptions import NormalizationError
from license_detector.patterns import (
    BEGIN_LICENSE_BLOCK,
    END_LICENSE_BLOCK,
    STRIP_DECORATIONS,
)


def strip_decorations(line: str) -> tuple[str, str]:
    """Split a line into its comment decoration and its content.

    Decorations can be stacked (``%% foo``, ``REM REM foo``, ``a */ */``),
    so stripping is repeated until the content no longer changes. The
    content is then free of decorations itself.

    Args:
        line: A single line of text, without the newline.

    Returns:
        Tuple of (prefix, content). The prefix includes comment markers
        and the indentation that follows them.

    Raises:
        NormalizationError: If line contains a newline.
    """
    if "\n" in line:
        raise NormalizationError("cannot strip decorations across lines", excerpt=line)
    prefix = ""
    content = line
    while True:
        match = STRIP_DECORATIONS.fullmatch(content)
        if match is None:
            raise NormalizationError("cannot strip decorations", excerpt=line)
        if match.group(2) == content:
            return prefix, content
        prefix += match.group(1)
        content = match.group(2)


def normalize(body: str) -> str:
    """Reformat a block of text into its canonical form.

    Args:
        body: Raw text, possibly still wrapped in comment decorations.

    Returns:
        The normalized text. Empty if body holds no lines at all.

    Raises:
        NormalizationError: If body has lines but none with any content.
    """
    lines = body.split("\n")
    while lines and lines[0] == "":
        lines.pop(0)
    while lines and lines[-1] == "":
        lines.pop()
    if not lines:
        return ""
    if (
        len(lines) > 2
        and BEGIN_LICENSE_BLOCK.match(lines[0])
        and END_LICENSE_BLOCK.match(lines[-1])
    ):
        lines = lines[1:-1]

    output: list[str] = []
    last_good: Optional[int] = None
    previous_prefix: Optional[str] = None
    last_was_empty = True
    for line in lines:
        prefix, content = strip_decorations(line)
        if last_was_empty and content == "":
            continue
        if content:
            if previous_prefix is None:
                previous_prefix = prefix
            elif len(previous_prefix) > len(prefix):
                previous_prefix = prefix
            elif len(previous_prefix) < len(prefix):
                # deeper indentation is part of the text
                content = prefix[len(previous_prefix) :] + content
            last_was_empty = False
            last_good = len(output) + 1
        else:
            last_was_empty = True
        output.append(content)

    if last_good is None:
        raise NormalizationError("reformatted to nothing", excerpt=body)
    return "\n".join(output[:last_good])
