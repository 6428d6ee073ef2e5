"""Default pattern catalogue for license detection.

The catalogue has two layers:

- Text patterns shared by the normalizer, the splitter and the block
  extractor (comment decorations, copyright statements, license
  fragments).
- Per-strategy descriptors (:class:`PatternCatalogue`) whose regular
  expressions expose their interesting parts through named groups:

  ``prefix`` / ``indent``
      The comment decoration and indentation of the first matched line.
      Every block pattern starts with :data:`INDENT` so both are always
      present.
  ``copyright`` / ``authors``
      Inline copyright statement and attributed authors.
  ``file`` / ``type`` / ``name``
      Referenced license file name, license family, thanked person.

Block patterns are compiled with ``re.MULTILINE`` and begin at the start
of a line. Multi-line license text is matched with :func:`_flow`, which
allows a word break to continue on the next line as long as that line
carries the same comment prefix.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

_DECORATION = r'[-;@#<!.\\"/*]'
_DECORATION_OR_SPACE = r'[-;@#<!.\\"/* ]'

# group 1: comment decoration plus indentation, group 2: content.
# Strips one layer; see analysis.normalize.strip_decorations.
STRIP_DECORATIONS = re.compile(
    r"^((?:" + _DECORATION_OR_SPACE + r"*" + _DECORATION + r"+|REM(?= |$)|%)?[ ]*)"
    r"(.*?)(?:[ ]*(?:\*+/|-->))?[ ]*$"
)

BEGIN_LICENSE_BLOCK = re.compile(
    r"^" + _DECORATION_OR_SPACE + r"*(?:\*{3,}|-{3,})[ ]*BEGIN LICENSE BLOCK[ ]*(?:\*{3,}|-{3,})"
)
END_LICENSE_BLOCK = re.compile(
    r"^" + _DECORATION_OR_SPACE + r"*(?:\*{3,}|-{3,})[ ]*END LICENSE BLOCK[ ]*(?:\*{3,}|-{3,})"
)

NEWLINE = re.compile(r"\r\n|\r")

# Anything that could be a copyright statement.
COPYRIGHT_MENTION = re.compile(r"(?:\bcopyright\b|©)", re.IGNORECASE)

# Text mentioning a copyright that is nevertheless not a copyright statement.
COPYRIGHT_MENTION_OK = re.compile(
    r"(?:\bcopyright (?:notices?|holders?|owners?|statements?|headers?|law|years?)\b"
    r"|\$YEAR\b|\{\{ *year *\}\})",
    re.IGNORECASE,
)

LICENSE_MENTION = re.compile(
    r"(?:\blicen[cs]ed under\b|\bpermission is hereby granted\b"
    r"|\bredistribution and use in\b|\bis free software\b"
    r"|\bSPDX-License-Identifier\b|\bGNU (?:Lesser |Library )?General Public License\b)",
    re.IGNORECASE,
)

# A copyright that is still present after the split point.
COPYRIGHT_MARKER = re.compile(r"Copyright (?:\([cC]\)|©|[0-9]{4})")

# "Copyright (c) 1999-2004 by" with the holder on the following line(s).
HALF_COPYRIGHT = re.compile(
    r"^ *Copyright(?: \([cC]\)| ©)?(?: [-0-9, ]+)?(?: by)?[ ]*,?$"
)
TRAILING_COMMA = re.compile(r",[ ]*$")

# Lines that may start a copyright block.
COPYRIGHT_STATEMENT_LEADING_PATTERNS = (
    re.compile(
        r"^ *(?:Portions (?:created by the Initial Developer )?(?:are )?)?"
        r"(?:Copyright|COPYRIGHT)\b.+$"
    ),
    re.compile(r"^ *\([Cc]\) [0-9]{4}.*$"),
    re.compile(r"^ *©.+$"),
    re.compile(r"^:copyright: .+$"),
)

# Lines that may appear anywhere within a copyright block.
COPYRIGHT_STATEMENT_PATTERNS = COPYRIGHT_STATEMENT_LEADING_PATTERNS + (
    re.compile(r"^ *All [Rr]ights [Rr]eserved\.?$"),
    re.compile(
        r"^ *(?:[Oo]riginally )?(?:[Ww]ritten|[Cc]ontributed|[Dd]esigned|[Mm]odified"
        r"|[Pp]orted|[Dd]eveloped) by .+$"
    ),
    re.compile(r"^ *(?:Author|Maintainer|Contributor)s?: .+$"),
    re.compile(r"^ *[^ \n][^\n]*<[^<>@\s]+@[^<>\s]+>[ ,.]*$"),
    re.compile(r"^ *<?[^<>@\s]+@[^<>\s]+\.[A-Za-z]+>?[ ,.]*$"),
    re.compile(r"^ *(?:[0-9]{4}(?: ?- ?[0-9]{4})?, ?)*[0-9]{4}(?: ?- ?[0-9]{4})? .+$"),
    re.compile(r"^$"),
)

# Markers of some other license. The backwards block scan stops at them.
LICENSE_FRAGMENTS = (
    re.compile(r"SPDX-License-Identifier:"),
    re.compile(r"Licensed under the Apache License"),
    re.compile(r"Permission is hereby granted, free of charge"),
    re.compile(r"Redistribution and use in source and binary forms"),
    re.compile(r"under the terms of the GNU (?:Lesser |Library )?General Public License"),
    re.compile(r"POSSIBILITY OF SUCH DAMAGE"),
    re.compile(r"OTHER DEALINGS IN THE SOFTWARE"),
    re.compile(r"limitations under the License"),
    re.compile(r"This software is provided 'as-is'"),
)

AUTHORS_PATTERN = re.compile(
    r"Copyright [-0-9 ,(cC)©]+\b(The .+ Authors)\.", re.IGNORECASE
)

# License recognition strings used by the body classifier.
LR_APACHE = "Apache License"
LR_APACHE_HEADER = "Licensed under the Apache License, Version 2.0"
LR_MPL = "Mozilla Public License"
LR_MPL_HEADER = "subject to the terms of the Mozilla Public License"
LR_GPL = "GNU GENERAL PUBLIC LICENSE"
LR_GPL_HEADER = "under the terms of the GNU General Public License"
LR_LGPL = ("GNU LESSER GENERAL PUBLIC LICENSE", "GNU LIBRARY GENERAL PUBLIC LICENSE")
LR_LGPL_HEADER = re.compile(
    r"under the terms of the GNU (?:Lesser|Library) General Public License"
)
LR_BSD = "Redistribution and use in source and binary forms"
LR_MIT = "Permission is hereby granted, free of charge, to any person obtaining a copy"
LR_ZLIB = "This software is provided 'as-is', without any express or implied"


# Start of a block pattern: comment decoration, then indentation.
INDENT = (
    r"^(?P<prefix>(?:" + _DECORATION_OR_SPACE + r"*" + _DECORATION + r"+|REM(?= |$)|%)?)"
    r"(?P<indent>[ ]*)"
)

# Whitespace between two words, possibly across lines of the same block.
_GAP = r"(?:[ ]+|(?:[ ]*\n(?P=prefix)(?:(?P=indent)[ ]*)?)+)"

# Any text up to the next phrase, staying within lines of the same block.
_TAIL = r"(?:[^\n]*\n(?P=prefix))*?[^\n]*?"


def _flow(text: str) -> str:
    """Build a pattern matching the words of text, wrapped at any space."""
    return _GAP.join(re.escape(word) for word in text.split())


def _compile(*parts: str) -> re.Pattern[str]:
    return re.compile("".join(parts), re.MULTILINE)


def _gnu_header(subject: str, license_name: str) -> re.Pattern[str]:
    return _compile(
        INDENT,
        _flow(
            f"This {subject} is free software; you can redistribute it and/or "
            f"modify it under the terms of the GNU"
        ),
        _GAP,
        license_name,
        _GAP,
        _flow("General Public License"),
        _TAIL,
        _flow(f"along with this {subject}"),
        r"(?:\.(?:",
        _GAP,
        _flow("If not, see"),
        _GAP,
        r"<https?://www\.gnu\.org/licenses/>\.)?|;",
        _GAP,
        _flow("if not, write to the Free Software Foundation,"),
        _TAIL,
        r"USA\.?)",
    )


class FileReferencePattern(NamedTuple):
    """A pattern naming an accompanying license file.

    Attributes:
        pattern: Block pattern with a ``file`` group.
        file_group: Group holding the referenced file name.
        copyright_group: Group holding an inline copyright. When set, the
            pattern is used as is instead of through block extraction.
        author_group: Group holding the authors of the inline copyright.
        needs_copyright: Whether the extracted block must carry a copyright.
    """

    pattern: re.Pattern[str]
    file_group: str = "file"
    copyright_group: Optional[str] = None
    author_group: Optional[str] = None
    needs_copyright: bool = True


class UrlReferencePattern(NamedTuple):
    """A pattern citing one or more licenses by URL.

    Attributes:
        pattern: Block pattern.
        license_groups: Groups holding the cited URLs, primary first.
        version_groups: Maps a license group to the group holding its version.
        check_local_first: Ask the license source for a local copy first.
    """

    pattern: re.Pattern[str]
    license_groups: tuple[str, ...] = ("url",)
    version_groups: Optional[dict[str, str]] = None
    check_local_first: bool = False


class ForwardReferencePattern(NamedTuple):
    """A later block reusing the license of the block above it.

    Attributes:
        pattern: Block pattern.
        target_pattern: Must be found in the body of the reused license.
    """

    pattern: re.Pattern[str]
    target_pattern: re.Pattern[str]


class PatternCatalogue(NamedTuple):
    """Per-strategy patterns, in the order the strategies run."""

    no_copyrights: tuple[re.Pattern[str], ...] = ()
    attributions: tuple[re.Pattern[str], ...] = ()
    references_by_filename: tuple[FileReferencePattern, ...] = ()
    references_by_type: tuple[re.Pattern[str], ...] = ()
    references_by_url: tuple[UrlReferencePattern, ...] = ()
    licenses: tuple[re.Pattern[str], ...] = ()
    notices: tuple[re.Pattern[str], ...] = ()
    fallbacks: tuple[re.Pattern[str], ...] = ()
    forward_references: tuple[ForwardReferencePattern, ...] = ()


NO_COPYRIGHTS = (
    _compile(
        INDENT,
        r"(?:Code generated by [^\n]*DO NOT EDIT\."
        r"|This (?:file|code) (?:is|was|has been) (?:automatically |auto-)?generated\b[^\n]*"
        r"|@generated\b[^\n]*)",
    ),
)

ATTRIBUTIONS = (
    _compile(
        INDENT,
        r"(?:Special |Many )?[Tt]hanks to (?P<name>[^\n]+?)\.?(?:[ ]*\*+/)?[ ]*$",
    ),
)

REFERENCES_BY_FILENAME = (
    # Dart SDK style, copyright and reference in one sentence
    FileReferencePattern(
        _compile(
            INDENT,
            r"(?P<copyright>Copyright \([cC]\) [-0-9, ]+(?P<authors>[Tt]he [^\n]+? authors)\.)",
            _GAP,
            _flow(
                "Please see the AUTHORS file for details. All rights reserved. "
                "Use of this source code is governed by a BSD-style license that "
                "can be found in the"
            ),
            _GAP,
            r"(?P<file>LICENSE)",
            _GAP,
            _flow("file."),
        ),
        copyright_group="copyright",
        author_group="authors",
    ),
    FileReferencePattern(
        _compile(
            INDENT,
            _flow(
                "Use of this source code is governed by a BSD-style license that "
                "can be found in the"
            ),
            _GAP,
            r"(?P<file>LICENSE)",
            _GAP,
            _flow("file."),
        ),
    ),
    FileReferencePattern(
        _compile(
            INDENT,
            r"(?:See|Refer to) (?:the )?(?P<file>LICENSE\.(?:txt|md)|LICENSE|COPYING)(?: file)?"
            r"(?: for (?:details|more details|more information|license information"
            r"|licensing details))?\.",
        ),
        needs_copyright=False,
    ),
)

REFERENCES_BY_TYPE = (
    _compile(
        INDENT,
        r"(?:This (?:file|code|program|library) is )?"
        r"(?:[Ll]icensed|[Rr]eleased|[Dd]istributed) under (?:the|an?) "
        r"(?P<type>BSD|Apache)(?:-style)? [Ll]icense\.",
    ),
)

REFERENCES_BY_URL = (
    UrlReferencePattern(
        _compile(
            INDENT,
            _flow(
                "Use of this source code is governed by a BSD-style license that "
                "can be found in the LICENSE file or at"
            ),
            _GAP,
            r"(?P<url>https://developers\.google\.com/open-source/licenses/bsd)\.?",
        ),
    ),
    UrlReferencePattern(
        _compile(
            INDENT,
            _flow("This code may only be used under the BSD style license found at"),
            _GAP,
            r"(?P<url>http://polymer\.github\.io/LICENSE\.txt)",
            _TAIL,
            _flow("additional IP rights grant found at"),
            _GAP,
            r"http://polymer\.github\.io/PATENTS\.txt",
        ),
    ),
    # Apache/MIT dual licensing as used across the Rust ecosystem
    UrlReferencePattern(
        _compile(
            INDENT,
            _flow("Licensed under the Apache License, Version"),
            _GAP,
            r"(?P<apache_version>2\.0)",
            _GAP,
            r"<(?:LICENSE-APACHE or",
            _GAP,
            r")?(?P<apache>https?://www\.apache\.org/licenses/LICENSE-2\.0)>",
            _GAP,
            _flow("or the MIT license"),
            _GAP,
            r"<(?:LICENSE-MIT or",
            _GAP,
            r")?(?P<mit>https?://opensource\.org/licenses/MIT)>,",
            _GAP,
            _flow("at your option."),
            r"(?:",
            _GAP,
            _flow(
                "This file may not be copied, modified, or distributed except "
                "according to those terms."
            ),
            r")?",
        ),
        license_groups=("apache", "mit"),
        version_groups={"apache": "apache_version"},
        check_local_first=True,
    ),
)

LICENSES = (
    _compile(
        INDENT,
        _flow('Licensed under the Apache License, Version 2.0 (the "License");'),
        _TAIL,
        _flow("limitations under the License."),
    ),
    _compile(
        INDENT,
        _flow(
            "Permission is hereby granted, free of charge, to any person obtaining a copy"
        ),
        _TAIL,
        _flow("OTHER DEALINGS IN THE SOFTWARE."),
    ),
    _compile(
        INDENT,
        _flow(
            "Redistribution and use in source and binary forms, with or without "
            "modification, are permitted provided that the following conditions are met:"
        ),
        _TAIL,
        _flow("POSSIBILITY OF SUCH DAMAGE."),
    ),
    # ISC
    _compile(
        INDENT,
        _flow("Permission to use, copy, modify,"),
        _GAP,
        r"(?:and/or|and)",
        _GAP,
        _flow("distribute this software for any purpose"),
        _TAIL,
        _flow("PERFORMANCE OF THIS SOFTWARE."),
    ),
    _compile(
        INDENT,
        _flow("This software is provided 'as-is', without any express or implied warranty."),
        _TAIL,
        _flow("removed or altered from any source distribution."),
    ),
    _gnu_header("program", "General"),
    _gnu_header("library", r"(?:Lesser|Library)"),
)

NOTICES = (
    _compile(INDENT, _flow("This product includes software developed by"), r"[^\n]*"),
)

FALLBACKS = (
    _compile(INDENT, r"This (?:file|code) is part of (?:the )?[^\n]+$"),
)

FORWARD_REFERENCES = (
    ForwardReferencePattern(
        _compile(
            INDENT,
            r"(?:Licensed|Distributed|Released) under the same BSD (?:license|terms) as "
            r"(?:above|the code above)\.",
        ),
        target_pattern=re.compile(LR_BSD),
    ),
    ForwardReferencePattern(
        _compile(
            INDENT,
            r"(?:Licensed|Distributed|Released) under the same MIT (?:license|terms) as "
            r"(?:above|the code above)\.",
        ),
        target_pattern=re.compile(re.escape(LR_MIT)),
    ),
    ForwardReferencePattern(
        _compile(
            INDENT,
            r"(?:Licensed|Distributed|Released) under the same (?:license|terms) as "
            r"(?:above|the code above)\.",
        ),
        target_pattern=re.compile(r""),
    ),
)

DEFAULT_CATALOGUE = PatternCatalogue(
    no_copyrights=NO_COPYRIGHTS,
    attributions=ATTRIBUTIONS,
    references_by_filename=REFERENCES_BY_FILENAME,
    references_by_type=REFERENCES_BY_TYPE,
    references_by_url=REFERENCES_BY_URL,
    licenses=LICENSES,
    notices=NOTICES,
    fallbacks=FALLBACKS,
    forward_references=FORWARD_REFERENCES,
)
