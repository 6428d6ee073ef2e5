"""Matching strategies.

Each strategy looks for one kind of license statement in the text of a
file and yields a :class:`LicenseMatch` for every statement it explains.
Strategies are independent of each other; the detector runs all of them
and checks that together they explain the file without overlapping.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from license_detector.analysis.blocks import find_license_blocks
from license_detector.analysis.classify import convert_license_name_to_type
from license_detector.analysis.normalize import normalize
from license_detector.exceptions import ResolutionError, ShapeError
from license_detector.log import get_logger
from license_detector.models.license import License, LicenseType
from license_detector.models.match import LicenseMatch
from license_detector.patterns import (
    FileReferencePattern,
    ForwardReferencePattern,
    UrlReferencePattern,
)
from license_detector.registry import LicenseRegistry
from license_detector.resolvers.base import LicenseSource
from license_detector.resolvers.well_known import WellKnownLicenses

log = get_logger(__name__)


def _found(
    license: License, start: int, end: int, debug: str, is_duplicate: bool = False
) -> LicenseMatch:
    match = LicenseMatch(license, start, end, debug=debug, is_duplicate=is_duplicate)
    log.debug("%s: %d..%d%s", debug, start, end, " (duplicate)" if is_duplicate else "")
    return match


def _expand(
    template: License, copyright: str, start: int, end: int, debug: str
) -> Iterator[LicenseMatch]:
    """Yield the matches for template combined with copyright.

    The first resulting license is the primary match; the others cover
    the same text and are flagged as duplicates.
    """
    results = template.expand_template(normalize(copyright))
    if not results:
        raise ResolutionError("license could not be expanded", excerpt=copyright)
    yield _found(results[0], start, end, f"expanding template for {debug}")
    for license in results[1:]:
        yield _found(
            license, start, end, f"expanding subsequent template for {debug}", True
        )


def try_none(
    body: str, filename: str, pattern: re.Pattern[str], source: LicenseSource
) -> Iterator[LicenseMatch]:
    """Files without a license of their own use the directory's default."""
    for match in pattern.finditer(body):
        results = source.nearest_licenses_for(filename)
        if not results:
            raise ResolutionError(
                f"no default license file found in {source!r}", excerpt=match.group(0)
            )
        yield _found(results[0], match.start(), match.end(), "default license")
        for license in results[1:]:
            yield _found(
                license, match.start(), match.end(), "subsequent default license", True
            )


def try_attribution(
    body: str, pattern: re.Pattern[str], registry: LicenseRegistry
) -> Iterator[LicenseMatch]:
    """An acknowledgement such as "Thanks to X." becomes a license of its own."""
    for match in pattern.finditer(body):
        license = registry.unique(f"Thanks to {match.group('name')}.", LicenseType.UNKNOWN)
        yield _found(license, match.start(), match.end(), "attribution")


def try_reference_by_filename(
    body: str, reference: FileReferencePattern, source: LicenseSource
) -> Iterator[LicenseMatch]:
    """A statement pointing at an accompanying license file."""
    if reference.copyright_group is not None:
        for match in reference.pattern.finditer(body):
            copyright = match.group(reference.copyright_group)
            authors: Optional[str] = None
            if reference.author_group is not None:
                authors = match.group(reference.author_group)
            name = match.group(reference.file_group)
            template = source.nearest_license_with_name(name, authors=authors)
            if template is None:
                raise ResolutionError(
                    f"failed to find template {name} in {source!r} (authors={authors})",
                    excerpt=match.group(0),
                )
            if not normalize(copyright or ""):
                raise ShapeError(
                    "copyright of license reference is empty", excerpt=match.group(0)
                )
            yield from _expand(
                template, copyright, match.start(), match.end(), f"reference to {name} with authors"
            )
        return

    for block in find_license_blocks(
        body, reference.pattern, needs_copyright=reference.needs_copyright
    ):
        name = block.group(reference.file_group)
        template = source.nearest_license_with_name(name, authors=block.get_authors())
        if template is None:
            raise ResolutionError(
                f'failed to find accompanying "{name}" in {source!r}',
                excerpt=block.get_entire_license(),
            )
        if block.get_copyrights() == "":
            yield _found(template, block.start, block.end, f"reference to {name}")
        else:
            yield from _expand(
                template, block.get_copyrights(), block.start, block.end, f"reference to {name}"
            )


def try_reference_by_type(
    body: str, pattern: re.Pattern[str], source: LicenseSource
) -> Iterator[LicenseMatch]:
    """A statement naming the license family, e.g. "under a BSD-style license"."""
    for block in find_license_blocks(body, pattern):
        license_type = convert_license_name_to_type(block.group("type"))
        template = source.nearest_license_of_type(license_type)
        if template is None:
            raise ResolutionError(
                f"failed to find accompanying {license_type.value} license in {source!r}",
                excerpt=block.get_entire_license(),
            )
        yield from _expand(
            template, block.get_copyrights(), block.start, block.end, "reference by type"
        )


def try_reference_by_url(
    body: str,
    reference: UrlReferencePattern,
    source: LicenseSource,
    registry: LicenseRegistry,
    well_known: WellKnownLicenses,
) -> Iterator[LicenseMatch]:
    """A statement citing one or more licenses by URL.

    With several URLs (dual licensing) the first is the primary match and
    the others are duplicates covering the same text.
    """
    for block in find_license_blocks(body, reference.pattern, needs_copyright=False):
        is_duplicate = False
        for group in reference.license_groups:
            url = block.group(group)
            if url is None:
                raise ResolutionError(
                    f"license reference has no {group} URL",
                    excerpt=block.get_entire_license(),
                )
            result: Optional[License] = None
            if reference.check_local_first:
                result = source.nearest_license_with_name(url)
            if result is None:
                version: Optional[str] = None
                if reference.version_groups and group in reference.version_groups:
                    version = block.group(reference.version_groups[group])
                result = well_known.resolve(registry, url, version)
            yield _found(result, block.start, block.end, f"reference to {url}", is_duplicate)
            is_duplicate = True


def try_inline(
    body: str,
    pattern: re.Pattern[str],
    registry: LicenseRegistry,
    needs_copyright: bool,
) -> Iterator[LicenseMatch]:
    """A license quoted in full, classified by its own text."""
    for block in find_license_blocks(body, pattern, needs_copyright=needs_copyright):
        license = registry.from_body(block.get_entire_license())
        yield _found(license, block.start, block.end, "inline license")


def try_forward_reference(
    body: str, reference: ForwardReferencePattern, template: License
) -> Iterator[LicenseMatch]:
    """A later block that is "under the same license as above"."""
    for block in find_license_blocks(body, reference.pattern):
        if not reference.target_pattern.search(template.body):
            raise ResolutionError(
                "forward license reference to unexpected license",
                excerpt=block.get_entire_license(),
            )
        yield from _expand(
            template, block.get_copyrights(), block.start, block.end, "forward reference"
        )
