"""License detection for the contents of a single file.

The detector runs every matching strategy over the top of a file, sorts
the matches, and checks that they neither overlap nor leave any
copyright or license statement unexplained. Any doubt is an error:
reporting the wrong license is worse than reporting none.
"""

from __future__ import annotations

from typing import Optional

from license_detector.config.defaults import get_default_config
from license_detector.exceptions import (
    LicenseDetectorError,
    OverlapError,
    UnexplainedCopyrightError,
    UnmatchedTextError,
)
from license_detector.log import get_logger
from license_detector.models.config import DetectorConfig
from license_detector.models.license import License
from license_detector.models.match import LicenseMatch
from license_detector.patterns import (
    COPYRIGHT_MENTION,
    COPYRIGHT_MENTION_OK,
    DEFAULT_CATALOGUE,
    LICENSE_MENTION,
    NEWLINE,
    PatternCatalogue,
)
from license_detector.registry import LicenseRegistry
from license_detector.resolvers.base import LicenseSource
from license_detector.resolvers.well_known import WellKnownLicenses
from license_detector.strategies import (
    try_attribution,
    try_forward_reference,
    try_inline,
    try_none,
    try_reference_by_filename,
    try_reference_by_type,
    try_reference_by_url,
)

log = get_logger(__name__)


def _line_at(body: str, offset: int) -> str:
    start = body.rfind("\n", 0, offset) + 1
    end = body.find("\n", offset)
    return body[start:] if end < 0 else body[start:end]


class LicenseDetector:
    """Determines the licenses that apply to files.

    Args:
        registry: Store shared by all detections of this detector. A new
            one is created when omitted.
        catalogue: Patterns for each strategy.
        well_known: Table of licenses cited by URL. Built from config
            (packaged licenses plus configured extras) when omitted.
        config: Detector settings. Defaults are used when omitted.
    """

    def __init__(
        self,
        registry: Optional[LicenseRegistry] = None,
        catalogue: PatternCatalogue = DEFAULT_CATALOGUE,
        well_known: Optional[WellKnownLicenses] = None,
        config: Optional[DetectorConfig] = None,
    ) -> None:
        self.config = config if config is not None else get_default_config()
        self.registry = registry if registry is not None else LicenseRegistry()
        self.catalogue = catalogue
        if well_known is None:
            well_known = WellKnownLicenses(self.config.well_known_licenses)
        self.well_known = well_known

    def prepare(self, file_contents: str) -> str:
        """Cut the text to the scanned prefix and normalize whitespace."""
        if len(file_contents) > self.config.max_file_size:
            file_contents = file_contents[: self.config.max_file_size]
        file_contents = file_contents.replace("\t", " ")
        return NEWLINE.sub("\n", file_contents)

    def determine_licenses_for(
        self, file_contents: str, filename: str, parent_directory: LicenseSource
    ) -> list[License]:
        """Return the licenses covering a file, in the order they appear.

        Every returned license is marked as used by filename. Licenses of
        duplicate matches (e.g. dual licensing) are included.

        Args:
            file_contents: Text of the file.
            filename: Name of the file, for default lookups and diagnostics.
            parent_directory: Source of the licenses the file refers to.

        Returns:
            The licenses, possibly empty for files without any copyright.

        Raises:
            LicenseDetectorError: If the file's licensing cannot be
                determined unambiguously. The error carries filename.
        """
        try:
            matches = self.find_matches(file_contents, filename, parent_directory)
        except LicenseDetectorError as error:
            if error.filename is None:
                error.filename = filename
            raise

        licenses = [match.license for match in matches]
        for license in licenses:
            license.mark_used(filename)
        log.debug(
            "%s: %d license(s) (%s)",
            filename,
            len(licenses),
            ", ".join(license.type.value for license in licenses),
        )
        return licenses

    def find_matches(
        self, file_contents: str, filename: str, parent_directory: LicenseSource
    ) -> list[LicenseMatch]:
        """Run all strategies and return the validated, sorted matches."""
        body = self.prepare(file_contents)
        catalogue = self.catalogue
        registry = self.registry

        results: list[LicenseMatch] = []
        for pattern in catalogue.no_copyrights:
            results.extend(try_none(body, filename, pattern, parent_directory))
        for pattern in catalogue.attributions:
            results.extend(try_attribution(body, pattern, registry))
        for reference in catalogue.references_by_filename:
            results.extend(try_reference_by_filename(body, reference, parent_directory))
        for pattern in catalogue.references_by_type:
            results.extend(try_reference_by_type(body, pattern, parent_directory))
        for url_reference in catalogue.references_by_url:
            results.extend(
                try_reference_by_url(
                    body, url_reference, parent_directory, registry, self.well_known
                )
            )
        for pattern in catalogue.licenses:
            results.extend(try_inline(body, pattern, registry, needs_copyright=True))
        for pattern in catalogue.notices:
            results.extend(try_inline(body, pattern, registry, needs_copyright=False))

        if not results:
            # no license, but the file may still be covered by a default one
            for pattern in catalogue.fallbacks:
                results.extend(try_none(body, filename, pattern, parent_directory))
            if not results:
                mention = COPYRIGHT_MENTION.search(body)
                if mention is not None:
                    raise UnexplainedCopyrightError(
                        "Failed to find license in file containing copyright",
                        excerpt=_line_at(body, mention.start()),
                    )

        if len(results) == 1:
            target = results[0].license
            for forward_reference in catalogue.forward_references:
                results.extend(try_forward_reference(body, forward_reference, target))

        results.sort(key=lambda match: (match.start, match.end))
        self._check_coverage(body, filename, results)
        return results

    def _check_coverage(
        self, body: str, filename: str, results: list[LicenseMatch]
    ) -> None:
        position = 0
        for match in results:
            if match.is_duplicate:
                # text expanded into several licenses overlaps by definition
                continue
            if position > match.start:
                log.error(
                    "Overlapping licenses in %s:\n%s",
                    filename,
                    "\n".join(m.describe() for m in results),
                )
                raise OverlapError(
                    f"overlapping licenses (one ends at {position}, "
                    f"another starts at {match.start})",
                    matches=results,
                    position=position,
                    start=match.start,
                    filename=filename,
                )
            if position < match.start:
                gap = body[position : match.start]
                if (
                    COPYRIGHT_MENTION.search(gap) or LICENSE_MENTION.search(gap)
                ) and not COPYRIGHT_MENTION_OK.search(gap):
                    raise UnmatchedTextError(
                        "unmatched potential copyright or license statements "
                        f"at {position}..{match.start}",
                        start=position,
                        end=match.start,
                        excerpt=gap,
                        filename=filename,
                    )
            position = match.end


def determine_licenses_for(
    file_contents: str,
    filename: str,
    parent_directory: LicenseSource,
    registry: Optional[LicenseRegistry] = None,
) -> list[License]:
    """Determine the licenses of one file with a default detector.

    Pass the same registry to every call that should share licenses.
    """
    detector = LicenseDetector(registry=registry)
    return detector.determine_licenses_for(file_contents, filename, parent_directory)
